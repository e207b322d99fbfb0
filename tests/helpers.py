# tests/helpers.py
import uuid
from typing import Iterable, Optional

from sqlalchemy.orm import Session
from sqlalchemy import select

from fithub.core.security import create_access_token
from fithub.models.enums import Role
from fithub.models.user import User


def auth_header(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


def user_header(user: User) -> dict:
    return auth_header(create_access_token(user.auth_id))


def create_user_in_db(
    db: Session,
    *,
    roles: Iterable[Role] = (Role.MEMBER,),
    privacy_settings: Optional[dict] = None,
    **fields,
) -> User:
    suffix = uuid.uuid4().hex[:8]
    values = {
        "auth_id": f"auth0|{suffix}",
        "name": "테스트",
        "surname": "유저",
        "nickname": f"user_{suffix}",
        "email": f"user_{suffix}@test.com",
        "roles": [Role(r).value for r in roles],
    }
    if privacy_settings is not None:
        values["privacy_settings"] = privacy_settings
    values.update(fields)

    user = User(**values)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def create_admin_in_db(db: Session, **fields) -> User:
    return create_user_in_db(db, roles=(Role.MEMBER, Role.ADMIN), **fields)


def create_superadmin_in_db(db: Session, **fields) -> User:
    return create_user_in_db(db, roles=(Role.MEMBER, Role.ADMIN, Role.SUPER_ADMIN), **fields)


def get_user(db: Session, user_id) -> User:
    # API 호출(다른 세션)로 바뀐 값을 다시 읽기 위해 캐시 무효화
    db.expire_all()
    if isinstance(user_id, str):
        user_id = uuid.UUID(user_id)
    return db.scalar(select(User).where(User.id == user_id))
