from typing import Generator, Optional

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError
from sqlalchemy.orm import Session

from fithub.core.errors import FithubError
from fithub.core.security import decode_access_token
from fithub.db.session import SessionLocal
from fithub.models.enums import ErrorCode
from fithub.models.user import User
from fithub.services.roles import has_admin_privileges
from fithub.services.users import find_user_by_auth_id

# Swagger Authorize에서 "Bearer 토큰" 입력받는 스키마
bearer_scheme = HTTPBearer(auto_error=False)


def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def _auth_id_from(cred: Optional[HTTPAuthorizationCredentials]) -> Optional[str]:
    if cred is None:
        return None
    try:
        return decode_access_token(cred.credentials)
    except JWTError:
        raise FithubError(401, "Could not validate credentials", ErrorCode.INVALID_TOKEN)


def get_current_user(
    cred: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> User:
    auth_id = _auth_id_from(cred)
    if auth_id is None:
        raise FithubError(401, "Not authenticated", ErrorCode.UNAUTHORIZED)

    user = find_user_by_auth_id(db, auth_id)
    if not user:
        raise FithubError(404, "User not found", ErrorCode.USER_NOT_FOUND)
    if user.is_blocked:
        raise FithubError(403, "User account is blocked", ErrorCode.USER_BLOCKED)

    return user


# 비로그인 허용 (공개 프로필 조회), 토큰이 있는데 잘못된 경우만 401
def get_optional_user(
    cred: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> Optional[User]:
    auth_id = _auth_id_from(cred)
    if auth_id is None:
        return None
    return find_user_by_auth_id(db, auth_id)


def get_current_admin(current_user: User = Depends(get_current_user)) -> User:
    if not has_admin_privileges(current_user.role_set):
        raise FithubError(403, "Admin privileges required", ErrorCode.FORBIDDEN)
    return current_user
