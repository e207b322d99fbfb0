"""

SUPER_ADMIN 초기 계정 생성 스크립트.

- 서버 최초 세팅 시 단 한 번 실행하는 용도
- .env에 정의된 SUPERADMIN_* 환경 변수를 읽어
  SUPER_ADMIN 계정을 생성한다.
- 이미 SUPER_ADMIN 계정이 존재하면 생성하지 않고 종료한다.
- SUPER_ADMIN 은 관리자 API로 부여할 수 없으므로 이 스크립트가 유일한 생성 경로이다.

사용 방법
- 가상환경 접속
- (.venv) ~\backend~$ python -m scripts.create_superadmin

"""

import logging
import os
from dotenv import load_dotenv
load_dotenv()

from sqlalchemy import select
from fithub.core.logging_config import setup_logging
from fithub.db.session import SessionLocal, create_tables
from fithub.models.enums import Role
from fithub.models.user import User
from fithub.services.roles import is_super_admin

logger = logging.getLogger("scripts.create_superadmin")


def main():
    setup_logging(os.environ.get("LOG_LEVEL", "INFO"))
    create_tables()

    db = SessionLocal()
    try:
        if any(is_super_admin(u.role_set) for u in db.scalars(select(User)).all()):
            logger.info("SUPER_ADMIN already exists. Skip creation.")
            return

        auth_id = os.environ["SUPERADMIN_AUTH_ID"]
        email = os.environ["SUPERADMIN_EMAIL"]

        exists = db.scalar(select(User).where((User.auth_id == auth_id) | (User.email == email)))
        if exists:
            raise RuntimeError("auth_id or email already exists but is not SUPER_ADMIN")

        user = User(
            auth_id=auth_id,
            email=email,
            name=os.environ.get("SUPERADMIN_NAME", "Super"),
            surname=os.environ.get("SUPERADMIN_SURNAME", "Admin"),
            nickname=os.environ.get("SUPERADMIN_NICKNAME", "superadmin"),
            roles=[Role.MEMBER.value, Role.ADMIN.value, Role.SUPER_ADMIN.value],
            is_email_verified=True,
        )

        db.add(user)
        db.commit()

        logger.info("SUPER_ADMIN created: %s", email)

    finally:
        db.close()


if __name__ == "__main__":
    main()
