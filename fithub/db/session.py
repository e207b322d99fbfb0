"""
session.py

데이터베이스 엔진 및 세션(Session) 관리 파일.

FastAPI 의존성(get_db)을 통해
요청 단위로 세션을 생성/종료하는 구조를 지원한다.

설계 원칙:
- DB 연결 설정은 한 곳에서만 정의
- pool_pre_ping=True로 유휴 연결 오류 방지
- 로컬 개발용 SQLite URL도 그대로 사용 가능 (스레드 체크 해제)

관련 파일:
- fithub.core.config        : DATABASE_URL 설정
- fithub.core.deps          : get_db 의존성
- scripts.create_superadmin : 초기 테이블 생성 / 계정 생성

"""

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from fithub.core.config import settings
from fithub.db.base import Base


def build_engine(url: str, **kwargs) -> Engine:
    # FastAPI 는 요청을 스레드풀에서 처리하므로 SQLite 연결을 스레드 간 공유해야 함
    if url.startswith("sqlite"):
        kwargs.setdefault("connect_args", {"check_same_thread": False})
    return create_engine(url, pool_pre_ping=True, **kwargs)


engine = build_engine(settings.DATABASE_URL)

# 요청 단위로 사용할 세션 팩토리
SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
)


def create_tables(bind: Engine = engine) -> None:
    # 모델 import 로 Base.metadata 에 테이블 등록
    import fithub.models.user  # noqa: F401
    import fithub.models.follow  # noqa: F401
    import fithub.models.admin_log  # noqa: F401

    Base.metadata.create_all(bind=bind)
