"""
config.py

애플리케이션 전역 설정(Configuration) 관리 파일.

이 파일은 .env 환경 변수들을 Pydantic BaseSettings를 통해 로드하여
애플리케이션 전반에서 공통으로 사용하는 설정 값을 제공한다.

주요 설정 항목:
- 데이터베이스 연결 정보
- JWT 인증 관련 시크릿 및 만료 정책
- CORS 허용 도메인 목록
- 로그 레벨
- 공개 범위 설정 누락 시 적용할 기본 레벨 (fail-open / fail-closed)

설계 원칙:
- 모든 환경 변수는 이 파일을 통해서만 접근
- 설정 값은 런타임 중 변경되지 않는 불변 객체로 취급
- 정책 엔진(services.*)은 settings를 직접 읽지 않고 라우터가 인자로 전달

관련 파일:
- fithub.main              : CORS / 로깅 초기화
- fithub.core.security     : JWT 시크릿 / 만료 설정 사용
- fithub.db.session        : DATABASE_URL 사용
- fithub.routers.users     : PRIVACY_FALLBACK_LEVEL 사용

"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List

from fithub.models.enums import PrivacyLevel


# .env 파일에 정의된 환경 변수를 로드하는 설정 클래스
# extra="ignore" 옵션으로 정의되지 않은 환경 변수는 무시
class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    DATABASE_URL: str
    TEST_DATABASE_URL: str | None = None

    # 토큰 발급은 외부 인증 서버 담당, 여기서는 검증만 (sub = auth_id)
    SECRET_KEY: str
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 30

    # CORS 허용 도메인 (프론트엔드 주소)
    CORS_ORIGINS: List[str] = ["http://localhost:5173", "http://127.0.0.1:5173"]

    LOG_LEVEL: str = "INFO"

    # 공개 범위가 저장되지 않은 그룹에 적용할 레벨
    # - PUBLIC  : fail-open (기본값, 기존 동작)
    # - PRIVATE : fail-closed
    PRIVACY_FALLBACK_LEVEL: PrivacyLevel = PrivacyLevel.PUBLIC


# 애플리케이션 전역에서 import하여 사용하는 Settings 인스턴스
settings = Settings()
