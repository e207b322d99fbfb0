"""
main.py

FastAPI 애플리케이션 진입점(Entry Point).

주요 역할:
- 로깅 초기화
- FastAPI 앱 인스턴스 생성
- CORS 미들웨어 설정
- 에러 응답 envelope({error, code}) 핸들러 등록
- 라우터(admin, users) 등록
- 헬스 체크 엔드포인트 제공

설계 원칙:
- 비즈니스 로직은 포함하지 않고 설정/조립 역할만 수행
- 권한 / 공개 범위 판단은 services.roles / services.privacy 에 위임

관련 파일:
- fithub.core.config        : 환경 변수 및 설정 로드
- fithub.core.errors        : 에러 응답 변환
- fithub.routers.*          : 기능별 API 라우터

"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from fithub.core.config import settings
from fithub.core.errors import register_exception_handlers
from fithub.core.logging_config import setup_logging
from fithub.routers import admin, users

setup_logging(settings.LOG_LEVEL)

app = FastAPI(title="Fithub Backend")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

app.include_router(admin.router)
app.include_router(users.router)


@app.get("/health")
def health():
    return {"status": "ok"}
