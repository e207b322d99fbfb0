"""
security.py

JWT Access Token 생성/검증 유틸리티.

토큰 발급은 외부 인증 서버(auth provider)의 역할이며,
이 서비스는 전달받은 Bearer 토큰을 검증하고 sub(auth_id)를 꺼내는 역할만 한다.
create_access_token 은 초기 세팅 스크립트 / 테스트에서 토큰을 만들 때 사용한다.

설계 원칙:
- access 타입 토큰만 허용
- 시간 기반(exp) 만료는 UTC 기준으로 처리

관련 파일:
- fithub.core.config        : JWT 시크릿 키 및 만료 설정
- fithub.core.deps          : 토큰을 실제로 검증하는 인증 의존성

"""

from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import jwt, JWTError

from fithub.core.config import settings


def create_access_token(subject: str, expires_delta: Optional[timedelta] = None) -> str:
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    )
    payload = {
        "sub": subject,
        "type": "access",
        "exp": int(expire.timestamp()),
    }
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


"""
Access Token 디코딩 및 검증 함수

- 서명 / 만료 검증
- 토큰 타입(access) 확인
- subject(auth_id) 반환
- 유효하지 않을 경우 JWTError 발생

"""

def decode_access_token(token: str) -> str:
    payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    if payload.get("type") and payload.get("type") != "access":
        raise JWTError("Not an access token")
    sub = payload.get("sub")
    if not sub:
        raise JWTError("Missing subject")
    return sub
