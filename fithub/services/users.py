"""
services/users.py

사용자 조회(Storage) 및 응답 변환 로직.

라우터 / 의존성에서 사용자를 찾을 때는 이 파일의 함수만 사용한다.

주요 기능:
- id / auth_id 로 사용자 조회
- 관리자용 사용자 목록 조회 (검색, 필터, 페이지네이션)
- User 모델 -> wire 포맷(camelCase) dict 변환

설계 원칙:
- HTTP / FastAPI 의존성 없음
- 트랜잭션 제어(commit)는 라우터에서 수행

관련 파일:
- fithub.models.user       : User 모델
- fithub.routers.admin     : 관리자 사용자 관리 API
- fithub.routers.users     : 공개 프로필 API

"""

import math
import uuid
from typing import Any, Optional

from sqlalchemy import func, or_, select
from sqlalchemy.orm import Session

from fithub.models.enums import Role
from fithub.models.user import User


def find_user_by_id(db: Session, user_id: uuid.UUID) -> Optional[User]:
    return db.scalar(select(User).where(User.id == user_id))


def find_user_by_auth_id(db: Session, auth_id: str) -> Optional[User]:
    return db.scalar(select(User).where(User.auth_id == auth_id))


def _isoformat(value) -> Optional[str]:
    return value.isoformat() if value is not None else None


"""
공개 프로필 projection 입력용 속성 dict

- 키는 클라이언트 wire 포맷(camelCase)
- 값은 JSON 직렬화 가능한 형태 (UUID / 날짜는 문자열)

"""

def to_attributes(user: User) -> dict[str, Any]:
    return {
        "id": str(user.id),
        "name": user.name,
        "surname": user.surname,
        "nickname": user.nickname,
        "createdAt": _isoformat(user.created_at),
        "roles": list(user.roles),
        "email": user.email,
        "dateOfBirth": _isoformat(user.date_of_birth),
        "sportTypes": list(user.sport_types or []),
        "stravaLink": user.strava_link,
        "instagramLink": user.instagram_link,
        "youtubeLink": user.youtube_link,
        "garminLink": user.garmin_link,
        "tiktokLink": user.tiktok_link,
        "personalWebsiteLink": user.personal_website_link,
        "avatarKey": user.avatar_key,
        "avatarThumbKey": user.avatar_thumb_key,
        "profilePicture": user.profile_picture,
        "bannerKey": user.banner_key,
        "description": user.description,
        "cityRegion": user.city_region,
        "country": user.country,
        "personalStats": user.personal_stats,
        "personalAchievements": user.personal_achievements,
    }


# 관리자 화면용 전체 정보 (공개 범위 적용 없음)
def to_user_response(user: User) -> dict[str, Any]:
    data = to_attributes(user)
    data.update(
        {
            "authId": user.auth_id,
            "updatedAt": _isoformat(user.updated_at),
            "isBlocked": user.is_blocked,
            "isEmailVerified": user.is_email_verified,
            "privacySettings": dict(user.privacy_settings or {}),
        }
    )
    return data


"""
관리자용 사용자 목록 조회

- search        : name / surname / nickname / email 부분 일치 (대소문자 무시)
- role          : 해당 Role 보유 사용자만
- blocked       : 차단 여부 필터
- email_verified: 이메일 인증 여부 필터
- 최신 가입순 정렬

반환: (현재 페이지 사용자 목록, 전체 개수, 전체 페이지 수)

"""

def list_users(
    db: Session,
    *,
    page: int,
    per_page: int,
    search: str = "",
    role: Optional[Role] = None,
    blocked: Optional[bool] = None,
    email_verified: Optional[bool] = None,
) -> tuple[list[User], int, int]:
    conditions = []

    if search:
        pattern = f"%{search.lower()}%"
        conditions.append(
            or_(
                func.lower(User.name).like(pattern),
                func.lower(User.surname).like(pattern),
                func.lower(User.nickname).like(pattern),
                func.lower(User.email).like(pattern),
            )
        )
    if blocked is not None:
        conditions.append(User.is_blocked.is_(blocked))
    if email_verified is not None:
        conditions.append(User.is_email_verified.is_(email_verified))

    query = select(User).where(*conditions).order_by(User.created_at.desc())
    start = (page - 1) * per_page

    if role is None:
        total = db.scalar(select(func.count()).select_from(User).where(*conditions)) or 0
        users = list(db.scalars(query.offset(start).limit(per_page)))
    else:
        # roles 는 JSON 컬럼이라 DB 종류와 무관하게 Python 에서 필터링
        matched = [u for u in db.scalars(query) if role in u.role_set]
        total = len(matched)
        users = matched[start:start + per_page]

    return users, total, math.ceil(total / per_page)
