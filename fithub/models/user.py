"""
user.py

사용자(User) 모델 정의 파일.

이 파일은 회원 프로필 정보와 권한(roles), 공개 범위(privacy_settings),
차단 상태(is_blocked)를 관리한다.

모든 인증, 권한, 공개 프로필 기능의 기준이 되는 핵심 모델이다.

- auth_id           : 외부 인증 서버의 사용자 식별자 (JWT sub)
- roles             : Role 값 문자열 리스트 (중복 없음, MEMBER 항상 포함)
- privacy_settings  : 그룹별 공개 범위 (wire key -> PrivacyLevel 값)

"""

import uuid
import datetime

from sqlalchemy import JSON, Boolean, Date, DateTime, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from fithub.db.base import Base
from fithub.models.enums import Role
from fithub.services.privacy import merge_privacy_settings


def _utcnow() -> datetime.datetime:
    return datetime.datetime.now(datetime.timezone.utc)


def _default_privacy() -> dict:
    return merge_privacy_settings().to_wire()


class User(Base):
    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    auth_id: Mapped[str] = mapped_column(String(255), unique=True, index=True, nullable=False)

    name: Mapped[str] = mapped_column(String(50), nullable=False)
    surname: Mapped[str] = mapped_column(String(50), nullable=False)
    nickname: Mapped[str] = mapped_column(String(50), unique=True, index=True, nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True, nullable=False)
    date_of_birth: Mapped[datetime.date | None] = mapped_column(Date, nullable=True)
    sport_types: Mapped[list] = mapped_column(JSON, nullable=False, default=list)

    # 이미지 저장소 key (업로드/썸네일 생성은 이 서비스 범위 밖)
    profile_picture: Mapped[str | None] = mapped_column(String(500), nullable=True)
    avatar_key: Mapped[str | None] = mapped_column(String(500), nullable=True)
    avatar_thumb_key: Mapped[str | None] = mapped_column(String(500), nullable=True)
    banner_key: Mapped[str | None] = mapped_column(String(500), nullable=True)

    strava_link: Mapped[str | None] = mapped_column(String(500), nullable=True)
    instagram_link: Mapped[str | None] = mapped_column(String(500), nullable=True)
    youtube_link: Mapped[str | None] = mapped_column(String(500), nullable=True)
    garmin_link: Mapped[str | None] = mapped_column(String(500), nullable=True)
    tiktok_link: Mapped[str | None] = mapped_column(String(500), nullable=True)
    personal_website_link: Mapped[str | None] = mapped_column(String(500), nullable=True)

    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    city_region: Mapped[str | None] = mapped_column(String(100), nullable=True)
    country: Mapped[str | None] = mapped_column(String(100), nullable=True)
    personal_stats: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    personal_achievements: Mapped[list | None] = mapped_column(JSON, nullable=True)

    roles: Mapped[list] = mapped_column(JSON, nullable=False, default=lambda: [Role.MEMBER.value])
    privacy_settings: Mapped[dict] = mapped_column(JSON, nullable=False, default=_default_privacy)

    is_blocked: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, index=True)
    is_email_verified: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    created_at: Mapped[datetime.datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=_utcnow)
    updated_at: Mapped[datetime.datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow
    )

    @property
    def role_set(self) -> frozenset[Role]:
        return frozenset(Role(r) for r in self.roles or ())
