from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from fithub.models.enums import PrivacyLevel, Role
from fithub.schemas.policy import PrivacySettings


# 🔹 관리자 권한 변경 요청용
class RoleUpdate(BaseModel):
    roles: list[Role] = Field(min_length=1)

    @field_validator("roles")
    @classmethod
    def _member_required(cls, roles: list[Role]) -> list[Role]:
        if Role.MEMBER not in roles:
            raise ValueError("User must have at least the MEMBER role")
        # 순서 유지하며 중복 제거
        return list(dict.fromkeys(roles))


# 🔹 관리자 차단 상태 변경 요청용
class BlockedUpdate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    is_blocked: bool = Field(alias="isBlocked")


"""
🔹 본인 공개 범위 설정 변경 요청용

- 전체 교체이므로 10개 그룹 모두 필수 (기본값 없음)
- 알 수 없는 키는 거부

"""

class PrivacySettingsUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid", alias_generator=to_camel, populate_by_name=True)

    email: PrivacyLevel
    date_of_birth: PrivacyLevel
    sport_types: PrivacyLevel
    social_links: PrivacyLevel
    avatar: PrivacyLevel
    banner: PrivacyLevel
    description: PrivacyLevel
    city_region: PrivacyLevel
    personal_stats: PrivacyLevel
    personal_achievements: PrivacyLevel

    def to_settings(self) -> PrivacySettings:
        return PrivacySettings(**self.model_dump())
