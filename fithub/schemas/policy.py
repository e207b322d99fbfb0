"""
policy.py

정책 엔진 입출력용 값 타입(Value Object) 정의.

- PrivacySettings   : 그룹별 공개 범위 (고정 키 레코드, 기본값 PUBLIC)
- ViewerContext     : 프로필 조회자 상태 (요청마다 새로 계산, 저장하지 않음)
- RoleChangeRequest : 권한 변경 판단 입력 (저장하지 않음)
- Decision          : 허용 여부 + 거부 사유

모든 타입은 frozen 이며 정책 엔진은 이 값들을 읽기만 한다.

"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, model_validator
from pydantic.alias_generators import to_camel

from fithub.models.enums import DenyReason, PrivacyGroup, PrivacyLevel, Role


"""
프로필 공개 범위 설정

- 필드명은 snake_case, JSON 키는 camelCase (예: date_of_birth <-> dateOfBirth)
- 지정하지 않은 그룹은 PUBLIC
- 생성 시 전달된 값만 기본값 위에 덮어쓴다

"""

class PrivacySettings(BaseModel):
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    email: PrivacyLevel = PrivacyLevel.PUBLIC
    date_of_birth: PrivacyLevel = PrivacyLevel.PUBLIC
    sport_types: PrivacyLevel = PrivacyLevel.PUBLIC
    social_links: PrivacyLevel = PrivacyLevel.PUBLIC
    avatar: PrivacyLevel = PrivacyLevel.PUBLIC
    banner: PrivacyLevel = PrivacyLevel.PUBLIC
    description: PrivacyLevel = PrivacyLevel.PUBLIC
    city_region: PrivacyLevel = PrivacyLevel.PUBLIC
    personal_stats: PrivacyLevel = PrivacyLevel.PUBLIC
    personal_achievements: PrivacyLevel = PrivacyLevel.PUBLIC

    def level_for(self, group: PrivacyGroup) -> PrivacyLevel:
        return getattr(self, _FIELD_BY_GROUP[group])

    def to_wire(self) -> dict[str, str]:
        return self.model_dump(mode="json", by_alias=True)


_FIELD_BY_GROUP = {PrivacyGroup(to_camel(name)): name for name in PrivacySettings.model_fields}


class ViewerContext(BaseModel):
    model_config = ConfigDict(frozen=True)

    is_authenticated: bool = False
    is_following_target: bool = False

    # 비로그인 조회자는 팔로우 관계를 가질 수 없음
    @model_validator(mode="after")
    def _anonymous_never_follows(self):
        if self.is_following_target and not self.is_authenticated:
            raise ValueError("anonymous viewer cannot follow the target")
        return self

    @classmethod
    def anonymous(cls) -> "ViewerContext":
        return cls()


class RoleChangeRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    actor_roles: frozenset[Role]
    target_roles: frozenset[Role]
    requested_roles: frozenset[Role]
    actor_is_target: bool = False


class Decision(BaseModel):
    model_config = ConfigDict(frozen=True)

    allowed: bool
    reason: Optional[DenyReason] = None

    def __bool__(self) -> bool:
        return self.allowed

    @classmethod
    def allow(cls) -> "Decision":
        return cls(allowed=True)

    @classmethod
    def deny(cls, reason: DenyReason) -> "Decision":
        return cls(allowed=False, reason=reason)
