"""
services/privacy.py

공개 프로필 조회 시 필드별 공개 범위(Privacy)를 적용하는 로직.

이 파일은 대상 사용자의 전체 속성, 공개 범위 설정, 조회자 상태(팔로우 여부)를 받아
조회자에게 보여줄 수 있는 속성만 골라 반환한다.

주요 기능:
- 그룹별 공개 범위 해석 (설정 누락 시 fallback 레벨 적용)
- 조회자 기준 공개 그룹 계산
- 공개 프로필 projection
- 프로필 생성 시 공개 범위 기본값 병합

설계 원칙:
- 순수 함수 (I/O 없음, 입력만 읽고 새 dict 반환)
- 차단/삭제된 대상 필터링은 호출 측 책임
- 제외된 그룹의 키는 응답에서 완전히 빠짐 (null 로 채우지 않음)
- PRIVATE 은 팔로우 여부/조회자 권한과 무관하게 항상 숨김

관련 파일:
- fithub.schemas.policy    : PrivacySettings / ViewerContext
- fithub.routers.users     : 공개 프로필 조회 API

"""

from typing import Any, Mapping, Optional, Union

from fithub.models.enums import PrivacyGroup, PrivacyLevel
from fithub.schemas.policy import PrivacySettings, ViewerContext


# 공개 범위와 무관하게 항상 노출되는 기본 식별 정보
BASE_FIELDS = ("id", "name", "surname", "nickname", "createdAt", "roles")

# 공개 범위 설정 대상이 아닌 필드 (항상 공개)
UNGUARDED_FIELDS = ("country",)

GROUP_ATTRIBUTES: dict[PrivacyGroup, tuple[str, ...]] = {
    PrivacyGroup.EMAIL: ("email",),
    PrivacyGroup.DATE_OF_BIRTH: ("dateOfBirth",),
    PrivacyGroup.SPORT_TYPES: ("sportTypes",),
    PrivacyGroup.SOCIAL_LINKS: (
        "stravaLink",
        "instagramLink",
        "youtubeLink",
        "garminLink",
        "tiktokLink",
        "personalWebsiteLink",
    ),
    PrivacyGroup.AVATAR: ("avatarKey", "avatarThumbKey", "profilePicture"),
    PrivacyGroup.BANNER: ("bannerKey",),
    PrivacyGroup.DESCRIPTION: ("description",),
    PrivacyGroup.CITY_REGION: ("cityRegion",),
    PrivacyGroup.PERSONAL_STATS: ("personalStats",),
    PrivacyGroup.PERSONAL_ACHIEVEMENTS: ("personalAchievements",),
}

PrivacyInput = Union[PrivacySettings, Mapping[Any, Any], None]


"""
그룹별 공개 범위 해석 (fallback 적용 지점은 이 함수 하나뿐)

- PrivacySettings : 필드 값 그대로 사용
- dict            : wire key("dateOfBirth") 또는 PrivacyGroup 키 모두 허용
- None / 키 누락 / 알 수 없는 값 : fallback (기본 PUBLIC, fail-open)

"""

def resolve_level(
    settings: PrivacyInput,
    group: PrivacyGroup,
    fallback: PrivacyLevel = PrivacyLevel.PUBLIC,
) -> PrivacyLevel:
    if settings is None:
        return fallback
    if isinstance(settings, PrivacySettings):
        return settings.level_for(group)

    raw = settings.get(group.value)
    if raw is None:
        raw = settings.get(group)
    if raw is None:
        return fallback
    try:
        return PrivacyLevel(raw)
    except ValueError:
        return fallback


def is_visible(level: PrivacyLevel, viewer: ViewerContext) -> bool:
    if level == PrivacyLevel.PUBLIC:
        return True
    if level == PrivacyLevel.FOLLOWERS:
        return viewer.is_following_target
    return False


def visible_groups(
    settings: PrivacyInput,
    viewer: ViewerContext,
    fallback: PrivacyLevel = PrivacyLevel.PUBLIC,
) -> set[PrivacyGroup]:
    return {
        group
        for group in PrivacyGroup
        if is_visible(resolve_level(settings, group, fallback), viewer)
    }


"""
공개 프로필 projection

1. BASE_FIELDS / UNGUARDED_FIELDS 는 항상 포함
2. 공개 그룹의 속성만 포함
3. 대상에 없는 속성은 만들지 않음

"""

def project(
    target_attributes: Mapping[str, Any],
    privacy_settings: PrivacyInput,
    viewer: ViewerContext,
    base_fields: tuple[str, ...] = BASE_FIELDS,
    *,
    fallback: PrivacyLevel = PrivacyLevel.PUBLIC,
) -> dict[str, Any]:
    allowed_keys = list(base_fields) + list(UNGUARDED_FIELDS)
    for group in visible_groups(privacy_settings, viewer, fallback):
        allowed_keys.extend(GROUP_ATTRIBUTES[group])

    return {key: target_attributes[key] for key in allowed_keys if key in target_attributes}


# 프로필 생성 시 전달된 값만 기본값(PUBLIC) 위에 병합
def merge_privacy_settings(supplied: Optional[Mapping[str, Any]] = None) -> PrivacySettings:
    if isinstance(supplied, PrivacySettings):
        return supplied
    values = {key: value for key, value in (supplied or {}).items() if value is not None}
    return PrivacySettings.model_validate(values)
