"""
공개 범위(Privacy) projection 단위 테스트.
- PUBLIC / FOLLOWERS / PRIVATE 별 노출 여부,
  제외된 그룹의 키가 응답에서 완전히 빠지는지,
  설정 누락 시 fallback(PUBLIC / PRIVATE) 적용, 기본값 병합을 검증한다.
"""

import pytest
from pydantic import ValidationError

from fithub.models.enums import PrivacyGroup, PrivacyLevel
from fithub.schemas.policy import PrivacySettings, ViewerContext
from fithub.services.privacy import (
    BASE_FIELDS,
    GROUP_ATTRIBUTES,
    merge_privacy_settings,
    project,
    resolve_level,
    visible_groups,
)

ANONYMOUS = ViewerContext.anonymous()
STRANGER = ViewerContext(is_authenticated=True, is_following_target=False)
FOLLOWER = ViewerContext(is_authenticated=True, is_following_target=True)


@pytest.fixture()
def attributes():
    return {
        "id": "u1",
        "name": "Mario",
        "surname": "Rossi",
        "nickname": "mrossi",
        "createdAt": "2026-01-01T00:00:00",
        "roles": ["MEMBER"],
        "email": "mario@test.com",
        "dateOfBirth": "1990-05-01",
        "sportTypes": ["RUNNING", "CYCLING"],
        "stravaLink": "https://strava.com/mrossi",
        "instagramLink": None,
        "youtubeLink": None,
        "garminLink": None,
        "tiktokLink": None,
        "personalWebsiteLink": None,
        "avatarKey": "avatars/u1.png",
        "avatarThumbKey": "avatars/u1_thumb.png",
        "profilePicture": None,
        "bannerKey": "banners/u1.png",
        "description": "runner",
        "cityRegion": "Milano",
        "country": "IT",
        "personalStats": {"marathons": 3},
        "personalAchievements": ["sub-3"],
    }


# 시나리오 D
def test_followers_field_hidden_from_non_follower(attributes):
    out = project(attributes, PrivacySettings(email=PrivacyLevel.FOLLOWERS), STRANGER)
    assert "email" not in out


# 시나리오 E
def test_followers_field_shown_to_follower(attributes):
    out = project(attributes, PrivacySettings(email=PrivacyLevel.FOLLOWERS), FOLLOWER)
    assert out["email"] == "mario@test.com"


# 시나리오 F
def test_private_field_hidden_even_from_follower(attributes):
    out = project(attributes, PrivacySettings(sport_types=PrivacyLevel.PRIVATE), FOLLOWER)
    assert "sportTypes" not in out


def test_anonymous_viewer_sees_only_public_groups(attributes):
    settings = PrivacySettings(
        email=PrivacyLevel.FOLLOWERS,
        date_of_birth=PrivacyLevel.PRIVATE,
        social_links=PrivacyLevel.FOLLOWERS,
    )
    out = project(attributes, settings, ANONYMOUS)
    assert "email" not in out
    assert "dateOfBirth" not in out
    assert "stravaLink" not in out and "instagramLink" not in out
    assert out["sportTypes"] == ["RUNNING", "CYCLING"]


def test_base_and_unguarded_fields_are_always_present(attributes):
    all_private = PrivacySettings(**{name: PrivacyLevel.PRIVATE for name in PrivacySettings.model_fields})
    out = project(attributes, all_private, FOLLOWER)
    assert set(out) == set(BASE_FIELDS) | {"country"}
    assert out["country"] == "IT"


def test_group_attributes_travel_together(attributes):
    out = project(attributes, PrivacySettings(avatar=PrivacyLevel.FOLLOWERS), FOLLOWER)
    for key in GROUP_ATTRIBUTES[PrivacyGroup.AVATAR]:
        assert key in out

    out = project(attributes, PrivacySettings(avatar=PrivacyLevel.FOLLOWERS), STRANGER)
    for key in GROUP_ATTRIBUTES[PrivacyGroup.AVATAR]:
        assert key not in out


def test_all_public_returns_every_known_attribute(attributes):
    out = project(attributes, PrivacySettings(), ANONYMOUS)
    assert out == attributes


def test_attributes_missing_from_target_are_not_invented():
    out = project({"id": "u2", "name": "N"}, PrivacySettings(), FOLLOWER)
    assert out == {"id": "u2", "name": "N"}


def test_custom_base_fields(attributes):
    out = project(attributes, PrivacySettings(**{n: PrivacyLevel.PRIVATE for n in PrivacySettings.model_fields}),
                  ANONYMOUS, base_fields=("id",))
    assert out == {"id": "u1", "country": "IT"}


class TestFallback:
    def test_no_settings_means_all_public(self, attributes):
        assert project(attributes, None, ANONYMOUS) == attributes

    def test_partial_mapping_defaults_missing_groups_to_public(self, attributes):
        out = project(attributes, {"email": "PRIVATE"}, ANONYMOUS)
        assert "email" not in out
        assert out["description"] == "runner"

    def test_fail_closed_fallback_hides_unset_groups(self, attributes):
        out = project(attributes, {"email": "PUBLIC"}, FOLLOWER, fallback=PrivacyLevel.PRIVATE)
        assert out["email"] == "mario@test.com"
        assert "description" not in out
        assert "country" in out

    def test_resolve_level_sources(self):
        assert resolve_level(None, PrivacyGroup.EMAIL) == PrivacyLevel.PUBLIC
        assert resolve_level({}, PrivacyGroup.BANNER, PrivacyLevel.FOLLOWERS) == PrivacyLevel.FOLLOWERS
        assert resolve_level({"dateOfBirth": "FOLLOWERS"}, PrivacyGroup.DATE_OF_BIRTH) == PrivacyLevel.FOLLOWERS
        assert resolve_level({PrivacyGroup.BANNER: PrivacyLevel.PRIVATE}, PrivacyGroup.BANNER) == PrivacyLevel.PRIVATE
        assert resolve_level({"email": None}, PrivacyGroup.EMAIL) == PrivacyLevel.PUBLIC
        assert resolve_level({"email": "SECRET"}, PrivacyGroup.EMAIL) == PrivacyLevel.PUBLIC

    def test_fixed_record_ignores_fallback(self):
        settings = PrivacySettings(email=PrivacyLevel.FOLLOWERS)
        assert resolve_level(settings, PrivacyGroup.EMAIL, PrivacyLevel.PRIVATE) == PrivacyLevel.FOLLOWERS
        assert resolve_level(settings, PrivacyGroup.BANNER, PrivacyLevel.PRIVATE) == PrivacyLevel.PUBLIC


def test_visible_groups_by_viewer():
    settings = PrivacySettings(email=PrivacyLevel.FOLLOWERS, banner=PrivacyLevel.PRIVATE)
    assert PrivacyGroup.EMAIL not in visible_groups(settings, STRANGER)
    assert PrivacyGroup.EMAIL in visible_groups(settings, FOLLOWER)
    assert PrivacyGroup.BANNER not in visible_groups(settings, FOLLOWER)
    assert len(visible_groups(PrivacySettings(), ANONYMOUS)) == len(PrivacyGroup)


def test_every_group_has_a_settings_field():
    settings = PrivacySettings()
    for group in PrivacyGroup:
        assert settings.level_for(group) == PrivacyLevel.PUBLIC
    assert set(settings.to_wire()) == {g.value for g in PrivacyGroup}


class TestMergePrivacySettings:
    def test_defaults(self):
        assert merge_privacy_settings() == PrivacySettings()

    def test_wire_keys_are_merged_over_defaults(self):
        merged = merge_privacy_settings({"dateOfBirth": "PRIVATE", "cityRegion": "FOLLOWERS"})
        assert merged.date_of_birth == PrivacyLevel.PRIVATE
        assert merged.city_region == PrivacyLevel.FOLLOWERS
        assert merged.email == PrivacyLevel.PUBLIC

    def test_null_values_keep_defaults(self):
        assert merge_privacy_settings({"email": None}).email == PrivacyLevel.PUBLIC

    def test_invalid_level_is_rejected(self):
        with pytest.raises(ValidationError):
            merge_privacy_settings({"email": "EVERYONE"})


def test_anonymous_viewer_cannot_be_following():
    with pytest.raises(ValidationError):
        ViewerContext(is_authenticated=False, is_following_target=True)
