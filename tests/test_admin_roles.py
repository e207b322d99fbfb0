"""
관리자 권한 변경 API 통합 테스트.
- 관리자 인증(401/403/404), 요청 검증(MEMBER 필수),
  권한 상승 방지 / SUPER_ADMIN 불변 / 본인 잠금 방지 에러 envelope,
  성공 시 DB 반영과 관리자 로그 기록까지 확인한다.
"""

import uuid

from fithub.models.enums import Role
from tests.helpers import (
    auth_header,
    create_admin_in_db,
    create_superadmin_in_db,
    create_user_in_db,
    get_user,
    user_header,
)


def _set_roles(client, actor, target_id, roles):
    return client.patch(
        f"/admin/users/{target_id}/roles",
        headers=user_header(actor),
        json={"roles": roles},
    )


def test_requires_authentication(client, db_session):
    member = create_user_in_db(db_session)
    r = client.patch(f"/admin/users/{member.id}/roles", json={"roles": ["MEMBER"]})
    assert r.status_code == 401
    assert r.json() == {"error": "Not authenticated", "code": "UNAUTHORIZED"}


def test_invalid_token_is_rejected(client, db_session):
    member = create_user_in_db(db_session)
    r = client.patch(
        f"/admin/users/{member.id}/roles",
        headers=auth_header("not-a-jwt"),
        json={"roles": ["MEMBER"]},
    )
    assert r.status_code == 401
    assert r.json()["code"] == "INVALID_TOKEN"


def test_member_cannot_use_admin_api(client, db_session):
    member = create_user_in_db(db_session)
    other = create_user_in_db(db_session)
    r = _set_roles(client, member, other.id, ["MEMBER", "GAMER"])
    assert r.status_code == 403
    assert r.json() == {"error": "Admin privileges required", "code": "FORBIDDEN"}


def test_blocked_admin_is_rejected(client, db_session):
    admin = create_admin_in_db(db_session, is_blocked=True)
    member = create_user_in_db(db_session)
    r = _set_roles(client, admin, member.id, ["MEMBER", "GAMER"])
    assert r.status_code == 403
    assert r.json()["code"] == "USER_BLOCKED"


def test_unknown_target_is_404(client, db_session):
    admin = create_admin_in_db(db_session)
    r = _set_roles(client, admin, uuid.uuid4(), ["MEMBER"])
    assert r.status_code == 404
    assert r.json()["code"] == "USER_NOT_FOUND"


def test_roles_must_include_member(client, db_session):
    admin = create_admin_in_db(db_session)
    member = create_user_in_db(db_session)

    r = _set_roles(client, admin, member.id, ["GAMER"])
    assert r.status_code == 400
    assert r.json()["code"] == "VALIDATION_ERROR"

    r = _set_roles(client, admin, member.id, [])
    assert r.status_code == 400

    r = _set_roles(client, admin, member.id, ["MEMBER", "WIZARD"])
    assert r.status_code == 400


def test_admin_updates_non_admin_roles(client, db_session):
    admin = create_admin_in_db(db_session)
    member = create_user_in_db(db_session)

    r = _set_roles(client, admin, member.id, ["MEMBER", "GAMER", "GAMER"])
    assert r.status_code == 200, r.text
    assert r.json()["user"]["roles"] == ["MEMBER", "GAMER"]
    assert get_user(db_session, member.id).role_set == {Role.MEMBER, Role.GAMER}

    logs = client.get("/admin/logs", headers=user_header(admin)).json()
    assert logs["meta"]["count"] == 1
    entry = logs["data"][0]
    assert entry["action"] == "SET_ROLES"
    assert entry["before"] == "MEMBER"
    assert entry["after"] == "GAMER,MEMBER"
    assert entry["actor"]["id"] == str(admin.id)
    assert entry["target"]["id"] == str(member.id)


def test_admin_cannot_grant_admin(client, db_session):
    admin = create_admin_in_db(db_session)
    member = create_user_in_db(db_session)

    r = _set_roles(client, admin, member.id, ["MEMBER", "ADMIN"])
    assert r.status_code == 403
    assert r.json() == {"error": "Only super-admins can grant or revoke admin roles", "code": "FORBIDDEN"}
    assert get_user(db_session, member.id).role_set == {Role.MEMBER}


def test_admin_cannot_manage_other_admin(client, db_session):
    admin = create_admin_in_db(db_session)
    other_admin = create_admin_in_db(db_session)

    r = _set_roles(client, admin, other_admin.id, ["MEMBER", "ADMIN", "GAMER"])
    assert r.status_code == 403
    assert r.json()["error"] == "Only super-admins can manage admin accounts"


def test_superadmin_grants_and_revokes_admin(client, db_session):
    superadmin = create_superadmin_in_db(db_session)
    member = create_user_in_db(db_session)

    r = _set_roles(client, superadmin, member.id, ["MEMBER", "ADMIN"])
    assert r.status_code == 200, r.text
    assert Role.ADMIN in get_user(db_session, member.id).role_set

    r = _set_roles(client, superadmin, member.id, ["MEMBER"])
    assert r.status_code == 200, r.text
    assert get_user(db_session, member.id).role_set == {Role.MEMBER}


def test_superadmin_role_cannot_be_granted_or_revoked(client, db_session):
    superadmin = create_superadmin_in_db(db_session)
    other_super = create_superadmin_in_db(db_session)
    admin = create_admin_in_db(db_session)

    r = _set_roles(client, superadmin, admin.id, ["MEMBER", "ADMIN", "SUPER_ADMIN"])
    assert r.status_code == 403
    assert r.json()["error"] == "The SUPER_ADMIN role cannot be granted or revoked"

    r = _set_roles(client, superadmin, other_super.id, ["MEMBER", "ADMIN"])
    assert r.status_code == 403
    assert Role.SUPER_ADMIN in get_user(db_session, other_super.id).role_set


def test_admin_cannot_remove_own_admin_role(client, db_session):
    admin = create_admin_in_db(db_session)

    r = _set_roles(client, admin, admin.id, ["MEMBER"])
    assert r.status_code == 400
    assert r.json() == {"error": "Cannot remove your own admin privileges", "code": "FORBIDDEN"}
    assert Role.ADMIN in get_user(db_session, admin.id).role_set


def test_admin_can_add_non_admin_role_to_self(client, db_session):
    admin = create_admin_in_db(db_session)

    r = _set_roles(client, admin, admin.id, ["MEMBER", "ADMIN", "COMMUNITY_LEADER"])
    assert r.status_code == 200, r.text
    assert Role.COMMUNITY_LEADER in get_user(db_session, admin.id).role_set


def test_superadmin_cannot_lock_self_out(client, db_session):
    superadmin = create_superadmin_in_db(db_session)

    r = _set_roles(client, superadmin, superadmin.id, ["MEMBER"])
    assert r.status_code == 400
    assert r.json()["error"] == "Cannot remove your own admin privileges"
