"""
services/roles.py

권한(Role) 계층 기반 관리자 권한 판단 로직 모음.

이 파일은 "누가 누구를 관리할 수 있는가",
"어떤 권한 변경이 허용되는가"를 판단하는 순수 함수만 제공한다.
사용자 / DB / HTTP 에 대한 지식은 없다.

주요 기능:
- 관리자 / 최고 관리자 여부 판단
- 관리 대상 사용자 판단 (관리자는 다른 관리자를 관리할 수 없음)
- 권한 변경 검증 (권한 상승 방지, SUPER_ADMIN 불변)
- 본인 권한 변경 시 자기 잠금(self-lockout) 방지
- 차단 가능 여부 판단 (본인 차단 / SUPER_ADMIN 차단 금지)

설계 원칙:
- 모든 함수는 부작용 없는 순수 함수 (동시 호출 시 잠금 불필요)
- 예외를 던지지 않고 bool 또는 Decision 을 반환
- 호출 측이 사전 검사를 했더라도 함수 단독으로 안전하도록 재검사

관련 파일:
- fithub.core.deps         : 관리자 인증 의존성
- fithub.routers.admin     : 권한 변경 / 차단 API
- fithub.core.errors       : Decision -> HTTP 에러 변환

"""

from typing import Iterable

from fithub.models.enums import DenyReason, Role
from fithub.schemas.policy import Decision, RoleChangeRequest


ADMIN_LEVEL_ROLES = frozenset({Role.ADMIN, Role.SUPER_ADMIN})


def has_role(roles: Iterable[Role], role: Role) -> bool:
    return role in set(roles)


def has_any_role(roles: Iterable[Role], candidates: Iterable[Role]) -> bool:
    owned = set(roles)
    return any(role in owned for role in candidates)


def has_all_roles(roles: Iterable[Role], candidates: Iterable[Role]) -> bool:
    owned = set(roles)
    return all(role in owned for role in candidates)


def is_super_admin(roles: Iterable[Role]) -> bool:
    return has_role(roles, Role.SUPER_ADMIN)


def is_admin(roles: Iterable[Role]) -> bool:
    return has_role(roles, Role.ADMIN)


def has_admin_privileges(roles: Iterable[Role]) -> bool:
    roles = set(roles)
    return is_admin(roles) or is_super_admin(roles)


"""
관리 대상 판단

- SUPER_ADMIN 은 모든 사용자를 관리할 수 있음
- 관리자 권한이 없는 actor 는 아무도 관리할 수 없음
- ADMIN 은 관리자 권한이 없는 사용자만 관리할 수 있음

"""

def can_manage_user(actor_roles: Iterable[Role], target_roles: Iterable[Role]) -> bool:
    actor_roles = set(actor_roles)
    if is_super_admin(actor_roles):
        return True
    if not has_admin_privileges(actor_roles):
        return False
    return not has_admin_privileges(target_roles)


def _membership_changed(role: Role, before: set[Role], after: set[Role]) -> bool:
    return (role in before) != (role in after)


"""
권한 변경 검증

- Rule 1: SUPER_ADMIN 이 아닌 actor 는 대상의 ADMIN / SUPER_ADMIN 보유 여부를 바꿀 수 없음
- Rule 2: actor 와 무관하게 SUPER_ADMIN 은 이 경로로 부여/회수할 수 없음
- 현재 권한과 동일한 요청(no-op)은 항상 통과

"""

def can_manage_admin_role(
    actor_roles: Iterable[Role],
    target_roles: Iterable[Role],
    requested_roles: Iterable[Role],
) -> bool:
    before, after = set(target_roles), set(requested_roles)

    if not is_super_admin(actor_roles):
        if any(_membership_changed(role, before, after) for role in ADMIN_LEVEL_ROLES):
            return False

    if _membership_changed(Role.SUPER_ADMIN, before, after):
        return False

    return True


"""
본인 권한 변경 검증 (actor == target 인 경우에만 사용)

- 일반 ADMIN : 요청 권한에 ADMIN 이 남아 있어야 함
- SUPER_ADMIN : 요청 권한에 SUPER_ADMIN 또는 ADMIN 중 하나가 남아 있어야 함

"""

def can_self_modify_roles(actor_is_super_admin: bool, requested_roles: Iterable[Role]) -> bool:
    requested = set(requested_roles)
    if actor_is_super_admin:
        return bool(requested & ADMIN_LEVEL_ROLES)
    return Role.ADMIN in requested


# 차단(requested_blocked=True)만 제한, 해제는 관리 권한만 확인
def can_block_user(
    actor_roles: Iterable[Role],
    target_roles: Iterable[Role],
    actor_is_target: bool,
    requested_blocked: bool,
) -> bool:
    target_roles = set(target_roles)
    if requested_blocked and (actor_is_target or is_super_admin(target_roles)):
        return False
    return can_manage_user(actor_roles, target_roles)


"""
사유(DenyReason) 포함 판단 함수

위 bool 함수들을 같은 규칙으로 감싸서
라우터가 에러 메시지/상태 코드를 고를 수 있도록 거부 사유를 함께 반환한다.

"""

def authorize_manage(actor_roles: Iterable[Role], target_roles: Iterable[Role]) -> Decision:
    actor_roles = set(actor_roles)
    if not has_admin_privileges(actor_roles):
        return Decision.deny(DenyReason.NOT_PRIVILEGED)
    if not can_manage_user(actor_roles, target_roles):
        return Decision.deny(DenyReason.TARGET_PROTECTED)
    return Decision.allow()


"""
권한 변경 판단 순서

1. actor 관리자 권한 확인                        -> NOT_PRIVILEGED
2. 다른 사용자 대상일 때 관리 가능 여부            -> TARGET_PROTECTED
3. 본인 대상일 때 자기 잠금 여부                  -> SELF_LOCKOUT
4. Rule 2 (SUPER_ADMIN 불변) / Rule 1 (권한 상승) -> SUPER_ADMIN_IMMUTABLE / ROLE_ESCALATION

본인 대상 요청은 2번 대신 3번을 먼저 검사해서
"본인 관리자 권한 제거 불가" 메시지를 우선 돌려준다.
허용 여부 자체는 모든 검사를 통과해야 하므로 순서와 무관하다.

"""

def authorize_role_change(request: RoleChangeRequest) -> Decision:
    actor_roles = set(request.actor_roles)
    target_roles = set(request.target_roles)
    requested_roles = set(request.requested_roles)

    if not has_admin_privileges(actor_roles):
        return Decision.deny(DenyReason.NOT_PRIVILEGED)

    if request.actor_is_target:
        if not can_self_modify_roles(is_super_admin(actor_roles), requested_roles):
            return Decision.deny(DenyReason.SELF_LOCKOUT)
    elif not can_manage_user(actor_roles, target_roles):
        return Decision.deny(DenyReason.TARGET_PROTECTED)

    if not can_manage_admin_role(actor_roles, target_roles, requested_roles):
        if _membership_changed(Role.SUPER_ADMIN, target_roles, requested_roles):
            return Decision.deny(DenyReason.SUPER_ADMIN_IMMUTABLE)
        return Decision.deny(DenyReason.ROLE_ESCALATION)

    return Decision.allow()


def authorize_block(
    actor_roles: Iterable[Role],
    target_roles: Iterable[Role],
    actor_is_target: bool,
    requested_blocked: bool,
) -> Decision:
    actor_roles, target_roles = set(actor_roles), set(target_roles)

    if requested_blocked and actor_is_target:
        return Decision.deny(DenyReason.SELF_BLOCK)
    if requested_blocked and is_super_admin(target_roles):
        return Decision.deny(DenyReason.SUPER_ADMIN_UNBLOCKABLE)
    return authorize_manage(actor_roles, target_roles)
