import logging
import uuid
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy import desc, select
from sqlalchemy.orm import Session, aliased

from fithub.core.deps import get_db, get_current_admin
from fithub.core.errors import FithubError, raise_for_decision
from fithub.models.admin_log import AdminAction, AdminActionLog
from fithub.models.enums import ErrorCode, Role
from fithub.models.user import User
from fithub.schemas.policy import RoleChangeRequest
from fithub.schemas.user import BlockedUpdate, RoleUpdate
from fithub.services.admin_log import format_roles, write_admin_log
from fithub.services.roles import authorize_block, authorize_role_change
from fithub.services.users import find_user_by_id, list_users, to_user_response

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["admin"])


def _get_target(db: Session, user_id: uuid.UUID) -> User:
    user = find_user_by_id(db, user_id)
    if not user:
        raise FithubError(404, "User not found", ErrorCode.USER_NOT_FOUND)
    return user


def _commit(db: Session, user: User) -> None:
    try:
        db.commit()
        db.refresh(user)
    except Exception as e:
        db.rollback()
        logger.error("admin update failed for %s: %s", user.id, type(e).__name__)
        raise FithubError(500, f"Database error: {type(e).__name__}", ErrorCode.INTERNAL_SERVER_ERROR)


# 전체 회원 목록 조회 (검색 / 필터 / 페이지네이션)
@router.get("/users")
def get_users(
    page: int = 1,
    per_page: int = Query(20, alias="perPage"),
    search: str = "",
    role: Optional[str] = None,
    blocked: Optional[str] = None,
    email_verified: Optional[str] = Query(None, alias="emailVerified"),
    db: Session = Depends(get_db),
    _: User = Depends(get_current_admin),
):
    page = max(1, page)
    per_page = min(100, max(1, per_page))

    # 알 수 없는 필터 값은 무시
    role_filter = Role(role) if role in {r.value for r in Role} else None
    flags = {"true": True, "false": False}

    users, total, total_pages = list_users(
        db,
        page=page,
        per_page=per_page,
        search=search,
        role=role_filter,
        blocked=flags.get(blocked),
        email_verified=flags.get(email_verified),
    )
    return {
        "data": [to_user_response(u) for u in users],
        "pagination": {
            "page": page,
            "perPage": per_page,
            "total": total,
            "totalPages": total_pages,
        },
    }


# 회원 상세 조회
@router.get("/users/{user_id}")
def get_user(
    user_id: uuid.UUID,
    db: Session = Depends(get_db),
    _: User = Depends(get_current_admin),
):
    return {"user": to_user_response(_get_target(db, user_id))}


# 회원 권한 변경
@router.patch("/users/{user_id}/roles")
def update_user_roles(
    user_id: uuid.UUID,
    data: RoleUpdate,
    db: Session = Depends(get_db),
    current_admin: User = Depends(get_current_admin),
):
    user = _get_target(db, user_id)

    decision = authorize_role_change(
        RoleChangeRequest(
            actor_roles=current_admin.role_set,
            target_roles=user.role_set,
            requested_roles=frozenset(data.roles),
            actor_is_target=user.id == current_admin.id,
        )
    )
    if not decision:
        logger.info("role change denied: actor=%s target=%s reason=%s", current_admin.id, user.id, decision.reason.value)
    raise_for_decision(decision)

    before = format_roles(user.role_set)
    user.roles = [r.value for r in data.roles]
    write_admin_log(
        db,
        actor_id=current_admin.id,
        action=AdminAction.SET_ROLES,
        target_user_id=user.id,
        before_value=before,
        after_value=format_roles(data.roles),
    )
    _commit(db, user)

    return {"user": to_user_response(user)}


# 회원 차단 / 차단 해제
@router.patch("/users/{user_id}/blocked")
def update_user_blocked(
    user_id: uuid.UUID,
    data: BlockedUpdate,
    db: Session = Depends(get_db),
    current_admin: User = Depends(get_current_admin),
):
    user = _get_target(db, user_id)

    decision = authorize_block(
        current_admin.role_set,
        user.role_set,
        actor_is_target=user.id == current_admin.id,
        requested_blocked=data.is_blocked,
    )
    if not decision:
        logger.info("block change denied: actor=%s target=%s reason=%s", current_admin.id, user.id, decision.reason.value)
    raise_for_decision(decision)

    before = user.is_blocked
    user.is_blocked = data.is_blocked
    write_admin_log(
        db,
        actor_id=current_admin.id,
        action=AdminAction.SET_BLOCKED,
        target_user_id=user.id,
        before_value=str(before).lower(),
        after_value=str(data.is_blocked).lower(),
    )
    _commit(db, user)

    return {"user": to_user_response(user)}


# 관리자 활동 로그 조회
@router.get("/logs")
def list_admin_logs(
    limit: int = 50,
    db: Session = Depends(get_db),
    _: User = Depends(get_current_admin),
):
    limit = max(1, min(limit, 200))

    Actor = aliased(User)
    Target = aliased(User)

    rows = db.execute(
        select(AdminActionLog, Actor, Target)
        .join(Actor, Actor.id == AdminActionLog.actor_id)
        .outerjoin(Target, Target.id == AdminActionLog.target_user_id)
        .order_by(desc(AdminActionLog.created_at))
        .limit(limit)
    ).all()

    result = [
        {
            "id": str(log.id),
            "createdAt": log.created_at.isoformat(),
            "action": log.action.value,
            "before": log.before_value,
            "after": log.after_value,
            "actor": {"id": str(actor.id), "nickname": actor.nickname, "roles": list(actor.roles)},
            "target": (
                {"id": str(target.id), "nickname": target.nickname, "roles": list(target.roles)}
                if target
                else None
            ),
        }
        for log, actor, target in rows
    ]
    return {
        "data": result,
        "meta": {
            "limit": limit,
            "count": len(result),
        },
    }
