"""
users.py

공개 프로필 조회 / 공개 범위 설정 / 팔로우 API 모음.

관리자용 사용자 관리 기능(admin.py)과 분리하여,
권한 범위와 노출 가능한 데이터 범위를 명확히 하기 위한 구조이다.

주요 기능:
- 공개 프로필 조회 (비로그인 허용, 필드별 공개 범위 적용)
- 본인 공개 범위 설정 변경
- 팔로우 / 언팔로우

설계 원칙:
- 차단된 사용자는 존재하지 않는 사용자와 동일하게 404 처리
- 공개 범위 판단은 fithub.services.privacy 에 위임
- 조회자의 관리자 권한은 공개 범위에 영향을 주지 않음

관련 파일:
- fithub.services.privacy   : 공개 프로필 projection
- fithub.services.follows   : 팔로우 관계 조회
- fithub.core.deps          : 로그인 / 선택적 로그인 의존성
"""

import logging
import uuid
from typing import Optional

from fastapi import APIRouter, Body, Depends
from pydantic import ValidationError
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from starlette import status

from fithub.core.config import settings
from fithub.core.deps import get_current_user, get_db, get_optional_user
from fithub.core.errors import FithubError
from fithub.models.enums import ErrorCode
from fithub.models.user import User
from fithub.schemas.policy import ViewerContext
from fithub.schemas.user import PrivacySettingsUpdate
from fithub.services.follows import add_follow, count_followers, count_following, find_follow, get_follow
from fithub.services.privacy import project
from fithub.services.users import find_user_by_id, to_attributes

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["users"])


def _get_visible_user(db: Session, user_id: uuid.UUID) -> User:
    user = find_user_by_id(db, user_id)
    if not user or user.is_blocked:
        raise FithubError(404, "User not found", ErrorCode.USER_NOT_FOUND)
    return user


"""
공개 프로필 조회 API

- 비로그인 사용자는 PUBLIC 필드만 조회
- 대상 사용자를 팔로우 중인 사용자는 FOLLOWERS 필드까지 조회
- PRIVATE 필드는 누구에게도 노출하지 않음
- isFollowing 은 로그인 사용자에게만 포함

"""
@router.get("/{user_id}/public")
def get_public_profile(
    user_id: uuid.UUID,
    db: Session = Depends(get_db),
    viewer: Optional[User] = Depends(get_optional_user),
):
    target = _get_visible_user(db, user_id)

    is_following = None
    if viewer is not None:
        is_following = find_follow(db, viewer.id, target.id)

    context = ViewerContext(is_authenticated=viewer is not None, is_following_target=bool(is_following))
    profile = project(
        to_attributes(target),
        target.privacy_settings,
        context,
        fallback=settings.PRIVACY_FALLBACK_LEVEL,
    )

    body = {
        "user": profile,
        "followStats": {
            "followersCount": count_followers(db, target.id),
            "followingCount": count_following(db, target.id),
        },
    }
    if is_following is not None:
        body["isFollowing"] = is_following
    return body


"""
본인 공개 범위 설정 변경 API

- 전체 설정을 한 번에 교체 (10개 그룹 모두 필수)
- 누락 / 알 수 없는 키 / 잘못된 값은 400 VALIDATION_ERROR, 기존 설정 유지

"""
@router.put("/me/privacy")
def update_privacy_settings(
    data: dict = Body(...),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        privacy = PrivacySettingsUpdate.model_validate(data).to_settings()
    except ValidationError as e:
        raise FithubError(400, f"Invalid privacy settings: {e.error_count()} error(s)", ErrorCode.VALIDATION_ERROR)

    current_user.privacy_settings = privacy.to_wire()
    db.commit()
    return {"privacySettings": current_user.privacy_settings}


@router.post("/{user_id}/follow", status_code=status.HTTP_201_CREATED)
def follow_user(
    user_id: uuid.UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    target = _get_visible_user(db, user_id)

    if target.id == current_user.id:
        raise FithubError(400, "Cannot follow yourself", ErrorCode.VALIDATION_ERROR)
    if find_follow(db, current_user.id, target.id):
        raise FithubError(409, "Already following this user", ErrorCode.RESOURCE_ALREADY_EXISTS)

    add_follow(db, current_user.id, target.id)
    try:
        db.commit()
    except IntegrityError:
        # 동시 요청으로 uq_follows_pair 위반
        db.rollback()
        raise FithubError(409, "Already following this user", ErrorCode.RESOURCE_ALREADY_EXISTS)
    logger.info("user %s followed %s", current_user.id, target.id)
    return {"isFollowing": True}


@router.delete("/{user_id}/follow")
def unfollow_user(
    user_id: uuid.UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    follow = get_follow(db, current_user.id, user_id)
    if follow is None:
        raise FithubError(404, "Follow relationship not found", ErrorCode.NOT_FOUND)

    db.delete(follow)
    db.commit()
    return {"isFollowing": False}
