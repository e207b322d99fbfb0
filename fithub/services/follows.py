"""
services/follows.py

팔로우 관계 조회/생성/삭제 로직.

공개 프로필 조회 시 "조회자가 대상 사용자를 팔로우 중인가"를
판단하는 데 사용된다 (ViewerContext.is_following_target).

NOTE:
- db.commit()은 호출 측(라우터)에서 수행

"""

import uuid
from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from fithub.models.follow import Follow


def get_follow(db: Session, follower_id: uuid.UUID, following_id: uuid.UUID) -> Optional[Follow]:
    return db.scalar(
        select(Follow).where(Follow.follower_id == follower_id, Follow.following_id == following_id)
    )


def find_follow(db: Session, follower_id: uuid.UUID, following_id: uuid.UUID) -> bool:
    return get_follow(db, follower_id, following_id) is not None


def count_followers(db: Session, user_id: uuid.UUID) -> int:
    return db.scalar(select(func.count()).select_from(Follow).where(Follow.following_id == user_id)) or 0


def count_following(db: Session, user_id: uuid.UUID) -> int:
    return db.scalar(select(func.count()).select_from(Follow).where(Follow.follower_id == user_id)) or 0


def add_follow(db: Session, follower_id: uuid.UUID, following_id: uuid.UUID) -> Follow:
    follow = Follow(follower_id=follower_id, following_id=following_id)
    db.add(follow)
    return follow
