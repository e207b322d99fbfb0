"""
services/admin_log.py

관리자 행위 로그 기록 서비스.

관리자(Admin)가 수행한 권한 변경 / 차단 상태 변경을
AdminActionLog 테이블에 기록하고, 같은 내용을 애플리케이션 로그에도 남긴다.

설계 원칙:
- 로그 기록은 비즈니스 흐름에 개입하지 않음
- 로그 데이터는 수정/삭제하지 않는 것을 전제로 설계

"""

import logging
from typing import Iterable

from sqlalchemy.orm import Session

from fithub.models.admin_log import AdminActionLog, AdminAction
from fithub.models.enums import Role

logger = logging.getLogger(__name__)


def format_roles(roles: Iterable[Role]) -> str:
    return ",".join(sorted(Role(r).value for r in roles))


"""
관리자 행위 로그 기록 함수

- actor_id       : 행위를 수행한 관리자 ID
- action         : 수행된 관리자 행위 유형
- target_user_id : 행위 대상 사용자 ID (선택)
- before_value   : 변경 전 값 (선택)
- after_value    : 변경 후 값 (선택)

NOTE:
- db.commit()은 호출 측(라우터)에서 수행

"""
def write_admin_log(
    db: Session,
    *,
    actor_id,
    action: AdminAction,
    target_user_id=None,
    before_value=None,
    after_value=None,
) -> AdminActionLog:
    log = AdminActionLog(
        actor_id=actor_id,
        action=action,
        target_user_id=target_user_id,
        before_value=before_value,
        after_value=after_value,
    )
    db.add(log)
    logger.info(
        "admin action %s by %s on %s: %s -> %s",
        action.value, actor_id, target_user_id, before_value, after_value,
    )
    return log
