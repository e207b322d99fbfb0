"""

admin_log.py

관리자(Admin) 행위 기록(Audit Log) 모델 정의 파일.

관리자에 의해 수행된 권한 변경 / 차단 상태 변경을
DB에 영구적으로 기록하기 위한 로그 테이블을 정의한다.

설계 원칙:
- 로그 데이터는 수정/삭제하지 않는 것을 전제로 설계
- actor(행위자)와 target(대상 사용자)을 명확히 구분
- before / after 는 사람이 읽을 수 있는 문자열로 저장
  (권한: "ADMIN,MEMBER" 처럼 정렬 후 콤마 연결, 차단: "true"/"false")

"""

import uuid
import datetime
from enum import Enum

from sqlalchemy import DateTime, Enum as SAEnum, ForeignKey, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from fithub.db.base import Base


#  관리자 행위 유형 Enum

class AdminAction(str, Enum):
    SET_ROLES = "SET_ROLES"
    SET_BLOCKED = "SET_BLOCKED"


class AdminActionLog(Base):
    __tablename__ = "admin_action_logs"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    actor_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("users.id"), nullable=False)
    target_user_id: Mapped[uuid.UUID | None] = mapped_column(Uuid, ForeignKey("users.id"), nullable=True)

    action: Mapped[AdminAction] = mapped_column(SAEnum(AdminAction, name="admin_action"), nullable=False)

    before_value: Mapped[str | None] = mapped_column(String(255), nullable=True)
    after_value: Mapped[str | None] = mapped_column(String(255), nullable=True)

    created_at: Mapped[datetime.datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.datetime.now(datetime.timezone.utc),
    )
