from sqlalchemy.orm import Session
from typing import List

from app.crud.base import CRUDBase
from app.models.moderation_log import ModerationLog
from app.schemas.moderation import ModerationLog as ModerationLogSchema


class CRUDModerationLog(CRUDBase[ModerationLog, ModerationLogSchema, ModerationLogSchema]):

    def get_latest(self, db: Session, *, skip: int = 0, limit: int = 100) -> List[ModerationLog]:
        return (
            db.query(ModerationLog)
            .order_by(ModerationLog.created_at.desc(), ModerationLog.id.desc())
            .offset(skip)
            .limit(limit)
            .all()
        )

moderation_log = CRUDModerationLog(ModerationLog)
