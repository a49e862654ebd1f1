import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from app.core.constants import ModerationActionEnum, RoleEnum
from app.core.exceptions import EntityNotFound, Forbidden, ValidationFailed
from app.crud.moderation_log import moderation_log as crud_moderation_log
from app.crud.user import user as crud_user
from app.models.moderation_log import ModerationLog
from app.schemas.user import Identity
from app.services.course import course_service
from app.utils.permission import PermissionHelper as permission_helper

logger = logging.getLogger(__name__)


class ModerationService:

    def _log(
        self,
        db: Session,
        *,
        identity: Identity,
        action: ModerationActionEnum,
        details: Optional[str],
        target_user_id: Optional[int] = None,
        target_course_id: Optional[int] = None,
    ) -> ModerationLog:
        entry = crud_moderation_log.create(
            db,
            obj_in={
                "moderator_id": identity.user_id,
                "action": action.value,
                "target_user_id": target_user_id,
                "target_course_id": target_course_id,
                "details": details,
            },
        )
        logger.info(
            "Moderator %s performed %s (user=%s, course=%s)",
            identity.user_id, action.value, target_user_id, target_course_id,
        )
        return entry

    def deactivate_user(self, db: Session, *, user_id: int, identity: Identity, details: Optional[str] = None) -> ModerationLog:
        if user_id == identity.user_id:
            raise ValidationFailed("You cannot deactivate your own account")
        user = crud_user.get(db, id=user_id)
        if not user:
            raise EntityNotFound("User not found")
        # admins are never deactivated here; moderators only by an admin
        if user.role_name == RoleEnum.ADMIN.value:
            raise Forbidden("Administrators cannot be deactivated through moderation.")
        if user.role_name == RoleEnum.MODERATOR.value and not permission_helper.is_admin(identity):
            raise Forbidden("Only an administrator can deactivate a moderator.")

        crud_user.set_active(db, db_obj=user, is_active=False)
        return self._log(
            db, identity=identity, action=ModerationActionEnum.DEACTIVATE_USER, details=details, target_user_id=user.id
        )

    def unpublish_course(self, db: Session, *, course_id: int, identity: Identity, details: Optional[str] = None) -> ModerationLog:
        course = course_service.unpublish(db, course_id=course_id)
        return self._log(
            db, identity=identity, action=ModerationActionEnum.UNPUBLISH_COURSE, details=details, target_course_id=course.id
        )

    def list_logs(self, db: Session, *, skip: int = 0, limit: int = 100) -> List[ModerationLog]:
        return crud_moderation_log.get_latest(db, skip=skip, limit=limit)


moderation_service = ModerationService()
