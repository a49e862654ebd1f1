from typing import List, Optional
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.constants import RoleEnum
from app.schemas.moderation import ModerationActionRequest, ModerationLog
from app.schemas.response import APIResponse
from app.schemas.user import Identity
from app.services.moderation import moderation_service
from app.utils import deps

router = APIRouter()

require_moderator = deps.require_role(RoleEnum.MODERATOR, RoleEnum.ADMIN)


@router.post("/users/{user_id}/deactivate", response_model=APIResponse[ModerationLog])
def deactivate_user(
    *,
    db: Session = Depends(deps.get_transactional_db),
    user_id: int,
    request: Optional[ModerationActionRequest] = None,
    identity: Identity = Depends(require_moderator)
):
    entry = moderation_service.deactivate_user(
        db, user_id=user_id, identity=identity, details=request.details if request else None
    )
    return APIResponse(message="User deactivated", data=ModerationLog.model_validate(entry))


@router.post("/courses/{course_id}/unpublish", response_model=APIResponse[ModerationLog])
def unpublish_course(
    *,
    db: Session = Depends(deps.get_transactional_db),
    course_id: int,
    request: Optional[ModerationActionRequest] = None,
    identity: Identity = Depends(require_moderator)
):
    entry = moderation_service.unpublish_course(
        db, course_id=course_id, identity=identity, details=request.details if request else None
    )
    return APIResponse(message="Course unpublished", data=ModerationLog.model_validate(entry))


@router.get("/logs", response_model=APIResponse[List[ModerationLog]], dependencies=[Depends(require_moderator)])
def list_moderation_logs(
    db: Session = Depends(deps.get_db),
    skip: int = 0,
    limit: int = 100
):
    logs = moderation_service.list_logs(db, skip=skip, limit=limit)
    return APIResponse(message="Moderation logs retrieved successfully", data=[ModerationLog.model_validate(entry) for entry in logs])
