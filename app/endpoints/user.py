from typing import List
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.constants import RoleEnum
from app.schemas.response import APIResponse
from app.schemas.user import Identity, StudentSummary, User, UserUpdate
from app.services.user import user_service
from app.utils import deps

router = APIRouter()


@router.get("/me", response_model=APIResponse[User])
def read_my_profile(
    db: Session = Depends(deps.get_db),
    identity: Identity = Depends(deps.get_current_identity)
):
    user = user_service.get_profile(db, identity=identity)
    return APIResponse(message="Profile retrieved successfully", data=User.model_validate(user))


@router.put("/me", response_model=APIResponse[User])
def update_my_profile(
    *,
    db: Session = Depends(deps.get_transactional_db),
    user_in: UserUpdate,
    identity: Identity = Depends(deps.get_current_identity)
):
    user = user_service.update_profile(db, identity=identity, user_in=user_in)
    return APIResponse(message="Profile updated successfully", data=User.model_validate(user))


@router.get(
    "/students",
    response_model=APIResponse[List[StudentSummary]],
    dependencies=[Depends(deps.require_role(RoleEnum.TUTOR, RoleEnum.ADMIN))],
)
def list_students(
    db: Session = Depends(deps.get_db),
    skip: int = 0,
    limit: int = 100
):
    students = user_service.list_students(db, skip=skip, limit=limit)
    return APIResponse(message="Students retrieved successfully", data=[StudentSummary.model_validate(s) for s in students])
