from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.core.constants import RoleEnum
from app.schemas.assignment import Assignment, AssignmentCreate, AssignmentDetail, AssignmentUpdate
from app.schemas.response import APIResponse
from app.schemas.submission import Submission, SubmissionCreate
from app.schemas.user import Identity
from app.services.assignment import assignment_service
from app.utils import deps

router = APIRouter()


@router.post("/", response_model=APIResponse[Assignment], status_code=status.HTTP_201_CREATED)
def create_assignment(
    *,
    db: Session = Depends(deps.get_transactional_db),
    assignment_in: AssignmentCreate,
    identity: Identity = Depends(deps.require_role(RoleEnum.TUTOR))
):
    new_assignment = assignment_service.create_assignment(db, assignment_in=assignment_in, identity=identity)
    return APIResponse(message="Assignment created successfully", data=Assignment.model_validate(new_assignment))


@router.get("/{assignment_id}", response_model=APIResponse[AssignmentDetail])
def read_assignment(
    *,
    db: Session = Depends(deps.get_db),
    assignment_id: int,
    identity: Identity = Depends(deps.get_current_identity)
):
    detail = assignment_service.get_assignment(db, assignment_id=assignment_id, identity=identity)
    return APIResponse(message="Assignment retrieved successfully", data=detail)


@router.put("/{assignment_id}", response_model=APIResponse[Assignment])
def update_assignment(
    *,
    db: Session = Depends(deps.get_transactional_db),
    assignment_id: int,
    assignment_in: AssignmentUpdate,
    identity: Identity = Depends(deps.require_role(RoleEnum.TUTOR))
):
    updated = assignment_service.update_assignment(
        db, assignment_id=assignment_id, assignment_in=assignment_in, identity=identity
    )
    return APIResponse(message="Assignment updated successfully", data=Assignment.model_validate(updated))


@router.delete("/{assignment_id}", response_model=APIResponse[Assignment])
def delete_assignment(
    *,
    db: Session = Depends(deps.get_transactional_db),
    assignment_id: int,
    identity: Identity = Depends(deps.require_role(RoleEnum.TUTOR))
):
    deleted = assignment_service.delete_assignment(db, assignment_id=assignment_id, identity=identity)
    return APIResponse(message="Assignment deleted successfully", data=deleted)


@router.post("/{assignment_id}/submit", response_model=APIResponse[Submission], status_code=status.HTTP_201_CREATED)
def submit_assignment(
    *,
    db: Session = Depends(deps.get_transactional_db),
    assignment_id: int,
    submission_in: SubmissionCreate,
    identity: Identity = Depends(deps.require_role(RoleEnum.STUDENT))
):
    submission = assignment_service.submit(
        db, assignment_id=assignment_id, submission_in=submission_in, identity=identity
    )
    return APIResponse(message="Assignment submitted successfully", data=Submission.model_validate(submission))
