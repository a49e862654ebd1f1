from typing import List
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.constants import RoleEnum
from app.schemas.response import APIResponse
from app.schemas.submission import GradeRequest, Submission, SubmissionForGrading
from app.schemas.user import Identity
from app.services.submission import submission_service
from app.utils import deps

router = APIRouter()


@router.get("/", response_model=APIResponse[List[SubmissionForGrading]])
def list_submissions(
    db: Session = Depends(deps.get_db),
    identity: Identity = Depends(deps.require_role(RoleEnum.TUTOR))
):
    submissions = submission_service.list_for_tutor(db, tutor_id=identity.user_id)
    return APIResponse(message="Submissions retrieved successfully", data=submissions)


@router.put("/{submission_id}/grade", response_model=APIResponse[Submission])
def grade_submission(
    *,
    db: Session = Depends(deps.get_transactional_db),
    submission_id: int,
    grade_in: GradeRequest,
    identity: Identity = Depends(deps.require_role(RoleEnum.TUTOR))
):
    graded = submission_service.grade(
        db,
        tutor_id=identity.user_id,
        submission_id=submission_id,
        grade=grade_in.grade,
        feedback=grade_in.feedback,
    )
    return APIResponse(message="Submission graded successfully", data=Submission.model_validate(graded))
