import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from app.core.exceptions import Forbidden, SubmissionNotFound, ValidationFailed
from app.crud.submission import submission as crud_submission
from app.models.submission import Submission as SubmissionModel
from app.schemas.submission import SubmissionForGrading
from app.schemas.user import UserSummary

logger = logging.getLogger(__name__)


def to_grading_view(submission: SubmissionModel) -> SubmissionForGrading:
    assignment = submission.assignment
    return SubmissionForGrading(
        id=submission.id,
        assignment_id=submission.assignment_id,
        student_id=submission.student_id,
        code_submission=submission.code_submission,
        grade=submission.grade,
        feedback=submission.feedback,
        submitted_at=submission.submitted_at,
        student=UserSummary.model_validate(submission.student),
        assignment_title=assignment.title,
        max_score=assignment.max_score,
        lesson_title=assignment.lesson.title,
        course_title=assignment.lesson.course.title,
    )


class SubmissionService:

    def list_for_tutor(self, db: Session, *, tutor_id: int) -> List[SubmissionForGrading]:
        return [to_grading_view(s) for s in crud_submission.get_for_tutor(db, tutor_id=tutor_id)]

    def grade(
        self, db: Session, *, tutor_id: int, submission_id: int, grade: int, feedback: Optional[str] = None
    ) -> SubmissionModel:
        """Records a grade for a submission in one of the tutor's courses.

        Raises ``SubmissionNotFound`` for an unknown id, ``Forbidden`` when the
        course belongs to another tutor and ``ValidationFailed`` when the grade
        falls outside ``0..max_score``.
        """
        submission = crud_submission.get(db, id=submission_id)
        if not submission:
            raise SubmissionNotFound()

        assignment = submission.assignment
        if assignment.lesson.course.tutor_id != tutor_id:
            raise Forbidden("Only the tutor who owns this course can grade its submissions.")

        if grade < 0 or grade > assignment.max_score:
            raise ValidationFailed(
                f"Grade must be between 0 and {assignment.max_score}",
                details={"grade": grade, "max_score": assignment.max_score},
            )

        graded = crud_submission.update(db, db_obj=submission, obj_in={"grade": grade, "feedback": feedback})
        logger.info("Tutor %s graded submission %s with %s", tutor_id, submission_id, grade)
        return graded


submission_service = SubmissionService()
