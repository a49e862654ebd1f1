import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.constants import RoleEnum
from app.core.exceptions import (
    AlreadySubmitted,
    AssignmentNotFound,
    Forbidden,
    LessonNotFound,
    NotEnrolled,
    ValidationFailed,
)
from app.crud.assignment import assignment as crud_assignment
from app.crud.enrollment import enrollment as crud_enrollment
from app.crud.lesson import lesson as crud_lesson
from app.crud.submission import submission as crud_submission
from app.models.assignment import Assignment as AssignmentModel
from app.models.submission import Submission as SubmissionModel
from app.schemas.assignment import (
    Assignment as AssignmentSchema,
    AssignmentCreate,
    AssignmentDetail,
    AssignmentUpdate,
    OwnSubmission,
)
from app.schemas.submission import SubmissionCreate
from app.schemas.user import Identity
from app.utils.permission import PermissionHelper as permission_helper

logger = logging.getLogger(__name__)


class AssignmentService:

    def _get_or_404(self, db: Session, assignment_id: int) -> AssignmentModel:
        assignment = crud_assignment.get(db, id=assignment_id)
        if not assignment:
            raise AssignmentNotFound()
        return assignment

    def create_assignment(self, db: Session, *, assignment_in: AssignmentCreate, identity: Identity) -> AssignmentModel:
        lesson = crud_lesson.get(db, id=assignment_in.lesson_id)
        if not lesson:
            raise LessonNotFound()
        permission_helper.require_course_owner(identity, lesson.course)

        new_assignment = crud_assignment.create(db, obj_in=assignment_in)
        logger.info("Tutor %s created assignment %s on lesson %s", identity.user_id, new_assignment.id, lesson.id)
        return new_assignment

    def update_assignment(
        self, db: Session, *, assignment_id: int, assignment_in: AssignmentUpdate, identity: Identity
    ) -> AssignmentModel:
        assignment = self._get_or_404(db, assignment_id)
        permission_helper.require_course_owner(identity, assignment.lesson.course)

        update_data = assignment_in.model_dump(exclude_unset=True)

        new_lesson_id = update_data.get("lesson_id")
        if new_lesson_id is not None and new_lesson_id != assignment.lesson_id:
            lesson = crud_lesson.get(db, id=new_lesson_id)
            if not lesson:
                raise LessonNotFound()
            permission_helper.require_course_owner(identity, lesson.course)

        new_max_score = update_data.get("max_score")
        if new_max_score is not None:
            graded = [s.grade for s in assignment.submissions if s.grade is not None]
            if graded and max(graded) > new_max_score:
                raise ValidationFailed(
                    f"max_score cannot drop below an existing grade of {max(graded)}"
                )

        updated = crud_assignment.update(db, db_obj=assignment, obj_in=update_data)
        logger.info("Tutor %s updated assignment %s: %s", identity.user_id, assignment_id, sorted(update_data))
        return updated

    def delete_assignment(self, db: Session, *, assignment_id: int, identity: Identity) -> AssignmentSchema:
        assignment = self._get_or_404(db, assignment_id)
        permission_helper.require_course_owner(identity, assignment.lesson.course)

        snapshot = AssignmentSchema.model_validate(assignment)
        crud_assignment.delete(db, id=assignment_id)
        logger.info("Tutor %s deleted assignment %s", identity.user_id, assignment_id)
        return snapshot

    def get_assignment(self, db: Session, *, assignment_id: int, identity: Identity) -> AssignmentDetail:
        assignment = self._get_or_404(db, assignment_id)
        course = assignment.lesson.course

        base = AssignmentSchema.model_validate(assignment).model_dump()
        if permission_helper.can_manage_course(identity, course):
            return AssignmentDetail(**base, submissions=[OwnSubmission.model_validate(s) for s in assignment.submissions])

        if permission_helper.is_student(identity) and crud_enrollment.is_enrolled(
            db, student_id=identity.user_id, course_id=course.id
        ):
            own = crud_submission.get_by_assignment_and_student(
                db, assignment_id=assignment.id, student_id=identity.user_id
            )
            return AssignmentDetail(**base, submissions=[OwnSubmission.model_validate(own)] if own else [])

        raise Forbidden("You do not have access to this assignment.")

    def submit(self, db: Session, *, assignment_id: int, submission_in: SubmissionCreate, identity: Identity) -> SubmissionModel:
        permission_helper.require_role(identity, [RoleEnum.STUDENT])
        assignment = self._get_or_404(db, assignment_id)

        if not crud_enrollment.is_enrolled(db, student_id=identity.user_id, course_id=assignment.lesson.course_id):
            raise NotEnrolled()

        if crud_submission.get_by_assignment_and_student(db, assignment_id=assignment.id, student_id=identity.user_id):
            raise AlreadySubmitted()

        try:
            new_submission = crud_submission.create(
                db,
                obj_in={
                    "assignment_id": assignment.id,
                    "student_id": identity.user_id,
                    "code_submission": submission_in.code_submission,
                },
            )
        except IntegrityError as exc:
            raise AlreadySubmitted() from exc

        logger.info("Student %s submitted assignment %s", identity.user_id, assignment.id)
        return new_submission


assignment_service = AssignmentService()
