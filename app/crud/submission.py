from sqlalchemy.orm import Session, selectinload
from typing import List, Optional

from app.crud.base import CRUDBase
from app.models.assignment import Assignment
from app.models.course import Course
from app.models.lesson import Lesson
from app.models.submission import Submission
from app.schemas.submission import SubmissionCreate, GradeRequest


class CRUDSubmission(CRUDBase[Submission, SubmissionCreate, GradeRequest]):

    def get(self, db: Session, id: int) -> Optional[Submission]:
        return (
            db.query(Submission)
            .options(
                selectinload(Submission.assignment).selectinload(Assignment.lesson).selectinload(Lesson.course),
                selectinload(Submission.student),
            )
            .filter(Submission.id == id)
            .first()
        )

    def get_by_assignment_and_student(self, db: Session, *, assignment_id: int, student_id: int) -> Optional[Submission]:
        return (
            db.query(Submission)
            .filter(Submission.assignment_id == assignment_id)
            .filter(Submission.student_id == student_id)
            .first()
        )

    def get_for_tutor(self, db: Session, *, tutor_id: int) -> List[Submission]:
        return (
            db.query(Submission)
            .join(Assignment, Submission.assignment_id == Assignment.id)
            .join(Lesson, Assignment.lesson_id == Lesson.id)
            .join(Course, Lesson.course_id == Course.id)
            .options(
                selectinload(Submission.assignment).selectinload(Assignment.lesson).selectinload(Lesson.course),
                selectinload(Submission.student),
            )
            .filter(Course.tutor_id == tutor_id)
            .order_by(Submission.submitted_at.desc(), Submission.id.desc())
            .all()
        )

submission = CRUDSubmission(Submission)
