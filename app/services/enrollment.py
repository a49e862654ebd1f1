import logging
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.constants import RoleEnum
from app.core.exceptions import (
    AlreadyEnrolled,
    CourseNotFound,
    EntityNotFound,
    LessonNotFound,
    NotEnrolled,
)
from app.crud.course import course as crud_course
from app.crud.enrollment import enrollment as crud_enrollment
from app.crud.lesson import lesson as crud_lesson
from app.crud.lesson_progress import lesson_progress as crud_lesson_progress
from app.crud.user import user as crud_user
from app.models.enrollment import Enrollment
from app.schemas.enrollment import CourseBrief, EnrollmentProgress
from app.schemas.lesson_progress import LessonCompletion, LessonProgress as LessonProgressSchema
from app.schemas.user import Identity
from app.utils.permission import PermissionHelper as permission_helper

logger = logging.getLogger(__name__)


def calculate_progress(completed: int, total: int) -> float:
    """Percentage of completed lessons; 0 for a course without lessons."""
    if total <= 0:
        return 0.0
    return completed / total * 100


class EnrollmentService:
    """Enrollment lifecycle and lesson-completion bookkeeping.

    Every method only flushes. The caller owns the transaction, so an
    enrollment and its seeded progress rows (or an unenroll's two deletes)
    are committed or rolled back together.
    """

    def enroll(self, db: Session, *, student_id: int, course_id: int) -> Enrollment:
        course = crud_course.get_published(db, id=course_id)
        if not course:
            raise CourseNotFound()

        if crud_enrollment.get_by_student_and_course(db, student_id=student_id, course_id=course_id):
            raise AlreadyEnrolled()

        try:
            enrollment = crud_enrollment.create(
                db, obj_in={"student_id": student_id, "course_id": course_id, "progress": 0.0}
            )
        except IntegrityError as exc:
            raise AlreadyEnrolled() from exc

        # lessons added later do not get rows for existing enrollments
        lesson_ids = crud_lesson.get_ids_by_course(db, course_id=course_id)
        crud_lesson_progress.create_for_lessons(db, enrollment_id=enrollment.id, lesson_ids=lesson_ids)

        logger.info(
            "Student %s enrolled in course %s with %d lessons", student_id, course_id, len(lesson_ids)
        )
        return enrollment

    def complete_lesson(self, db: Session, *, student_id: int, lesson_id: int) -> LessonCompletion:
        lesson = crud_lesson.get(db, id=lesson_id)
        if not lesson:
            raise LessonNotFound()

        enrollment = crud_enrollment.get_for_update(db, student_id=student_id, course_id=lesson.course_id)
        if not enrollment:
            raise NotEnrolled()

        record = crud_lesson_progress.mark_completed(
            db,
            enrollment_id=enrollment.id,
            lesson_id=lesson.id,
            completed_at=datetime.now(timezone.utc),
        )
        self._recalculate(db, enrollment)

        logger.info(
            "Student %s completed lesson %s; course %s progress %.2f",
            student_id, lesson_id, lesson.course_id, enrollment.progress,
        )
        return LessonCompletion(
            progress=LessonProgressSchema.model_validate(record),
            course_progress=enrollment.rounded_progress,
        )

    def unenroll(self, db: Session, *, student_id: int, course_id: int) -> None:
        enrollment = crud_enrollment.get_by_student_and_course(db, student_id=student_id, course_id=course_id)
        if not enrollment:
            raise NotEnrolled()

        crud_enrollment.delete_with_progress(db, db_obj=enrollment)
        logger.info("Student %s unenrolled from course %s", student_id, course_id)

    def _recalculate(self, db: Session, enrollment: Enrollment) -> Enrollment:
        total = crud_lesson.count_by_course(db, course_id=enrollment.course_id)
        completed = crud_lesson_progress.count_completed(db, enrollment_id=enrollment.id)
        return crud_enrollment.update_progress(
            db, db_obj=enrollment, progress=calculate_progress(completed, total)
        )

    def recalculate_course(self, db: Session, *, course_id: int) -> None:
        """Re-derives progress for every enrollment after the lesson set changed."""
        for enrollment in crud_enrollment.get_by_course(db, course_id=course_id):
            self._recalculate(db, enrollment)

    def get_progress_overview(self, db: Session, *, student_id: int) -> List[EnrollmentProgress]:
        overview = []
        for enrollment in crud_enrollment.get_by_student(db, student_id=student_id):
            overview.append(
                EnrollmentProgress(
                    id=enrollment.id,
                    student_id=enrollment.student_id,
                    course_id=enrollment.course_id,
                    progress=enrollment.progress,
                    enrolled_at=enrollment.enrolled_at,
                    course=CourseBrief.model_validate(enrollment.course),
                    completed_lessons=crud_lesson_progress.count_completed(db, enrollment_id=enrollment.id),
                    total_lessons=crud_lesson.count_by_course(db, course_id=enrollment.course_id),
                    rounded_progress=enrollment.rounded_progress,
                )
            )
        return overview

    def enroll_student(self, db: Session, *, course_id: int, student_id: int, identity: Identity) -> Enrollment:
        course = crud_course.get(db, id=course_id)
        if not course:
            raise CourseNotFound()
        permission_helper.require_course_management_permission(identity, course)

        student = crud_user.get(db, id=student_id)
        if not student or student.role_name != RoleEnum.STUDENT.value:
            raise EntityNotFound("Student not found")

        enrollment = self.enroll(db, student_id=student.id, course_id=course.id)
        logger.info("User %s enrolled student %s in course %s", identity.user_id, student.id, course.id)
        return enrollment

    def get_course_enrollments(self, db: Session, *, course_id: int, identity: Identity) -> List[Enrollment]:
        course = crud_course.get(db, id=course_id)
        if not course:
            raise CourseNotFound()
        permission_helper.require_course_management_permission(identity, course)
        return crud_enrollment.get_by_course(db, course_id=course_id)

    def delete_enrollment(
        self, db: Session, *, enrollment_id: int, identity: Identity, course_id: Optional[int] = None
    ) -> Enrollment:
        """Removes an enrollment and its progress rows.

        Admins may remove any enrollment, tutors only those in courses they own.
        With ``course_id`` the enrollment must also belong to that course.
        """
        enrollment = crud_enrollment.get(db, id=enrollment_id)
        if not enrollment or (course_id is not None and enrollment.course_id != course_id):
            raise EntityNotFound("Enrollment not found")
        permission_helper.require_course_management_permission(identity, enrollment.course)

        crud_enrollment.delete_with_progress(db, db_obj=enrollment)
        logger.info("User %s removed enrollment %s from course %s", identity.user_id, enrollment_id, enrollment.course_id)
        return enrollment


enrollment_service = EnrollmentService()
