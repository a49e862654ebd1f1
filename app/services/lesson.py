import logging
from typing import List, Union

from sqlalchemy.orm import Session

from app.core.exceptions import CourseNotFound, Forbidden, LessonNotFound
from app.crud.course import course as crud_course
from app.crud.enrollment import enrollment as crud_enrollment
from app.crud.lesson import lesson as crud_lesson
from app.crud.lesson_progress import lesson_progress as crud_lesson_progress
from app.models.course import Course
from app.models.lesson import Lesson as LessonModel
from app.schemas.lesson import Lesson, LessonCreate, LessonUpdate, LessonWithProgress
from app.schemas.user import Identity
from app.services.enrollment import enrollment_service
from app.utils.permission import PermissionHelper as permission_helper

logger = logging.getLogger(__name__)


class LessonService:

    def _get_course(self, db: Session, course_id: int) -> Course:
        course = crud_course.get(db, id=course_id)
        if not course:
            raise CourseNotFound()
        return course

    def _get_lesson(self, db: Session, lesson_id: int) -> LessonModel:
        lesson = crud_lesson.get(db, id=lesson_id)
        if not lesson:
            raise LessonNotFound()
        return lesson

    def _require_view(self, db: Session, identity: Identity, course: Course):
        if permission_helper.can_manage_course(identity, course):
            return
        if permission_helper.is_student(identity) and crud_enrollment.is_enrolled(
            db, student_id=identity.user_id, course_id=course.id
        ):
            return
        raise Forbidden("You do not have permission to view this course's lessons.")

    def list_lessons(self, db: Session, *, course_id: int, identity: Identity) -> List[Union[Lesson, LessonWithProgress]]:
        course = self._get_course(db, course_id)
        self._require_view(db, identity, course)

        lessons = crud_lesson.get_by_course(db, course_id=course_id)
        if not permission_helper.is_student(identity):
            return [Lesson.model_validate(lesson) for lesson in lessons]

        enrollment = crud_enrollment.get_by_student_and_course(db, student_id=identity.user_id, course_id=course_id)
        records = crud_lesson_progress.get_map_by_enrollment(db, enrollment_id=enrollment.id)
        result = []
        for lesson in lessons:
            item = LessonWithProgress.model_validate(lesson)
            record = records.get(lesson.id)
            if record:
                item.is_completed = record.is_completed
                item.completed_at = record.completed_at
            result.append(item)
        return result

    def get_lesson(self, db: Session, *, lesson_id: int, identity: Identity) -> LessonModel:
        lesson = self._get_lesson(db, lesson_id)
        self._require_view(db, identity, lesson.course)
        return lesson

    def create_lesson(self, db: Session, *, lesson_in: LessonCreate, identity: Identity) -> LessonModel:
        course = self._get_course(db, lesson_in.course_id)
        permission_helper.require_course_management_permission(identity, course)

        new_lesson = crud_lesson.create(db, obj_in=lesson_in)
        # existing enrollments keep their rows; only the denominator changes
        enrollment_service.recalculate_course(db, course_id=course.id)

        logger.info("User %s added lesson %s to course %s", identity.user_id, new_lesson.id, course.id)
        return new_lesson

    def update_lesson(self, db: Session, *, lesson_id: int, lesson_in: LessonUpdate, identity: Identity) -> LessonModel:
        lesson = self._get_lesson(db, lesson_id)
        permission_helper.require_course_management_permission(identity, lesson.course)
        return crud_lesson.update(db, db_obj=lesson, obj_in=lesson_in)

    def delete_lesson(self, db: Session, *, lesson_id: int, identity: Identity) -> Lesson:
        lesson = self._get_lesson(db, lesson_id)
        course_id = lesson.course_id
        permission_helper.require_course_management_permission(identity, lesson.course)

        snapshot = Lesson.model_validate(lesson)
        crud_lesson.delete(db, id=lesson_id)
        db.expire_all()
        enrollment_service.recalculate_course(db, course_id=course_id)

        logger.info("User %s deleted lesson %s from course %s", identity.user_id, lesson_id, course_id)
        return snapshot


lesson_service = LessonService()
