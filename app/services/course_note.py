import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from app.core.exceptions import CourseNotFound, EntityNotFound, Forbidden
from app.crud.base import PaginatedResponse, paginate
from app.crud.course import course as crud_course
from app.crud.course_note import course_note as crud_course_note
from app.crud.enrollment import enrollment as crud_enrollment
from app.models.course import Course
from app.models.course_note import CourseNote as CourseNoteModel
from app.schemas.course_note import CourseNote, CourseNoteCreate, CourseNoteUpdate
from app.schemas.user import Identity
from app.utils.permission import PermissionHelper as permission_helper

logger = logging.getLogger(__name__)


class CourseNoteService:
    """Notes a course's tutor (or an admin) publishes alongside its lessons.

    Writing is limited to whoever can manage the course. Enrolled students
    can read the notes of their courses.
    """

    def _get_course(self, db: Session, course_id: int) -> Course:
        course = crud_course.get(db, id=course_id)
        if not course:
            raise CourseNotFound()
        return course

    def _get_note(self, db: Session, note_id: int) -> CourseNoteModel:
        note = crud_course_note.get(db, id=note_id)
        if not note:
            raise EntityNotFound("Course note not found")
        return note

    def list_for_manager(
        self,
        db: Session,
        *,
        identity: Identity,
        page: int = 1,
        size: int = 20,
        course_id: Optional[int] = None,
        search: Optional[str] = None,
    ) -> PaginatedResponse[CourseNote]:
        # tutors only ever see notes from their own courses
        tutor_id = None if permission_helper.is_admin(identity) else identity.user_id
        query = crud_course_note.query_filtered(db, tutor_id=tutor_id, course_id=course_id, search=search)
        rows, total = paginate(query, page=page, size=size)
        return PaginatedResponse[CourseNote].build(
            [CourseNote.model_validate(n) for n in rows], total=total, page=page, size=size
        )

    def list_for_course(self, db: Session, *, course_id: int, identity: Identity) -> List[CourseNoteModel]:
        course = self._get_course(db, course_id)
        if not permission_helper.can_manage_course(identity, course):
            if not (
                permission_helper.is_student(identity)
                and crud_enrollment.is_enrolled(db, student_id=identity.user_id, course_id=course.id)
            ):
                raise Forbidden("You do not have permission to view this course's notes.")
        return crud_course_note.get_by_course(db, course_id=course.id)

    def create_note(self, db: Session, *, note_in: CourseNoteCreate, identity: Identity) -> CourseNoteModel:
        course = self._get_course(db, note_in.course_id)
        permission_helper.require_course_management_permission(identity, course)

        note_data = note_in.model_dump()
        note_data["author_id"] = identity.user_id
        new_note = crud_course_note.create(db, obj_in=note_data)

        logger.info("User %s added note %s to course %s", identity.user_id, new_note.id, course.id)
        return crud_course_note.get(db, id=new_note.id)

    def update_note(self, db: Session, *, note_id: int, note_in: CourseNoteUpdate, identity: Identity) -> CourseNoteModel:
        note = self._get_note(db, note_id)
        permission_helper.require_course_management_permission(identity, note.course)
        return crud_course_note.update(db, db_obj=note, obj_in=note_in)

    def delete_note(self, db: Session, *, note_id: int, identity: Identity) -> CourseNote:
        note = self._get_note(db, note_id)
        permission_helper.require_course_management_permission(identity, note.course)

        snapshot = CourseNote.model_validate(note)
        crud_course_note.delete(db, id=note_id)
        logger.info("User %s deleted note %s", identity.user_id, note_id)
        return snapshot


course_note_service = CourseNoteService()
