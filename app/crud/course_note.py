from sqlalchemy import func, or_
from sqlalchemy.orm import Session, Query, selectinload
from typing import List, Optional

from app.crud.base import CRUDBase
from app.models.course import Course
from app.models.course_note import CourseNote
from app.schemas.course_note import CourseNoteCreate, CourseNoteUpdate


class CRUDCourseNote(CRUDBase[CourseNote, CourseNoteCreate, CourseNoteUpdate]):

    def get(self, db: Session, id: int) -> Optional[CourseNote]:
        return (
            db.query(CourseNote)
            .options(selectinload(CourseNote.course), selectinload(CourseNote.author))
            .filter(CourseNote.id == id)
            .first()
        )

    def get_by_course(self, db: Session, *, course_id: int) -> List[CourseNote]:
        return (
            db.query(CourseNote)
            .options(selectinload(CourseNote.course), selectinload(CourseNote.author))
            .filter(CourseNote.course_id == course_id)
            .order_by(CourseNote.created_at.desc(), CourseNote.id.desc())
            .all()
        )

    def query_filtered(
        self,
        db: Session,
        *,
        tutor_id: Optional[int] = None,
        course_id: Optional[int] = None,
        search: Optional[str] = None,
    ) -> Query:
        query = db.query(CourseNote).options(selectinload(CourseNote.course), selectinload(CourseNote.author))
        if tutor_id is not None:
            query = query.join(Course, CourseNote.course_id == Course.id).filter(Course.tutor_id == tutor_id)
        if course_id is not None:
            query = query.filter(CourseNote.course_id == course_id)
        if search:
            pattern = f"%{search.lower()}%"
            query = query.filter(
                or_(func.lower(CourseNote.title).like(pattern), func.lower(CourseNote.content).like(pattern))
            )
        return query.order_by(CourseNote.created_at.desc(), CourseNote.id.desc())

course_note = CRUDCourseNote(CourseNote)
