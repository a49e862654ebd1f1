from sqlalchemy.orm import Session, selectinload
from typing import List, Optional

from app.crud.base import CRUDBase
from app.models.lesson import Lesson
from app.schemas.lesson import LessonCreate, LessonUpdate


class CRUDLesson(CRUDBase[Lesson, LessonCreate, LessonUpdate]):

    def get(self, db: Session, id: int) -> Optional[Lesson]:
        return (
            db.query(Lesson)
            .options(selectinload(Lesson.course), selectinload(Lesson.assignments))
            .filter(Lesson.id == id)
            .first()
        )

    def get_by_course(self, db: Session, *, course_id: int) -> List[Lesson]:
        return (
            db.query(Lesson)
            .options(selectinload(Lesson.assignments))
            .filter(Lesson.course_id == course_id)
            .order_by(Lesson.order_index, Lesson.id)
            .all()
        )

    def get_ids_by_course(self, db: Session, *, course_id: int) -> List[int]:
        rows = (
            db.query(Lesson.id)
            .filter(Lesson.course_id == course_id)
            .order_by(Lesson.order_index, Lesson.id)
            .all()
        )
        return [row.id for row in rows]

    def count_by_course(self, db: Session, *, course_id: int) -> int:
        return db.query(Lesson).filter(Lesson.course_id == course_id).count()

lesson = CRUDLesson(Lesson)
