from sqlalchemy import func, or_
from sqlalchemy.orm import Session, Query, selectinload
from typing import List, Optional

from app.crud.base import CRUDBase
from app.models.course import Course
from app.models.tag import Tag
from app.schemas.course import CourseCreate, CourseUpdate


class CRUDCourse(CRUDBase[Course, CourseCreate, CourseUpdate]):

    def _query_with_relationships(self, db: Session) -> Query:
        return db.query(Course).options(
            selectinload(Course.tutor),
            selectinload(Course.lessons),
            selectinload(Course.enrollments),
            selectinload(Course.tags),
        )

    def get(self, db: Session, id: int) -> Optional[Course]:
        return self._query_with_relationships(db).filter(Course.id == id).first()

    def get_published(self, db: Session, id: int) -> Optional[Course]:
        return (
            self._query_with_relationships(db)
            .filter(Course.id == id, Course.is_published.is_(True))
            .first()
        )

    def query_filtered(
        self,
        db: Session,
        *,
        published_only: bool = True,
        tutor_id: Optional[int] = None,
        search: Optional[str] = None,
        category: Optional[str] = None,
        level: Optional[str] = None,
        tag: Optional[str] = None,
    ) -> Query:
        query = self._query_with_relationships(db)
        if published_only:
            query = query.filter(Course.is_published.is_(True))
        if tutor_id is not None:
            query = query.filter(Course.tutor_id == tutor_id)
        if search:
            pattern = f"%{search.lower()}%"
            query = query.filter(
                or_(func.lower(Course.title).like(pattern), func.lower(Course.description).like(pattern))
            )
        if category:
            query = query.filter(func.lower(Course.category) == category.lower())
        if level:
            query = query.filter(Course.level == level)
        if tag:
            query = query.filter(Course.tags.any(Tag.name == tag.strip().lower()))
        return query.order_by(Course.created_at.desc(), Course.id.desc())

    def get_by_tutor(self, db: Session, *, tutor_id: int) -> List[Course]:
        return self.query_filtered(db, published_only=False, tutor_id=tutor_id).all()

    def set_tags(self, db: Session, *, course: Course, tags: List[Tag]) -> Course:
        course.tags = tags
        db.add(course)
        db.flush()
        db.refresh(course)
        return course

course = CRUDCourse(Course)
