from sqlalchemy.orm import Session, Query, selectinload
from typing import List, Optional
from datetime import datetime

from app.crud.base import CRUDBase
from app.models.enrollment import Enrollment
from app.schemas.enrollment import EnrollmentCreate, EnrollmentUpdate


class CRUDEnrollment(CRUDBase[Enrollment, EnrollmentCreate, EnrollmentUpdate]):

    def _query_with_relationships(self, db: Session) -> Query:
        return db.query(Enrollment).options(
            selectinload(Enrollment.student),
            selectinload(Enrollment.course),
        )

    def get_by_student_and_course(self, db: Session, *, student_id: int, course_id: int) -> Optional[Enrollment]:
        return (
            db.query(Enrollment)
            .filter(Enrollment.student_id == student_id)
            .filter(Enrollment.course_id == course_id)
            .first()
        )

    def get_for_update(self, db: Session, *, student_id: int, course_id: int) -> Optional[Enrollment]:
        # Row lock on dialects that support it; SQLite ignores FOR UPDATE
        return (
            db.query(Enrollment)
            .filter(Enrollment.student_id == student_id)
            .filter(Enrollment.course_id == course_id)
            .with_for_update()
            .populate_existing()
            .first()
        )

    def get_by_student(self, db: Session, *, student_id: int) -> List[Enrollment]:
        return (
            self._query_with_relationships(db)
            .filter(Enrollment.student_id == student_id)
            .order_by(Enrollment.enrolled_at.desc(), Enrollment.id.desc())
            .all()
        )

    def get_by_course(self, db: Session, *, course_id: int) -> List[Enrollment]:
        return (
            self._query_with_relationships(db)
            .filter(Enrollment.course_id == course_id)
            .order_by(Enrollment.enrolled_at.desc(), Enrollment.id.desc())
            .all()
        )

    def query_filtered(self, db: Session, *, course_id: Optional[int] = None) -> Query:
        query = self._query_with_relationships(db)
        if course_id is not None:
            query = query.filter(Enrollment.course_id == course_id)
        return query.order_by(Enrollment.enrolled_at.desc(), Enrollment.id.desc())

    def is_enrolled(self, db: Session, *, student_id: int, course_id: int) -> bool:
        return self.get_by_student_and_course(db, student_id=student_id, course_id=course_id) is not None

    def update_progress(self, db: Session, *, db_obj: Enrollment, progress: float) -> Enrollment:
        db_obj.progress = progress
        db.add(db_obj)
        db.flush()
        return db_obj

    def delete_with_progress(self, db: Session, *, db_obj: Enrollment) -> None:
        for record in list(db_obj.lesson_progress):
            db.delete(record)
        db.flush()
        db.expire(db_obj, ["lesson_progress"])
        db.delete(db_obj)
        db.flush()

    def count_since(self, db: Session, *, since: datetime) -> int:
        return db.query(Enrollment).filter(Enrollment.enrolled_at >= since).count()

    def get_recent(self, db: Session, *, since: datetime, limit: int = 5) -> List[Enrollment]:
        return (
            self._query_with_relationships(db)
            .filter(Enrollment.enrolled_at >= since)
            .order_by(Enrollment.enrolled_at.desc())
            .limit(limit)
            .all()
        )

enrollment = CRUDEnrollment(Enrollment)
