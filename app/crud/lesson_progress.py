from sqlalchemy.orm import Session
from typing import Dict, List, Optional
from datetime import datetime

from app.crud.base import CRUDBase
from app.models.lesson_progress import LessonProgress
from app.schemas.lesson_progress import LessonProgressCreate, LessonProgressUpdate

class CRUDLessonProgress(CRUDBase[LessonProgress, LessonProgressCreate, LessonProgressUpdate]):

    def get_by_enrollment_and_lesson(self, db: Session, *, enrollment_id: int, lesson_id: int) -> Optional[LessonProgress]:
        return (
            db.query(LessonProgress)
            .filter(LessonProgress.enrollment_id == enrollment_id)
            .filter(LessonProgress.lesson_id == lesson_id)
            .first()
        )

    def get_all_by_enrollment(self, db: Session, *, enrollment_id: int) -> List[LessonProgress]:
        return (
            db.query(LessonProgress)
            .filter(LessonProgress.enrollment_id == enrollment_id)
            .order_by(LessonProgress.lesson_id)
            .all()
        )

    def get_map_by_enrollment(self, db: Session, *, enrollment_id: int) -> Dict[int, LessonProgress]:
        return {lp.lesson_id: lp for lp in self.get_all_by_enrollment(db, enrollment_id=enrollment_id)}

    def create_for_lessons(self, db: Session, *, enrollment_id: int, lesson_ids: List[int]) -> List[LessonProgress]:
        records = [
            LessonProgress(enrollment_id=enrollment_id, lesson_id=lesson_id, is_completed=False)
            for lesson_id in lesson_ids
        ]
        db.add_all(records)
        db.flush()
        return records

    def mark_completed(self, db: Session, *, enrollment_id: int, lesson_id: int, completed_at: datetime) -> LessonProgress:
        """Upserts the progress row for the pair and marks it completed.

        An already-completed row keeps its original ``completed_at``.
        """
        record = self.get_by_enrollment_and_lesson(db, enrollment_id=enrollment_id, lesson_id=lesson_id)
        if record is None:
            record = LessonProgress(
                enrollment_id=enrollment_id,
                lesson_id=lesson_id,
                is_completed=True,
                completed_at=completed_at,
            )
            db.add(record)
        elif not record.is_completed:
            record.is_completed = True
            record.completed_at = completed_at
            db.add(record)
        db.flush()
        return record

    def count_completed(self, db: Session, *, enrollment_id: int) -> int:
        return (
            db.query(LessonProgress)
            .filter(LessonProgress.enrollment_id == enrollment_id)
            .filter(LessonProgress.is_completed.is_(True))
            .count()
        )

lesson_progress = CRUDLessonProgress(LessonProgress)
