from sqlalchemy.orm import Session, selectinload
from typing import Optional

from app.crud.base import CRUDBase
from app.models.assignment import Assignment
from app.models.lesson import Lesson
from app.schemas.assignment import AssignmentCreate, AssignmentUpdate


class CRUDAssignment(CRUDBase[Assignment, AssignmentCreate, AssignmentUpdate]):

    def get(self, db: Session, id: int) -> Optional[Assignment]:
        return (
            db.query(Assignment)
            .options(selectinload(Assignment.lesson).selectinload(Lesson.course))
            .filter(Assignment.id == id)
            .first()
        )

assignment = CRUDAssignment(Assignment)
