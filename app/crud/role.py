from app.crud.base import CRUDBase
from app.models.role import Role
from app.schemas.role import RoleCreate, RoleUpdate
from sqlalchemy.orm import Session

class CRUDRole(CRUDBase[Role, RoleCreate, RoleUpdate]):
    def get_by_name(self, db: Session, *, name: str) -> Role | None:
        return db.query(Role).filter(Role.name == name).first()

    def get_or_create(self, db: Session, *, name: str) -> Role:
        existing = self.get_by_name(db, name=name)
        if existing:
            return existing
        return self.create(db, obj_in={"name": name})

role = CRUDRole(Role)
