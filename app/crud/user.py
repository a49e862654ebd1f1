from typing import Optional, List
from datetime import datetime
from sqlalchemy import func, or_
from sqlalchemy.orm import Session, Query

from app.crud.base import CRUDBase
from app.models.role import Role
from app.models.user import User
from app.schemas.user import UserCreate, UserUpdate


class CRUDUser(CRUDBase[User, UserCreate, UserUpdate]):
    def get_by_email(self, db: Session, *, email: str) -> Optional[User]:
        return db.query(User).filter(func.lower(User.email) == email.lower()).first()

    def get_by_username(self, db: Session, *, username: str) -> Optional[User]:
        return db.query(User).filter(User.username == username).first()

    def get_by_email_or_username(self, db: Session, *, email: str, username: str) -> Optional[User]:
        return (
            db.query(User)
            .filter(or_(func.lower(User.email) == email.lower(), User.username == username))
            .first()
        )

    def create_with_password(
        self, db: Session, *, username: str, email: str, hashed_password: str, role: Role,
        full_name: Optional[str] = None, is_active: bool = True
    ) -> User:
        return self.create(
            db,
            obj_in={
                "username": username,
                "email": email.lower(),
                "hashed_password": hashed_password,
                "full_name": full_name,
                "role_id": role.id,
                "is_active": is_active,
            },
        )

    def query_filtered(self, db: Session, *, search: Optional[str] = None, role_name: Optional[str] = None) -> Query:
        query = db.query(User).outerjoin(Role, User.role_id == Role.id)
        if search:
            pattern = f"%{search.lower()}%"
            query = query.filter(
                or_(
                    func.lower(User.username).like(pattern),
                    func.lower(User.email).like(pattern),
                    func.lower(User.full_name).like(pattern),
                )
            )
        if role_name:
            query = query.filter(Role.name == role_name)
        return query.order_by(User.created_at.desc(), User.id.desc())

    def get_by_role_name(self, db: Session, *, role_name: str, skip: int = 0, limit: int = 100) -> List[User]:
        return (
            db.query(User)
            .join(Role, User.role_id == Role.id)
            .filter(Role.name == role_name)
            .order_by(User.username)
            .offset(skip)
            .limit(limit)
            .all()
        )

    def count_since(self, db: Session, *, since: datetime) -> int:
        return db.query(User).filter(User.created_at >= since).count()

    def get_recent(self, db: Session, *, since: datetime, limit: int = 5) -> List[User]:
        return (
            db.query(User)
            .filter(User.created_at >= since)
            .order_by(User.created_at.desc())
            .limit(limit)
            .all()
        )

    def set_active(self, db: Session, *, db_obj: User, is_active: bool) -> User:
        return self.update(db, db_obj=db_obj, obj_in={"is_active": is_active})

user = CRUDUser(User)
