import logging
from typing import List

from sqlalchemy.orm import Session

from app.core.constants import RoleEnum
from app.core.exceptions import UserNotFound
from app.crud.user import user as crud_user
from app.models.user import User
from app.schemas.user import Identity, UserUpdate

logger = logging.getLogger(__name__)


class UserService:

    def get_profile(self, db: Session, *, identity: Identity) -> User:
        user = crud_user.get(db, id=identity.user_id)
        if not user:
            raise UserNotFound()
        return user

    def update_profile(self, db: Session, *, identity: Identity, user_in: UserUpdate) -> User:
        user = self.get_profile(db, identity=identity)
        updated = crud_user.update(db, db_obj=user, obj_in=user_in.model_dump(exclude_none=True))
        logger.info("User %s updated their profile", identity.user_id)
        return updated

    def list_students(self, db: Session, *, skip: int = 0, limit: int = 100) -> List[User]:
        return crud_user.get_by_role_name(db, role_name=RoleEnum.STUDENT.value, skip=skip, limit=limit)


user_service = UserService()
