import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.constants import ActivityTypeEnum, RoleEnum
from app.core.exceptions import DuplicateUser, EntityNotFound, ValidationFailed
from app.core.security import get_password_hash
from app.crud.base import PaginatedResponse, paginate
from app.crud.course import course as crud_course
from app.crud.enrollment import enrollment as crud_enrollment
from app.crud.role import role as crud_role
from app.crud.user import user as crud_user
from app.models.user import User
from app.schemas.dashboard import Activity, Dashboard, DashboardStats
from app.schemas.enrollment import EnrollmentWithStudent
from app.schemas.user import AdminUserCreate, AdminUserUpdate, Identity, User as UserSchema

logger = logging.getLogger(__name__)

RECENT_WINDOW = timedelta(days=7)
RECENT_ACTIVITY_LIMIT = 10


class AdminService:

    def get_dashboard(self, db: Session) -> Dashboard:
        since = datetime.now(timezone.utc) - RECENT_WINDOW

        stats = DashboardStats(
            total_users=crud_user.count(db),
            total_courses=crud_course.count(db),
            total_enrollments=crud_enrollment.count(db),
            recent_users=crud_user.count_since(db, since=since),
            recent_enrollments=crud_enrollment.count_since(db, since=since),
        )

        activity = [
            Activity(
                description=f"New user registered: {u.username}",
                timestamp=u.created_at,
                type=ActivityTypeEnum.USER_REGISTRATION.value,
            )
            for u in crud_user.get_recent(db, since=since, limit=RECENT_ACTIVITY_LIMIT)
        ]
        activity += [
            Activity(
                description=f"{e.student.username} enrolled in {e.course.title}",
                timestamp=e.enrolled_at,
                type=ActivityTypeEnum.ENROLLMENT.value,
            )
            for e in crud_enrollment.get_recent(db, since=since, limit=RECENT_ACTIVITY_LIMIT)
        ]
        activity.sort(key=lambda a: a.timestamp, reverse=True)

        return Dashboard(stats=stats, recent_activity=activity[:RECENT_ACTIVITY_LIMIT])

    def list_users(
        self, db: Session, *, page: int = 1, size: int = 20, search: Optional[str] = None, role: Optional[RoleEnum] = None
    ) -> PaginatedResponse[UserSchema]:
        query = crud_user.query_filtered(db, search=search, role_name=role.value if role else None)
        rows, total = paginate(query, page=page, size=size)
        return PaginatedResponse[UserSchema].build(
            [UserSchema.model_validate(u) for u in rows], total=total, page=page, size=size
        )

    def _get_user(self, db: Session, user_id: int) -> User:
        user = crud_user.get(db, id=user_id)
        if not user:
            raise EntityNotFound("User not found")
        return user

    def create_user(self, db: Session, *, user_in: AdminUserCreate, identity: Identity) -> User:
        if crud_user.get_by_email_or_username(db, email=user_in.email, username=user_in.username):
            raise DuplicateUser("User with this email or username already exists")

        role = crud_role.get_or_create(db, name=RoleEnum(user_in.role).value)
        try:
            new_user = crud_user.create_with_password(
                db,
                username=user_in.username,
                email=user_in.email,
                hashed_password=get_password_hash(user_in.password),
                role=role,
                full_name=user_in.full_name,
                is_active=user_in.is_active,
            )
        except IntegrityError as exc:
            raise DuplicateUser("User with this email or username already exists") from exc

        logger.info("Admin %s created user %s as %s", identity.user_id, new_user.id, role.name)
        return new_user

    def update_user(self, db: Session, *, user_id: int, user_in: AdminUserUpdate, identity: Identity) -> User:
        user = self._get_user(db, user_id)
        data = user_in.model_dump(exclude_none=True)

        if user.id == identity.user_id and data.get("is_active") is False:
            raise ValidationFailed("You cannot deactivate your own account")

        for field in ("email", "username"):
            if field in data and data[field] != getattr(user, field):
                existing = (
                    crud_user.get_by_email(db, email=data[field])
                    if field == "email"
                    else crud_user.get_by_username(db, username=data[field])
                )
                if existing and existing.id != user.id:
                    raise DuplicateUser(f"A user with this {field} already exists")

        role_name = data.pop("role", None)
        if role_name is not None:
            data["role_id"] = crud_role.get_or_create(db, name=RoleEnum(role_name).value).id

        updated = crud_user.update(db, db_obj=user, obj_in=data)
        logger.info("Admin %s updated user %s: %s", identity.user_id, user_id, sorted(data))
        return updated

    def delete_user(self, db: Session, *, user_id: int, identity: Identity) -> UserSchema:
        if user_id == identity.user_id:
            raise ValidationFailed("You cannot delete your own account")
        user = self._get_user(db, user_id)

        snapshot = UserSchema.model_validate(user)
        crud_user.delete(db, id=user_id)
        logger.info("Admin %s deleted user %s", identity.user_id, user_id)
        return snapshot

    def list_enrollments(
        self, db: Session, *, page: int = 1, size: int = 20, course_id: Optional[int] = None
    ) -> PaginatedResponse[EnrollmentWithStudent]:
        rows, total = paginate(crud_enrollment.query_filtered(db, course_id=course_id), page=page, size=size)
        return PaginatedResponse[EnrollmentWithStudent].build(
            [EnrollmentWithStudent.model_validate(e) for e in rows], total=total, page=page, size=size
        )


admin_service = AdminService()
