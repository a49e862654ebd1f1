from typing import Iterable

from app.core.constants import RoleEnum
from app.core.exceptions import Forbidden
from app.models.course import Course
from app.schemas.user import Identity


class PermissionHelper:
    @staticmethod
    def require_role(identity: Identity, allowed_roles: Iterable[RoleEnum]) -> Identity:
        """Allows the caller only when their role is one of ``allowed_roles``.

        Membership is exact; no role implies another.
        """
        allowed = {RoleEnum(r) for r in allowed_roles}
        if identity.role_name not in allowed:
            raise Forbidden()
        return identity

    @staticmethod
    def is_admin(identity: Identity) -> bool:
        return identity.role_name == RoleEnum.ADMIN

    @staticmethod
    def is_tutor(identity: Identity) -> bool:
        return identity.role_name == RoleEnum.TUTOR

    @staticmethod
    def is_student(identity: Identity) -> bool:
        return identity.role_name == RoleEnum.STUDENT

    @staticmethod
    def owns_course(identity: Identity, course: Course) -> bool:
        return course.tutor_id == identity.user_id

    @staticmethod
    def can_manage_course(identity: Identity, course: Course) -> bool:
        if PermissionHelper.is_admin(identity):
            return True
        return PermissionHelper.is_tutor(identity) and PermissionHelper.owns_course(identity, course)

    @staticmethod
    def require_course_management_permission(identity: Identity, course: Course):
        if not PermissionHelper.can_manage_course(identity, course):
            raise Forbidden("You do not have permission to manage this course.")

    @staticmethod
    def require_course_owner(identity: Identity, course: Course):
        if not (PermissionHelper.is_tutor(identity) and PermissionHelper.owns_course(identity, course)):
            raise Forbidden("Only the tutor who owns this course can perform this action.")
