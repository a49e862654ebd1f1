from enum import Enum


class RoleEnum(str, Enum):
    STUDENT = "student"
    TUTOR = "tutor"
    ADMIN = "admin"
    MODERATOR = "moderator"

SELF_REGISTRATION_ROLES = (RoleEnum.STUDENT, RoleEnum.TUTOR)

class CourseLevelEnum(str, Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"
    ALL = "all"

class ModerationActionEnum(str, Enum):
    DEACTIVATE_USER = "deactivate_user"
    UNPUBLISH_COURSE = "unpublish_course"

class ActivityTypeEnum(str, Enum):
    USER_REGISTRATION = "user_registration"
    ENROLLMENT = "enrollment"
