# Import every model so Base.metadata and the relationship registry are complete
from app.core.database import Base  # noqa

from app.models.role import Role  # noqa
from app.models.user import User  # noqa
from app.models.course import Course, course_tags  # noqa
from app.models.tag import Tag  # noqa
from app.models.lesson import Lesson  # noqa
from app.models.enrollment import Enrollment  # noqa
from app.models.lesson_progress import LessonProgress  # noqa
from app.models.assignment import Assignment  # noqa
from app.models.submission import Submission  # noqa
from app.models.moderation_log import ModerationLog  # noqa
from app.models.course_note import CourseNote  # noqa
