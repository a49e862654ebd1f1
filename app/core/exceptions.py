"""Domain failures raised by services and mapped to HTTP only by the exception handlers."""
from typing import Any, Dict, Optional


class AppError(Exception):
    status_code: int = 500
    code: str = "INTERNAL_SERVER_ERROR"
    message: str = "An unexpected error occurred"

    def __init__(self, message: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        self.message = message or self.message
        self.details = details
        super().__init__(self.message)


class Unauthenticated(AppError):
    status_code = 401
    code = "UNAUTHORIZED"
    message = "Access token required"


class InvalidToken(AppError):
    status_code = 403
    code = "INVALID_TOKEN"
    message = "Invalid or expired token"


class UserNotFound(AppError):
    status_code = 403
    code = "USER_NOT_FOUND"
    message = "User not found or inactive"


class Forbidden(AppError):
    status_code = 403
    code = "FORBIDDEN"
    message = "You do not have permission to perform this action."


class NotFound(AppError):
    status_code = 404
    code = "NOT_FOUND"
    message = "Resource not found"


class EntityNotFound(NotFound):
    pass


class CourseNotFound(NotFound):
    code = "COURSE_NOT_FOUND"
    message = "Course not found"


class LessonNotFound(NotFound):
    code = "LESSON_NOT_FOUND"
    message = "Lesson not found"


class AssignmentNotFound(NotFound):
    code = "ASSIGNMENT_NOT_FOUND"
    message = "Assignment not found"


class SubmissionNotFound(NotFound):
    code = "SUBMISSION_NOT_FOUND"
    message = "Submission not found"


class NotEnrolled(NotFound):
    code = "NOT_ENROLLED"
    message = "Not enrolled in this course"


class Conflict(AppError):
    status_code = 409
    code = "CONFLICT"
    message = "Resource already exists"


class AlreadyEnrolled(Conflict):
    code = "ALREADY_ENROLLED"
    message = "Already enrolled in this course"


class DuplicateUser(Conflict):
    code = "DUPLICATE_USER"
    message = "User already exists"


class AlreadySubmitted(Conflict):
    code = "ALREADY_SUBMITTED"
    message = "Assignment already submitted"


class ValidationFailed(AppError):
    status_code = 400
    code = "BAD_REQUEST"
    message = "Invalid request"
