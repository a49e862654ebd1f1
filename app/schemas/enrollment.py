from pydantic import BaseModel, ConfigDict
from typing import Optional
from datetime import datetime

from app.schemas.user import StudentSummary


class EnrollmentCreate(BaseModel):
    student_id: int
    course_id: int
    progress: float = 0.0

class EnrollmentUpdate(BaseModel):
    progress: Optional[float] = None

class EnrollStudentRequest(BaseModel):
    student_id: int

class Enrollment(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    student_id: int
    course_id: int
    progress: float
    enrolled_at: Optional[datetime] = None

class EnrollmentWithStudent(Enrollment):
    student: StudentSummary

class CourseBrief(BaseModel):
    id: int
    title: str
    description: Optional[str] = None
    thumbnail_url: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)

class EnrollmentProgress(Enrollment):
    """An enrollment as seen by its student, with lesson counts."""
    course: CourseBrief
    completed_lessons: int
    total_lessons: int
    rounded_progress: int
