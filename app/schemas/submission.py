from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from datetime import datetime

from app.schemas.user import UserSummary


class SubmissionCreate(BaseModel):
    code_submission: str = Field(..., min_length=1)

class GradeRequest(BaseModel):
    grade: int = Field(..., ge=0)
    feedback: Optional[str] = None

class Submission(BaseModel):
    id: int
    assignment_id: int
    student_id: int
    code_submission: Optional[str] = None
    grade: Optional[int] = None
    feedback: Optional[str] = None
    submitted_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)

class SubmissionForGrading(Submission):
    student: UserSummary
    assignment_title: Optional[str] = None
    max_score: int
    lesson_title: str
    course_title: str
