from pydantic import BaseModel, ConfigDict
from typing import Optional
from datetime import datetime


class LessonProgressCreate(BaseModel):
    enrollment_id: int
    lesson_id: int
    is_completed: bool = False
    completed_at: Optional[datetime] = None

class LessonProgressUpdate(BaseModel):
    is_completed: Optional[bool] = None
    completed_at: Optional[datetime] = None

class LessonProgress(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    enrollment_id: int
    lesson_id: int
    is_completed: bool
    completed_at: Optional[datetime] = None

class LessonCompletion(BaseModel):
    """Result of completing a lesson."""
    progress: LessonProgress
    course_progress: int
