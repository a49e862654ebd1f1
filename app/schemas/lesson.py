from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional, List
from datetime import datetime


class LessonBase(BaseModel):
    title: str
    content: Optional[str] = None
    video_url: Optional[str] = None
    order_index: int = Field(default=0, ge=0)

class LessonCreate(LessonBase):
    course_id: int

class LessonUpdate(LessonBase):
    title: Optional[str] = None
    order_index: Optional[int] = Field(default=None, ge=0)

    @field_validator("title", "order_index")
    def not_null(cls, v, info):
        if v is None:
            raise ValueError(f"{info.field_name} cannot be null")
        return v

class AssignmentBrief(BaseModel):
    id: int
    title: Optional[str] = None
    max_score: int

    model_config = ConfigDict(from_attributes=True)

class Lesson(LessonBase):
    id: int
    course_id: int
    created_at: Optional[datetime] = None
    assignments: List[AssignmentBrief] = Field(default_factory=list)

    model_config = ConfigDict(from_attributes=True)

class LessonWithProgress(Lesson):
    is_completed: bool = False
    completed_at: Optional[datetime] = None
