from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional
from datetime import datetime

from app.schemas.enrollment import CourseBrief
from app.schemas.user import UserSummary


def _not_blank(v: Optional[str], field_name: str) -> Optional[str]:
    if v is not None and not v.strip():
        raise ValueError(f"{field_name} cannot be empty")
    return v


class CourseNoteBase(BaseModel):
    title: str = Field(..., max_length=200)
    content: str

    @field_validator("title", "content")
    def not_blank(cls, v, info):
        return _not_blank(v, info.field_name)

class CourseNoteCreate(CourseNoteBase):
    course_id: int

class CourseNoteUpdate(BaseModel):
    title: Optional[str] = Field(default=None, max_length=200)
    content: Optional[str] = None

    @field_validator("title", "content")
    def not_null_or_blank(cls, v, info):
        if v is None:
            raise ValueError(f"{info.field_name} cannot be null")
        return _not_blank(v, info.field_name)

class CourseNote(CourseNoteBase):
    id: int
    course_id: int
    author_id: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    course: CourseBrief
    author: Optional[UserSummary] = None

    model_config = ConfigDict(from_attributes=True)
