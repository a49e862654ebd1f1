from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional, List
from datetime import datetime

from app.core.constants import CourseLevelEnum
from app.schemas.user import UserSummary


class CourseBase(BaseModel):
    title: str
    description: Optional[str] = None
    category: Optional[str] = None
    level: Optional[CourseLevelEnum] = None
    thumbnail_url: Optional[str] = None

    model_config = ConfigDict(use_enum_values=True)

    @field_validator("title")
    def title_not_blank(cls, v):
        if v is not None and not v.strip():
            raise ValueError("Title cannot be empty")
        return v

class CourseCreate(CourseBase):
    is_published: bool = False

class CourseUpdate(CourseBase):
    title: Optional[str] = None
    is_published: Optional[bool] = None

    # omitted means unchanged; an explicit null would hit a NOT NULL column
    @field_validator("title", "is_published")
    def not_null(cls, v, info):
        if v is None:
            raise ValueError(f"{info.field_name} cannot be null")
        return v

class CourseTagsUpdate(BaseModel):
    tags: List[str] = Field(default_factory=list)

class Course(CourseBase):
    id: int
    tutor_id: int
    is_published: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    tutor: Optional[UserSummary] = None
    tag_names: List[str] = Field(default_factory=list)
    lesson_count: int = 0
    enrollment_count: int = 0

    model_config = ConfigDict(from_attributes=True, use_enum_values=True)
