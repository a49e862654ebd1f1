from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional, List
from datetime import datetime


class AssignmentBase(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    max_score: int = Field(default=100, gt=0)

class AssignmentCreate(AssignmentBase):
    lesson_id: int

class AssignmentUpdate(AssignmentBase):
    lesson_id: Optional[int] = None
    max_score: Optional[int] = Field(default=None, gt=0)

    @field_validator("lesson_id", "max_score")
    def not_null(cls, v, info):
        if v is None:
            raise ValueError(f"{info.field_name} cannot be null")
        return v

class OwnSubmission(BaseModel):
    id: int
    grade: Optional[int] = None
    feedback: Optional[str] = None
    submitted_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)

class Assignment(AssignmentBase):
    id: int
    lesson_id: int

    model_config = ConfigDict(from_attributes=True)

class AssignmentDetail(Assignment):
    submissions: List[OwnSubmission] = Field(default_factory=list)
