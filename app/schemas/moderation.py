from pydantic import BaseModel, ConfigDict
from typing import Optional
from datetime import datetime


class ModerationActionRequest(BaseModel):
    details: Optional[str] = None

class ModerationLog(BaseModel):
    id: int
    moderator_id: Optional[int] = None
    action: str
    target_user_id: Optional[int] = None
    target_course_id: Optional[int] = None
    details: Optional[str] = None
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
