from pydantic import BaseModel
from typing import List
from datetime import datetime


class DashboardStats(BaseModel):
    total_users: int
    total_courses: int
    total_enrollments: int
    recent_users: int
    recent_enrollments: int

class Activity(BaseModel):
    description: str
    timestamp: datetime
    type: str

class Dashboard(BaseModel):
    stats: DashboardStats
    recent_activity: List[Activity]
