from pydantic import BaseModel, EmailStr, field_validator, ConfigDict, model_validator
from typing import Optional, Any
from datetime import datetime

from app.core.constants import RoleEnum


def _validate_password(v: str) -> str:
    if not v or not v.strip():
        raise ValueError("Password cannot be empty or contain only whitespace.")
    if len(v) < 6:
        raise ValueError("Password must be at least 6 characters long.")
    return v


def _validate_username(v: str) -> str:
    v = v.strip()
    if len(v) < 3:
        raise ValueError("Username must be at least 3 characters long.")
    if not all(ch.isalnum() or ch in "_.-" for ch in v):
        raise ValueError("Username may only contain letters, digits, '_', '.' and '-'.")
    return v


class UserBase(BaseModel):
    """Base user schema with common fields."""
    username: str
    email: EmailStr
    full_name: Optional[str] = None

    @field_validator("email")
    def normalize_email(cls, v):
        return v.lower()

    @field_validator("username")
    def validate_username(cls, v):
        return _validate_username(v)

class UserCreate(UserBase):
    """Schema for self-registration, includes password."""
    password: str
    role: RoleEnum = RoleEnum.STUDENT

    model_config = ConfigDict(use_enum_values=True)

    @field_validator("password")
    def validate_password(cls, v):
        return _validate_password(v)

class UserUpdate(BaseModel):
    """Schema for updating a user's own profile."""
    full_name: Optional[str] = None
    bio: Optional[str] = None
    profile_pic_url: Optional[str] = None

    @field_validator("full_name")
    def not_empty(cls, v):
        if v is not None and not v.strip():
            raise ValueError("Full name cannot be empty")
        return v

    @model_validator(mode='before')
    @classmethod
    def at_least_one_value(cls, data: Any):
        if isinstance(data, dict) and not any(v is not None for v in data.values()):
            raise ValueError("At least one field must be provided for update")
        return data

class User(BaseModel):
    """Public user representation; never carries the password hash."""
    id: int
    username: str
    email: EmailStr
    full_name: Optional[str] = None
    bio: Optional[str] = None
    profile_pic_url: Optional[str] = None
    role_name: str
    is_active: bool
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)

class UserSummary(BaseModel):
    id: int
    username: str
    full_name: Optional[str] = None
    profile_pic_url: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)

class StudentSummary(UserSummary):
    email: EmailStr

class Identity(BaseModel):
    """The authenticated caller as resolved from a bearer token."""
    user_id: int
    role_name: RoleEnum
    username: str

    model_config = ConfigDict(frozen=True)

class AdminUserCreate(UserBase):
    password: str
    role: RoleEnum = RoleEnum.STUDENT
    is_active: bool = True

    model_config = ConfigDict(use_enum_values=True)

    @field_validator("password")
    def validate_password(cls, v):
        return _validate_password(v)

class AdminUserUpdate(BaseModel):
    """Schema for administrative user updates."""
    username: Optional[str] = None
    email: Optional[EmailStr] = None
    full_name: Optional[str] = None
    role: Optional[RoleEnum] = None
    is_active: Optional[bool] = None

    model_config = ConfigDict(use_enum_values=True)

    @field_validator("email")
    def normalize_email(cls, v):
        return v.lower() if v is not None else v

    @field_validator("username")
    def validate_username(cls, v):
        return _validate_username(v) if v is not None else v

    @model_validator(mode='before')
    @classmethod
    def at_least_one_value(cls, data: Any):
        if isinstance(data, dict) and not any(v is not None for v in data.values()):
            raise ValueError("At least one field must be provided for update")
        return data
