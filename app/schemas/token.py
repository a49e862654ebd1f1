from pydantic import BaseModel, EmailStr

from .user import User


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"

class LoginRequest(BaseModel):
    email: EmailStr
    password: str

class AuthResponse(BaseModel):
    """Response for the register and login endpoints."""
    token: Token
    user: User
