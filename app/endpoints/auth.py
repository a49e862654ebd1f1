from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.schemas.response import APIResponse
from app.schemas.token import AuthResponse, LoginRequest
from app.schemas.user import Identity, UserCreate
from app.services.auth import auth_service
from app.utils import deps

router = APIRouter()


@router.post("/register", response_model=APIResponse[AuthResponse], status_code=status.HTTP_201_CREATED)
def register(
    *,
    db: Session = Depends(deps.get_transactional_db),
    user_in: UserCreate
):
    """Self-registration for students and tutors."""
    result = auth_service.register(db, user_in=user_in)
    return APIResponse(message="User registered successfully", data=result)


@router.post("/login", response_model=APIResponse[AuthResponse])
def login(
    request: LoginRequest,
    db: Session = Depends(deps.get_db)
):
    result = auth_service.login(db, email=request.email, password=request.password)
    return APIResponse(message="Login successful", data=result)


@router.get("/me", response_model=APIResponse[Identity])
def read_identity(identity: Identity = Depends(deps.get_current_identity)):
    return APIResponse(message="Authenticated", data=identity)
