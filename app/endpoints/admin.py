from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.core.constants import RoleEnum
from app.crud.base import PaginatedResponse
from app.schemas.course import Course
from app.schemas.dashboard import Dashboard
from app.schemas.enrollment import Enrollment, EnrollmentWithStudent
from app.schemas.response import APIResponse
from app.schemas.user import AdminUserCreate, AdminUserUpdate, Identity, User as UserSchema
from app.services.admin import admin_service
from app.services.course import course_service
from app.services.enrollment import enrollment_service
from app.utils import deps

router = APIRouter()

require_admin = deps.require_role(RoleEnum.ADMIN)


@router.get("/dashboard/stats", response_model=APIResponse[Dashboard], dependencies=[Depends(require_admin)])
def get_dashboard_stats(db: Session = Depends(deps.get_db)):
    dashboard = admin_service.get_dashboard(db)
    return APIResponse(message="Dashboard stats retrieved successfully", data=dashboard)


@router.get("/users", response_model=APIResponse[PaginatedResponse[UserSchema]], dependencies=[Depends(require_admin)])
def list_users(
    *,
    db: Session = Depends(deps.get_db),
    page: int = Query(1, ge=1),
    size: int = Query(20, ge=1, le=100),
    search: Optional[str] = None,
    role: Optional[RoleEnum] = None
):
    users = admin_service.list_users(db, page=page, size=size, search=search, role=role)
    return APIResponse(message="Users retrieved successfully", data=users)


@router.post("/users", response_model=APIResponse[UserSchema], status_code=status.HTTP_201_CREATED)
def create_user(
    *,
    db: Session = Depends(deps.get_transactional_db),
    user_in: AdminUserCreate,
    identity: Identity = Depends(require_admin)
):
    new_user = admin_service.create_user(db, user_in=user_in, identity=identity)
    return APIResponse(message="User created successfully", data=UserSchema.model_validate(new_user))


@router.put("/users/{user_id}", response_model=APIResponse[UserSchema])
def update_user(
    *,
    db: Session = Depends(deps.get_transactional_db),
    user_id: int,
    user_in: AdminUserUpdate,
    identity: Identity = Depends(require_admin)
):
    updated_user = admin_service.update_user(db, user_id=user_id, user_in=user_in, identity=identity)
    return APIResponse(message="User updated successfully", data=UserSchema.model_validate(updated_user))


@router.delete("/users/{user_id}", response_model=APIResponse[UserSchema])
def delete_user(
    *,
    db: Session = Depends(deps.get_transactional_db),
    user_id: int,
    identity: Identity = Depends(require_admin)
):
    deleted_user = admin_service.delete_user(db, user_id=user_id, identity=identity)
    return APIResponse(message="User deleted successfully", data=deleted_user)


@router.get("/courses", response_model=APIResponse[PaginatedResponse[Course]], dependencies=[Depends(require_admin)])
def list_all_courses(
    *,
    db: Session = Depends(deps.get_db),
    page: int = Query(1, ge=1),
    size: int = Query(20, ge=1, le=100),
    search: Optional[str] = None
):
    courses = course_service.list_all(db, page=page, size=size, search=search)
    return APIResponse(message="Courses retrieved successfully", data=courses)


@router.delete("/courses/{course_id}", response_model=APIResponse[Course])
def delete_course(
    *,
    db: Session = Depends(deps.get_transactional_db),
    course_id: int,
    identity: Identity = Depends(require_admin)
):
    deleted_course = course_service.delete_course(db, course_id=course_id, identity=identity)
    return APIResponse(message="Course deleted successfully", data=deleted_course)


@router.get("/enrollments", response_model=APIResponse[PaginatedResponse[EnrollmentWithStudent]], dependencies=[Depends(require_admin)])
def list_enrollments(
    *,
    db: Session = Depends(deps.get_db),
    page: int = Query(1, ge=1),
    size: int = Query(20, ge=1, le=100),
    course_id: Optional[int] = None
):
    enrollments = admin_service.list_enrollments(db, page=page, size=size, course_id=course_id)
    return APIResponse(message="Enrollments retrieved successfully", data=enrollments)


@router.delete("/enrollments/{enrollment_id}", response_model=APIResponse[Enrollment])
def delete_enrollment(
    *,
    db: Session = Depends(deps.get_transactional_db),
    enrollment_id: int,
    identity: Identity = Depends(require_admin)
):
    removed = enrollment_service.delete_enrollment(db, enrollment_id=enrollment_id, identity=identity)
    return APIResponse(message="Enrollment deleted successfully", data=Enrollment.model_validate(removed))
