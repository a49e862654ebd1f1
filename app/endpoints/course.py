from typing import List, Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.core.constants import CourseLevelEnum, RoleEnum
from app.crud.base import PaginatedResponse
from app.schemas.course import Course, CourseCreate, CourseTagsUpdate, CourseUpdate
from app.schemas.enrollment import (
    EnrollStudentRequest,
    Enrollment,
    EnrollmentProgress,
    EnrollmentWithStudent,
)
from app.schemas.response import APIResponse
from app.schemas.user import Identity
from app.services.course import course_service
from app.services.enrollment import enrollment_service
from app.utils import deps

router = APIRouter()


@router.get("/", response_model=APIResponse[PaginatedResponse[Course]])
def list_courses(
    db: Session = Depends(deps.get_db),
    identity: Identity = Depends(deps.get_current_identity),
    page: int = Query(1, ge=1),
    size: int = Query(20, ge=1, le=100),
    search: Optional[str] = None,
    category: Optional[str] = None,
    level: Optional[CourseLevelEnum] = None,
    tag: Optional[str] = None
):
    courses = course_service.list_published(
        db,
        page=page,
        size=size,
        search=search,
        category=category,
        level=level.value if level else None,
        tag=tag,
    )
    return APIResponse(message="Courses retrieved successfully", data=courses)


@router.post("/", response_model=APIResponse[Course], status_code=status.HTTP_201_CREATED)
def create_course(
    *,
    db: Session = Depends(deps.get_transactional_db),
    course_in: CourseCreate,
    identity: Identity = Depends(deps.require_role(RoleEnum.TUTOR, RoleEnum.ADMIN))
):
    new_course = course_service.create_course(db, course_in=course_in, identity=identity)
    return APIResponse(message="Course created successfully", data=Course.model_validate(new_course))


@router.get("/mine", response_model=APIResponse[PaginatedResponse[Course]])
def list_my_courses(
    db: Session = Depends(deps.get_db),
    identity: Identity = Depends(deps.require_role(RoleEnum.TUTOR)),
    page: int = Query(1, ge=1),
    size: int = Query(20, ge=1, le=100)
):
    courses = course_service.list_for_tutor(db, identity=identity, page=page, size=size)
    return APIResponse(message="Your courses retrieved successfully", data=courses)


@router.get("/progress", response_model=APIResponse[List[EnrollmentProgress]])
def read_my_progress(
    db: Session = Depends(deps.get_db),
    identity: Identity = Depends(deps.require_role(RoleEnum.STUDENT))
):
    overview = enrollment_service.get_progress_overview(db, student_id=identity.user_id)
    return APIResponse(message="Progress retrieved successfully", data=overview)


@router.get("/{course_id}", response_model=APIResponse[Course])
def read_course(
    *,
    db: Session = Depends(deps.get_db),
    course_id: int,
    identity: Identity = Depends(deps.get_current_identity)
):
    course = course_service.get_course(db, course_id=course_id, identity=identity)
    return APIResponse(message="Course retrieved successfully", data=Course.model_validate(course))


@router.put("/{course_id}", response_model=APIResponse[Course])
def update_course(
    *,
    db: Session = Depends(deps.get_transactional_db),
    course_id: int,
    course_in: CourseUpdate,
    identity: Identity = Depends(deps.require_role(RoleEnum.TUTOR, RoleEnum.ADMIN))
):
    updated_course = course_service.update_course(db, course_id=course_id, course_in=course_in, identity=identity)
    return APIResponse(message="Course updated successfully", data=Course.model_validate(updated_course))


@router.delete("/{course_id}", response_model=APIResponse[Course])
def delete_course(
    *,
    db: Session = Depends(deps.get_transactional_db),
    course_id: int,
    identity: Identity = Depends(deps.require_role(RoleEnum.TUTOR, RoleEnum.ADMIN))
):
    deleted_course = course_service.delete_course(db, course_id=course_id, identity=identity)
    return APIResponse(message="Course deleted successfully", data=deleted_course)


@router.put("/{course_id}/tags", response_model=APIResponse[Course])
def replace_course_tags(
    *,
    db: Session = Depends(deps.get_transactional_db),
    course_id: int,
    tags_in: CourseTagsUpdate,
    identity: Identity = Depends(deps.require_role(RoleEnum.TUTOR, RoleEnum.ADMIN))
):
    course = course_service.set_tags(db, course_id=course_id, tag_names=tags_in.tags, identity=identity)
    return APIResponse(message="Course tags updated successfully", data=Course.model_validate(course))


@router.post("/{course_id}/enroll", response_model=APIResponse[Enrollment], status_code=status.HTTP_201_CREATED)
def enroll_in_course(
    *,
    db: Session = Depends(deps.get_transactional_db),
    course_id: int,
    identity: Identity = Depends(deps.require_role(RoleEnum.STUDENT))
):
    enrollment = enrollment_service.enroll(db, student_id=identity.user_id, course_id=course_id)
    return APIResponse(message="Enrolled successfully", data=Enrollment.model_validate(enrollment))


@router.delete("/{course_id}/unenroll", response_model=APIResponse[None])
def unenroll_from_course(
    *,
    db: Session = Depends(deps.get_transactional_db),
    course_id: int,
    identity: Identity = Depends(deps.require_role(RoleEnum.STUDENT))
):
    enrollment_service.unenroll(db, student_id=identity.user_id, course_id=course_id)
    return APIResponse(message="Unenrolled successfully")


@router.post("/{course_id}/enroll-student", response_model=APIResponse[Enrollment], status_code=status.HTTP_201_CREATED)
def enroll_student(
    *,
    db: Session = Depends(deps.get_transactional_db),
    course_id: int,
    request: EnrollStudentRequest,
    identity: Identity = Depends(deps.require_role(RoleEnum.TUTOR, RoleEnum.ADMIN))
):
    enrollment = enrollment_service.enroll_student(
        db, course_id=course_id, student_id=request.student_id, identity=identity
    )
    return APIResponse(message="Student enrolled successfully", data=Enrollment.model_validate(enrollment))


@router.get("/{course_id}/enrollments", response_model=APIResponse[List[EnrollmentWithStudent]])
def list_course_enrollments(
    *,
    db: Session = Depends(deps.get_db),
    course_id: int,
    identity: Identity = Depends(deps.require_role(RoleEnum.TUTOR, RoleEnum.ADMIN))
):
    enrollments = enrollment_service.get_course_enrollments(db, course_id=course_id, identity=identity)
    return APIResponse(
        message="Enrollments retrieved successfully",
        data=[EnrollmentWithStudent.model_validate(e) for e in enrollments],
    )


@router.delete("/{course_id}/enrollments/{enrollment_id}", response_model=APIResponse[Enrollment])
def remove_course_enrollment(
    *,
    db: Session = Depends(deps.get_transactional_db),
    course_id: int,
    enrollment_id: int,
    identity: Identity = Depends(deps.require_role(RoleEnum.TUTOR, RoleEnum.ADMIN))
):
    removed = enrollment_service.delete_enrollment(
        db, enrollment_id=enrollment_id, identity=identity, course_id=course_id
    )
    return APIResponse(message="Enrollment removed successfully", data=Enrollment.model_validate(removed))
