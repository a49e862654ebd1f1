from typing import List, Union
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.core.constants import RoleEnum
from app.schemas.lesson import Lesson, LessonCreate, LessonUpdate, LessonWithProgress
from app.schemas.lesson_progress import LessonCompletion
from app.schemas.response import APIResponse
from app.schemas.user import Identity
from app.services.enrollment import enrollment_service
from app.services.lesson import lesson_service
from app.utils import deps

router = APIRouter()


@router.get("/", response_model=APIResponse[List[Union[Lesson, LessonWithProgress]]])
def list_lessons(
    course_id: int,
    db: Session = Depends(deps.get_db),
    identity: Identity = Depends(deps.get_current_identity)
):
    lessons = lesson_service.list_lessons(db, course_id=course_id, identity=identity)
    return APIResponse(message="Lessons retrieved successfully", data=lessons)


@router.post("/", response_model=APIResponse[Lesson], status_code=status.HTTP_201_CREATED)
def create_lesson(
    *,
    db: Session = Depends(deps.get_transactional_db),
    lesson_in: LessonCreate,
    identity: Identity = Depends(deps.require_role(RoleEnum.TUTOR, RoleEnum.ADMIN))
):
    new_lesson = lesson_service.create_lesson(db, lesson_in=lesson_in, identity=identity)
    return APIResponse(message="Lesson created successfully", data=Lesson.model_validate(new_lesson))


@router.get("/{lesson_id}", response_model=APIResponse[Lesson])
def read_lesson(
    *,
    db: Session = Depends(deps.get_db),
    lesson_id: int,
    identity: Identity = Depends(deps.get_current_identity)
):
    lesson = lesson_service.get_lesson(db, lesson_id=lesson_id, identity=identity)
    return APIResponse(message="Lesson retrieved successfully", data=Lesson.model_validate(lesson))


@router.put("/{lesson_id}", response_model=APIResponse[Lesson])
def update_lesson(
    *,
    db: Session = Depends(deps.get_transactional_db),
    lesson_id: int,
    lesson_in: LessonUpdate,
    identity: Identity = Depends(deps.require_role(RoleEnum.TUTOR, RoleEnum.ADMIN))
):
    lesson = lesson_service.update_lesson(db, lesson_id=lesson_id, lesson_in=lesson_in, identity=identity)
    return APIResponse(message="Lesson updated successfully", data=Lesson.model_validate(lesson))


@router.delete("/{lesson_id}", response_model=APIResponse[Lesson])
def delete_lesson(
    *,
    db: Session = Depends(deps.get_transactional_db),
    lesson_id: int,
    identity: Identity = Depends(deps.require_role(RoleEnum.TUTOR, RoleEnum.ADMIN))
):
    deleted = lesson_service.delete_lesson(db, lesson_id=lesson_id, identity=identity)
    return APIResponse(message="Lesson deleted successfully", data=deleted)


@router.post("/{lesson_id}/complete", response_model=APIResponse[LessonCompletion])
def complete_lesson(
    *,
    db: Session = Depends(deps.get_transactional_db),
    lesson_id: int,
    identity: Identity = Depends(deps.require_role(RoleEnum.STUDENT))
):
    result = enrollment_service.complete_lesson(db, student_id=identity.user_id, lesson_id=lesson_id)
    return APIResponse(message="Lesson marked as completed", data=result)
