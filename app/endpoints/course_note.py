from typing import List, Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.core.constants import RoleEnum
from app.crud.base import PaginatedResponse
from app.schemas.course_note import CourseNote, CourseNoteCreate, CourseNoteUpdate
from app.schemas.response import APIResponse
from app.schemas.user import Identity
from app.services.course_note import course_note_service
from app.utils import deps

router = APIRouter()

require_manager = deps.require_role(RoleEnum.TUTOR, RoleEnum.ADMIN)


@router.get("/", response_model=APIResponse[PaginatedResponse[CourseNote]])
def list_course_notes(
    db: Session = Depends(deps.get_db),
    page: int = Query(1, ge=1),
    size: int = Query(20, ge=1, le=100),
    course_id: Optional[int] = None,
    search: Optional[str] = None,
    identity: Identity = Depends(require_manager)
):
    notes = course_note_service.list_for_manager(
        db, identity=identity, page=page, size=size, course_id=course_id, search=search
    )
    return APIResponse(message="Course notes retrieved successfully", data=notes)


@router.get("/course/{course_id}", response_model=APIResponse[List[CourseNote]])
def list_notes_for_course(
    *,
    db: Session = Depends(deps.get_db),
    course_id: int,
    identity: Identity = Depends(deps.get_current_identity)
):
    notes = course_note_service.list_for_course(db, course_id=course_id, identity=identity)
    return APIResponse(message="Course notes retrieved successfully", data=[CourseNote.model_validate(n) for n in notes])


@router.post("/", response_model=APIResponse[CourseNote], status_code=status.HTTP_201_CREATED)
def create_course_note(
    *,
    db: Session = Depends(deps.get_transactional_db),
    note_in: CourseNoteCreate,
    identity: Identity = Depends(require_manager)
):
    note = course_note_service.create_note(db, note_in=note_in, identity=identity)
    return APIResponse(message="Course note created successfully", data=CourseNote.model_validate(note))


@router.put("/{note_id}", response_model=APIResponse[CourseNote])
def update_course_note(
    *,
    db: Session = Depends(deps.get_transactional_db),
    note_id: int,
    note_in: CourseNoteUpdate,
    identity: Identity = Depends(require_manager)
):
    note = course_note_service.update_note(db, note_id=note_id, note_in=note_in, identity=identity)
    return APIResponse(message="Course note updated successfully", data=CourseNote.model_validate(note))


@router.delete("/{note_id}", response_model=APIResponse[CourseNote])
def delete_course_note(
    *,
    db: Session = Depends(deps.get_transactional_db),
    note_id: int,
    identity: Identity = Depends(require_manager)
):
    deleted = course_note_service.delete_note(db, note_id=note_id, identity=identity)
    return APIResponse(message="Course note deleted successfully", data=deleted)
