import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from app.core.constants import RoleEnum
from app.core.exceptions import CourseNotFound
from app.crud.base import PaginatedResponse, paginate
from app.crud.course import course as crud_course
from app.crud.tag import tag as crud_tag
from app.models.course import Course as CourseModel
from app.schemas.course import CourseCreate, CourseUpdate, Course as CourseSchema
from app.schemas.user import Identity
from app.utils.permission import PermissionHelper as permission_helper

logger = logging.getLogger(__name__)


def normalize_tag_names(names: List[str]) -> List[str]:
    seen = []
    for name in names:
        cleaned = name.strip().lower()
        if cleaned and cleaned not in seen:
            seen.append(cleaned)
    return seen


class CourseService:

    def _get_or_404(self, db: Session, course_id: int) -> CourseModel:
        course = crud_course.get(db, id=course_id)
        if not course:
            raise CourseNotFound()
        return course

    def _page(self, query, *, page: int, size: int) -> PaginatedResponse[CourseSchema]:
        rows, total = paginate(query, page=page, size=size)
        return PaginatedResponse[CourseSchema].build(
            [CourseSchema.model_validate(c) for c in rows], total=total, page=page, size=size
        )

    def list_published(
        self,
        db: Session,
        *,
        page: int = 1,
        size: int = 20,
        search: Optional[str] = None,
        category: Optional[str] = None,
        level: Optional[str] = None,
        tag: Optional[str] = None,
    ) -> PaginatedResponse[CourseSchema]:
        query = crud_course.query_filtered(
            db, published_only=True, search=search, category=category, level=level, tag=tag
        )
        return self._page(query, page=page, size=size)

    def list_all(self, db: Session, *, page: int = 1, size: int = 20, search: Optional[str] = None) -> PaginatedResponse[CourseSchema]:
        query = crud_course.query_filtered(db, published_only=False, search=search)
        return self._page(query, page=page, size=size)

    def list_for_tutor(self, db: Session, *, identity: Identity, page: int = 1, size: int = 20) -> PaginatedResponse[CourseSchema]:
        query = crud_course.query_filtered(db, published_only=False, tutor_id=identity.user_id)
        return self._page(query, page=page, size=size)

    def get_course(self, db: Session, *, course_id: int, identity: Identity) -> CourseModel:
        course = self._get_or_404(db, course_id)
        # drafts are invisible to everyone but their tutor and admins
        if not course.is_published and not permission_helper.can_manage_course(identity, course):
            raise CourseNotFound()
        return course

    def create_course(self, db: Session, *, course_in: CourseCreate, identity: Identity) -> CourseModel:
        permission_helper.require_role(identity, [RoleEnum.TUTOR, RoleEnum.ADMIN])

        course_data = course_in.model_dump(exclude_unset=True)
        course_data["tutor_id"] = identity.user_id
        new_course = crud_course.create(db, obj_in=course_data)

        logger.info("User %s created course %s", identity.user_id, new_course.id)
        return crud_course.get(db, id=new_course.id)

    def update_course(self, db: Session, *, course_id: int, course_in: CourseUpdate, identity: Identity) -> CourseModel:
        course = self._get_or_404(db, course_id)
        permission_helper.require_course_management_permission(identity, course)

        crud_course.update(db, db_obj=course, obj_in=course_in)
        return course

    def set_tags(self, db: Session, *, course_id: int, tag_names: List[str], identity: Identity) -> CourseModel:
        course = self._get_or_404(db, course_id)
        permission_helper.require_course_management_permission(identity, course)

        tags = crud_tag.get_or_create_many(db, names=normalize_tag_names(tag_names))
        return crud_course.set_tags(db, course=course, tags=tags)

    def delete_course(self, db: Session, *, course_id: int, identity: Identity) -> CourseSchema:
        course = self._get_or_404(db, course_id)
        permission_helper.require_course_management_permission(identity, course)

        snapshot = CourseSchema.model_validate(course)
        crud_course.delete(db, id=course_id)
        logger.info("User %s deleted course %s", identity.user_id, course_id)
        return snapshot

    def unpublish(self, db: Session, *, course_id: int) -> CourseModel:
        course = self._get_or_404(db, course_id)
        return crud_course.update(db, db_obj=course, obj_in={"is_published": False})


course_service = CourseService()
