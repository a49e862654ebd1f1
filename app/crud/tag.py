from typing import List
from sqlalchemy.orm import Session

from app.crud.base import CRUDBase
from app.models.tag import Tag
from pydantic import BaseModel


class TagCreate(BaseModel):
    name: str


class CRUDTag(CRUDBase[Tag, TagCreate, TagCreate]):
    def get_by_name(self, db: Session, *, name: str) -> Tag | None:
        return db.query(Tag).filter(Tag.name == name).first()

    def get_or_create_many(self, db: Session, *, names: List[str]) -> List[Tag]:
        tags = []
        for name in names:
            tag = self.get_by_name(db, name=name) or self.create(db, obj_in={"name": name})
            tags.append(tag)
        return tags

tag = CRUDTag(Tag)
