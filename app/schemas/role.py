from pydantic import BaseModel, ConfigDict

from app.core.constants import RoleEnum


class RoleBase(BaseModel):
    name: RoleEnum

    model_config = ConfigDict(use_enum_values=True)

class RoleCreate(RoleBase):
    pass

class RoleUpdate(RoleBase):
    pass

class Role(RoleBase):
    id: int

    model_config = ConfigDict(from_attributes=True, use_enum_values=True)
