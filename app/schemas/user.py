from datetime import date, datetime
from typing import List, Optional
from uuid import UUID

from pydantic import AliasChoices, Field

from app.core.enums import Belt, UserRoleType
from app.schemas.common import CamelModel


class StudentCreate(CamelModel):
    name: str = Field(..., min_length=1)
    registry_number: Optional[str] = Field(None, alias="registry")
    password: Optional[str] = None
    belt: Belt = Belt.WHITE
    birthday: Optional[date] = None
    training_since: Optional[date] = None
    instructor_id: Optional[UUID] = None


class StudentUpdate(CamelModel):
    # non-nullable columns: omitted is fine, explicit null is rejected
    name: str = Field(None, min_length=1)
    belt: Belt = None
    is_active: bool = None

    registry_number: Optional[str] = Field(None, alias="registry")
    password: Optional[str] = None
    birthday: Optional[date] = None
    training_since: Optional[date] = None
    instructor_id: Optional[UUID] = None


class TeacherLogin(CamelModel):
    registry: str
    password: str


class UserOut(CamelModel):
    id: UUID
    name: str
    registry_number: Optional[str] = Field(
        None, validation_alias=AliasChoices("registry_number", "registry"), serialization_alias="registry"
    )
    belt: Belt
    birthday: Optional[date] = None
    training_since: Optional[date] = None
    is_active: bool
    instructor_id: Optional[UUID] = None
    roles: List[UserRoleType] = Field(
        default_factory=list, validation_alias="role_names", serialization_alias="roles"
    )
    created_at: datetime
    updated_at: datetime


class LoginResponse(CamelModel):
    token: str
    user: UserOut
