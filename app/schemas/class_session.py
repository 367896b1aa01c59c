import datetime as dt
from typing import Optional
from uuid import UUID

from pydantic import AliasChoices, Field

from app.schemas.class_ import ClassSummary
from app.schemas.common import CamelModel
from app.schemas.user import UserOut


class ClassSessionCreate(CamelModel):
    date: dt.date
    start_time: Optional[dt.time] = None
    end_time: Optional[dt.time] = None
    notes: Optional[str] = Field(None, max_length=500)
    class_id: UUID
    teacher_id: UUID


class ClassSessionUpdate(CamelModel):
    date: dt.date = None
    class_id: UUID = None
    teacher_id: UUID = None

    start_time: Optional[dt.time] = None
    end_time: Optional[dt.time] = None
    notes: Optional[str] = Field(None, max_length=500)


class ClassSessionSummary(CamelModel):
    id: UUID
    date: dt.date
    start_time: Optional[dt.time] = None
    end_time: Optional[dt.time] = None
    notes: Optional[str] = None
    is_active: bool
    class_id: UUID
    teacher_id: UUID


class ClassSessionOut(ClassSessionSummary):
    class_: Optional[ClassSummary] = Field(
        None, validation_alias=AliasChoices("class_", "class"), serialization_alias="class"
    )
    teacher: Optional[UserOut] = None
    created_at: dt.datetime
    updated_at: dt.datetime
