from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import AliasChoices, Field

from app.core.enums import AttendanceStatus
from app.schemas.class_ import ClassSummary
from app.schemas.class_session import ClassSessionSummary
from app.schemas.common import CamelModel
from app.schemas.user import UserOut


class AttendanceCreate(CamelModel):
    session_id: UUID
    student_id: UUID
    status: Optional[AttendanceStatus] = None
    notes: Optional[str] = None


class AttendanceUpdate(CamelModel):
    status: AttendanceStatus = None
    notes: Optional[str] = None


class AttendanceSession(ClassSessionSummary):
    class_: Optional[ClassSummary] = Field(
        None, validation_alias=AliasChoices("class_", "class"), serialization_alias="class"
    )


class AttendanceOut(CamelModel):
    id: UUID
    session_id: UUID
    student_id: UUID
    is_enrolled_class: bool
    status: AttendanceStatus
    checked_in_at: Optional[datetime] = None
    notes: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    session: Optional[AttendanceSession] = None
    student: Optional[UserOut] = None
