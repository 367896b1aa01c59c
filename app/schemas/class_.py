from datetime import datetime, time
from typing import List, Optional
from uuid import UUID

from pydantic import Field

from app.core.enums import DayOfWeek
from app.schemas.common import CamelModel
from app.schemas.user import UserOut


class ClassCreate(CamelModel):
    name: str = Field(..., min_length=1)
    days: List[DayOfWeek] = Field(..., min_length=1, max_length=7)
    start_time: time
    duration_minutes: int = Field(..., ge=30, le=300)
    # defaults to the authenticated teacher
    teacher_id: Optional[UUID] = None


class ClassUpdate(CamelModel):
    name: str = Field(None, min_length=1)
    days: List[DayOfWeek] = Field(None, min_length=1, max_length=7)
    start_time: time = None
    duration_minutes: int = Field(None, ge=30, le=300)
    teacher_id: UUID = None
    is_active: bool = None


class ClassSummary(CamelModel):
    id: UUID
    name: str
    days: List[DayOfWeek]
    start_time: time
    duration_minutes: int
    is_active: bool
    teacher_id: UUID


class ClassOut(ClassSummary):
    teacher: Optional[UserOut] = None
    enrolled_students: List[UserOut] = []
    created_at: datetime
    updated_at: datetime
