# app/db/models/attendance.py
import uuid
from datetime import datetime

from sqlalchemy import Column, Text, Boolean, DateTime, ForeignKey, Enum, Uuid, UniqueConstraint
from sqlalchemy.orm import relationship

from app.core.enums import AttendanceStatus
from app.db.base import Base


class Attendance(Base):
    __tablename__ = "attendances"
    __table_args__ = (
        UniqueConstraint("session_id", "student_id", name="uq_attendance_session_student"),
    )

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    session_id = Column(Uuid, ForeignKey("class_sessions.id", ondelete="CASCADE"), nullable=False, index=True)
    student_id = Column(Uuid, ForeignKey("users.id", ondelete="RESTRICT"), nullable=False, index=True)

    # was the student enrolled in the class when the record was created
    is_enrolled_class = Column(Boolean, nullable=False, default=True)

    status = Column(
        Enum(AttendanceStatus, name="attendance_status", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=AttendanceStatus.PENDING,
    )
    checked_in_at = Column(DateTime, nullable=True)
    notes = Column(Text, nullable=True)

    created_at = Column(DateTime, nullable=False, default=datetime.utcnow, index=True)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    session = relationship("ClassSession", back_populates="attendances")
    student = relationship("User")
