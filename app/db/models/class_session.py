# app/db/models/class_session.py
import uuid
from datetime import datetime

from sqlalchemy import Column, String, Boolean, Date, Time, DateTime, ForeignKey, Uuid
from sqlalchemy.orm import relationship

from app.db.base import Base


class ClassSession(Base):
    __tablename__ = "class_sessions"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    date = Column(Date, nullable=False, index=True)

    # scheduled: start_time is None
    # started:   start_time set, end_time None
    # ended:     both set
    start_time = Column(Time, nullable=True)
    end_time = Column(Time, nullable=True)

    notes = Column(String(500), nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
    class_id = Column(Uuid, ForeignKey("classes.id", ondelete="RESTRICT"), nullable=False, index=True)
    teacher_id = Column(Uuid, ForeignKey("users.id", ondelete="RESTRICT"), nullable=False, index=True)

    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    class_ = relationship("Class", back_populates="sessions")
    teacher = relationship("User", foreign_keys=[teacher_id])
    attendances = relationship(
        "Attendance",
        back_populates="session",
        cascade="all, delete-orphan",
    )
