import uuid
from datetime import datetime

from sqlalchemy import Column, String, Integer, Boolean, Time, DateTime, JSON, ForeignKey, Table, Uuid
from sqlalchemy.orm import relationship

from app.db.base import Base

# many-to-many: students enrolled in a class
class_enrollments = Table(
    "class_enrollments",
    Base.metadata,
    Column("class_id", Uuid, ForeignKey("classes.id", ondelete="CASCADE"), primary_key=True),
    Column("user_id", Uuid, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
)


class Class(Base):
    __tablename__ = "classes"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String, nullable=False)
    days = Column(JSON, nullable=False)  # weekday numbers, 0 = Sunday
    start_time = Column(Time, nullable=False)
    duration_minutes = Column(Integer, nullable=False)
    is_active = Column(Boolean, nullable=False, default=True)
    teacher_id = Column(Uuid, ForeignKey("users.id", ondelete="RESTRICT"), nullable=False)

    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    teacher = relationship("User", foreign_keys=[teacher_id])
    enrolled_students = relationship("User", secondary=class_enrollments, order_by="User.name")
    sessions = relationship("ClassSession", back_populates="class_")
