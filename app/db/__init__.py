# app/db/__init__.py
# Importing app.db registers every model on Base.metadata

from app.db.base import Base
from app.db.models.user import User, UserRole
from app.db.models.class_model import Class, class_enrollments
from app.db.models.class_session import ClassSession
from app.db.models.attendance import Attendance

__all__ = ["Base", "User", "UserRole", "Class", "class_enrollments", "ClassSession", "Attendance"]
