import uuid
from datetime import datetime

from sqlalchemy import Column, String, Enum, Boolean, Date, DateTime, ForeignKey, Uuid, UniqueConstraint
from sqlalchemy.orm import relationship

from app.core.enums import Belt, UserRoleType
from app.db.base import Base


def _enum_values(enum_cls):
    return [member.value for member in enum_cls]


class User(Base):
    __tablename__ = "users"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String, nullable=False)
    # "registry" is reserved on declarative classes
    registry_number = Column("registry", String, unique=True, nullable=True)
    hashed_password = Column(String, nullable=True)
    belt = Column(
        Enum(Belt, name="belt", values_callable=_enum_values),
        nullable=False,
        default=Belt.WHITE,
    )
    birthday = Column(Date, nullable=True)
    training_since = Column(Date, nullable=True)
    is_active = Column(Boolean, nullable=False, default=True, index=True)
    instructor_id = Column(Uuid, ForeignKey("users.id"), nullable=True, index=True)

    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    roles = relationship("UserRole", back_populates="user", cascade="all, delete-orphan", lazy="selectin")
    instructor = relationship("User", remote_side=[id])

    def has_role(self, role: UserRoleType) -> bool:
        return any(r.role == role for r in self.roles)

    @property
    def role_names(self):
        return [r.role.value for r in self.roles]


class UserRole(Base):
    __tablename__ = "user_roles"
    __table_args__ = (UniqueConstraint("user_id", "role", name="uq_user_role"),)

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    role = Column(Enum(UserRoleType, name="user_role", values_callable=_enum_values), nullable=False)

    user = relationship("User", back_populates="roles")
