import logging
from typing import Iterable, List, Optional
from uuid import UUID

from sqlalchemy import asc, desc, func
from sqlalchemy.orm import Session

from app.core.enums import Belt, UserRoleType
from app.core.exceptions import BadRequestError, NotFoundError, ensure_active, translate_errors
from app.core.security import PasswordHasher
from app.crud.utils import update_fields
from app.db.models.user import User, UserRole
from app.schemas.common import PageMeta

logger = logging.getLogger(__name__)

SORTABLE_FIELDS = {
    "name": User.name,
    "registry": User.registry_number,
    "belt": User.belt,
    "createdAt": User.created_at,
}


def get_user_by_id(db: Session, user_id: UUID) -> Optional[User]:
    return db.query(User).filter(User.id == user_id).first()


def get_user_by_registry(db: Session, registry: str) -> Optional[User]:
    return db.query(User).filter(User.registry_number == registry).first()


def get_users_by_role(db: Session, role: UserRoleType) -> List[User]:
    return db.query(User).join(User.roles).filter(UserRole.role == role).all()


def _ensure_registry_free(db: Session, registry: Optional[str]) -> None:
    if registry and get_user_by_registry(db, registry):
        raise BadRequestError("Registry is already in use")


def _ensure_instructor_exists(db: Session, instructor_id: Optional[UUID]) -> None:
    if instructor_id and not get_user_by_id(db, instructor_id):
        raise NotFoundError("Instructor not found")


@translate_errors("Failed to create user", integrity_message="Invalid instructor or duplicate registry")
def create_user(db: Session, user_data: dict, roles: Iterable[UserRoleType], hasher: PasswordHasher) -> User:
    data = dict(user_data)
    password = data.pop("password", None)
    _ensure_registry_free(db, data.get("registry_number"))
    _ensure_instructor_exists(db, data.get("instructor_id"))

    db_user = User(**data)
    if password:
        db_user.hashed_password = hasher.hash(password)
    db_user.roles = [UserRole(role=role) for role in roles]

    db.add(db_user)
    db.commit()
    db.refresh(db_user)
    logger.info("Created user %s with roles %s", db_user.id, db_user.role_names)
    return db_user


@translate_errors("Failed to update user", integrity_message="Invalid instructor or duplicate registry")
def update_user(db: Session, user: User, patch: dict, hasher: PasswordHasher) -> User:
    patch = dict(patch)
    if "password" in patch:
        password = patch.pop("password")
        user.hashed_password = hasher.hash(password) if password else None

    if patch.get("registry_number") and patch["registry_number"] != user.registry_number:
        _ensure_registry_free(db, patch["registry_number"])
    _ensure_instructor_exists(db, patch.get("instructor_id"))

    update_fields(user, patch)
    db.commit()
    db.refresh(user)
    return user


def _get_with_role(db: Session, user_id: UUID, role: UserRoleType, label: str) -> User:
    user = get_user_by_id(db, user_id)
    if not user or not user.has_role(role):
        raise NotFoundError(f"{label} not found")
    ensure_active(user, f"{label} is not active")
    return user


def get_student(db: Session, student_id: UUID) -> User:
    return _get_with_role(db, student_id, UserRoleType.STUDENT, "Student")


def get_teacher(db: Session, teacher_id: UUID) -> User:
    return _get_with_role(db, teacher_id, UserRoleType.TEACHER, "Teacher")


def find_student(db: Session, student_id: UUID) -> User:
    """Like get_student, but deactivated students are still returned."""
    user = get_user_by_id(db, student_id)
    if not user or not user.has_role(UserRoleType.STUDENT):
        raise NotFoundError("Student not found")
    return user


def authenticate_teacher(db: Session, registry: str, password: str, hasher: PasswordHasher) -> Optional[User]:
    user = get_user_by_registry(db, registry)
    if not user or not user.is_active or not user.has_role(UserRoleType.TEACHER):
        return None
    if not hasher.verify(password, user.hashed_password):
        return None
    return user


def find_students(
    db: Session,
    page: int = 1,
    limit: int = 10,
    name: Optional[str] = None,
    registry: Optional[str] = None,
    belts: Optional[List[Belt]] = None,
    is_active: Optional[bool] = None,
    sort_by: str = "createdAt",
    sort_order: str = "DESC",
):
    query = db.query(User).join(User.roles).filter(UserRole.role == UserRoleType.STUDENT)

    if name:
        query = query.filter(func.lower(User.name).contains(name.lower()))
    if registry:
        query = query.filter(User.registry_number == registry)
    if belts:
        query = query.filter(User.belt.in_(belts))
    if is_active is not None:
        query = query.filter(User.is_active == is_active)

    total = query.count()

    column = SORTABLE_FIELDS.get(sort_by, User.created_at)
    direction = asc if sort_order.upper() == "ASC" else desc
    students = (
        query.order_by(direction(column))
        .offset((page - 1) * limit)
        .limit(limit)
        .all()
    )
    return {"data": students, "meta": PageMeta.build(total, page, limit)}
