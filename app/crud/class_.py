import logging
from typing import List, Optional
from uuid import UUID

from sqlalchemy.orm import Session, selectinload

from app.core.exceptions import BadRequestError, NotFoundError, ensure_active, translate_errors
from app.crud import user as crud_user
from app.crud.utils import update_fields
from app.db.models.class_model import Class
from app.schemas.common import PageMeta

logger = logging.getLogger(__name__)


def _query(db: Session):
    return db.query(Class).options(selectinload(Class.teacher), selectinload(Class.enrolled_students))


def _day_numbers(days) -> List[int]:
    return sorted({int(day) for day in days})


@translate_errors("Failed to create class", integrity_message="Invalid teacher reference")
def create_class(db: Session, class_data: dict, teacher_id: UUID) -> Class:
    teacher = crud_user.get_teacher(db, teacher_id)

    data = dict(class_data)
    data.pop("teacher_id", None)
    data["days"] = _day_numbers(data["days"])
    db_class = Class(**data, teacher=teacher, enrolled_students=[])
    db.add(db_class)
    db.commit()
    db.refresh(db_class)
    logger.info("Created class %s for teacher %s", db_class.id, teacher.id)
    return db_class


def get_classes(
    db: Session,
    page: int = 1,
    limit: int = 10,
    include_inactive: bool = False,
    teacher_id: Optional[UUID] = None,
):
    query = _query(db)
    if not include_inactive:
        query = query.filter(Class.is_active.is_(True))
    if teacher_id:
        query = query.filter(Class.teacher_id == teacher_id)

    total = query.count()
    classes = (
        query.order_by(Class.created_at.desc())
        .offset((page - 1) * limit)
        .limit(limit)
        .all()
    )
    return {"data": classes, "meta": PageMeta.build(total, page, limit)}


def get_class(db: Session, class_id: UUID) -> Class:
    db_class = _query(db).filter(Class.id == class_id).first()
    if not db_class:
        raise NotFoundError("Class not found")
    return db_class


def get_classes_by_teacher(db: Session, teacher_id: UUID, include_inactive: bool = False) -> List[Class]:
    query = _query(db).filter(Class.teacher_id == teacher_id)
    if not include_inactive:
        query = query.filter(Class.is_active.is_(True))
    return query.all()


@translate_errors("Failed to update class", integrity_message="Invalid teacher reference")
def update_class(db: Session, class_id: UUID, patch: dict) -> Class:
    db_class = get_class(db, class_id)

    if patch.get("teacher_id"):
        db_class.teacher = crud_user.get_teacher(db, patch["teacher_id"])

    if patch.get("days") is not None:
        patch = dict(patch, days=_day_numbers(patch["days"]))
    update_fields(db_class, patch, exclude=("teacher_id",))
    db.commit()
    db.refresh(db_class)
    return db_class


def set_active(db: Session, class_id: UUID, active: bool) -> Class:
    db_class = get_class(db, class_id)
    db_class.is_active = active
    db.commit()
    db.refresh(db_class)
    logger.info("Class %s is_active=%s", class_id, active)
    return db_class


@translate_errors("Failed to enroll student in class", integrity_message="Invalid student or class reference")
def enroll_student(db: Session, class_id: UUID, student_id: UUID) -> Class:
    db_class = get_class(db, class_id)
    ensure_active(db_class, "Cannot enroll in an inactive class")

    student = crud_user.get_student(db, student_id)
    if is_enrolled(db_class, student.id):
        raise BadRequestError("Student is already enrolled in this class")

    db_class.enrolled_students.append(student)
    db.commit()
    db.refresh(db_class)
    logger.info("Enrolled student %s in class %s", student_id, class_id)
    return db_class


def unenroll_student(db: Session, class_id: UUID, student_id: UUID) -> Class:
    db_class = get_class(db, class_id)

    student = next((s for s in db_class.enrolled_students if s.id == student_id), None)
    if student is None:
        raise NotFoundError("Student is not enrolled in this class")

    db_class.enrolled_students.remove(student)
    db.commit()
    db.refresh(db_class)
    logger.info("Unenrolled student %s from class %s", student_id, class_id)
    return db_class


def is_enrolled(db_class: Class, student_id: UUID) -> bool:
    return any(s.id == student_id for s in db_class.enrolled_students)
