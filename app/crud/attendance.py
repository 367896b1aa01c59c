import logging
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from sqlalchemy.orm import Session, selectinload

from app.core.enums import AttendanceStatus, CHECKED_IN_STATUSES
from app.core.exceptions import BadRequestError, NotFoundError, ensure_active, translate_errors
from app.crud import class_ as crud_class
from app.crud import class_session as crud_session
from app.crud import user as crud_user
from app.crud.utils import update_fields
from app.db.models.attendance import Attendance
from app.db.models.class_session import ClassSession
from app.schemas.common import PageMeta

logger = logging.getLogger(__name__)

DUPLICATE_MESSAGE = "Attendance already recorded for this student in this session"
INACTIVE_SESSION_MESSAGE = "Cannot record attendance for an inactive class session"


def _query(db: Session):
    return db.query(Attendance).options(
        selectinload(Attendance.session).selectinload(ClassSession.class_),
        selectinload(Attendance.student),
    )


def _find_existing(db: Session, session_id: UUID, student_id: UUID) -> Optional[Attendance]:
    return db.query(Attendance).filter(
        Attendance.session_id == session_id,
        Attendance.student_id == student_id,
    ).first()


@translate_errors("Failed to create attendance", integrity_message=DUPLICATE_MESSAGE)
def create_attendance(db: Session, attendance_data: dict) -> Attendance:
    session_id = attendance_data["session_id"]
    student_id = attendance_data["student_id"]

    session = crud_session.get_session(db, session_id)
    ensure_active(session, INACTIVE_SESSION_MESSAGE)

    student = crud_user.get_student(db, student_id)

    if _find_existing(db, session_id, student_id):
        raise BadRequestError(DUPLICATE_MESSAGE)

    db_class = crud_class.get_class(db, session.class_id)
    is_enrolled_class = crud_class.is_enrolled(db_class, student.id)

    # quick check-in: an omitted status means the student is here
    status = AttendanceStatus(attendance_data.get("status") or AttendanceStatus.PRESENT)
    attendance = Attendance(
        session=session,
        student=student,
        is_enrolled_class=is_enrolled_class,
        notes=attendance_data.get("notes"),
        status=status,
        checked_in_at=datetime.utcnow() if status in CHECKED_IN_STATUSES else None,
    )
    db.add(attendance)
    db.commit()
    db.refresh(attendance)
    logger.info(
        "Recorded attendance %s (%s) for student %s in session %s",
        attendance.id, status.value, student_id, session_id,
    )
    return attendance


@translate_errors("Failed to create attendances", integrity_message=DUPLICATE_MESSAGE)
def bulk_create_attendances(db: Session, session_id: UUID) -> List[Attendance]:
    """Create a pending attendance for every enrolled student that lacks one.

    Runs as a single transaction: either every new row is committed or none
    is. Returns only the rows created by this call.
    """
    session = crud_session.get_session(db, session_id)
    ensure_active(session, INACTIVE_SESSION_MESSAGE)

    db_class = crud_class.get_class(db, session.class_id)
    if not db_class.enrolled_students:
        raise BadRequestError("No students enrolled in the class to record attendance for")

    existing_student_ids = {
        student_id
        for (student_id,) in db.query(Attendance.student_id).filter(Attendance.session_id == session_id)
    }
    missing = [s for s in db_class.enrolled_students if s.id not in existing_student_ids]
    if not missing:
        return []

    attendances = [
        Attendance(
            session=session,
            student=student,
            is_enrolled_class=True,
            status=AttendanceStatus.PENDING,
            checked_in_at=None,
        )
        for student in missing
    ]
    db.add_all(attendances)
    db.commit()
    for attendance in attendances:
        db.refresh(attendance)

    logger.info("Bulk created %d attendances for session %s", len(attendances), session_id)
    return attendances


def get_attendances(
    db: Session,
    session_id: Optional[UUID] = None,
    student_id: Optional[UUID] = None,
    status: Optional[AttendanceStatus] = None,
    is_enrolled_class: Optional[bool] = None,
) -> List[Attendance]:
    query = _query(db)

    if session_id:
        query = query.filter(Attendance.session_id == session_id)
    if student_id:
        query = query.filter(Attendance.student_id == student_id)
    if status:
        query = query.filter(Attendance.status == status)
    if is_enrolled_class is not None:
        query = query.filter(Attendance.is_enrolled_class == is_enrolled_class)

    return query.all()


def get_attendance(db: Session, attendance_id: UUID) -> Attendance:
    attendance = _query(db).filter(Attendance.id == attendance_id).first()
    if not attendance:
        raise NotFoundError(f"Attendance with ID {attendance_id} not found")
    return attendance


def get_attendances_by_session(db: Session, session_id: UUID) -> List[Attendance]:
    crud_session.get_session(db, session_id)

    return (
        db.query(Attendance)
        .options(selectinload(Attendance.student))
        .filter(Attendance.session_id == session_id)
        .order_by(Attendance.created_at.asc())
        .all()
    )


def get_attendances_by_student(db: Session, student_id: UUID, page: int = 1, limit: int = 10):
    crud_user.get_student(db, student_id)

    query = db.query(Attendance).filter(Attendance.student_id == student_id)
    total = query.count()
    attendances = (
        query.options(selectinload(Attendance.session).selectinload(ClassSession.class_))
        .order_by(Attendance.created_at.desc())
        .offset((page - 1) * limit)
        .limit(limit)
        .all()
    )
    return {"data": attendances, "meta": PageMeta.build(total, page, limit)}


def update_attendance(db: Session, attendance_id: UUID, patch: dict) -> Attendance:
    attendance = get_attendance(db, attendance_id)

    # An update without a status clears the check-in, same as an explicit
    # non checked-in status. Callers re-send the status to keep it.
    if patch.get("status") in CHECKED_IN_STATUSES:
        if attendance.checked_in_at is None:
            attendance.checked_in_at = datetime.utcnow()
    else:
        attendance.checked_in_at = None

    update_fields(attendance, patch, exclude=("session_id", "student_id"))
    db.commit()
    db.refresh(attendance)
    return attendance


def _mark(db: Session, attendance_id: UUID, status: AttendanceStatus) -> Attendance:
    attendance = get_attendance(db, attendance_id)
    attendance.status = status
    attendance.checked_in_at = datetime.utcnow() if status in CHECKED_IN_STATUSES else None
    db.commit()
    db.refresh(attendance)
    logger.info("Attendance %s marked %s", attendance_id, status.value)
    return attendance


def mark_present(db: Session, attendance_id: UUID) -> Attendance:
    return _mark(db, attendance_id, AttendanceStatus.PRESENT)


def mark_late(db: Session, attendance_id: UUID) -> Attendance:
    return _mark(db, attendance_id, AttendanceStatus.LATE)


def mark_absent(db: Session, attendance_id: UUID) -> Attendance:
    return _mark(db, attendance_id, AttendanceStatus.ABSENT)


def mark_excused(db: Session, attendance_id: UUID) -> Attendance:
    return _mark(db, attendance_id, AttendanceStatus.EXCUSED)


def remove_attendance(db: Session, attendance_id: UUID) -> None:
    attendance = get_attendance(db, attendance_id)
    db.delete(attendance)
    db.commit()
    logger.info("Deleted attendance %s", attendance_id)
