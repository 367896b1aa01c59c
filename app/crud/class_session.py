import logging
from datetime import date, datetime
from typing import List, Optional
from uuid import UUID

from sqlalchemy.orm import Session, selectinload

from app.core.exceptions import BadRequestError, NotFoundError, ensure_active, translate_errors
from app.crud import class_ as crud_class
from app.crud import user as crud_user
from app.crud.utils import update_fields
from app.db.models.class_session import ClassSession

logger = logging.getLogger(__name__)


def _query(db: Session):
    return db.query(ClassSession).options(
        selectinload(ClassSession.class_), selectinload(ClassSession.teacher)
    )


def _now_time():
    """Current UTC wall-clock time, truncated to whole seconds."""
    return datetime.utcnow().time().replace(microsecond=0)


@translate_errors(
    "Failed to create class session",
    integrity_message="A session with this information already exists",
)
def create_session(db: Session, session_data: dict) -> ClassSession:
    data = dict(session_data)
    class_id = data.pop("class_id")
    teacher_id = data.pop("teacher_id")

    db_class = crud_class.get_class(db, class_id)
    ensure_active(db_class, "Cannot create session for an inactive class")

    teacher = crud_user.get_teacher(db, teacher_id)

    existing = db.query(ClassSession).filter(
        ClassSession.class_id == class_id,
        ClassSession.date == data["date"],
    ).first()
    if existing:
        raise BadRequestError("A session for this class on the specified date already exists")

    session = ClassSession(**data, class_=db_class, teacher=teacher)
    db.add(session)
    db.commit()
    db.refresh(session)
    logger.info("Created session %s for class %s on %s", session.id, class_id, session.date)
    return session


def get_sessions(
    db: Session,
    class_id: Optional[UUID] = None,
    teacher_id: Optional[UUID] = None,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    is_active: Optional[bool] = None,
) -> List[ClassSession]:
    query = _query(db)

    if class_id:
        query = query.filter(ClassSession.class_id == class_id)
    if teacher_id:
        query = query.filter(ClassSession.teacher_id == teacher_id)

    if start_date and end_date:
        query = query.filter(ClassSession.date.between(start_date, end_date))
    elif start_date:
        query = query.filter(ClassSession.date >= start_date)
    elif end_date:
        query = query.filter(ClassSession.date <= end_date)

    if is_active is not None:
        query = query.filter(ClassSession.is_active == is_active)

    return query.order_by(ClassSession.date.desc()).all()


def get_session(db: Session, session_id: UUID) -> ClassSession:
    session = _query(db).filter(ClassSession.id == session_id).first()
    if not session:
        raise NotFoundError(f"Class session with ID {session_id} not found")
    return session


def _active_only(query, include_inactive: bool):
    if not include_inactive:
        query = query.filter(ClassSession.is_active.is_(True))
    return query.order_by(ClassSession.date.desc())


def get_sessions_by_class(db: Session, class_id: UUID, include_inactive: bool = False) -> List[ClassSession]:
    query = _query(db).filter(ClassSession.class_id == class_id)
    return _active_only(query, include_inactive).all()


def get_sessions_by_teacher(db: Session, teacher_id: UUID, include_inactive: bool = False) -> List[ClassSession]:
    query = _query(db).filter(ClassSession.teacher_id == teacher_id)
    return _active_only(query, include_inactive).all()


def get_sessions_by_date_range(
    db: Session, start_date: date, end_date: date, include_inactive: bool = False
) -> List[ClassSession]:
    query = _query(db).filter(ClassSession.date.between(start_date, end_date))
    return _active_only(query, include_inactive).all()


@translate_errors(
    "Failed to update class session",
    integrity_message="A session with this information already exists",
)
def update_session(db: Session, session_id: UUID, patch: dict) -> ClassSession:
    session = get_session(db, session_id)

    if patch.get("teacher_id"):
        session.teacher = crud_user.get_teacher(db, patch["teacher_id"])

    if patch.get("class_id"):
        db_class = crud_class.get_class(db, patch["class_id"])
        ensure_active(db_class, "Cannot assign session to an inactive class")
        session.class_ = db_class

    update_fields(session, patch, exclude=("teacher_id", "class_id"))
    db.commit()
    db.refresh(session)
    return session


def set_active(db: Session, session_id: UUID, active: bool) -> ClassSession:
    session = get_session(db, session_id)
    session.is_active = active
    db.commit()
    db.refresh(session)
    logger.info("Session %s is_active=%s", session_id, active)
    return session


def start_session(db: Session, session_id: UUID) -> ClassSession:
    session = get_session(db, session_id)
    if session.start_time is not None:
        raise BadRequestError("Session has already been started")

    session.start_time = _now_time()
    db.commit()
    db.refresh(session)
    logger.info("Session %s started at %s", session_id, session.start_time)
    return session


def end_session(db: Session, session_id: UUID) -> ClassSession:
    session = get_session(db, session_id)
    if session.start_time is None:
        raise BadRequestError("Session has not been started yet")
    if session.end_time is not None:
        raise BadRequestError("Session has already been ended")

    session.end_time = _now_time()
    db.commit()
    db.refresh(session)
    logger.info("Session %s ended at %s", session_id, session.end_time)
    return session


def remove_session(db: Session, session_id: UUID) -> None:
    session = get_session(db, session_id)
    db.delete(session)
    db.commit()
    logger.info("Deleted session %s", session_id)
