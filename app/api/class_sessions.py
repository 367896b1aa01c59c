# app/api/class_sessions.py
from datetime import date
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from app.api.deps import get_db, require_teacher
from app.crud import class_session as crud_session
from app.schemas.class_session import ClassSessionCreate, ClassSessionOut, ClassSessionUpdate

router = APIRouter(dependencies=[Depends(require_teacher)])


@router.post("", response_model=ClassSessionOut, status_code=status.HTTP_201_CREATED)
def create_session(session_in: ClassSessionCreate, db: Session = Depends(get_db)):
    return crud_session.create_session(db, session_in.model_dump())


@router.get("", response_model=List[ClassSessionOut])
def list_sessions(
    class_id: Optional[UUID] = Query(None, alias="classId"),
    teacher_id: Optional[UUID] = Query(None, alias="teacherId"),
    start_date: Optional[date] = Query(None, alias="startDate"),
    end_date: Optional[date] = Query(None, alias="endDate"),
    is_active: Optional[bool] = Query(None, alias="isActive"),
    db: Session = Depends(get_db),
):
    return crud_session.get_sessions(db, class_id, teacher_id, start_date, end_date, is_active)


@router.get("/by-class/{class_id}", response_model=List[ClassSessionOut])
def list_sessions_by_class(
    class_id: UUID,
    include_inactive: bool = Query(False, alias="includeInactive"),
    db: Session = Depends(get_db),
):
    return crud_session.get_sessions_by_class(db, class_id, include_inactive)


@router.get("/by-teacher/{teacher_id}", response_model=List[ClassSessionOut])
def list_sessions_by_teacher(
    teacher_id: UUID,
    include_inactive: bool = Query(False, alias="includeInactive"),
    db: Session = Depends(get_db),
):
    return crud_session.get_sessions_by_teacher(db, teacher_id, include_inactive)


@router.get("/by-date-range", response_model=List[ClassSessionOut])
def list_sessions_by_date_range(
    start_date: date = Query(..., alias="startDate"),
    end_date: date = Query(..., alias="endDate"),
    include_inactive: bool = Query(False, alias="includeInactive"),
    db: Session = Depends(get_db),
):
    return crud_session.get_sessions_by_date_range(db, start_date, end_date, include_inactive)


@router.get("/{session_id}", response_model=ClassSessionOut)
def get_session(session_id: UUID, db: Session = Depends(get_db)):
    return crud_session.get_session(db, session_id)


@router.patch("/{session_id}", response_model=ClassSessionOut)
def update_session(session_id: UUID, session_update: ClassSessionUpdate, db: Session = Depends(get_db)):
    return crud_session.update_session(db, session_id, session_update.model_dump(exclude_unset=True))


@router.patch("/{session_id}/activate", response_model=ClassSessionOut)
def activate_session(session_id: UUID, db: Session = Depends(get_db)):
    return crud_session.set_active(db, session_id, True)


@router.patch("/{session_id}/deactivate", response_model=ClassSessionOut)
def deactivate_session(session_id: UUID, db: Session = Depends(get_db)):
    return crud_session.set_active(db, session_id, False)


@router.patch("/{session_id}/start", response_model=ClassSessionOut)
def start_session(session_id: UUID, db: Session = Depends(get_db)):
    return crud_session.start_session(db, session_id)


@router.patch("/{session_id}/end", response_model=ClassSessionOut)
def end_session(session_id: UUID, db: Session = Depends(get_db)):
    return crud_session.end_session(db, session_id)


@router.delete("/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_session(session_id: UUID, db: Session = Depends(get_db)):
    crud_session.remove_session(db, session_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
