# app/api/attendances.py
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.api.deps import get_current_user, get_db
from app.core.enums import AttendanceStatus
from app.crud import attendance as crud_attendance
from app.schemas.attendance import AttendanceCreate, AttendanceOut, AttendanceUpdate
from app.schemas.common import Page

# any authenticated user, no role restriction
router = APIRouter(dependencies=[Depends(get_current_user)])


@router.post("", response_model=AttendanceOut, status_code=status.HTTP_201_CREATED)
def create_attendance(attendance_in: AttendanceCreate, db: Session = Depends(get_db)):
    return crud_attendance.create_attendance(db, attendance_in.model_dump())


@router.post("/bulk/{session_id}", response_model=List[AttendanceOut], status_code=status.HTTP_201_CREATED)
def bulk_create_attendances(session_id: UUID, db: Session = Depends(get_db)):
    return crud_attendance.bulk_create_attendances(db, session_id)


@router.get("", response_model=List[AttendanceOut])
def list_attendances(
    session_id: Optional[UUID] = Query(None, alias="sessionId"),
    student_id: Optional[UUID] = Query(None, alias="studentId"),
    status: Optional[AttendanceStatus] = None,
    is_enrolled_class: Optional[bool] = Query(None, alias="isEnrolledClass"),
    db: Session = Depends(get_db),
):
    return crud_attendance.get_attendances(db, session_id, student_id, status, is_enrolled_class)


@router.get("/session/{session_id}", response_model=List[AttendanceOut])
def list_attendances_by_session(session_id: UUID, db: Session = Depends(get_db)):
    return crud_attendance.get_attendances_by_session(db, session_id)


@router.get("/student/{student_id}", response_model=Page[AttendanceOut])
def list_attendances_by_student(
    student_id: UUID,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1),
    db: Session = Depends(get_db),
):
    return crud_attendance.get_attendances_by_student(db, student_id, page, limit)


@router.get("/{attendance_id}", response_model=AttendanceOut)
def get_attendance(attendance_id: UUID, db: Session = Depends(get_db)):
    return crud_attendance.get_attendance(db, attendance_id)


@router.patch("/{attendance_id}", response_model=AttendanceOut)
def update_attendance(attendance_id: UUID, attendance_update: AttendanceUpdate, db: Session = Depends(get_db)):
    return crud_attendance.update_attendance(db, attendance_id, attendance_update.model_dump(exclude_unset=True))


@router.patch("/{attendance_id}/mark-present", response_model=AttendanceOut)
def mark_present(attendance_id: UUID, db: Session = Depends(get_db)):
    return crud_attendance.mark_present(db, attendance_id)


@router.patch("/{attendance_id}/mark-late", response_model=AttendanceOut)
def mark_late(attendance_id: UUID, db: Session = Depends(get_db)):
    return crud_attendance.mark_late(db, attendance_id)


@router.patch("/{attendance_id}/mark-absent", response_model=AttendanceOut)
def mark_absent(attendance_id: UUID, db: Session = Depends(get_db)):
    return crud_attendance.mark_absent(db, attendance_id)


@router.patch("/{attendance_id}/mark-excused", response_model=AttendanceOut)
def mark_excused(attendance_id: UUID, db: Session = Depends(get_db)):
    return crud_attendance.mark_excused(db, attendance_id)


@router.delete("/{attendance_id}")
def delete_attendance(attendance_id: UUID, db: Session = Depends(get_db)):
    crud_attendance.remove_attendance(db, attendance_id)
    return {"message": "Attendance deleted"}
