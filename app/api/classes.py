# app/api/classes.py
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from app.api.deps import get_db, require_teacher
from app.crud import class_ as crud_class
from app.db.models.user import User
from app.schemas.class_ import ClassCreate, ClassOut, ClassUpdate
from app.schemas.common import Page

router = APIRouter(dependencies=[Depends(require_teacher)])


@router.post("", response_model=ClassOut, status_code=status.HTTP_201_CREATED)
def create_class(
    class_in: ClassCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_teacher),
):
    teacher_id = class_in.teacher_id or current_user.id
    return crud_class.create_class(db, class_in.model_dump(), teacher_id)


# Only the calling teacher's classes are listed
@router.get("", response_model=Page[ClassOut])
def list_classes(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1),
    include_inactive: bool = Query(False, alias="includeInactive"),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_teacher),
):
    return crud_class.get_classes(db, page, limit, include_inactive, teacher_id=current_user.id)


@router.get("/{class_id}", response_model=ClassOut)
def get_class(class_id: UUID, db: Session = Depends(get_db)):
    return crud_class.get_class(db, class_id)


@router.patch("/{class_id}", response_model=ClassOut)
def update_class(class_id: UUID, class_update: ClassUpdate, db: Session = Depends(get_db)):
    return crud_class.update_class(db, class_id, class_update.model_dump(exclude_unset=True))


@router.patch("/{class_id}/activate", response_model=ClassOut)
def activate_class(class_id: UUID, db: Session = Depends(get_db)):
    return crud_class.set_active(db, class_id, True)


@router.patch("/{class_id}/deactivate", response_model=ClassOut)
def deactivate_class(class_id: UUID, db: Session = Depends(get_db)):
    return crud_class.set_active(db, class_id, False)


@router.post("/{class_id}/enroll/{student_id}", response_model=ClassOut, status_code=status.HTTP_201_CREATED)
def enroll_student(class_id: UUID, student_id: UUID, db: Session = Depends(get_db)):
    return crud_class.enroll_student(db, class_id, student_id)


@router.delete("/{class_id}/enroll/{student_id}", status_code=status.HTTP_204_NO_CONTENT)
def unenroll_student(class_id: UUID, student_id: UUID, db: Session = Depends(get_db)):
    crud_class.unenroll_student(db, class_id, student_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
