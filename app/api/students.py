# app/api/students.py
from typing import List, Literal, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.api.deps import get_db, get_password_hasher, require_teacher
from app.core.enums import Belt, UserRoleType
from app.core.security import PasswordHasher
from app.crud import user as crud_user
from app.schemas.common import Page
from app.schemas.user import StudentCreate, StudentUpdate, UserOut

router = APIRouter(dependencies=[Depends(require_teacher)])


@router.post("", response_model=UserOut, status_code=status.HTTP_201_CREATED)
def create_student(
    student_in: StudentCreate,
    db: Session = Depends(get_db),
    hasher: PasswordHasher = Depends(get_password_hasher),
):
    return crud_user.create_user(db, student_in.model_dump(), [UserRoleType.STUDENT], hasher)


@router.get("", response_model=Page[UserOut])
def list_students(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1),
    name: Optional[str] = None,
    registry: Optional[str] = None,
    belt: Optional[List[Belt]] = Query(None),
    is_active: Optional[bool] = Query(None, alias="isActive"),
    sort_by: Literal["name", "registry", "belt", "createdAt"] = Query("createdAt", alias="sortBy"),
    sort_order: str = Query("DESC", alias="sortOrder", pattern="^(ASC|DESC|asc|desc)$"),
    db: Session = Depends(get_db),
):
    return crud_user.find_students(
        db,
        page=page,
        limit=limit,
        name=name,
        registry=registry,
        belts=belt,
        is_active=is_active,
        sort_by=sort_by,
        sort_order=sort_order,
    )


@router.get("/{student_id}", response_model=UserOut)
def get_student(student_id: UUID, db: Session = Depends(get_db)):
    return crud_user.find_student(db, student_id)


@router.patch("/{student_id}", response_model=UserOut)
def update_student(
    student_id: UUID,
    student_update: StudentUpdate,
    db: Session = Depends(get_db),
    hasher: PasswordHasher = Depends(get_password_hasher),
):
    student = crud_user.find_student(db, student_id)
    return crud_user.update_user(db, student, student_update.model_dump(exclude_unset=True), hasher)
