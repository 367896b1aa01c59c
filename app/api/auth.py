from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.api.deps import get_db, get_password_hasher, require_teacher
from app.core.security import PasswordHasher, create_access_token
from app.crud import user as crud_user
from app.db.models.user import User
from app.schemas.user import LoginResponse, TeacherLogin, UserOut

router = APIRouter()


@router.post("/login", response_model=LoginResponse)
def login(
    form: TeacherLogin,
    db: Session = Depends(get_db),
    hasher: PasswordHasher = Depends(get_password_hasher),
):
    user = crud_user.authenticate_teacher(db, form.registry, form.password, hasher)
    if not user:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")

    token = create_access_token(
        data={"sub": str(user.id), "username": user.registry_number, "roles": user.role_names}
    )
    return {"token": token, "user": user}


@router.get("/me", response_model=UserOut)
def read_me(current_user: User = Depends(require_teacher)):
    return current_user
