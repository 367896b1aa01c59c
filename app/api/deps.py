# app/api/deps.py
from functools import lru_cache
from typing import Generator, Optional
from uuid import UUID

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.enums import UserRoleType
from app.core.security import PasswordHasher, decode_access_token
from app.crud import user as crud_user
from app.db.models.user import User
from app.db.session import SessionLocal

bearer_scheme = HTTPBearer(auto_error=False)


def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@lru_cache
def get_password_hasher() -> PasswordHasher:
    return PasswordHasher(settings.PASSWORD_HASH_SCHEME, settings.PASSWORD_HASH_ROUNDS)


def _unauthorized(detail: str = "Could not validate credentials") -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> User:
    if credentials is None:
        raise _unauthorized("Not authenticated")

    try:
        payload = decode_access_token(credentials.credentials)
        user_id = UUID(str(payload.get("sub")))
    except (JWTError, ValueError):
        raise _unauthorized()

    user = crud_user.get_user_by_id(db, user_id)
    if not user or not user.is_active:
        raise _unauthorized()
    return user


def require_role(role: UserRoleType):
    def checker(current_user: User = Depends(get_current_user)) -> User:
        if not current_user.has_role(role):
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden resource")
        return current_user

    return checker


require_teacher = require_role(UserRoleType.TEACHER)
