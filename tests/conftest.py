from datetime import date, time
from typing import Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.api.deps import get_db, get_password_hasher
from app.core.enums import UserRoleType
from app.core.security import PasswordHasher, create_access_token
from app.crud import class_ as crud_class
from app.crud import class_session as crud_session
from app.crud import user as crud_user
from app.db import Base
from app.db.session import make_engine
from app.main import app as fastapi_app

TEACHER_PASSWORD = "kiai-2024"


@pytest.fixture
def engine():
    engine = make_engine("sqlite://", poolclass=StaticPool)
    Base.metadata.create_all(engine)
    yield engine
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def db(engine) -> Generator[Session, None, None]:
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSession()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def hasher() -> PasswordHasher:
    return PasswordHasher("pbkdf2_sha256", rounds=1000)


@pytest.fixture
def make_teacher(db, hasher):
    counter = {"n": 0}

    def factory(name="Sensei", registry=None, password=TEACHER_PASSWORD):
        counter["n"] += 1
        registry = registry or f"T{counter['n']:03d}"
        return crud_user.create_user(
            db, {"name": name, "registry_number": registry, "password": password}, [UserRoleType.TEACHER], hasher
        )

    return factory


@pytest.fixture
def make_student(db, hasher):
    def factory(name="Student", **extra):
        return crud_user.create_user(db, {"name": name, **extra}, [UserRoleType.STUDENT], hasher)

    return factory


@pytest.fixture
def teacher(make_teacher):
    return make_teacher()


@pytest.fixture
def make_class(db):
    def factory(teacher, name="Kids BJJ", students=()):
        db_class = crud_class.create_class(
            db,
            {"name": name, "days": [1, 3, 5], "start_time": time(18, 30), "duration_minutes": 60},
            teacher.id,
        )
        for student in students:
            crud_class.enroll_student(db, db_class.id, student.id)
        return crud_class.get_class(db, db_class.id)

    return factory


@pytest.fixture
def make_session(db):
    def factory(db_class, teacher, on=date(2026, 3, 2), **extra):
        return crud_session.create_session(
            db, {"class_id": db_class.id, "teacher_id": teacher.id, "date": on, **extra}
        )

    return factory


@pytest.fixture
def client(db, hasher) -> Generator[TestClient, None, None]:
    def override_get_db():
        yield db

    fastapi_app.dependency_overrides[get_db] = override_get_db
    fastapi_app.dependency_overrides[get_password_hasher] = lambda: hasher
    with TestClient(fastapi_app) as test_client:
        yield test_client
    fastapi_app.dependency_overrides.clear()


@pytest.fixture
def bearer():
    def factory(user):
        token = create_access_token(data={"sub": str(user.id), "username": user.registry_number, "roles": user.role_names})
        return {"Authorization": f"Bearer {token}"}

    return factory


@pytest.fixture
def auth_headers(bearer, teacher):
    return bearer(teacher)
