import uuid

import pytest

from app.core.enums import Belt, UserRoleType
from app.core.exceptions import BadRequestError, NotFoundError
from app.crud import user as crud_user
from conftest import TEACHER_PASSWORD


def test_password_hasher_round_trip(hasher):
    hashed = hasher.hash("oss")

    assert hashed != "oss"
    assert hasher.verify("oss", hashed)
    assert not hasher.verify("wrong", hashed)
    assert not hasher.verify("oss", None)


def test_create_student_defaults(make_student):
    student = make_student(name="Ana", registry_number="S001")

    assert student.belt == Belt.WHITE
    assert student.is_active is True
    assert student.hashed_password is None
    assert student.role_names == ["student"]


def test_registry_must_be_unique(make_student, make_teacher):
    make_student(registry_number="S001")

    with pytest.raises(BadRequestError, match="Registry is already in use"):
        make_teacher(registry="S001")


def test_get_student_and_teacher_check_role(db, teacher, make_student):
    student = make_student()

    assert crud_user.get_student(db, student.id).id == student.id
    assert crud_user.get_teacher(db, teacher.id).id == teacher.id

    with pytest.raises(NotFoundError, match="Student not found"):
        crud_user.get_student(db, teacher.id)
    with pytest.raises(NotFoundError, match="Teacher not found"):
        crud_user.get_teacher(db, student.id)
    with pytest.raises(NotFoundError):
        crud_user.get_student(db, uuid.uuid4())


def test_inactive_student(db, hasher, make_student):
    student = make_student()
    crud_user.update_user(db, student, {"is_active": False}, hasher)

    with pytest.raises(BadRequestError, match="Student is not active"):
        crud_user.get_student(db, student.id)
    assert crud_user.find_student(db, student.id).is_active is False


def test_update_user_rehashes_password(db, hasher, make_student):
    student = make_student(registry_number="S001")

    crud_user.update_user(db, student, {"password": "new-secret", "belt": Belt.BLUE}, hasher)

    assert student.belt == Belt.BLUE
    assert hasher.verify("new-secret", student.hashed_password)


def test_authenticate_teacher(db, hasher, teacher, make_student):
    make_student(registry_number="S001", password="student-pass")

    assert crud_user.authenticate_teacher(db, teacher.registry_number, TEACHER_PASSWORD, hasher).id == teacher.id
    assert crud_user.authenticate_teacher(db, teacher.registry_number, "wrong", hasher) is None
    assert crud_user.authenticate_teacher(db, "S001", "student-pass", hasher) is None
    assert crud_user.authenticate_teacher(db, "missing", TEACHER_PASSWORD, hasher) is None


def test_get_users_by_role(db, teacher, make_student):
    student = make_student()

    assert [u.id for u in crud_user.get_users_by_role(db, UserRoleType.STUDENT)] == [student.id]
    assert [u.id for u in crud_user.get_users_by_role(db, UserRoleType.TEACHER)] == [teacher.id]


def test_find_students_filters_and_sorting(db, hasher, teacher, make_student):
    make_student(name="Carla Souza", belt=Belt.BLUE)
    make_student(name="Ana Lima", belt=Belt.WHITE)
    inactive = make_student(name="Bruno Costa", belt=Belt.BLUE)
    crud_user.update_user(db, inactive, {"is_active": False}, hasher)

    by_name = crud_user.find_students(db, sort_by="name", sort_order="ASC")
    assert [s.name for s in by_name["data"]] == ["Ana Lima", "Bruno Costa", "Carla Souza"]
    assert by_name["meta"].total == 3

    blue = crud_user.find_students(db, belts=[Belt.BLUE], sort_by="name", sort_order="asc")
    assert [s.name for s in blue["data"]] == ["Bruno Costa", "Carla Souza"]

    active_blue = crud_user.find_students(db, belts=[Belt.BLUE], is_active=True)
    assert [s.name for s in active_blue["data"]] == ["Carla Souza"]

    partial = crud_user.find_students(db, name="LIMA")
    assert [s.name for s in partial["data"]] == ["Ana Lima"]


def test_find_students_pagination(db, make_student):
    for i in range(5):
        make_student(name=f"Student {i}")

    result = crud_user.find_students(db, page=3, limit=2, sort_by="name", sort_order="ASC")

    assert [s.name for s in result["data"]] == ["Student 4"]
    assert result["meta"].total_pages == 3


def test_create_user_unknown_instructor(make_student):
    with pytest.raises(NotFoundError, match="Instructor not found"):
        make_student(instructor_id=uuid.uuid4())


def test_duplicate_registry_past_the_lookup_is_rolled_back(db, monkeypatch, make_student):
    make_student(name="Ana", registry_number="S001")
    monkeypatch.setattr(crud_user, "_ensure_registry_free", lambda db, registry: None)

    with pytest.raises(BadRequestError, match="Invalid instructor or duplicate registry"):
        make_student(name="Bruno", registry_number="S001")

    assert [s.name for s in crud_user.find_students(db)["data"]] == ["Ana"]
