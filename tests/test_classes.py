import uuid
from datetime import time

import pytest

from app.core.enums import DayOfWeek
from app.core.exceptions import BadRequestError, NotFoundError
from app.crud import class_ as crud_class


def test_create_class_normalises_days(db, teacher):
    db_class = crud_class.create_class(
        db,
        {
            "name": "Adults No-Gi",
            "days": [DayOfWeek.FRIDAY, DayOfWeek.MONDAY, DayOfWeek.MONDAY],
            "start_time": time(19, 0),
            "duration_minutes": 90,
        },
        teacher.id,
    )

    assert db_class.days == [1, 5]
    assert db_class.teacher.id == teacher.id
    assert db_class.enrolled_students == []
    assert db_class.is_active is True


def test_create_class_requires_teacher(db, make_student):
    student = make_student()

    with pytest.raises(NotFoundError, match="Teacher not found"):
        crud_class.create_class(
            db,
            {"name": "Kids", "days": [1], "start_time": time(17, 0), "duration_minutes": 60},
            student.id,
        )


def test_get_missing_class(db):
    with pytest.raises(NotFoundError, match="Class not found"):
        crud_class.get_class(db, uuid.uuid4())


def test_enroll_and_unenroll(db, teacher, make_student, make_class):
    ana = make_student(name="Ana")
    db_class = make_class(teacher)

    enrolled = crud_class.enroll_student(db, db_class.id, ana.id)
    assert [s.id for s in enrolled.enrolled_students] == [ana.id]
    assert crud_class.is_enrolled(enrolled, ana.id)

    remaining = crud_class.unenroll_student(db, db_class.id, ana.id)
    assert remaining.enrolled_students == []


def test_enroll_twice_is_rejected(db, teacher, make_student, make_class):
    ana = make_student(name="Ana")
    db_class = make_class(teacher, students=[ana])

    with pytest.raises(BadRequestError, match="already enrolled"):
        crud_class.enroll_student(db, db_class.id, ana.id)


def test_enroll_in_inactive_class_is_rejected(db, teacher, make_student, make_class):
    db_class = make_class(teacher)
    crud_class.set_active(db, db_class.id, False)

    with pytest.raises(BadRequestError, match="inactive class"):
        crud_class.enroll_student(db, db_class.id, make_student().id)


def test_enroll_teacher_only_account_is_rejected(db, teacher, make_teacher, make_class):
    db_class = make_class(teacher)
    other = make_teacher(name="Other")

    with pytest.raises(NotFoundError, match="Student not found"):
        crud_class.enroll_student(db, db_class.id, other.id)


def test_unenroll_non_member(db, teacher, make_student, make_class):
    db_class = make_class(teacher)

    with pytest.raises(NotFoundError, match="not enrolled"):
        crud_class.unenroll_student(db, db_class.id, make_student().id)


def test_enrolled_students_sorted_by_name(db, teacher, make_student, make_class):
    zoe, ana = make_student(name="Zoe"), make_student(name="Ana")

    db_class = make_class(teacher, students=[zoe, ana])

    assert [s.name for s in db_class.enrolled_students] == ["Ana", "Zoe"]


def test_get_classes_pagination_and_scope(db, teacher, make_teacher, make_class):
    other = make_teacher(name="Other")
    for name in ("A", "B", "C"):
        make_class(teacher, name=name)
    make_class(other, name="Elsewhere")
    hidden = make_class(teacher, name="Hidden")
    crud_class.set_active(db, hidden.id, False)

    result = crud_class.get_classes(db, page=1, limit=2, teacher_id=teacher.id)
    assert len(result["data"]) == 2
    assert result["meta"].total == 3
    assert result["meta"].total_pages == 2

    everything = crud_class.get_classes(db, limit=10, include_inactive=True, teacher_id=teacher.id)
    assert everything["meta"].total == 4


def test_update_class(db, teacher, make_teacher, make_class):
    db_class = make_class(teacher)
    successor = make_teacher(name="Successor")

    updated = crud_class.update_class(
        db, db_class.id, {"name": "Renamed", "days": [6, 0], "teacher_id": successor.id}
    )

    assert updated.name == "Renamed"
    assert updated.days == [0, 6]
    assert updated.teacher.id == successor.id
    assert [c.id for c in crud_class.get_classes_by_teacher(db, successor.id)] == [db_class.id]
