# app/core/enums.py
from enum import Enum, IntEnum


class Belt(str, Enum):
    WHITE = "white"
    YELLOW = "yellow"
    ORANGE = "orange"
    GREEN = "green"
    BLUE = "blue"
    BROWN = "brown"
    BLACK = "black"


class UserRoleType(str, Enum):
    STUDENT = "student"
    TEACHER = "teacher"


class AttendanceStatus(str, Enum):
    PENDING = "pending"
    PRESENT = "present"
    LATE = "late"
    ABSENT = "absent"
    EXCUSED = "excused"


# statuses that carry a check-in timestamp
CHECKED_IN_STATUSES = (AttendanceStatus.PRESENT, AttendanceStatus.LATE)


class DayOfWeek(IntEnum):
    SUNDAY = 0
    MONDAY = 1
    TUESDAY = 2
    WEDNESDAY = 3
    THURSDAY = 4
    FRIDAY = 5
    SATURDAY = 6
