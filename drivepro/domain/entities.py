from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum


class Role(str, Enum):
    STUDENT = "student"
    INSTRUCTOR = "instructor"
    ADMIN = "admin"


class LessonStatus(str, Enum):
    SCHEDULED = "scheduled"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


# toRole value that addresses every role
AUDIENCE_ALL = "all"


@dataclass
class User:
    id: str
    name: str
    email: str
    password: str
    role: Role
    is_active: bool = True


@dataclass
class Lesson:
    id: str
    type: str
    date: str
    time: str
    student_id: str
    instructor_id: str
    status: LessonStatus = LessonStatus.SCHEDULED


@dataclass(frozen=True)
class Notification:
    id: str
    from_user_id: str
    from_user_name: str
    from_role: Role
    to_role: str
    subject: str
    body: str
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
