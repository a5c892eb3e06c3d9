from dataclasses import dataclass

from ..domain.entities import User


@dataclass
class LoginResult:
    token: str
    user: User


@dataclass
class NewUserInput:
    name: str | None = None
    email: str | None = None
    role: str | None = None
    password: str | None = None
    is_active: bool = True


@dataclass
class UserChanges:
    name: str | None = None
    email: str | None = None
    role: str | None = None
    is_active: bool | None = None


@dataclass
class LessonDraft:
    date: str | None = None
    time: str | None = None
    type: str | None = None
    student_id: str | None = None
    instructor_id: str | None = None


@dataclass
class LessonChanges:
    date: str | None = None
    time: str | None = None
    type: str | None = None
    status: str | None = None


@dataclass
class DashboardStats:
    total_students: int
    total_instructors: int
    todays_lessons: int
    pending_actions: int
