from datetime import datetime

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from ...domain.entities import User, Lesson, Notification, Role, LessonStatus
from ...application.interfaces import IUserRepository
from ...application.dto import DashboardStats


class CamelModel(BaseModel):
    """JSON bodies use camelCase keys (isActive, studentId, toRole...)."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# Request bodies: every field is optional so that the use cases can answer
# missing input with their own 400 messages.

class LoginReq(CamelModel):
    email: str | None = None
    password: str | None = None
    user_type: str | None = None

class UserCreate(CamelModel):
    name: str | None = None
    email: str | None = None
    role: str | None = None
    password: str | None = None
    is_active: bool = True

class UserUpdate(CamelModel):
    name: str | None = None
    email: str | None = None
    role: str | None = None
    is_active: bool | None = None

class LessonCreate(CamelModel):
    student_id: str | None = None
    instructor_id: str | None = None
    date: str | None = None
    time: str | None = None
    type: str | None = None

class LessonUpdate(CamelModel):
    date: str | None = None
    time: str | None = None
    type: str | None = None
    status: str | None = None

class AttendanceReq(CamelModel):
    status: str | None = None

class NotificationCreate(CamelModel):
    to_role: str | None = None
    subject: str | None = None
    body: str | None = None


class UserOut(CamelModel):
    id: str
    name: str
    email: str
    role: Role
    is_active: bool

class LoginResp(CamelModel):
    token: str
    user: UserOut

class LessonOut(CamelModel):
    id: str
    type: str
    date: str
    time: str
    status: LessonStatus
    # participants are expanded to public users, None once the user is gone
    student_id: UserOut | None
    instructor_id: UserOut | None

class NotificationOut(CamelModel):
    id: str
    from_user_id: str
    from_user_name: str
    from_role: Role
    to_role: str
    subject: str
    body: str
    created_at: datetime

class StatsOut(CamelModel):
    total_students: int
    total_instructors: int
    todays_lessons: int
    pending_actions: int


def public_user(user: User | None) -> UserOut | None:
    """User without the password field."""
    if user is None:
        return None
    return UserOut(id=user.id, name=user.name, email=user.email, role=user.role, is_active=user.is_active)


def lesson_out(lesson: Lesson, users: IUserRepository) -> LessonOut:
    return LessonOut(
        id=lesson.id,
        type=lesson.type,
        date=lesson.date,
        time=lesson.time,
        status=lesson.status,
        student_id=public_user(users.get(lesson.student_id)),
        instructor_id=public_user(users.get(lesson.instructor_id)),
    )


def notification_out(n: Notification) -> NotificationOut:
    return NotificationOut(
        id=n.id,
        from_user_id=n.from_user_id,
        from_user_name=n.from_user_name,
        from_role=n.from_role,
        to_role=n.to_role,
        subject=n.subject,
        body=n.body,
        created_at=n.created_at,
    )


def stats_out(stats: DashboardStats) -> StatsOut:
    return StatsOut(
        total_students=stats.total_students,
        total_instructors=stats.total_instructors,
        todays_lessons=stats.todays_lessons,
        pending_actions=stats.pending_actions,
    )
