from __future__ import annotations

from contextlib import AbstractContextManager

from ..domain.entities import User, Lesson, Notification, Role


class IUserRepository:
    def list(self) -> list[User]: ...
    def get(self, user_id: str) -> User | None: ...
    def get_by_email(self, email: str) -> User | None: ...
    def first_active(self, role: Role) -> User | None: ...
    def add(self, user: User) -> User: ...
    def remove(self, user_id: str) -> bool: ...


class ILessonRepository:
    def list(self) -> list[Lesson]: ...
    def for_student(self, student_id: str) -> list[Lesson]: ...
    def for_instructor(self, instructor_id: str) -> list[Lesson]: ...
    def get(self, lesson_id: str) -> Lesson | None: ...
    def add(self, lesson: Lesson) -> Lesson: ...
    def remove(self, lesson_id: str) -> bool: ...
    def remove_for_user(self, user_id: str) -> int: ...


class INotificationRepository:
    def list(self) -> list[Notification]: ...
    def add(self, notification: Notification) -> Notification: ...


class IStore:
    users: IUserRepository
    lessons: ILessonRepository
    notifications: INotificationRepository

    def atomic(self) -> AbstractContextManager["IStore"]: ...


class ITokenIssuer:
    def __call__(self, user: User) -> str: ...
