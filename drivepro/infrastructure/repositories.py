from __future__ import annotations

import threading
from typing import Iterator
from contextlib import contextmanager

from fastapi import Request

from ..domain.entities import User, Lesson, Notification, Role
from ..application.interfaces import IUserRepository, ILessonRepository, INotificationRepository


class UserRepository(IUserRepository):
    def __init__(self, lock: threading.RLock):
        self._lock = lock
        self._rows: list[User] = []

    def list(self) -> list[User]:
        with self._lock:
            return list(self._rows)

    def get(self, user_id: str) -> User | None:
        with self._lock:
            return next((u for u in self._rows if u.id == user_id), None)

    def get_by_email(self, email: str) -> User | None:
        needle = email.lower()
        with self._lock:
            return next((u for u in self._rows if u.email.lower() == needle), None)

    def first_active(self, role: Role) -> User | None:
        with self._lock:
            return next((u for u in self._rows if u.role == role and u.is_active), None)

    def add(self, user: User) -> User:
        with self._lock:
            self._rows.append(user)
        return user

    def remove(self, user_id: str) -> bool:
        with self._lock:
            before = len(self._rows)
            self._rows = [u for u in self._rows if u.id != user_id]
            return len(self._rows) != before

    def __len__(self) -> int:
        with self._lock:
            return len(self._rows)


class LessonRepository(ILessonRepository):
    def __init__(self, lock: threading.RLock):
        self._lock = lock
        self._rows: list[Lesson] = []

    def list(self) -> list[Lesson]:
        with self._lock:
            return list(self._rows)

    def for_student(self, student_id: str) -> list[Lesson]:
        with self._lock:
            return [l for l in self._rows if l.student_id == student_id]

    def for_instructor(self, instructor_id: str) -> list[Lesson]:
        with self._lock:
            return [l for l in self._rows if l.instructor_id == instructor_id]

    def get(self, lesson_id: str) -> Lesson | None:
        with self._lock:
            return next((l for l in self._rows if l.id == lesson_id), None)

    def add(self, lesson: Lesson) -> Lesson:
        with self._lock:
            self._rows.append(lesson)
        return lesson

    def remove(self, lesson_id: str) -> bool:
        with self._lock:
            before = len(self._rows)
            self._rows = [l for l in self._rows if l.id != lesson_id]
            return len(self._rows) != before

    def remove_for_user(self, user_id: str) -> int:
        """Drop every lesson where the user is student or instructor; returns the count."""
        with self._lock:
            kept = [l for l in self._rows if user_id not in (l.student_id, l.instructor_id)]
            removed = len(self._rows) - len(kept)
            self._rows = kept
            return removed


class NotificationRepository(INotificationRepository):
    def __init__(self, lock: threading.RLock):
        self._lock = lock
        self._rows: list[Notification] = []

    def list(self) -> list[Notification]:
        with self._lock:
            return list(self._rows)

    def add(self, notification: Notification) -> Notification:
        with self._lock:
            self._rows.append(notification)
        return notification


class InMemoryStore:
    """Process-wide users, lessons and notifications sharing one re-entrant lock.

    Repository calls are individually atomic; use cases wrap multi-step
    operations in ``atomic()`` so a whole request sees a consistent state.
    """

    def __init__(self):
        self.lock = threading.RLock()
        self.users = UserRepository(self.lock)
        self.lessons = LessonRepository(self.lock)
        self.notifications = NotificationRepository(self.lock)

    @contextmanager
    def atomic(self) -> Iterator["InMemoryStore"]:
        with self.lock:
            yield self


def get_store(request: Request) -> InMemoryStore:
    return request.app.state.store
