from datetime import date, datetime, timezone
from typing import Callable

from ...domain.entities import LessonStatus, Role
from ..dto import DashboardStats
from ..interfaces import IStore


def utc_today() -> date:
    return datetime.now(timezone.utc).date()


class ComputeStats:
    def __init__(self, store: IStore, today: Callable[[], date] = utc_today):
        self.store = store
        self.today = today

    def execute(self) -> DashboardStats:
        today = self.today().isoformat()
        with self.store.atomic():
            users = self.store.users.list()
            lessons = self.store.lessons.list()

        return DashboardStats(
            total_students=sum(1 for u in users if u.role == Role.STUDENT),
            total_instructors=sum(1 for u in users if u.role == Role.INSTRUCTOR),
            # date may carry a time part, only the calendar day is compared
            todays_lessons=sum(
                1 for l in lessons
                if (l.date or "")[:10] == today and l.status != LessonStatus.CANCELLED
            ),
            pending_actions=sum(1 for l in lessons if l.status == LessonStatus.SCHEDULED),
        )
