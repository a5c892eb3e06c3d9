import uuid
from datetime import date, timedelta

import structlog

from ..domain.entities import User, Lesson, Role
from ..application.use_cases.stats import utc_today
from .repositories import InMemoryStore

logger = structlog.get_logger()

DEMO_PASSWORD = "password123"


def create_demo_data(store: InMemoryStore, today: date | None = None) -> bool:
    """Seed demo users and lessons into an empty store. Returns False if users already exist."""
    today = today or utc_today()
    with store.atomic():
        if len(store.users) > 0:
            return False

        student = User(str(uuid.uuid4()), "Sarah Student", "student@drivepro.com", DEMO_PASSWORD, Role.STUDENT)
        instructor = User(str(uuid.uuid4()), "Ivan Instructor", "instructor@drivepro.com", DEMO_PASSWORD, Role.INSTRUCTOR)
        admin = User(str(uuid.uuid4()), "Alice Admin", "admin@drivepro.com", DEMO_PASSWORD, Role.ADMIN)
        for user in (student, instructor, admin):
            store.users.add(user)

        store.lessons.add(Lesson(
            id=str(uuid.uuid4()), type="Practical#1", date=today.isoformat(), time="10:00",
            student_id=student.id, instructor_id=instructor.id,
        ))
        store.lessons.add(Lesson(
            id=str(uuid.uuid4()), type="Theory#1", date=(today + timedelta(days=1)).isoformat(), time="14:00",
            student_id=student.id, instructor_id=instructor.id,
        ))

    logger.info("demo_data_seeded", users=3, lessons=2)
    return True
