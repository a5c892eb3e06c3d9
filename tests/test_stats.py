from datetime import date, datetime, timezone

from drivepro.domain.entities import Lesson, LessonStatus
from drivepro.application.use_cases.stats import ComputeStats

TODAY = date(2024, 3, 15)


def _lesson(lesson_id, day, status=LessonStatus.SCHEDULED):
    return Lesson(lesson_id, "Practical#1", day, "09:00", "u-sarah", "u-ivan", status)


def test_compute_stats(store):
    store.lessons.add(_lesson("l-1", "2024-03-15"))
    store.lessons.add(_lesson("l-2", "2024-03-15T08:00:00.000Z", LessonStatus.COMPLETED))
    store.lessons.add(_lesson("l-3", "2024-03-15", LessonStatus.CANCELLED))
    store.lessons.add(_lesson("l-4", "2024-03-16"))

    stats = ComputeStats(store, today=lambda: TODAY).execute()

    assert stats.total_students == 2
    assert stats.total_instructors == 1
    # cancelled lessons do not count for today, timestamps count by their day
    assert stats.todays_lessons == 2
    assert stats.pending_actions == 2


def test_stats_endpoint(client, auth, store, admin):
    today = datetime.now(timezone.utc).date().isoformat()
    store.lessons.add(_lesson("l-1", today))

    for path in ("/api/admin/stats", "/api/dashboard/stats"):
        response = client.get(path, headers=auth(admin))
        assert response.status_code == 200
        assert response.json() == {
            "totalStudents": 2,
            "totalInstructors": 1,
            "todaysLessons": 1,
            "pendingActions": 1,
        }


def test_stats_unauthenticated(client):
    assert client.get("/api/admin/stats").status_code == 401
