from drivepro.domain.entities import User, Lesson, Role
from drivepro.infrastructure.repositories import InMemoryStore


def _lesson(lesson_id, student_id, instructor_id):
    return Lesson(id=lesson_id, type="Practical#1", date="2024-01-01", time="09:00",
                  student_id=student_id, instructor_id=instructor_id)


def test_get_by_email_is_case_insensitive(store):
    """Email lookup ignores case"""
    user = store.users.get_by_email("Student@DrivePro.com")
    assert user is not None
    assert user.id == "u-sarah"


def test_first_active_follows_insertion_order():
    """The first active user of a role wins, inactive ones are skipped"""
    store = InMemoryStore()
    store.users.add(User("i-1", "Off Duty", "off@drivepro.com", "pw", Role.INSTRUCTOR, is_active=False))
    store.users.add(User("i-2", "Bea", "bea@drivepro.com", "pw", Role.INSTRUCTOR))
    store.users.add(User("i-3", "Al", "al@drivepro.com", "pw", Role.INSTRUCTOR))

    assert store.users.first_active(Role.INSTRUCTOR).id == "i-2"
    assert store.users.first_active(Role.ADMIN) is None


def test_remove_for_user_only_touches_participants():
    """Cascade removes lessons where the user is student or instructor and nothing else"""
    store = InMemoryStore()
    store.lessons.add(_lesson("l-1", "s-1", "i-1"))
    store.lessons.add(_lesson("l-2", "s-2", "i-1"))
    store.lessons.add(_lesson("l-3", "s-1", "i-2"))
    store.lessons.add(_lesson("l-4", "s-2", "i-2"))

    assert store.lessons.remove_for_user("i-1") == 2
    assert [l.id for l in store.lessons.list()] == ["l-3", "l-4"]

    assert store.lessons.remove_for_user("s-1") == 1
    assert [l.id for l in store.lessons.list()] == ["l-4"]


def test_participant_filters():
    """Lessons can be listed per student and per instructor"""
    store = InMemoryStore()
    store.lessons.add(_lesson("l-1", "s-1", "i-1"))
    store.lessons.add(_lesson("l-2", "s-2", "i-1"))

    assert [l.id for l in store.lessons.for_student("s-2")] == ["l-2"]
    assert [l.id for l in store.lessons.for_instructor("i-1")] == ["l-1", "l-2"]
    assert store.lessons.for_instructor("i-9") == []


def test_list_returns_a_copy(store):
    """Callers cannot mutate the collection through a listing"""
    rows = store.users.list()
    rows.clear()
    assert len(store.users) == 4


def test_atomic_is_reentrant(store):
    """Nested atomic blocks and repository calls do not deadlock"""
    with store.atomic():
        with store.atomic():
            assert store.users.get("u-admin") is not None
