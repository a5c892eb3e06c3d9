import uuid

import structlog

from ...domain.entities import User, Lesson, LessonStatus, Role
from ...domain.errors import ValidationError, ForbiddenError, NotFoundError
from ..dto import LessonDraft, LessonChanges
from ..interfaces import IStore

logger = structlog.get_logger()


def parse_status(value: str) -> LessonStatus:
    try:
        return LessonStatus(value)
    except ValueError:
        raise ValidationError("Invalid status")


def _new_lesson(draft: LessonDraft, student_id: str, instructor_id: str) -> Lesson:
    return Lesson(
        id=str(uuid.uuid4()),
        type=draft.type,
        date=draft.date,
        time=draft.time,
        student_id=student_id,
        instructor_id=instructor_id,
        status=LessonStatus.SCHEDULED,
    )


class ListLessons:
    def __init__(self, store: IStore):
        self.store = store

    def execute(self, caller: User) -> list[Lesson]:
        with self.store.atomic():
            if caller.role == Role.STUDENT:
                return self.store.lessons.for_student(caller.id)
            if caller.role == Role.INSTRUCTOR:
                return self.store.lessons.for_instructor(caller.id)
            return self.store.lessons.list()


class CreateLesson:
    """Staff-side creation: both participants are given explicitly."""

    def __init__(self, store: IStore):
        self.store = store

    def execute(self, draft: LessonDraft) -> Lesson:
        if not (draft.student_id and draft.instructor_id and draft.date and draft.time and draft.type):
            raise ValidationError("studentId, instructorId, date, time and type are required")

        with self.store.atomic():
            users = self.store.users
            if users.get(draft.student_id) is None or users.get(draft.instructor_id) is None:
                raise ValidationError("Invalid studentId or instructorId")
            lesson = self.store.lessons.add(_new_lesson(draft, draft.student_id, draft.instructor_id))

        logger.info("lesson_created", lesson_id=lesson.id, student_id=lesson.student_id,
                    instructor_id=lesson.instructor_id)
        return lesson


class BookLesson:
    """Booking flow used by students for themselves and by staff on a student's behalf.

    A student caller may omit ``student_id``. When ``instructor_id`` is omitted
    the first active instructor, in insertion order, is assigned.
    """

    def __init__(self, store: IStore):
        self.store = store

    def execute(self, caller: User, draft: LessonDraft) -> Lesson:
        if not draft.date or not draft.time or not draft.type:
            raise ValidationError("date, time and type are required")

        student_id = draft.student_id
        if not student_id and caller.role == Role.STUDENT:
            student_id = caller.id
        if not student_id:
            raise ValidationError("studentId is required when not booking as a student")

        with self.store.atomic():
            users = self.store.users
            student = users.get(student_id)
            if student is None or student.role != Role.STUDENT:
                raise ValidationError("Invalid studentId")

            if draft.instructor_id:
                instructor = users.get(draft.instructor_id)
                if instructor is None or instructor.role != Role.INSTRUCTOR:
                    raise ValidationError("Invalid instructorId")
            else:
                instructor = users.first_active(Role.INSTRUCTOR)
                if instructor is None:
                    raise ValidationError("No available instructor to assign")

            lesson = self.store.lessons.add(_new_lesson(draft, student.id, instructor.id))

        logger.info("lesson_booked", lesson_id=lesson.id, booked_by=caller.id,
                    student_id=student.id, instructor_id=instructor.id,
                    auto_assigned=not draft.instructor_id)
        return lesson


class UpdateLesson:
    def __init__(self, store: IStore):
        self.store = store

    def execute(self, lesson_id: str, changes: LessonChanges) -> Lesson:
        with self.store.atomic():
            lesson = self.store.lessons.get(lesson_id)
            if lesson is None:
                raise NotFoundError("Lesson not found")
            status = parse_status(changes.status) if changes.status is not None else None

            if changes.date is not None:
                lesson.date = changes.date
            if changes.time is not None:
                lesson.time = changes.time
            if changes.type is not None:
                lesson.type = changes.type
            if status is not None:
                lesson.status = status
        return lesson


class MarkAttendance:
    def __init__(self, store: IStore):
        self.store = store

    def execute(self, lesson_id: str, status: str | None = None) -> Lesson:
        with self.store.atomic():
            lesson = self.store.lessons.get(lesson_id)
            if lesson is None:
                raise NotFoundError("Lesson not found")
            lesson.status = parse_status(status) if status is not None else LessonStatus.COMPLETED
        return lesson


class CancelLesson:
    def __init__(self, store: IStore):
        self.store = store

    def execute(self, caller: User, lesson_id: str) -> None:
        with self.store.atomic():
            lesson = self.store.lessons.get(lesson_id)
            if lesson is None:
                raise NotFoundError("Lesson not found")
            if caller.role == Role.STUDENT and lesson.student_id != caller.id:
                raise ForbiddenError("You can only cancel your own lessons")
            self.store.lessons.remove(lesson_id)

        logger.info("lesson_cancelled", lesson_id=lesson_id, cancelled_by=caller.id)
