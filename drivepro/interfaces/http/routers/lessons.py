from fastapi import APIRouter, Depends, Response, status

from ....domain.entities import User
from ....application.dto import LessonDraft, LessonChanges
from ....application.use_cases.lessons import (
    ListLessons, CreateLesson, BookLesson, UpdateLesson, MarkAttendance, CancelLesson,
)
from ....infrastructure.metrics import lessons_booked_total
from ....infrastructure.repositories import InMemoryStore, get_store
from ..authz import get_current_user, require_staff, require_member
from ..schemas import LessonCreate, LessonUpdate, AttendanceReq, LessonOut, lesson_out

router = APIRouter(prefix="/api/lessons", tags=["lessons"])

# Lessons are serialized under the same lock as the use case that produced them,
# otherwise a concurrent update or cascade can show through half-applied.


def _draft(payload: LessonCreate) -> LessonDraft:
    return LessonDraft(
        date=payload.date,
        time=payload.time,
        type=payload.type,
        student_id=payload.student_id,
        instructor_id=payload.instructor_id,
    )


@router.get("", response_model=list[LessonOut])
def list_lessons(user: User = Depends(get_current_user), store: InMemoryStore = Depends(get_store)):
    with store.atomic():
        return [lesson_out(l, store.users) for l in ListLessons(store).execute(user)]


@router.post("", response_model=LessonOut, status_code=status.HTTP_201_CREATED,
             dependencies=[Depends(require_staff)])
def create_lesson(payload: LessonCreate | None = None, store: InMemoryStore = Depends(get_store)):
    with store.atomic():
        lesson = CreateLesson(store).execute(_draft(payload or LessonCreate()))
        out = lesson_out(lesson, store.users)
    lessons_booked_total.labels(source="direct").inc()
    return out


@router.post("/book", response_model=LessonOut, status_code=status.HTTP_201_CREATED)
def book_lesson(
    payload: LessonCreate | None = None,
    user: User = Depends(require_member),
    store: InMemoryStore = Depends(get_store),
):
    with store.atomic():
        lesson = BookLesson(store).execute(user, _draft(payload or LessonCreate()))
        out = lesson_out(lesson, store.users)
    lessons_booked_total.labels(source="booking").inc()
    return out


@router.put("/{lesson_id}", response_model=LessonOut, dependencies=[Depends(require_staff)])
def update_lesson(lesson_id: str, payload: LessonUpdate | None = None,
                  store: InMemoryStore = Depends(get_store)):
    payload = payload or LessonUpdate()
    changes = LessonChanges(
        date=payload.date,
        time=payload.time,
        type=payload.type,
        status=payload.status,
    )
    with store.atomic():
        return lesson_out(UpdateLesson(store).execute(lesson_id, changes), store.users)


@router.post("/{lesson_id}/attendance", response_model=LessonOut, dependencies=[Depends(require_staff)])
def mark_attendance(lesson_id: str, payload: AttendanceReq | None = None,
                    store: InMemoryStore = Depends(get_store)):
    with store.atomic():
        lesson = MarkAttendance(store).execute(lesson_id, (payload or AttendanceReq()).status)
        return lesson_out(lesson, store.users)


@router.delete("/{lesson_id}", status_code=status.HTTP_204_NO_CONTENT)
def cancel_lesson(lesson_id: str, user: User = Depends(require_member),
                  store: InMemoryStore = Depends(get_store)):
    CancelLesson(store).execute(user, lesson_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
