from fastapi import APIRouter, Depends, status

from ....domain.entities import User
from ....application.use_cases.notifications import PostNotification, ListNotifications
from ....infrastructure.repositories import InMemoryStore, get_store
from ..authz import require_member
from ..schemas import NotificationCreate, NotificationOut, notification_out

# /api/messages and /api/notifications are the same log
router = APIRouter(prefix="/api", tags=["notifications"])


@router.post("/messages", response_model=NotificationOut, status_code=status.HTTP_201_CREATED)
@router.post("/notifications", response_model=NotificationOut, status_code=status.HTTP_201_CREATED)
def post_notification(
    payload: NotificationCreate | None = None,
    user: User = Depends(require_member),
    store: InMemoryStore = Depends(get_store),
):
    payload = payload or NotificationCreate()
    notification = PostNotification(store).execute(
        user, subject=payload.subject, body=payload.body, to_role=payload.to_role,
    )
    return notification_out(notification)


@router.get("/messages", response_model=list[NotificationOut])
@router.get("/notifications", response_model=list[NotificationOut])
def list_notifications(user: User = Depends(require_member), store: InMemoryStore = Depends(get_store)):
    return [notification_out(n) for n in ListNotifications(store).execute(user)]
