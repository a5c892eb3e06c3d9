import uuid

import structlog

from ...domain.entities import User, Notification, Role, AUDIENCE_ALL
from ...domain.errors import ValidationError
from ..interfaces import IStore

logger = structlog.get_logger()

AUDIENCES = {r.value for r in Role} | {AUDIENCE_ALL}


class PostNotification:
    def __init__(self, store: IStore):
        self.store = store

    def execute(self, sender: User, subject: str | None, body: str | None,
                to_role: str | None = None) -> Notification:
        if not subject or not body:
            raise ValidationError("subject and body are required")
        if to_role is None:
            to_role = Role.ADMIN.value
        if to_role not in AUDIENCES:
            raise ValidationError("toRole must be a role or 'all'")

        notification = Notification(
            id=str(uuid.uuid4()),
            from_user_id=sender.id,
            from_user_name=sender.name,
            from_role=sender.role,
            to_role=to_role,
            subject=subject,
            body=body,
        )
        self.store.notifications.add(notification)
        logger.info("notification_posted", notification_id=notification.id,
                    from_user_id=sender.id, to_role=to_role)
        return notification


class ListNotifications:
    def __init__(self, store: IStore):
        self.store = store

    def execute(self, caller: User) -> list[Notification]:
        rows = self.store.notifications.list()
        if caller.role == Role.ADMIN:
            return rows
        return [n for n in rows if n.to_role in (AUDIENCE_ALL, caller.role.value)]
