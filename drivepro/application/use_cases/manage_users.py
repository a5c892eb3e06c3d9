import uuid

import structlog

from ...domain.entities import User, Role
from ...domain.errors import ValidationError, NotFoundError, ConflictError
from ..dto import NewUserInput, UserChanges
from ..interfaces import IStore

logger = structlog.get_logger()

MANAGED_ROLES = (Role.STUDENT, Role.INSTRUCTOR)


def parse_managed_role(value: str) -> Role:
    """Only students and instructors can be created or re-roled by an admin."""
    for role in MANAGED_ROLES:
        if role.value == value:
            return role
    raise ValidationError("role must be student or instructor")


class ListUsers:
    def __init__(self, store: IStore):
        self.store = store

    def execute(self, role: str | None = None) -> list[User]:
        with self.store.atomic():
            rows = [u for u in self.store.users.list() if u.role != Role.ADMIN]
        if role:
            rows = [u for u in rows if u.role.value == role]
        return rows


class CreateUser:
    def __init__(self, store: IStore, default_password: str):
        self.store = store
        self.default_password = default_password

    def execute(self, data: NewUserInput) -> User:
        if not data.name or not data.email or not data.role:
            raise ValidationError("name, email and role are required")
        role = parse_managed_role(data.role)

        with self.store.atomic():
            if self.store.users.get_by_email(data.email):
                raise ConflictError("Email already in use")
            user = User(
                id=str(uuid.uuid4()),
                name=data.name,
                email=data.email,
                password=data.password or self.default_password,
                role=role,
                is_active=bool(data.is_active),
            )
            self.store.users.add(user)

        logger.info("user_created", user_id=user.id, role=role.value)
        return user


class UpdateUser:
    def __init__(self, store: IStore):
        self.store = store

    def execute(self, user_id: str, changes: UserChanges) -> User:
        with self.store.atomic():
            user = self.store.users.get(user_id)
            if user is None or user.role == Role.ADMIN:
                raise NotFoundError("User not found")

            if changes.email and changes.email != user.email:
                other = self.store.users.get_by_email(changes.email)
                if other is not None and other.id != user.id:
                    raise ConflictError("Email already in use")

            # promotion to admin is silently ignored
            new_role = None
            if changes.role is not None and changes.role != Role.ADMIN.value:
                new_role = parse_managed_role(changes.role)

            if changes.name is not None:
                user.name = changes.name
            if changes.email is not None:
                user.email = changes.email
            if new_role is not None:
                user.role = new_role
            if changes.is_active is not None:
                user.is_active = bool(changes.is_active)
        return user


class DeleteUser:
    def __init__(self, store: IStore):
        self.store = store

    def execute(self, user_id: str) -> int:
        """Removes the user and every lesson they take part in; returns the lesson count."""
        with self.store.atomic():
            user = self.store.users.get(user_id)
            if user is None or user.role == Role.ADMIN:
                raise NotFoundError("User not found")
            removed = self.store.lessons.remove_for_user(user_id)
            self.store.users.remove(user_id)

        logger.info("user_deleted", user_id=user_id, lessons_removed=removed)
        return removed
