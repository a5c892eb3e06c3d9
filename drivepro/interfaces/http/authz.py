from fastapi import Depends, Request

from ...domain.entities import User, Role
from ...domain.errors import AuthError, ForbiddenError
from ...infrastructure.repositories import InMemoryStore, get_store
from ...infrastructure.security import parse_user_from_token

BEARER_PREFIX = "Bearer "


def get_current_user(request: Request, store: InMemoryStore = Depends(get_store)) -> User:
    header = request.headers.get("Authorization", "")
    if not header.startswith(BEARER_PREFIX):
        raise AuthError("Missing or invalid Authorization header")

    user = parse_user_from_token(header[len(BEARER_PREFIX):], store.users)
    if user is None:
        raise AuthError("Invalid auth token")
    request.state.user = user
    return user


def require_role(role: Role):
    def dependency(user: User = Depends(get_current_user)) -> User:
        if user.role != role:
            raise ForbiddenError("Forbidden")
        return user
    return dependency


def require_any_role(*roles: Role):
    def dependency(user: User = Depends(get_current_user)) -> User:
        if user.role not in roles:
            raise ForbiddenError("Forbidden")
        return user
    return dependency


require_admin = require_role(Role.ADMIN)
require_staff = require_any_role(Role.ADMIN, Role.INSTRUCTOR)
require_member = require_any_role(Role.ADMIN, Role.INSTRUCTOR, Role.STUDENT)
