import json

import structlog
from jose import jwt, JWTError
from jose.utils import base64url_decode, base64url_encode

from ..config import settings
from ..domain.entities import User
from ..application.interfaces import IUserRepository

logger = structlog.get_logger()

UNSIGNED_HEADER = {"alg": "none", "typ": "JWT"}


def _encode_segment(data: dict) -> str:
    return base64url_encode(json.dumps(data, separators=(",", ":")).encode("utf-8")).decode("ascii")


def _decode_segment(segment: str) -> dict:
    data = json.loads(base64url_decode(segment.encode("ascii")))
    if not isinstance(data, dict):
        raise ValueError("segment is not a JSON object")
    return data


def token_claims(user: User) -> dict:
    return {"id": user.id, "name": user.name, "email": user.email, "role": user.role.value}


def create_access_token(user: User) -> str:
    """Issue a token carrying the user's identity snapshot.

    Signed tokens are ordinary HS256 JWTs. With signing disabled the token keeps
    the same three-part shape but the signature segment is empty, so anyone who
    knows a user id can forge one.
    """
    claims = token_claims(user)
    if settings.TOKEN_SIGNING_ENABLED:
        return jwt.encode(claims, settings.SECRET_KEY, algorithm=settings.JWT_ALGORITHM)
    return f"{_encode_segment(UNSIGNED_HEADER)}.{_encode_segment(claims)}."


def decode_token(token: str) -> dict:
    """Returns the claims of a token or raises JWTError."""
    parts = token.split(".")
    if len(parts) < 2:
        raise JWTError(f"Invalid format, {len(parts)} segment(s)")
    # deeply nested JSON exhausts the parser's recursion limit, jose only wraps ValueError
    try:
        if settings.TOKEN_SIGNING_ENABLED:
            return jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
        return _decode_segment(parts[1])
    except RecursionError as e:
        raise JWTError("Undecodable token: nesting too deep") from e
    except ValueError as e:
        raise JWTError(f"Undecodable payload: {e}") from e


def parse_user_from_token(token: str | None, users: IUserRepository) -> User | None:
    if not token:
        logger.warning("token_parse_failed", reason="format", error="empty token")
        return None
    try:
        claims = decode_token(token)
    except JWTError as e:
        logger.warning("token_parse_failed", reason="decode", error=str(e))
        return None

    user_id = claims.get("id")
    user = users.get(user_id) if isinstance(user_id, str) else None
    if user is None:
        logger.warning("token_parse_failed", reason="unknown_user", user_id=user_id)
    return user
