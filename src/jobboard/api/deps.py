from __future__ import annotations

from collections.abc import Generator

from fastapi import Request
from sqlalchemy.orm import Session

from jobboard.core.errors import ForbiddenError, UnauthorizedError
from jobboard.core.security import decode_access_token
from jobboard.db.session import get_db_session
from jobboard.types import Identity, normalize_role


def get_db() -> Generator[Session, None, None]:
    yield from get_db_session()


def get_identity(request: Request) -> Identity:
    """Resolve the caller from the Authorization header.

    Both `Bearer <token>` and a bare token are accepted. A missing header is a
    403, an unverifiable token a 401.
    """
    header = request.headers.get("Authorization", "")
    token = header.removeprefix("Bearer").strip()
    if not token:
        raise ForbiddenError("No token provided")

    payload = decode_access_token(token)
    user_id = payload.get("id") or payload.get("sub")
    role = payload.get("role")
    if not user_id or not role:
        raise UnauthorizedError("Token claims are incomplete")

    try:
        user_id = int(user_id)
    except (TypeError, ValueError) as exc:
        raise UnauthorizedError("Token claims are incomplete") from exc

    return Identity(id=user_id, role=normalize_role(role), email=payload.get("email") or "")
