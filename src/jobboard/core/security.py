from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import Any

import jwt
from passlib.context import CryptContext

from jobboard.config import Settings, get_settings
from jobboard.core.errors import UnauthorizedError

pwd_context = CryptContext(schemes=["pbkdf2_sha512"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return pwd_context.verify(password, password_hash)
    except (ValueError, TypeError):
        # unrecognized hash format
        return False


def create_access_token(claims: dict[str, Any], settings: Settings | None = None) -> str:
    settings = settings or get_settings()
    to_encode = dict(claims)
    expire = datetime.now(UTC) + timedelta(days=settings.jwt_expire_days)
    to_encode["exp"] = int(expire.timestamp())
    return jwt.encode(to_encode, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str, settings: Settings | None = None) -> dict[str, Any]:
    settings = settings or get_settings()
    try:
        return jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except jwt.ExpiredSignatureError as exc:
        raise UnauthorizedError("Token has expired") from exc
    except jwt.InvalidTokenError as exc:
        raise UnauthorizedError("Invalid token") from exc
