from __future__ import annotations

import logging
import re
from typing import Any

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from jobboard.config import Settings, get_settings
from jobboard.core.errors import (
    BadRequestError,
    ConflictError,
    InternalError,
    NotFoundError,
    UnauthorizedError,
)
from jobboard.core.security import create_access_token, hash_password, verify_password
from jobboard.db.models import User
from jobboard.db.repositories import Repository
from jobboard.types import USER_ROLES, Identity, normalize_role

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
MIN_PASSWORD_LENGTH = 6


def public_user(user: User) -> dict[str, Any]:
    return {
        "id": user.id,
        "name": user.name,
        "email": user.email,
        "role": normalize_role(user.role),
    }


class AccountService:
    def __init__(self, session: Session, *, settings: Settings | None = None):
        self.session = session
        self.settings = settings or get_settings()
        self.repo = Repository(session)

    def issue_token(self, user: User) -> str:
        return create_access_token(
            {"id": user.id, "email": user.email, "role": normalize_role(user.role)},
            self.settings,
        )

    def register(
        self,
        *,
        name: str | None,
        email: str | None,
        password: str | None,
        role: str | None,
    ) -> dict[str, Any]:
        name = (name or "").strip()
        email = (email or "").strip()
        password = password or ""
        normalized_role = normalize_role(role)

        if not name or not email or not password or not normalized_role:
            raise BadRequestError("All fields are required")
        if not EMAIL_PATTERN.match(email):
            raise BadRequestError("Invalid email format")
        if len(password) < MIN_PASSWORD_LENGTH:
            raise BadRequestError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters long")
        if normalized_role not in USER_ROLES:
            raise BadRequestError("Role must be jobseeker or employer")

        try:
            if self.repo.get_user_by_email(email) is not None:
                raise ConflictError("Email already registered")
            user = self.repo.create_user(
                name=name,
                email=email,
                password_hash=hash_password(password),
                role=normalized_role,
            )
        except IntegrityError as exc:
            self.session.rollback()
            raise ConflictError("Email already registered") from exc
        except SQLAlchemyError as exc:
            logger.exception("Registration failed for %s", email)
            raise InternalError("Failed to create user account") from exc

        logger.info("Registered user id=%s role=%s", user.id, normalized_role)
        return {"token": self.issue_token(user), "user": public_user(user)}

    def login(self, *, email: str | None, password: str | None) -> dict[str, Any]:
        email = (email or "").strip()
        if not email or not password:
            raise BadRequestError("Email and password are required")

        try:
            user = self.repo.get_user_by_email(email)
        except SQLAlchemyError as exc:
            logger.exception("Login lookup failed for %s", email)
            raise InternalError("Server error occurred during login") from exc

        if user is None or not verify_password(password, user.password):
            raise UnauthorizedError("Invalid email or password")
        return {"token": self.issue_token(user), "user": public_user(user)}

    def profile(self, identity: Identity) -> dict[str, Any]:
        user = self.repo.get_user(identity.id)
        if user is None:
            raise NotFoundError("User not found")
        return public_user(user)

    def verify(self, identity: Identity) -> dict[str, Any]:
        user = self.repo.get_user(identity.id)
        if user is None:
            raise UnauthorizedError("Invalid token")
        return public_user(user)
