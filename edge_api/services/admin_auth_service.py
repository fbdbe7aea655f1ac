"""Admin login, logout and per-request session validation.

Sessions are opaque random tokens stored server side with an expiry. Every
admin request presents the token as a bearer credential and is checked against
the store; nothing the client holds grants access on its own.
"""
from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone

from edge_api.core.config import get_settings
from edge_api.core.errors import AuthenticationError, ValidationError
from edge_api.core.security import verify_password
from edge_api.repositories.sql_repository import SQLRepository
from edge_api.services.store import reading, writing

logger = logging.getLogger(__name__)


def _aware(value: datetime | None) -> datetime | None:
    # SQLite hands back naive datetimes; they were written as UTC
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=timezone.utc)


class AdminAuthService:
    def __init__(self, repository: SQLRepository | None = None) -> None:
        self.repository = repository or SQLRepository()

    def _now(self) -> datetime:
        return datetime.now(timezone.utc)

    def _allowed(self, email: str) -> bool:
        allow = get_settings().admin_emails
        return not allow or email.lower() in allow

    def login(self, email, password) -> tuple[str, datetime]:
        email = (email or "").strip().lower() if isinstance(email, str) else ""
        if not email or not isinstance(password, str) or not password:
            raise ValidationError("email and password required")
        with reading("admin user"):
            user = self.repository.get_admin_user(email)
        if not user or not user.is_active or not verify_password(password, user.password_hash):
            logger.warning("Admin login rejected for %s", email)
            raise AuthenticationError("Invalid credentials")
        if not self._allowed(email):
            logger.warning("Admin login for %s not in allow-list", email)
            raise AuthenticationError("Invalid credentials")
        expires_at = self._now() + timedelta(seconds=get_settings().admin_session_ttl_seconds)
        with writing("admin session"):
            token = self.repository.create_admin_session(email, expires_at)
        logger.info("Admin %s logged in", email)
        return token, expires_at

    def authenticate(self, token: str | None) -> str:
        """Return the admin e-mail bound to ``token`` or raise AuthenticationError."""
        if not token:
            raise AuthenticationError("Not authenticated")
        with reading("admin session"):
            sess = self.repository.get_admin_session(token)
        if not sess:
            raise AuthenticationError("Not authenticated")
        if _aware(sess.expires_at) < self._now():
            with writing("admin session"):
                self.repository.delete_admin_session(token)
            raise AuthenticationError("Session expired")
        with reading("admin user"):
            user = self.repository.get_admin_user(sess.admin_email)
        if not user or not user.is_active or not self._allowed(user.email):
            raise AuthenticationError("Not authenticated")
        return user.email

    def logout(self, token: str | None) -> None:
        if not token:
            return
        with writing("admin session"):
            self.repository.delete_admin_session(token)
