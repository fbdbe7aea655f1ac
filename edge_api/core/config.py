"""
Configuration helpers for the admin edge API.

Routers and services read a Settings instance instead of fetching os.environ
directly, so tests can swap the environment and call get_settings.cache_clear().
"""

from dataclasses import dataclass
from functools import lru_cache
import os


@dataclass(frozen=True)
class Settings:
    """Typed view of environment variables."""

    app_env: str
    database_url: str
    log_level: str
    admin_session_ttl_seconds: int
    admin_emails: frozenset
    card_provider_mode: str
    card_provider_client_id: str
    card_provider_client_secret: str

    @property
    def card_provider_configured(self) -> bool:
        return bool(self.card_provider_client_id and self.card_provider_client_secret)


@lru_cache
def get_settings() -> Settings:
    """Read the current environment and build a Settings instance."""
    def _int(value: str, default: int = 0) -> int:
        try:
            return int(value)
        except (TypeError, ValueError):
            return default

    def _csv(value: str | None) -> frozenset:
        return frozenset(x.strip().lower() for x in (value or "").split(",") if x.strip())

    return Settings(
        app_env=(os.getenv("APP_ENV") or "dev").lower(),
        database_url=os.getenv("DATABASE_URL", ""),
        log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
        admin_session_ttl_seconds=max(
            600, _int(os.getenv("ADMIN_SESSION_TTL_SECONDS", "43200"), 43200)
        ),
        admin_emails=_csv(os.getenv("ADMIN_EMAILS")),
        card_provider_mode=(os.getenv("CARD_PROVIDER_MODE") or "demo").strip().lower(),
        card_provider_client_id=(os.getenv("CARD_PROVIDER_CLIENT_ID") or "").strip(),
        card_provider_client_secret=(os.getenv("CARD_PROVIDER_CLIENT_SECRET") or "").strip(),
    )
