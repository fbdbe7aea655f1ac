"""Platform settings and feature flag use cases."""

from __future__ import annotations

import logging

from edge_api.core.errors import ValidationError
from edge_api.db.models import FeatureFlag
from edge_api.repositories.sql_repository import SQLRepository
from edge_api.services.store import reading, writing

logger = logging.getLogger(__name__)


def flag_to_dict(flag: FeatureFlag) -> dict:
    return {
        "id": flag.id,
        "feature_name": flag.feature_name,
        "enabled": bool(flag.enabled),
        "updated_by": flag.updated_by,
        "updated_at": flag.updated_at.isoformat() if flag.updated_at else None,
    }


class SettingsService:
    """Read and write the key/value platform settings."""

    def __init__(self, repository: SQLRepository | None = None) -> None:
        self.repository = repository or SQLRepository()

    def get_all(self) -> dict:
        with reading("platform settings"):
            rows = self.repository.list_settings()
        return {row.key: row.value for row in rows}

    def update(self, payload, *, actor: str | None = None) -> list[str]:
        if not isinstance(payload, dict):
            raise ValidationError("Settings payload must be a JSON object")
        for key in payload:
            if not isinstance(key, str) or not key.strip():
                raise ValidationError("Setting keys must be non-empty strings")
        if not payload:
            return []
        with writing("platform settings"):
            updated = self.repository.upsert_settings(payload, actor=actor)
        logger.info("Settings updated by %s: %s", actor, ", ".join(updated))
        return updated


class FeatureFlagService:
    """List and toggle feature flags."""

    def __init__(self, repository: SQLRepository | None = None) -> None:
        self.repository = repository or SQLRepository()

    def list_flags(self) -> list[dict]:
        with reading("feature flags"):
            flags = self.repository.list_feature_flags()
        return [flag_to_dict(flag) for flag in flags]

    def set_flag(self, feature_name, enabled, *, actor: str | None = None) -> dict:
        name = (feature_name or "").strip() if isinstance(feature_name, str) else ""
        if not name:
            raise ValidationError("Missing feature_name")
        if not isinstance(enabled, bool):
            raise ValidationError("enabled must be a boolean")
        with writing("feature flag"):
            flag = self.repository.upsert_feature_flag(name, enabled, actor=actor)
        logger.info("Feature flag %s set to %s by %s", name, enabled, actor)
        return flag_to_dict(flag)
