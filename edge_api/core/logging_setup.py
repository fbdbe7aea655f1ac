"""Logging setup applied once when the application is created."""
from __future__ import annotations

import logging

from edge_api.core.config import get_settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: str | None = None) -> None:
    settings = get_settings()
    resolved = getattr(logging, (level or settings.log_level).upper(), logging.INFO)
    logging.basicConfig(level=resolved, format=LOG_FORMAT)
    logging.getLogger("edge_api").setLevel(resolved)
    # SQL echo is too noisy outside debugging
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
