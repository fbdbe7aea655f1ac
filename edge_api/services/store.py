"""Translate store failures into the backend error taxonomy."""
from __future__ import annotations

import logging
from contextlib import contextmanager

from sqlalchemy.exc import SQLAlchemyError

from edge_api.core.errors import BackendReadError, BackendWriteError

logger = logging.getLogger(__name__)


@contextmanager
def reading(what: str):
    try:
        yield
    except SQLAlchemyError as exc:
        logger.exception("Store read failed: %s", what)
        raise BackendReadError(f"Failed to load {what}") from exc


@contextmanager
def writing(what: str):
    try:
        yield
    except SQLAlchemyError as exc:
        logger.exception("Store write failed: %s", what)
        raise BackendWriteError(f"Failed to update {what}") from exc
