"""Error taxonomy shared by services and routers.

Every handler failure is raised as an EdgeError subclass and serialized by the
exception handlers registered in edge_api.app into ``{"error": "..."}``.
"""
from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from edge_api.core.cors import CORS_HEADERS

logger = logging.getLogger(__name__)


class EdgeError(Exception):
    """Base exception for handler failures."""

    status_code = 500

    def __init__(self, message: str | None = None) -> None:
        self.message = message or (self.__doc__ or "error").strip()
        super().__init__(self.message)


class ValidationError(EdgeError):
    """Invalid request."""

    status_code = 400


class AuthenticationError(EdgeError):
    """Not authenticated."""

    status_code = 401


class NotFound(EdgeError):
    """Not found."""

    status_code = 404


class AlreadyCompleted(EdgeError):
    """Transaction already completed."""

    status_code = 409


class BackendError(EdgeError):
    """Backend unavailable."""

    status_code = 500


class BackendReadError(BackendError):
    """Failed to read from the backend."""


class BackendWriteError(BackendError):
    """Failed to write to the backend."""


class ConfigurationError(EdgeError):
    """Service is not configured."""

    status_code = 500


class CardProviderError(EdgeError):
    """Card provider request failed."""

    status_code = 502


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse({"error": message}, status_code=status_code)


async def _edge_error_handler(request: Request, exc: EdgeError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return error_response(exc.status_code, exc.message)


async def _http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return error_response(exc.status_code, str(exc.detail))


async def _validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return error_response(400, "Invalid request body")


async def _unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    # served by ServerErrorMiddleware, outside EdgeCorsMiddleware
    return JSONResponse({"error": "Internal server error"}, status_code=500, headers=CORS_HEADERS)


def install_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(EdgeError, _edge_error_handler)
    app.add_exception_handler(StarletteHTTPException, _http_error_handler)
    app.add_exception_handler(RequestValidationError, _validation_error_handler)
    app.add_exception_handler(Exception, _unhandled_error_handler)
