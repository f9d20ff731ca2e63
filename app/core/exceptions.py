"""Custom exceptions and exception handlers."""

import logging
import traceback
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.config import get_settings
from app.constants import MSG_ROUTE_NOT_FOUND

logger = logging.getLogger(__name__)


class AppException(Exception):
    """Base exception for feedback and chat service errors."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, details: Dict[str, Any] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class ValidationError(AppException):
    """Missing or malformed input, or an invalid enumerated value."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str, fields: Optional[List[str]] = None, details: Dict[str, Any] = None):
        self.fields = fields or []
        details = dict(details or {})
        if self.fields:
            details.setdefault("fields", self.fields)
        super().__init__(message, details)


class NotFoundError(AppException):
    """Identifier does not resolve to a stored record."""

    status_code = status.HTTP_404_NOT_FOUND


class PersistenceError(AppException):
    """Underlying storage operation failed."""

    def __init__(self, message: str, error: str = "", details: Dict[str, Any] = None):
        self.error = error
        super().__init__(message, details)


class NotificationError(AppException):
    """Outbound email delivery failed. Never surfaced to HTTP callers."""


def _envelope(message: str, **extra: Any) -> Dict[str, Any]:
    content = {"success": False, "message": message}
    content.update({key: value for key, value in extra.items() if value is not None})
    return content


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """Handle service-level exceptions."""
    if exc.status_code >= 500:
        logger.error(f"{exc.__class__.__name__} on {request.url}: {exc.message}", extra=exc.details)
    else:
        logger.warning(f"{exc.__class__.__name__} on {request.url}: {exc.message}")

    return JSONResponse(
        status_code=exc.status_code,
        content=_envelope(
            exc.message,
            error=getattr(exc, "error", None) or None,
            details=jsonable_encoder(exc.details) if exc.details else None,
        ),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Handle request body/query validation errors as client errors."""
    logger.warning(f"Validation error on {request.url}: {exc.errors()}")

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=_envelope(
            "Invalid request",
            details=jsonable_encoder(exc.errors()),
        ),
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Handle HTTP exceptions, including unmatched routes."""
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        message = MSG_ROUTE_NOT_FOUND if exc.detail in (None, "Not Found") else exc.detail
    else:
        message = exc.detail
        logger.warning(f"HTTP error {exc.status_code} on {request.url}: {exc.detail}")

    return JSONResponse(
        status_code=exc.status_code,
        content=_envelope(str(message)),
        headers=getattr(exc, "headers", None),
    )


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle everything else with a generic 500."""
    logger.error(f"Unexpected error on {request.url}: {str(exc)}", exc_info=True)

    stack = None
    if get_settings().include_stack_traces:
        stack = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_envelope("Internal server error", stack=stack),
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """Setup exception handlers for the application."""
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)
