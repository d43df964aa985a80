"""
Error codes, API exceptions and the JSON error envelope.

Every failure leaves the API as ``{"success": false, "code": ...}``
with an HTTP status matching its class.  Services raise one of the
``ApiError`` subclasses below; the handlers registered by
``register_exception_handlers`` render them.  Unexpected exceptions
are logged with their traceback and returned as an opaque
``INTERNAL_SERVER_ERROR``.
"""

import logging
from enum import Enum
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import settings
from .logging_config import level_for_status

logger = logging.getLogger(__name__)


class ErrorCode(str, Enum):
    """Machine readable codes returned in error envelopes."""

    AUTH_TOKEN_MISSING = "AUTH_TOKEN_MISSING"
    AUTH_TOKEN_INVALID = "AUTH_TOKEN_INVALID"
    AUTH_TENANT_CONTEXT_REQUIRED = "AUTH_TENANT_CONTEXT_REQUIRED"
    AUTH_INSUFFICIENT_PERMISSIONS = "AUTH_INSUFFICIENT_PERMISSIONS"

    EVENT_NOT_FOUND = "EVENT_NOT_FOUND"
    EVENT_NAME_REQUIRED = "EVENT_NAME_REQUIRED"
    EVENT_LOCATION_REQUIRED = "EVENT_LOCATION_REQUIRED"
    EVENT_START_DATE_REQUIRED = "EVENT_START_DATE_REQUIRED"
    EVENT_END_DATE_REQUIRED = "EVENT_END_DATE_REQUIRED"
    EVENT_INVALID_DATES = "EVENT_INVALID_DATES"
    EVENT_INVALID_CAPACITY = "EVENT_INVALID_CAPACITY"
    EVENT_CANNOT_DELETE_ACTIVE = "EVENT_CANNOT_DELETE_ACTIVE"

    NOT_FOUND = "NOT_FOUND"
    METHOD_NOT_ALLOWED = "METHOD_NOT_ALLOWED"
    BAD_REQUEST = "BAD_REQUEST"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INTERNAL_SERVER_ERROR = "INTERNAL_SERVER_ERROR"


class ApiError(Exception):
    """Base class for errors that are surfaced to the caller."""

    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(self, code: ErrorCode, message: Optional[str] = None) -> None:
        super().__init__(message or code.value)
        self.code = code
        self.message = message


class BadRequestError(ApiError):
    status_code = status.HTTP_400_BAD_REQUEST


class UnauthorizedError(ApiError):
    status_code = status.HTTP_401_UNAUTHORIZED


class ForbiddenError(ApiError):
    status_code = status.HTTP_403_FORBIDDEN


class NotFoundError(ApiError):
    status_code = status.HTTP_404_NOT_FOUND


def error_envelope(code: ErrorCode, message: Optional[str] = None, details: Any = None) -> Dict[str, Any]:
    """Build the error body shared by all failing responses."""
    body: Dict[str, Any] = {"success": False, "code": code.value}
    if message:
        body["message"] = message
    if details is not None:
        body["details"] = details
    return body


def send_error(
    status_code: int,
    code: ErrorCode,
    message: Optional[str] = None,
    details: Any = None,
    headers: Optional[Dict[str, str]] = None,
) -> JSONResponse:
    """Log the failure at a level matching its class and render it."""
    level = level_for_status(status_code)
    if level is not None:
        logger.log(level, "Request failed: status=%s code=%s", status_code, code.value)
    return JSONResponse(status_code=status_code, content=error_envelope(code, message, details), headers=headers)


async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    return send_error(exc.status_code, exc.code, exc.message)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    # Pydantic messages are safe to return; they only describe the payload.
    details = [
        {"field": ".".join(str(part) for part in err.get("loc", ())), "message": err.get("msg")}
        for err in exc.errors()
    ]
    return send_error(
        status.HTTP_400_BAD_REQUEST,
        ErrorCode.VALIDATION_ERROR,
        "Request payload is invalid",
        details,
    )


# Errors raised by the framework itself (unknown route, wrong method,
# unparsable JSON body).
HTTP_STATUS_CODES = {
    status.HTTP_400_BAD_REQUEST: ErrorCode.BAD_REQUEST,
    status.HTTP_401_UNAUTHORIZED: ErrorCode.AUTH_TOKEN_INVALID,
    status.HTTP_403_FORBIDDEN: ErrorCode.AUTH_INSUFFICIENT_PERMISSIONS,
    status.HTTP_404_NOT_FOUND: ErrorCode.NOT_FOUND,
    status.HTTP_405_METHOD_NOT_ALLOWED: ErrorCode.METHOD_NOT_ALLOWED,
}


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code >= 500:
        code = ErrorCode.INTERNAL_SERVER_ERROR
    else:
        code = HTTP_STATUS_CODES.get(exc.status_code, ErrorCode.BAD_REQUEST)
    message = exc.detail if isinstance(exc.detail, str) else None
    return send_error(exc.status_code, code, message, headers=getattr(exc, "headers", None))


async def internal_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error while processing %s %s", request.method, request.url.path, exc_info=exc)
    details = str(exc) if settings.debug else None
    return send_error(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        ErrorCode.INTERNAL_SERVER_ERROR,
        "Internal server error",
        details,
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the envelope-rendering handlers to ``app``."""
    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, internal_error_handler)
