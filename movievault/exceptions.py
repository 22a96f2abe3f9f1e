
from contextlib import contextmanager
from typing import Any, Dict, List, Optional
import logging

import asyncpg
import redis.exceptions
from fastapi import Request
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

# Failures of the storage layer that are reported to clients as a 500
STORAGE_ERRORS = (
    asyncpg.PostgresError,
    asyncpg.InterfaceError,
    redis.exceptions.RedisError,
    OSError,
)


class MovieVaultException(Exception):
    """Base exception for the application"""
    status_code = 500
    message = "Internal server error"

    def __init__(self, message: Optional[str] = None, headers: Optional[Dict[str, str]] = None):
        self.message = message or self.message
        self.headers = headers
        super().__init__(self.message)


class ValidationError(MovieVaultException):
    status_code = 400
    message = "Invalid request"

    def __init__(self, message: Optional[str] = None, details: Optional[List[Dict[str, Any]]] = None):
        super().__init__(message)
        self.details = details or []


class ConflictError(MovieVaultException):
    status_code = 400
    message = "User with this email or username already exists"


class Unauthenticated(MovieVaultException):
    status_code = 401
    message = "Authentication required"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message, headers={"WWW-Authenticate": "Bearer"})


class InvalidCredentials(MovieVaultException):
    # Same message for unknown user and wrong password
    status_code = 401
    message = "Invalid credentials"

    def __init__(self):
        super().__init__(headers={"WWW-Authenticate": "Bearer"})


class NotFoundOrForbidden(MovieVaultException):
    status_code = 404
    message = "Not found or you do not have permission to access it"


class InternalError(MovieVaultException):
    status_code = 500
    message = "Internal server error"


@contextmanager
def storage_errors(action: str):
    """
    Translate persistence-layer failures into InternalError.

    The original exception is logged here and chained, never sent to the client.
    """
    try:
        yield
    except STORAGE_ERRORS as exc:
        logger.error(f"Storage failure while {action}", exc_info=exc)
        raise InternalError(f"Server error while {action}") from exc


def _envelope(request: Request, message: str, **extra) -> Dict[str, Any]:
    return {
        "success": False,
        "message": message,
        "request_id": getattr(request.state, "request_id", "unknown"),
        **extra,
    }


def _describe_error(error: Dict[str, Any]) -> str:
    ctx = error.get("ctx") or {}
    if error.get("type") == "value_error" and "error" in ctx:
        return str(ctx["error"])
    field = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
    return f"{field}: {error.get('msg')}" if field else str(error.get("msg"))


async def app_exception_handler(request: Request, exc: MovieVaultException):
    """
    Render domain exceptions in the standard response envelope.
    """
    request_id = getattr(request.state, "request_id", "unknown")
    if exc.status_code >= 500:
        logger.error(exc.message, extra={"request_id": request_id, "path": request.url.path})
    else:
        logger.info(exc.message, extra={"request_id": request_id, "path": request.url.path})

    extra = {}
    if isinstance(exc, ValidationError) and exc.details:
        extra["details"] = exc.details

    return JSONResponse(
        status_code=exc.status_code,
        content=_envelope(request, exc.message, **extra),
        headers=exc.headers,
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """
    Handle Pydantic validation errors as a 400 with a readable message.
    """
    errors = exc.errors()
    details = [
        {"loc": list(error.get("loc", ())), "msg": error.get("msg"), "type": error.get("type")}
        for error in errors
    ]
    message = "; ".join(_describe_error(error) for error in errors) or ValidationError.message
    return await app_exception_handler(request, ValidationError(message, details))


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """
    Handle standard HTTPExceptions (unknown routes, wrong methods).
    """
    request_id = getattr(request.state, "request_id", "unknown")

    if exc.status_code >= 500:
        logger.error(f"HTTP {exc.status_code} error", extra={"request_id": request_id})
    else:
        logger.info(f"HTTP {exc.status_code} error", extra={"request_id": request_id})

    return JSONResponse(
        status_code=exc.status_code,
        content=_envelope(request, str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


async def rate_limit_exception_handler(request: Request, exc: RateLimitExceeded):
    return JSONResponse(
        status_code=429,
        content=_envelope(request, f"Too many requests: {exc.detail}"),
    )


async def global_exception_handler(request: Request, exc: Exception):
    """
    Catch-all exception handler.
    Returns 500 JSON response and hides internal error details.
    """
    request_id = getattr(request.state, "request_id", "unknown")

    logger.error(
        "Unhandled exception occurred",
        extra={"request_id": request_id, "path": request.url.path},
        exc_info=exc
    )

    return JSONResponse(
        status_code=500,
        content=_envelope(request, "An unexpected error occurred. Please contact support."),
    )
