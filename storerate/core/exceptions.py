"""
Domain error taxonomy and global exception handlers.

Handlers translate every failure into the ``{"detail", "success"}``
envelope and keep stack traces out of responses.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from starlette.exceptions import HTTPException

logger = logging.getLogger(__name__)


class StoreRatingError(Exception):
    """Base class for errors raised by domain operations."""

    status_code = 500
    default_detail = "Internal server error"
    headers: dict[str, str] | None = None

    def __init__(self, detail: str | None = None) -> None:
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class ValidationError(StoreRatingError):
    status_code = 400
    default_detail = "Invalid input"


class InvalidRating(ValidationError):
    default_detail = "Rating must be between 1 and 5"


class Unauthenticated(StoreRatingError):
    status_code = 401
    default_detail = "Access token required"
    headers = {"WWW-Authenticate": "Bearer"}


class InvalidCredentials(StoreRatingError):
    status_code = 401
    default_detail = "Invalid credentials"


class InvalidToken(StoreRatingError):
    status_code = 403
    default_detail = "Invalid token"


class Forbidden(StoreRatingError):
    status_code = 403
    default_detail = "Insufficient permissions"


class NotFound(StoreRatingError):
    status_code = 404
    default_detail = "Not found"


class StoreNotFound(NotFound):
    default_detail = "Store not found"


class Conflict(StoreRatingError):
    # Existing clients treat a duplicate email as a plain 400.
    status_code = 400
    default_detail = "Email already registered"


class StorageError(StoreRatingError):
    status_code = 500
    default_detail = "Internal database error"


def _envelope(status_code: int, detail: str, **extra: object) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"detail": detail, **extra, "success": False},
    )


async def _domain_error_handler(_request: Request, exc: StoreRatingError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("Domain operation failed: %s", exc, exc_info=True)
    # 5xx details stay in the log
    detail = exc.default_detail if exc.status_code >= 500 else exc.detail
    response = _envelope(exc.status_code, detail)
    if exc.headers:
        response.headers.update(exc.headers)
    return response


async def _http_exception_handler(_request: Request, exc: HTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail, "success": False},
        headers=exc.headers,
    )


async def _request_validation_handler(
    _request: Request, exc: RequestValidationError
) -> JSONResponse:
    errors = []
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ()) if part not in ("body", "query", "path")]
        message = str(err.get("msg", "Invalid value"))
        if message.startswith("Value error, "):
            message = message[len("Value error, "):]
        errors.append({"field": ".".join(loc) or None, "message": message})
    return _envelope(400, "Validation failed", errors=errors)


async def _integrity_error_handler(_request: Request, exc: IntegrityError) -> JSONResponse:
    logger.error("Database integrity error: %s", exc, exc_info=True)
    return _envelope(Conflict.status_code, "Database constraint violation")


async def _sqlalchemy_error_handler(_request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.error("Database error: %s", exc, exc_info=True)
    return _envelope(500, "Internal database error")


async def _generic_exception_handler(_request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled exception: %s", exc)
    return _envelope(500, "Internal server error")


def register_exception_handlers(app: FastAPI) -> None:
    """Attach all exception handlers to the FastAPI app."""
    app.add_exception_handler(StoreRatingError, _domain_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(HTTPException, _http_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, _request_validation_handler)  # type: ignore[arg-type]
    app.add_exception_handler(IntegrityError, _integrity_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(SQLAlchemyError, _sqlalchemy_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, _generic_exception_handler)
