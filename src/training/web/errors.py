"""Mapping of domain errors to HTTP responses.

This is the only place that knows which status code a domain error gets.
Every error body is {"message": ...}, plus "errors" for validation.
"""

from __future__ import annotations

import structlog
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from training.core.errors import (
    DuplicateEmailError,
    InvalidCredentialsError,
    InvalidTokenError,
    MissingTokenError,
    NotFoundError,
    TrainingError,
    ValidationError,
)
from training.web.schemas import ErrorResponse, FieldError

logger = structlog.get_logger(__name__)

# Checked in order; first isinstance match wins
STATUS_BY_ERROR: list[tuple[type[TrainingError], int]] = [
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (DuplicateEmailError, status.HTTP_400_BAD_REQUEST),
    (InvalidCredentialsError, status.HTTP_400_BAD_REQUEST),
    (MissingTokenError, status.HTTP_401_UNAUTHORIZED),
    (InvalidTokenError, status.HTTP_403_FORBIDDEN),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
]

GENERIC_MESSAGE = "Server error"


def status_for(exc: TrainingError) -> int:
    for error_type, code in STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def _error_response(code: int, body: ErrorResponse) -> JSONResponse:
    return JSONResponse(status_code=code, content=body.model_dump(exclude_none=True))


async def training_error_handler(request: Request, exc: TrainingError) -> JSONResponse:
    code = status_for(exc)

    if code == status.HTTP_500_INTERNAL_SERVER_ERROR:
        logger.error(
            "unhandled_domain_error",
            path=request.url.path,
            error_type=type(exc).__name__,
            error=str(exc),
        )
        return _error_response(code, ErrorResponse(message=GENERIC_MESSAGE))

    if isinstance(exc, NotFoundError):
        logger.info("not_found", path=request.url.path, error_type=type(exc).__name__)

    errors = None
    if isinstance(exc, ValidationError):
        errors = [FieldError(**e) for e in exc.errors]

    return _error_response(code, ErrorResponse(message=exc.message, errors=errors))


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report malformed request bodies as 400 with field-level detail."""
    errors = []
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ()) if part != "body"]
        errors.append(FieldError(field=".".join(loc) or "body", message=err.get("msg", "")))
    return _error_response(
        status.HTTP_400_BAD_REQUEST,
        ErrorResponse(message=ValidationError.message, errors=errors),
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("unhandled_error", path=request.url.path)
    return _error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR, ErrorResponse(message=GENERIC_MESSAGE)
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(TrainingError, training_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
