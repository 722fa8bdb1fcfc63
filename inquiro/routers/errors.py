"""Error-to-HTTP mapping shared by every router.

Services raise ``InquiroError`` subclasses; this module is the single place
that turns them into status codes and the ``{success, data, error, message}``
envelope.
"""
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from inquiro.services.ai import AIServiceUnavailableError, SurveyGenerationError
from inquiro.services.errors import (
    AnonymousNotAllowedError,
    ForbiddenError,
    InquiroError,
    InvalidStateError,
    NotFoundError,
    TokenGoneError,
    UnauthorizedError,
)

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal server error"

# Checked in order; the first matching class wins.
ERROR_STATUS_CODES: tuple[tuple[type[InquiroError], int], ...] = (
    (UnauthorizedError, 401),
    (ForbiddenError, 403),
    (AnonymousNotAllowedError, 403),
    (NotFoundError, 404),
    (TokenGoneError, 410),
    (InvalidStateError, 400),
    (SurveyGenerationError, 502),
    (AIServiceUnavailableError, 503),
)


def status_code_for(exc: InquiroError) -> int:
    for error_class, status_code in ERROR_STATUS_CODES:
        if isinstance(exc, error_class):
            return status_code
    return 400


def error_response(status_code: int, error: str, **extra) -> JSONResponse:
    content = {"success": False, "data": None, "error": error, "message": None}
    content.update(extra)
    return JSONResponse(status_code=status_code, content=content)


async def inquiro_error_handler(request: Request, exc: InquiroError) -> JSONResponse:
    status_code = status_code_for(exc)
    if status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    else:
        logger.info(f"{request.method} {request.url.path} -> {status_code}: {exc.message}")
    return error_response(status_code, exc.message)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "data": None, "error": str(exc.detail), "message": None},
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Handle Pydantic validation errors with user-friendly messages."""
    logger.warning(f"Validation error on {request.url.path}: {exc.errors()}")

    errors = []
    for error in exc.errors():
        loc = error.get("loc", [])
        msg = error.get("msg", "Validation error")
        error_type = error.get("type", "unknown")

        # Build a readable error message
        field_path = " -> ".join(str(x) for x in loc[1:]) if len(loc) > 1 else "unknown field"
        errors.append({
            "field": field_path,
            "message": msg,
            "type": error_type
        })

    return error_response(422, "Request validation failed", errors=errors)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=exc)
    return error_response(500, INTERNAL_ERROR_MESSAGE)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(InquiroError, inquiro_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
