"""Error Handlers — map every failure to the {"error": {...}} envelope.

Invariants:
    - CityInfoError → its own status, headers (e.g. WWW-Authenticate) and to_response()
    - RequestValidationError (bad path, query or body) → 400 VALIDATION_ERROR with details
    - Anything else → 500 INTERNAL_ERROR; the message never reaches the client

Design Decisions:
    - Three layers registered in order: domain, validation, catch-all
    - Domain errors logged at WARNING below 500, ERROR at 500 and above,
      with the city / point-of-interest ids from the error context as extra fields
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from cityinfo.core.errors import (
    CityInfoError,
    ErrorCategory,
    ErrorSeverity,
    validation_details,
)

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(CityInfoError, cityinfo_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)


async def cityinfo_error_handler(request: Request, exc: CityInfoError) -> JSONResponse:
    level = logging.ERROR if exc.http_status >= 500 else logging.WARNING
    logger.log(
        level,
        f"{exc.code} on {request.method} {request.url.path}: {exc.message}",
        extra={
            "error_code": exc.code,
            "path": request.url.path,
            "city_id": exc.context.city_id,
            "point_of_interest_id": exc.context.point_of_interest_id,
        },
    )
    return JSONResponse(
        status_code=exc.http_status,
        content=exc.to_response(),
        headers=exc.headers,
    )


async def request_validation_handler(
    request: Request, exc: RequestValidationError,
) -> JSONResponse:
    details = validation_details(exc.errors())
    logger.warning(
        f"Rejected {request.method} {request.url.path}: "
        + "; ".join(f"{d['field']}: {d['message']}" for d in details),
        extra={"error_code": "VALIDATION_ERROR", "path": request.url.path},
    )
    return _envelope(
        status.HTTP_400_BAD_REQUEST,
        "VALIDATION_ERROR", "Invalid request data",
        ErrorCategory.VALIDATION, ErrorSeverity.ERROR,
        details=details,
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        f"Unhandled {type(exc).__name__} on {request.method} {request.url.path}",
        exc_info=exc,
        extra={"error_code": "INTERNAL_ERROR", "path": request.url.path},
    )
    return _envelope(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "INTERNAL_ERROR", "An unexpected error occurred",
        ErrorCategory.INTERNAL, ErrorSeverity.CRITICAL,
    )


def _envelope(
    status_code: int,
    code: str,
    message: str,
    category: ErrorCategory,
    severity: ErrorSeverity,
    details: list[dict[str, str]] | None = None,
) -> JSONResponse:
    error = {
        "code": code,
        "message": message,
        "category": category.value,
        "severity": severity.value,
    }
    if details is not None:
        error["details"] = details
    return JSONResponse(status_code=status_code, content={"error": error})
