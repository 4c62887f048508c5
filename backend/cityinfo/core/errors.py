"""Error Hierarchy — every failure the API reports, with its HTTP status and envelope.

Invariants:
    - Each error carries code, category, severity and the city / point-of-interest
      ids it concerns (ErrorContext)
    - 4xx errors describe caller mistakes; 5xx errors (DatabaseError) are CRITICAL
    - to_response() is the only shape clients see: {"error": {...}}
    - Messages name resources by type and id, never by driver or SQL detail

Design Decisions:
    - One base class so a single FastAPI handler renders every domain failure
    - Errors may carry response headers (WWW-Authenticate on 401)
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    AUTHENTICATION = "authentication"
    AUTHORIZATION = "authorization"
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    city_id: int | None = None
    point_of_interest_id: int | None = None
    debug_info: dict[str, Any] | None = None


class CityInfoError(Exception):
    """Base exception for all CityInfo errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status
        self.headers: dict[str, str] | None = None

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "city_id": self.context.city_id,
                    "point_of_interest_id": self.context.point_of_interest_id,
                },
            }
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class PatchValidationError(CityInfoError):
    """Patch document could not be applied, or its result violates field constraints."""
    def __init__(
        self,
        message: str,
        details: list[dict[str, str]],
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.details = details

    def to_response(self) -> dict:
        response = super().to_response()
        response["error"]["details"] = self.details
        return response


class AuthenticationError(CityInfoError):
    """Bearer token missing, malformed, expired or signed with the wrong key."""
    def __init__(self, message: str = "Not authenticated", context: ErrorContext | None = None):
        super().__init__(
            message, "NOT_AUTHENTICATED", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 401,
        )
        self.headers = {"WWW-Authenticate": "Bearer"}


class ForbiddenError(CityInfoError):
    """Caller's city claim does not grant access to the requested city."""
    def __init__(self, city_id: int, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.city_id = city_id
        super().__init__(
            "Caller is not allowed to access this city",
            "FORBIDDEN", ErrorCategory.AUTHORIZATION,
            ErrorSeverity.WARNING, ctx, 403,
        )


class ResourceNotFoundError(CityInfoError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: int | str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )
        self.resource_type = resource_type


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(CityInfoError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation


def validation_details(errors: list[dict[str, Any]]) -> list[dict[str, str]]:
    """Flatten pydantic error dicts into {field, message, type} entries."""
    return [
        {
            "field": ".".join(str(loc) for loc in e["loc"]),
            "message": e["msg"],
            "type": e["type"],
        }
        for e in errors
    ]
