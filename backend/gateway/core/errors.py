"""Error Hierarchy — typed, categorized exceptions for every gateway failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - http_status + reason phrase together form the legacy status line ("404 Not Found")
    - to_envelope() produces the legacy {"status": {error, code, request}} shape
    - No internal exception type or detail is ever serialized to clients

Design Decisions:
    - Single hierarchy with GatewayError base: the dispatcher catches one type
      and emits one envelope shape (ADR: uniform error shape)
    - ClassificationError is NOT a GatewayError: it never reaches HTTP clients,
      callers of format_mention() must handle it
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and logging."""
    VALIDATION = "validation"
    AUTHENTICATION = "authentication"
    AUTHORIZATION = "authorization"
    RESOURCE_NOT_FOUND = "resource_not_found"
    PROTOCOL = "protocol"
    RATE_LIMIT = "rate_limit"
    DATABASE = "database"
    INTERNAL = "internal"


# Reason phrases used by legacy clients; the status line is "<code> <phrase>"
REASON_PHRASES: dict[int, str] = {
    200: "OK",
    400: "Bad Request",
    401: "Unauthorized",
    403: "Forbidden",
    404: "Not Found",
    405: "Method Not Allowed",
    429: "Too Many Requests",
    500: "Internal Server Error",
    503: "Service Unavailable",
}


def status_line(http_status: int) -> str:
    """Legacy status line, e.g. 404 -> '404 Not Found'."""
    return f"{http_status} {REASON_PHRASES.get(http_status, '')}".rstrip()


@dataclass
class ErrorContext:
    """Rich context for error observability."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    viewer_id: int | None = None
    api_path: str | None = None
    debug_info: dict[str, Any] | None = None


class GatewayError(Exception):
    """Base exception for all gateway errors surfaced through the envelope."""

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
        self.message = message or REASON_PHRASES.get(http_status, "")
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    @property
    def status_line(self) -> str:
        return status_line(self.http_status)

    def to_envelope(self, request: str = "") -> dict:
        """Convert to the legacy error envelope."""
        return {
            "status": {
                "error": self.message,
                "code": self.status_line,
                "request": request,
            },
        }


# ─── Client Errors (400-level) ──────────────────────────────────

class BadRequestError(GatewayError):
    """Missing or invalid required parameter."""
    def __init__(self, message: str = "", context: ErrorContext | None = None):
        super().__init__(
            message, "BAD_REQUEST", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )


class UnauthorizedError(GatewayError):
    """No authenticated session."""
    def __init__(self, message: str = "", context: ErrorContext | None = None):
        super().__init__(
            message, "UNAUTHORIZED", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 401,
        )


class ForbiddenError(GatewayError):
    """Authenticated, but a scope or account flag denies the action."""
    def __init__(self, message: str = "", context: ErrorContext | None = None):
        super().__init__(
            message, "FORBIDDEN", ErrorCategory.AUTHORIZATION,
            ErrorSeverity.WARNING, context, 403,
        )


class NotFoundError(GatewayError):
    """Unknown contact, user, profile or endpoint."""
    def __init__(self, message: str = "", context: ErrorContext | None = None):
        super().__init__(
            message, "NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.INFO, context, 404,
        )


class MethodNotAllowedError(GatewayError):
    """Endpoint registered for a different HTTP method."""
    def __init__(self, message: str = "", context: ErrorContext | None = None):
        super().__init__(
            message, "METHOD_NOT_ALLOWED", ErrorCategory.PROTOCOL,
            ErrorSeverity.WARNING, context, 405,
        )


class TooManyRequestsError(GatewayError):
    """Hourly quota exhausted."""
    def __init__(self, message: str = "Rate limit exceeded", context: ErrorContext | None = None):
        super().__init__(
            message, "RATE_LIMITED", ErrorCategory.RATE_LIMIT,
            ErrorSeverity.WARNING, context, 429,
        )


# ─── Server Errors (500-level) ──────────────────────────────────

class InternalServerError(GatewayError):
    """Handler produced no result or failed unexpectedly."""
    def __init__(self, message: str = "", context: ErrorContext | None = None):
        super().__init__(
            message, "INTERNAL_ERROR", ErrorCategory.INTERNAL,
            ErrorSeverity.CRITICAL, context, 500,
        )


class DatabaseError(GatewayError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation


# ─── Matcher Errors (never surfaced over HTTP) ──────────────────

class ClassificationError(Exception):
    """Profile URL could not be matched to any known network."""
    def __init__(self, profile_url: str):
        super().__init__(f"Unknown network for profile URL: {profile_url}")
        self.profile_url = profile_url
