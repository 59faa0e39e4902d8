"""Error Hierarchy — typed, categorized exceptions for all Tandem failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are recoverable; infrastructure errors (500-level) are critical
    - to_response() produces the REST envelope consumed by the global handler
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with TandemError base: FastAPI global handler catches all
    - ErrorContext as dataclass: rich observability without coupling to logging framework
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
    BUSINESS_RULE = "business_rule"
    RESOURCE_NOT_FOUND = "resource_not_found"
    AUTHORIZATION = "authorization"
    DATABASE = "database"
    INTERNAL = "internal"
    CONFLICT = "conflict"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    actor_id: str | None = None
    target_id: str | None = None
    request_id: str | None = None
    debug_info: dict[str, Any] | None = None


class TandemError(Exception):
    """Base exception for all Tandem errors."""

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
                    "actor_id": self.context.actor_id,
                    "target_id": self.context.target_id,
                    "request_id": self.context.request_id,
                },
            }
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class SelfRequestError(TandemError):
    """Actor tried to send a connection request to themselves."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "You can't send a connection request to yourself.",
            "SELF_REQUEST", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )


class AlreadyFriendsError(TandemError):
    """The two users are already in each other's friend sets."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "This user is already your friend.",
            "ALREADY_FRIENDS", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, context, 400,
        )


class DuplicateRequestError(TandemError):
    """A request already exists for the unordered pair, in any status."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "A connection request already exists between these users.",
            "DUPLICATE_REQUEST", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, context, 409,
        )


class NotFoundError(TandemError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


class ForbiddenError(TandemError):
    """Actor is not allowed to perform the operation."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "FORBIDDEN", ErrorCategory.AUTHORIZATION,
            ErrorSeverity.ERROR, context, 403,
        )


class UnauthenticatedError(TandemError):
    """No resolvable actor on the request."""
    def __init__(self, message: str = "Authentication required", context: ErrorContext | None = None):
        super().__init__(
            message, "UNAUTHENTICATED", ErrorCategory.AUTHORIZATION,
            ErrorSeverity.WARNING, context, 401,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class ConflictError(TandemError):
    """Concurrent write lost against a uniqueness or atomicity guard."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "CONCURRENCY_CONFLICT", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, context, 409,
        )


class DatabaseError(TandemError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation


# ─── Edge Errors (built by the HTTP layer) ──────────────────────

class InvalidRequestError(TandemError):
    """Request body, path or query failed schema validation."""
    def __init__(self, details: list[dict[str, str]], context: ErrorContext | None = None):
        super().__init__(
            "Invalid request data", "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.details = details

    def to_response(self) -> dict:
        body = super().to_response()
        body["error"]["details"] = self.details
        return body


class InternalError(TandemError):
    """Unexpected failure. The message never carries internals."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "An unexpected error occurred", "INTERNAL_ERROR", ErrorCategory.INTERNAL,
            ErrorSeverity.CRITICAL, context, 500,
        )
