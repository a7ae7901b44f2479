"""Error Hierarchy — typed, categorized exceptions for every registry failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Request errors (400-level) are recoverable; infrastructure errors are retryable 500s
    - to_response() produces the REST envelope
    - No driver text or internal details in user-facing messages

Design Decisions:
    - Single hierarchy with RegistryError base: one FastAPI handler catches all
    - ErrorContext as dataclass: observability fields travel with the error
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
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    AUTHENTICATION = "authentication"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Context attached to an error for logs and the response envelope."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    resource: str | None = None
    record_id: int | str | None = None
    operation: str | None = None
    debug_info: dict[str, Any] | None = None


class RegistryError(Exception):
    """Base exception for all registry errors."""

    retryable: bool = False

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
        details: list[dict] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status
        self.details = details

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        body = {
            "code": self.code,
            "message": self.message,
            "category": self.category.value,
            "severity": self.severity.value,
            "timestamp": self.context.timestamp.isoformat(),
            "context": {
                "resource": self.context.resource,
                "record_id": self.context.record_id,
                "retryable": self.retryable,
            },
        }
        if self.details:
            body["details"] = self.details
        return {"error": body}


# ─── Request Errors (400-level) ─────────────────────────────────

class RecordValidationError(RegistryError):
    """Malformed or missing input."""
    def __init__(
        self, message: str, fields: list[str] | None = None,
        context: ErrorContext | None = None,
    ):
        self.fields = fields or []
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
            details=[{"field": f} for f in self.fields] or None,
        )


class ResourceNotFoundError(RegistryError):
    """No row matches the requested identifier."""
    def __init__(
        self, resource_label: str, record_id: int | str,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.record_id = record_id
        super().__init__(
            f"{resource_label} not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.WARNING, ctx, 404,
        )


class ConflictError(RegistryError):
    """Write rejected by a uniqueness or referential constraint."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "CONFLICT", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, context, 409,
        )


class AuthError(RegistryError):
    """Credential check failed.

    ``reason`` tells unknown usernames and wrong passwords apart for the
    server log; the response message is the same for both.
    """
    def __init__(self, reason: str, context: ErrorContext | None = None):
        super().__init__(
            "Invalid username or password",
            "AUTHENTICATION_FAILED", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 401,
        )
        self.reason = reason


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(RegistryError):
    """Database operation failed."""

    retryable = True

    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 500,
        )
        self.operation = operation


class PoolExhaustedError(DatabaseError):
    """No pooled connection became free within the configured wait."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__("no connection available", "connect", context)
        self.code = "POOL_EXHAUSTED"
