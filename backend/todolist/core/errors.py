"""Error Hierarchy — typed, categorized exceptions for all TodoList failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are recoverable; infrastructure errors (500-level) are critical
    - to_response() produces the REST envelope
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with TodoListError base: FastAPI global handler catches all
    - ErrorContext as dataclass: rich observability without coupling to logging framework
    - Core raises, never returns failure sentinels: handlers stay linear (resolve, validate, mutate, commit)
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
    DOMAIN = "domain"
    RESOURCE_NOT_FOUND = "resource_not_found"
    AUTHENTICATION = "authentication"
    DATABASE = "database"
    INTERNAL = "internal"
    CONFLICT = "conflict"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    user_id: str | None = None
    task_id: str | None = None
    debug_info: dict[str, Any] | None = None


class TodoListError(Exception):
    """Base exception for all TodoList errors."""

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
                    "user_id": self.context.user_id,
                    "task_id": self.context.task_id,
                },
            }
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class ValidationFailedError(TodoListError):
    """Request shape is wrong or the requester may not perform it."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )


class InvalidOperationError(TodoListError):
    """Operation is well-formed but disallowed in the current state."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "INVALID_OPERATION", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, context, 409,
        )


class DomainError(TodoListError):
    """An entity invariant would be violated."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "DOMAIN_ERROR", ErrorCategory.DOMAIN,
            ErrorSeverity.ERROR, context, 400,
        )


class ResourceNotFoundError(TodoListError):
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


class AuthenticationError(TodoListError):
    """Caller identity is missing or unknown."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "UNAUTHENTICATED", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 401,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(TodoListError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation


class ConcurrencyError(TodoListError):
    """A uniqueness constraint rejected a write that passed its pre-check."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "CONCURRENCY_CONFLICT", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, context, 409,
        )
