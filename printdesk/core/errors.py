"""Error Hierarchy — typed, categorized exceptions for all PrintDesk failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Validation errors are raised before any backend call is issued
    - Backend-reported messages are carried verbatim in `message`
    - to_response() produces the REST error envelope

Design Decisions:
    - Single hierarchy with PrintDeskError base: FastAPI global handler catches all
    - ErrorContext as dataclass: observability fields without coupling to logging
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
    CONFIGURATION = "configuration"
    CONNECTIVITY = "connectivity"
    EXTERNAL_API = "external_api"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Context attached to an error for logs and the response envelope."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    order_id: str | None = None
    operation: str | None = None
    debug_info: dict[str, Any] | None = None


class PrintDeskError(Exception):
    """Base exception for all PrintDesk errors."""

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

    @property
    def recoverable(self) -> bool:
        return self.severity in (ErrorSeverity.INFO, ErrorSeverity.WARNING)

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
                    "order_id": self.context.order_id,
                    "operation": self.context.operation,
                },
            }
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class ValidationError(PrintDeskError):
    """Required input missing — blocks submission, no backend call issued."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )
        self.field = field


class ConfirmationRequiredError(ValidationError):
    """Delete attempted without an explicit confirmation step."""
    def __init__(self, order_id: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.order_id = order_id
        super().__init__(
            f"Deleting order '{order_id}' requires confirmation",
            "confirm", ctx,
        )
        self.code = "CONFIRMATION_REQUIRED"


class StatusTransitionError(PrintDeskError):
    """Backward status move rejected under strict lifecycle enforcement."""
    def __init__(self, current: str, requested: str, context: ErrorContext | None = None):
        super().__init__(
            f"Cannot move order from {current} back to {requested}",
            "STATUS_TRANSITION_REJECTED", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.WARNING, context, 409,
        )
        self.current = current
        self.requested = requested


class ResourceNotFoundError(PrintDeskError):
    """Requested order is not in the current snapshot."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class ConfigurationError(PrintDeskError):
    """Connection parameters missing — fatal to interactivity, not to rendering."""
    def __init__(self, missing: list[str], context: ErrorContext | None = None):
        super().__init__(
            f"Order backend is not configured (missing: {', '.join(missing)})",
            "CONFIGURATION_ERROR", ErrorCategory.CONFIGURATION,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.missing = missing


class ConnectivityError(PrintDeskError):
    """Round trip to the order backend failed — prior snapshot stays intact."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.operation = operation
        super().__init__(
            message, "CONNECTIVITY_ERROR", ErrorCategory.CONNECTIVITY,
            ErrorSeverity.ERROR, ctx, 503,
        )
        self.operation = operation


class BackendError(PrintDeskError):
    """Backend rejected a write; its message is surfaced verbatim."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.operation = operation
        super().__init__(
            message, "BACKEND_ERROR", ErrorCategory.EXTERNAL_API,
            ErrorSeverity.ERROR, ctx, 502,
        )
        self.operation = operation
