"""Error Hierarchy — typed, categorized exceptions for all print agent failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Validation errors (400-level) are rejected before the Store is touched
    - StorageError is the only failure that reaches the client after a write attempt
    - Printer errors never become HTTP errors: the adapter converts them to PrintResult
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with PrintAgentError base: FastAPI global handler catches all
      (ADR: uniform error shape)
    - ErrorContext as dataclass: rich observability without coupling to logging framework
"""

from dataclasses import dataclass, field
from enum import Enum
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"
    PRINTER = "printer"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    bill_id: str | None = None
    operation: str | None = None


class PrintAgentError(Exception):
    """Base exception for all print agent errors."""

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
                    "bill_id": self.context.bill_id,
                    "operation": self.context.operation,
                },
            }
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class BillValidationError(PrintAgentError):
    """Bill payload rejected before persistence."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.field = field


class ResourceNotFoundError(PrintAgentError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class StorageError(PrintAgentError):
    """Bill store operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Storage {operation} failed: {message}",
            "STORAGE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 500,
        )
        self.operation = operation


class PrinterUnavailableError(PrintAgentError):
    """Printer is not configured or did not answer the probe."""
    def __init__(self, message: str = "printer unavailable", context: ErrorContext | None = None):
        super().__init__(
            message, "PRINTER_UNAVAILABLE", ErrorCategory.PRINTER,
            ErrorSeverity.WARNING, context, 503,
        )


class PrinterExecutionError(PrintAgentError):
    """Printer accepted the job but rendering or transfer failed."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            f"Printing failed: {message}",
            "PRINTER_EXECUTION_ERROR", ErrorCategory.PRINTER,
            ErrorSeverity.WARNING, context, 502,
        )
