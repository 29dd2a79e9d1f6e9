"""Error Hierarchy: typed, categorized exceptions for all marketplace failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors are recoverable at the dispatcher boundary; infrastructure errors are critical
    - to_result() produces the dispatcher's error mapping (one user-facing line)
    - No internal details leaked in user-facing messages

Design Decisions:
    - Every domain error derives from MarketError and is caught once, in the dispatcher
    - ErrorContext carries command and actor into the logs
"""

from dataclasses import dataclass, field
from enum import Enum
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for logging and terminal rendering."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories."""
    VALIDATION = "validation"
    BUSINESS_RULE = "business_rule"
    RESOURCE_NOT_FOUND = "resource_not_found"
    AUTHORIZATION = "authorization"
    PERSISTENCE = "persistence"
    INTERNAL = "internal"
    CONFLICT = "conflict"


@dataclass
class ErrorContext:
    """Context attached to an error for logging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    command: str | None = None
    user_id: str | None = None


class MarketError(Exception):
    """Base exception for all marketplace errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()

    def to_result(self) -> dict:
        """Convert to the dispatcher's error result."""
        return {
            "status": "error",
            "error_code": self.code,
            "category": self.category.value,
            "message": f"ERROR: {self.message}",
        }


# ─── Dispatch & Authorization Errors ────────────────────────────

class UnknownCommandError(MarketError):
    """No operation is registered under the command name."""
    def __init__(self, command: str, context: ErrorContext | None = None):
        super().__init__(
            f"Unknown command '{command}'. Type 'help' to list available commands.",
            "UNKNOWN_COMMAND", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context,
        )
        self.command = command


class ForbiddenError(MarketError):
    """No registered operation may be invoked by the current session."""
    def __init__(
        self, message: str = "Permission denied.", code: str = "FORBIDDEN",
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, code, ErrorCategory.AUTHORIZATION,
            ErrorSeverity.WARNING, context,
        )


class NotAuthenticatedError(ForbiddenError):
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Please log in first.", "NOT_AUTHENTICATED", context,
        )


class WrongRoleError(ForbiddenError):
    def __init__(self, role: str, context: ErrorContext | None = None):
        super().__init__(
            f"Permission denied for role {role}.", "WRONG_ROLE", context,
        )
        self.role = role


class BannedError(ForbiddenError):
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Your account has been banned.", "BANNED", context,
        )


class AuthenticationError(MarketError):
    """Username or password did not match."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Invalid username or password.",
            "INVALID_CREDENTIALS", ErrorCategory.AUTHORIZATION,
            ErrorSeverity.WARNING, context,
        )


# ─── Domain Errors ──────────────────────────────────────────────

class InvalidArgumentError(MarketError):
    """Malformed argument: missing token, bad number, out-of-range value."""
    def __init__(
        self, message: str, field: str | None = None,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, "INVALID_ARGUMENT", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context,
        )
        self.field = field


class InvalidEntityError(MarketError):
    """Entity cannot be stored (empty id)."""
    def __init__(self, entity_type: str, context: ErrorContext | None = None):
        super().__init__(
            f"{entity_type} id must not be empty.",
            "INVALID_ENTITY", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context,
        )
        self.entity_type = entity_type


class NotFoundError(MarketError):
    """Requested entity does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found.",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


class InvalidTransitionError(MarketError):
    """State machine precondition violated."""
    def __init__(
        self, entity_type: str, entity_id: str, current: str, attempted: str,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{entity_type} '{entity_id}' cannot be {attempted}: "
            f"current status is {current}.",
            "INVALID_TRANSITION", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, context,
        )
        self.entity_type = entity_type
        self.entity_id = entity_id
        self.current = current
        self.attempted = attempted


class NotOwnerError(MarketError):
    """Acting user does not own the entity."""
    def __init__(
        self, entity_type: str, entity_id: str,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{entity_type} '{entity_id}' does not belong to you.",
            "NOT_OWNER", ErrorCategory.AUTHORIZATION,
            ErrorSeverity.ERROR, context,
        )
        self.entity_type = entity_type
        self.entity_id = entity_id


class ProductUnavailableError(MarketError):
    """Order placed against a product that is not AVAILABLE."""
    def __init__(
        self, product_id: str, status: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"Product '{product_id}' is not available (status: {status}).",
            "PRODUCT_UNAVAILABLE", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, context,
        )
        self.product_id = product_id


class SelfTradeForbiddenError(MarketError):
    """Buyer and seller are the same user."""
    def __init__(self, product_id: str, context: ErrorContext | None = None):
        super().__init__(
            f"You cannot buy your own product '{product_id}'.",
            "SELF_TRADE_FORBIDDEN", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, context,
        )
        self.product_id = product_id


class DuplicateReviewError(MarketError):
    """Order already has a review."""
    def __init__(self, order_id: str, context: ErrorContext | None = None):
        super().__init__(
            f"Order '{order_id}' has already been reviewed.",
            "DUPLICATE_REVIEW", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, context,
        )
        self.order_id = order_id


class ConflictError(MarketError):
    """Unique value already taken (e.g. username)."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "CONFLICT", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, context,
        )


class AdminProtectedError(MarketError):
    """Administrators cannot be banned."""
    def __init__(self, user_id: str, context: ErrorContext | None = None):
        super().__init__(
            f"User '{user_id}' is an administrator and cannot be banned.",
            "ADMIN_PROTECTED", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, context,
        )
        self.user_id = user_id


# ─── Infrastructure Errors ──────────────────────────────────────

class PersistenceError(MarketError):
    """Snapshot store operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Snapshot {operation} failed: {message}",
            "PERSISTENCE_ERROR", ErrorCategory.PERSISTENCE,
            ErrorSeverity.CRITICAL, context,
        )
        self.operation = operation
