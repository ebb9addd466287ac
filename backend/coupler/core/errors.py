"""Error Hierarchy: typed, categorized exceptions for every Coupler failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Each expected condition has its own class so callers can tell them apart
    - Domain errors are 4xx; persistence faults are 503
    - to_response() never includes debug_info

Design Decisions:
    - Single hierarchy rooted at CouplerError: one FastAPI handler serves all
    - ErrorContext as dataclass: carries ids for logging without coupling to a logger
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
    CONFLICT = "conflict"
    RESOURCE_NOT_FOUND = "resource_not_found"
    INVITE = "invite"
    AUTHENTICATION = "authentication"
    AUTHORIZATION = "authorization"
    DATABASE = "database"


@dataclass
class ErrorContext:
    """Identifiers attached to an error for logs and responses."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    entity: str | None = None
    entity_id: str | None = None
    debug_info: dict[str, Any] | None = None


class CouplerError(Exception):
    """Base exception for all Coupler errors."""

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
                    "entity": self.context.entity,
                    "entity_id": self.context.entity_id,
                },
            }
        }


# ─── Validation (400) ───────────────────────────────────────────

class ValidationError(CouplerError):
    """A required field is missing or malformed."""
    def __init__(self, field: str, message: str, context: ErrorContext | None = None):
        super().__init__(
            f"{field}: {message}", "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )
        self.field = field


# ─── Conflicts (409) ────────────────────────────────────────────

class EmailAlreadyUsedError(CouplerError):
    """Email is already bound to an account."""
    def __init__(self, email: str | None = None, context: ErrorContext | None = None):
        super().__init__(
            "email is already in use and bound to an account",
            "EMAIL_ALREADY_USED", ErrorCategory.CONFLICT,
            ErrorSeverity.WARNING, context, 409,
        )
        self.email = email


class CompanyNameAlreadyUsedError(CouplerError):
    """A company with this (case-normalised) name already exists."""
    def __init__(self, name: str | None = None, context: ErrorContext | None = None):
        super().__init__(
            "company name is already in use",
            "COMPANY_NAME_ALREADY_USED", ErrorCategory.CONFLICT,
            ErrorSeverity.WARNING, context, 409,
        )
        self.name = name


# ─── Not found (404) ────────────────────────────────────────────

class EntityNotFoundError(CouplerError):
    """Referenced entity does not exist."""
    def __init__(self, entity: str, entity_id: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.entity, ctx.entity_id = entity, entity_id
        super().__init__(
            f"{entity} '{entity_id}' not found",
            "ENTITY_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.WARNING, ctx, 404,
        )
        self.entity = entity
        self.entity_id = entity_id


class InviteNotFoundError(EntityNotFoundError):
    """No invite link with this id (for this company)."""
    def __init__(self, invite_id: str, context: ErrorContext | None = None):
        super().__init__("InviteLink", invite_id, context)
        self.code = "INVITE_NOT_FOUND"


# ─── Invite lifecycle ───────────────────────────────────────────

class InviteExpiredError(CouplerError):
    """Invite link is past its expiry date."""
    def __init__(self, invite_id: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.entity, ctx.entity_id = "InviteLink", invite_id
        super().__init__(
            "invite link has expired",
            "INVITE_EXPIRED", ErrorCategory.INVITE,
            ErrorSeverity.WARNING, ctx, 410,
        )
        self.invite_id = invite_id


class InviteAlreadyUsedError(CouplerError):
    """Invite link has already been redeemed."""
    def __init__(self, invite_id: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.entity, ctx.entity_id = "InviteLink", invite_id
        super().__init__(
            "invite link has already been used",
            "INVITE_ALREADY_USED", ErrorCategory.INVITE,
            ErrorSeverity.WARNING, ctx, 409,
        )
        self.invite_id = invite_id


# ─── Auth (401/403) ─────────────────────────────────────────────

class AuthenticationError(CouplerError):
    """Missing, invalid or expired credentials."""
    def __init__(self, message: str = "invalid credentials", context: ErrorContext | None = None):
        super().__init__(
            message, "AUTHENTICATION_FAILED", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 401,
        )


class AuthorizationError(CouplerError):
    """Authenticated, but not allowed to perform this operation."""
    def __init__(self, message: str = "not allowed", context: ErrorContext | None = None):
        super().__init__(
            message, "FORBIDDEN", ErrorCategory.AUTHORIZATION,
            ErrorSeverity.WARNING, context, 403,
        )


# ─── Infrastructure (503) ───────────────────────────────────────

class DatabaseError(CouplerError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation
