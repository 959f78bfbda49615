"""Error Hierarchy — typed, categorized exceptions for all SkinSense failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - http_status is the status the client sees; AI upstream errors pass their status through
    - to_response() produces the standard error envelope consumed by the frontend
    - No internal details leaked in user-facing messages (details are explicit, never tracebacks)

Design Decisions:
    - Single hierarchy with SkinSenseError base: one global handler renders them all
    - Envelope shape {success, error: {message, statusCode, details}, timestamp} kept stable
      for the frontend; code/category added alongside for observability
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any

from app.core.responses import error_envelope


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
    BUSINESS_RULE = "business_rule"
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    RATE_LIMIT = "rate_limit"
    DATABASE = "database"
    EXTERNAL_API = "external_api"
    INTERNAL = "internal"


@dataclass(frozen=True)
class FieldError:
    """One failed check on one request field."""
    field: str
    message: str

    def to_dict(self) -> dict:
        return {"field": self.field, "message": self.message}


class SkinSenseError(Exception):
    """Base exception for all SkinSense errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        http_status: int = 500,
        details: Any = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.http_status = http_status
        self.details = details

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return error_envelope(
            self.message, self.http_status, self.details,
            code=self.code, category=self.category.value,
        )


# ─── Client Errors (400-level) ──────────────────────────────────

class ValidationFailedError(SkinSenseError):
    """One or more request fields failed validation."""
    def __init__(self, errors: list[FieldError]):
        super().__init__(
            "Validation Failed", "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, 400, [e.to_dict() for e in errors],
        )
        self.errors = errors


class BadRequestError(SkinSenseError):
    """Malformed request that is not a field-level validation failure."""
    def __init__(self, message: str, code: str = "BAD_REQUEST", details: Any = None):
        super().__init__(
            message, code, ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, 400, details,
        )


class AuthenticationError(SkinSenseError):
    """Missing, expired or invalid credentials."""
    def __init__(self, message: str, code: str = "UNAUTHORIZED"):
        super().__init__(
            message, code, ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, 401,
        )


class TokenExpiredError(AuthenticationError):
    def __init__(self):
        super().__init__("Token has expired.", "TOKEN_EXPIRED")


class InvalidTokenError(AuthenticationError):
    def __init__(self):
        super().__init__("Invalid token", "INVALID_TOKEN")


class ChatUnavailableError(SkinSenseError):
    """Chat is disabled for the requested condition."""
    def __init__(self, disease: str):
        super().__init__(
            "Chat is not available for this condition. "
            "Please consult a healthcare professional!",
            "CHAT_DISABLED", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.INFO, 403,
            {"disease": disease, "reason": "Chat disabled for this condition"},
        )


class ResourceNotFoundError(SkinSenseError):
    """Requested resource does not exist (or is not visible to the caller)."""
    def __init__(self, resource_type: str, resource_id: str | None = None):
        message = (
            f"{resource_type} '{resource_id}' not found"
            if resource_id else f"{resource_type} not found"
        )
        super().__init__(
            message, "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.WARNING, 404,
        )


class ConflictError(SkinSenseError):
    """Unique resource already exists."""
    def __init__(self, message: str, code: str = "CONFLICT"):
        super().__init__(
            message, code, ErrorCategory.CONFLICT,
            ErrorSeverity.WARNING, 409,
        )


class RateLimitExceededError(SkinSenseError):
    def __init__(self, retry_after_seconds: int):
        super().__init__(
            "Too many requests from this IP, please try again later.",
            "RATE_LIMITED", ErrorCategory.RATE_LIMIT,
            ErrorSeverity.WARNING, 429,
        )
        self.retry_after_seconds = retry_after_seconds


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(SkinSenseError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, 503,
        )
        self.operation = operation


class AIServiceError(SkinSenseError):
    """AI prediction or RAG call failed; status mirrors the failure kind."""
    def __init__(
        self,
        message: str,
        http_status: int = 500,
        details: Any = None,
        code: str = "AI_SERVICE_ERROR",
    ):
        super().__init__(
            message, code, ErrorCategory.EXTERNAL_API,
            ErrorSeverity.CRITICAL if http_status >= 500 else ErrorSeverity.ERROR,
            http_status, details,
        )
