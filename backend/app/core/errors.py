"""Error Hierarchy - typed, categorized exceptions for every prompt enhancer failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Request errors (400-level) are raised to the client; provider errors (500-level)
      are turned into the fallback message by the enhancer service
    - to_response() produces the REST envelope
    - No vendor stack traces or keys in user-facing messages
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


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
    RATE_LIMIT = "rate_limit"
    CONFIGURATION = "configuration"
    EXTERNAL_API = "external_api"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Context attached to an error for logs and the REST envelope."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    provider: str | None = None
    model: str | None = None
    retry_after_ms: int | None = None
    debug_info: dict[str, Any] | None = None


class PromptEnhancerError(Exception):
    """Base exception for all prompt enhancer errors."""

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
                    "provider": self.context.provider,
                    "model": self.context.model,
                    "retry_after_ms": self.context.retry_after_ms,
                },
            }
        }


# ─── Request Errors (400-level) ─────────────────────────────────

class PromptValidationError(PromptEnhancerError):
    """Prompt missing, empty, or not a string."""
    def __init__(self, message: str = "Invalid or missing original prompt",
                 context: ErrorContext | None = None):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )


class PromptTooLongError(PromptEnhancerError):
    """Prompt exceeds the configured maximum length."""
    def __init__(self, max_length: int, context: ErrorContext | None = None):
        super().__init__(
            f"Prompt is too long (maximum {max_length} characters)",
            "PROMPT_TOO_LONG", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.max_length = max_length


class AuthenticationError(PromptEnhancerError):
    """X-API-Key header missing or wrong."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Invalid or missing API key",
            "UNAUTHORIZED", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 401,
        )


class RateLimitExceededError(PromptEnhancerError):
    """Client exceeded the per-address request limit."""
    def __init__(self, limit: str, context: ErrorContext | None = None):
        super().__init__(
            f"Rate limit exceeded: {limit}",
            "RATE_LIMITED", ErrorCategory.RATE_LIMIT,
            ErrorSeverity.WARNING, context, 429,
        )
        self.limit = limit


# ─── Provider Errors (500-level) ────────────────────────────────

class ProviderNotConfiguredError(PromptEnhancerError):
    """No AI provider has credentials configured."""
    def __init__(self, requested: str | None = None, context: ErrorContext | None = None):
        message = "No AI provider available. Check your configuration."
        if requested:
            message = (
                f"No AI provider available (requested '{requested}'). "
                "Check your configuration."
            )
        super().__init__(
            message, "PROVIDER_NOT_CONFIGURED", ErrorCategory.CONFIGURATION,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.requested = requested


class ProviderAPIError(PromptEnhancerError):
    """LLM vendor call failed."""
    def __init__(
        self,
        message: str,
        api_error_type: str,
        provider: str | None = None,
        retry_after_ms: int | None = None,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.retry_after_ms = retry_after_ms
        if provider and not ctx.provider:
            ctx.provider = provider
        label = ctx.provider or "LLM"
        super().__init__(
            f"{label} API error ({api_error_type}): {message}",
            "PROVIDER_API_ERROR", ErrorCategory.EXTERNAL_API,
            ErrorSeverity.CRITICAL, ctx, 503,
        )
        self.api_error_type = api_error_type
