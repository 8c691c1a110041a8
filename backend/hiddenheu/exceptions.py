"""
HiddenHeu Backend — Custom Exception Hierarchy
================================================

What:  Application-specific exceptions for the error scenarios of the API.
Why:   Services raise domain errors; global handlers in main.py turn them
       into structured JSON responses with the right status code.
How:   Each exception carries a user-facing message and an optional context
       dict (logged, and returned as `details` where safe).
Who:   Raised by services, dependencies and middleware.

Exception Hierarchy:
    HiddenHeuError (base)
    ├── ValidationError            → 400 Bad Request
    ├── ConflictError              → 400 Bad Request (duplicate username/email/favorite)
    ├── AuthenticationError        → 401 Unauthorized
    ├── NotFoundError              → 404 Not Found
    ├── TranslationServiceError    → 503 Service Unavailable
    ├── CircuitBreakerOpenError    → 503 Service Unavailable
    └── RateLimitExceededError     → 429 Too Many Requests

The in-memory store never raises any of these. Lookups there return None
and the service layer decides what absence means.
"""

from typing import Any, Dict, Optional


class HiddenHeuError(Exception):
    """
    Base exception for all HiddenHeu application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(HiddenHeuError):
    """
    Raised when client input fails a business-rule check.

    Schema-level problems (missing fields, wrong types) are rejected earlier
    by FastAPI; main.py maps those to the same 400 response shape.
    """

    def __init__(
        self,
        message: str = "Invalid data",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class ConflictError(HiddenHeuError):
    """
    Raised when a create would violate a uniqueness rule.

    When:  Username or email already registered (case-insensitive), place
           already in the user's favorites.
    HTTP:  400 Bad Request, matching what the web client already handles.
    """

    def __init__(
        self,
        message: str = "Resource already exists",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class AuthenticationError(HiddenHeuError):
    """Raised when a request needs a session and has none (or a stale one)."""

    def __init__(
        self,
        message: str = "Authentication required",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class NotFoundError(HiddenHeuError):
    """
    Raised when a requested resource does not exist.

    The store returns None for a missing id; services convert that into
    this exception so the handler can answer 404.
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[Any] = None,
        message: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        if message is None:
            message = f"{resource.capitalize()} not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id is not None:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)
        self.resource = resource


class TranslationServiceError(HiddenHeuError):
    """
    Raised when the translation provider fails after all retries.

    HTTP:  503 Service Unavailable, optionally with Retry-After.
    """

    def __init__(
        self,
        message: str = "Translation service is temporarily unavailable",
        retry_after: Optional[int] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if retry_after:
            ctx["retry_after"] = retry_after
        super().__init__(message=message, context=ctx)
        self.retry_after = retry_after


class CircuitBreakerOpenError(HiddenHeuError):
    """
    Raised while the translation circuit breaker is OPEN.

    CLOSED → (N consecutive failures) → OPEN → (recovery timeout) → HALF_OPEN
    → success → CLOSED, or failure → OPEN again.
    """

    def __init__(
        self,
        recovery_time: int = 60,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = (
            f"Translation is temporarily unavailable due to repeated failures. "
            f"Please retry in approximately {recovery_time} seconds."
        )
        ctx = context or {}
        ctx["recovery_time"] = recovery_time
        super().__init__(message=message, context=ctx)
        self.recovery_time = recovery_time


class RateLimitExceededError(HiddenHeuError):
    """Raised when a client exceeds the per-IP request rate limit (429)."""

    def __init__(
        self,
        retry_after: int = 60,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = (
            f"Rate limit exceeded. Please wait {retry_after} seconds before making more requests."
        )
        ctx = context or {}
        ctx["retry_after"] = retry_after
        super().__init__(message=message, context=ctx)
        self.retry_after = retry_after
