"""Domain-specific exceptions for typed error handling at boundaries.

Every failure the API client can report is one of a closed set of kinds
(:class:`~poodle.domain.enums.ErrorKind`). Each kind is an exception class
carrying kind-specific structured fields so callers can act on failures
(retry delay, field errors, upgrade URL, suspension reason) without parsing
message text. Finer-grained cases within a kind are exposed as ``subtype``.

Contents:
    * :class:`PoodleError` - common base (message, context, status_code).
    * :class:`ValidationError` - 400/422 and local payload validation.
    * :class:`AuthenticationError` - 401.
    * :class:`PaymentError` - 402.
    * :class:`ForbiddenError` - 403.
    * :class:`RateLimitError` - 429.
    * :class:`ServerError` - 5xx.
    * :class:`NetworkError` - transport failures and unexpected statuses.
    * :class:`ConfigurationError` - missing or invalid local configuration.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any, ClassVar

from .enums import (
    AuthenticationSubtype,
    ErrorKind,
    ForbiddenSubtype,
    NetworkSubtype,
    PaymentSubtype,
    RateLimitSubtype,
    ServerSubtype,
    ValidationSubtype,
)

UPGRADE_URL = "https://app.usepoodle.com/upgrade"


class ConfigurationError(Exception):
    """Missing, invalid, or incomplete configuration.

    Raised when required configuration values are absent, malformed, or
    logically inconsistent. Typically caught at CLI boundaries to provide
    user-friendly error messages.

    Example:
        >>> err = ConfigurationError("No API key configured")
        >>> str(err)
        'No API key configured'
    """


class PoodleError(Exception):
    """Base class for every error raised by the Poodle client.

    Attributes:
        message: Human-readable message without status or context decoration.
        context: Free-form diagnostic data (always a fresh dict).
        status_code: HTTP status code when the failure came from a response.
        subtype: Kind-specific refinement, ``None`` on the bare base class.

    Example:
        >>> err = PoodleError("Boom", status_code=500, context={"k": "v"})
        >>> err.message
        'Boom'
        >>> str(err)
        "Boom (Status: 500) Context: {'k': 'v'}"
    """

    kind: ClassVar[ErrorKind | None] = None

    def __init__(
        self,
        message: str = "",
        *,
        context: Mapping[str, Any] | None = None,
        status_code: int | None = None,
        subtype: Any = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.context: dict[str, Any] = dict(context) if context else {}
        self.status_code = status_code
        self.subtype = subtype

    def __str__(self) -> str:
        result = self.message
        if self.status_code is not None:
            result += f" (Status: {self.status_code})"
        if self.context:
            result += f" Context: {self.context}"
        return result


class ValidationError(PoodleError, ValueError):
    """Request validation failed (400 Bad Request, 422 Unprocessable Entity).

    Raised both for server-side rejections and for local payload checks
    performed when building a message. Inherits from ValueError so generic
    ``except ValueError`` handlers catch local validation failures.

    Example:
        >>> err = ValidationError.missing_field("subject")
        >>> err.errors
        {'subject': ['The subject field is required']}
        >>> isinstance(err, ValueError)
        True
    """

    kind = ErrorKind.VALIDATION

    def __init__(
        self,
        message: str = "Validation failed",
        *,
        errors: Mapping[str, list[str]] | None = None,
        context: Mapping[str, Any] | None = None,
        status_code: int = 400,
        subtype: ValidationSubtype = ValidationSubtype.VALIDATION_FAILED,
    ) -> None:
        self.errors: dict[str, list[str]] = dict(errors) if errors else {}
        merged = {**(context or {}), "errors": self.errors}
        super().__init__(message, context=merged, status_code=status_code, subtype=subtype)

    @classmethod
    def invalid_email(cls, email: str, *, field: str = "email") -> ValidationError:
        """Build the error for a syntactically invalid address in ``field``."""
        return cls(
            "Invalid email address provided",
            errors={field: [f"'{email}' is not a valid email address"]},
            subtype=ValidationSubtype.INVALID_EMAIL,
        )

    @classmethod
    def missing_field(cls, field: str) -> ValidationError:
        """Build the error for an absent or empty required field."""
        return cls(
            f"Missing required field: {field}",
            errors={field: [f"The {field} field is required"]},
            subtype=ValidationSubtype.MISSING_FIELD,
        )

    @classmethod
    def invalid_content(cls) -> ValidationError:
        """Build the error for a message without any body."""
        return cls(
            "Email must contain either HTML content, text content, or both",
            errors={"content": ["At least one content type (html or text) is required"]},
            subtype=ValidationSubtype.INVALID_CONTENT,
        )

    @classmethod
    def content_too_large(cls, field: str, max_size: int) -> ValidationError:
        """Build the error for a body exceeding ``max_size`` bytes."""
        text = f"Content size exceeds maximum allowed size of {max_size} bytes"
        return cls(text, errors={field: [text]}, subtype=ValidationSubtype.CONTENT_TOO_LARGE)

    @classmethod
    def invalid_field_value(cls, field: str, value: str, reason: str = "") -> ValidationError:
        """Build the error for a field holding an unacceptable value.

        Example:
            >>> ValidationError.invalid_field_value("to", "x", "Too short").message
            "Invalid value for field 'to': x. Too short"
        """
        message = f"Invalid value for field '{field}': {value}"
        if reason:
            message += f". {reason}"
        return cls(message, errors={field: [message]}, subtype=ValidationSubtype.INVALID_FIELD_VALUE)


class AuthenticationError(PoodleError):
    """API authentication failed (401 Unauthorized)."""

    kind = ErrorKind.AUTHENTICATION

    def __init__(
        self,
        message: str = "Authentication failed",
        *,
        context: Mapping[str, Any] | None = None,
        subtype: AuthenticationSubtype = AuthenticationSubtype.AUTHENTICATION_FAILED,
    ) -> None:
        super().__init__(message, context=context, status_code=401, subtype=subtype)

    @classmethod
    def _with_subtype(cls, message: str, subtype: AuthenticationSubtype) -> AuthenticationError:
        return cls(message, context={"error_type": subtype.value}, subtype=subtype)

    @classmethod
    def invalid_api_key(cls) -> AuthenticationError:
        """Build the error the classifier produces for every 401 response.

        Example:
            >>> AuthenticationError.invalid_api_key().message
            'Invalid API key provided. Please check your API key and try again.'
        """
        return cls._with_subtype(
            "Invalid API key provided. Please check your API key and try again.",
            AuthenticationSubtype.INVALID_API_KEY,
        )

    @classmethod
    def missing_api_key(cls) -> AuthenticationError:
        return cls._with_subtype(
            "API key is required. Please provide a valid API key.",
            AuthenticationSubtype.MISSING_API_KEY,
        )

    @classmethod
    def expired_api_key(cls) -> AuthenticationError:
        return cls._with_subtype(
            "API key has expired. Please generate a new API key.",
            AuthenticationSubtype.EXPIRED_API_KEY,
        )


class PaymentError(PoodleError):
    """Payment is required to continue sending (402 Payment Required).

    Attributes:
        upgrade_url: Where the account owner can upgrade, when known.
    """

    kind = ErrorKind.PAYMENT

    def __init__(
        self,
        message: str = "Payment required",
        *,
        upgrade_url: str | None = None,
        context: Mapping[str, Any] | None = None,
        subtype: PaymentSubtype = PaymentSubtype.PAYMENT_REQUIRED,
    ) -> None:
        self.upgrade_url = upgrade_url
        merged = {**(context or {}), "upgrade_url": upgrade_url}
        super().__init__(message, context=merged, status_code=402, subtype=subtype)

    @classmethod
    def _upgrade(cls, message: str, subtype: PaymentSubtype) -> PaymentError:
        return cls(message, upgrade_url=UPGRADE_URL, context={"error_type": subtype.value}, subtype=subtype)

    @classmethod
    def subscription_expired(cls) -> PaymentError:
        return cls._upgrade(
            "Subscription expired. Please renew your subscription to continue sending emails.",
            PaymentSubtype.SUBSCRIPTION_EXPIRED,
        )

    @classmethod
    def trial_limit_reached(cls) -> PaymentError:
        return cls._upgrade(
            "Trial limit reached. Please upgrade to a paid plan to continue sending emails.",
            PaymentSubtype.TRIAL_LIMIT_REACHED,
        )

    @classmethod
    def monthly_limit_reached(cls) -> PaymentError:
        return cls._upgrade(
            "Monthly email limit reached. Please upgrade your plan to send more emails.",
            PaymentSubtype.MONTHLY_LIMIT_REACHED,
        )

    @classmethod
    def monthly_limit_exceeded(cls) -> PaymentError:
        return cls._upgrade(
            "Monthly email limit exceeded. Please upgrade your plan to send more emails.",
            PaymentSubtype.MONTHLY_LIMIT_EXCEEDED,
        )


class ForbiddenError(PoodleError):
    """Access is forbidden (403 Forbidden).

    Attributes:
        reason: Suspension reason or ``"insufficient_permissions"``.
        rate: Suspension rate reported by the API, if any.
    """

    kind = ErrorKind.FORBIDDEN

    def __init__(
        self,
        message: str = "Access forbidden",
        *,
        reason: str | None = None,
        rate: Any = None,
        context: Mapping[str, Any] | None = None,
        subtype: ForbiddenSubtype = ForbiddenSubtype.FORBIDDEN,
    ) -> None:
        self.reason = reason
        self.rate = rate
        merged = {**(context or {}), "reason": reason}
        super().__init__(message, context=merged, status_code=403, subtype=subtype)

    @classmethod
    def account_suspended(cls, reason: str, rate: Any = None) -> ForbiddenError:
        """Build the error for a suspended account.

        Example:
            >>> ForbiddenError.account_suspended("abuse", 0.9).message
            'Account suspended: abuse (Rate: 0.9)'
        """
        message = f"Account suspended: {reason}"
        if rate is not None:
            message += f" (Rate: {rate})"
        return cls(
            message,
            reason=reason,
            rate=rate,
            context={"error_type": ForbiddenSubtype.ACCOUNT_SUSPENDED.value, "suspension_rate": rate},
            subtype=ForbiddenSubtype.ACCOUNT_SUSPENDED,
        )

    @classmethod
    def insufficient_permissions(cls) -> ForbiddenError:
        return cls(
            "API key does not have sufficient permissions for this operation.",
            reason="insufficient_permissions",
            context={"error_type": ForbiddenSubtype.INSUFFICIENT_PERMISSIONS.value},
            subtype=ForbiddenSubtype.INSUFFICIENT_PERMISSIONS,
        )


class RateLimitError(PoodleError):
    """API rate limit exceeded (429 Too Many Requests).

    Numeric fields are ``None`` when the corresponding header was absent or
    unparsable, never zero by default.

    Attributes:
        retry_after: Seconds to wait before retrying.
        limit: Request quota for the current window.
        remaining: Requests left in the current window.
        reset_time: Unix timestamp at which the window resets.
    """

    kind = ErrorKind.RATE_LIMIT

    def __init__(
        self,
        message: str = "Rate limit exceeded",
        *,
        retry_after: int | None = None,
        limit: int | None = None,
        remaining: int | None = None,
        reset_time: int | None = None,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        self.retry_after = retry_after
        self.limit = limit
        self.remaining = remaining
        self.reset_time = reset_time
        rate_context = {
            "error_type": RateLimitSubtype.RATE_LIMIT_EXCEEDED.value,
            "retry_after": retry_after,
            "limit": limit,
            "remaining": remaining,
            "reset_time": reset_time,
        }
        merged = {**(context or {}), **{k: v for k, v in rate_context.items() if v is not None}}
        super().__init__(message, context=merged, status_code=429, subtype=RateLimitSubtype.RATE_LIMIT_EXCEEDED)

    @classmethod
    def exceeded(
        cls,
        *,
        retry_after: int | None = None,
        limit: int | None = None,
        remaining: int | None = None,
        reset_time: int | None = None,
    ) -> RateLimitError:
        """Build the error from already-parsed rate limit values.

        Example:
            >>> RateLimitError.exceeded(retry_after=30).message
            'Rate limit exceeded. Retry after 30 seconds.'
            >>> RateLimitError.exceeded().message
            'Rate limit exceeded.'
        """
        message = "Rate limit exceeded."
        if retry_after is not None:
            message += f" Retry after {retry_after} seconds."
        return cls(
            message,
            retry_after=retry_after,
            limit=limit,
            remaining=remaining,
            reset_time=reset_time,
        )

    @property
    def reset_at(self) -> datetime | None:
        """Return the reset time as an aware UTC datetime, if known."""
        if self.reset_time is None:
            return None
        return datetime.fromtimestamp(self.reset_time, tz=timezone.utc)


class ServerError(PoodleError):
    """The API failed on its side (5xx)."""

    kind = ErrorKind.SERVER

    def __init__(
        self,
        message: str = "Server error occurred",
        *,
        context: Mapping[str, Any] | None = None,
        status_code: int = 500,
        subtype: ServerSubtype = ServerSubtype.SERVER_ERROR,
    ) -> None:
        merged = {**(context or {}), "error_type": "server_error"}
        super().__init__(message, context=merged, status_code=status_code, subtype=subtype)

    @classmethod
    def internal_server_error(cls, message: str = "Internal server error") -> ServerError:
        return cls(message, status_code=500, subtype=ServerSubtype.INTERNAL_SERVER_ERROR)

    @classmethod
    def bad_gateway(cls, message: str = "Bad gateway") -> ServerError:
        return cls(message, status_code=502, subtype=ServerSubtype.BAD_GATEWAY)

    @classmethod
    def service_unavailable(cls, message: str = "Service unavailable") -> ServerError:
        return cls(message, status_code=503, subtype=ServerSubtype.SERVICE_UNAVAILABLE)

    @classmethod
    def gateway_timeout(cls, message: str = "Gateway timeout") -> ServerError:
        return cls(message, status_code=504, subtype=ServerSubtype.GATEWAY_TIMEOUT)


class NetworkError(PoodleError):
    """The exchange failed below HTTP semantics, or returned an unexpected status.

    Attributes:
        original_error: Low-level exception kept for diagnostics, if any.
    """

    kind = ErrorKind.NETWORK

    def __init__(
        self,
        message: str = "Network error occurred",
        *,
        original_error: BaseException | None = None,
        context: Mapping[str, Any] | None = None,
        status_code: int | None = None,
        subtype: NetworkSubtype = NetworkSubtype.NETWORK_ERROR,
    ) -> None:
        self.original_error = original_error
        super().__init__(message, context=context, status_code=status_code, subtype=subtype)

    @classmethod
    def connection_timeout(
        cls, timeout: int | float, *, original_error: BaseException | None = None
    ) -> NetworkError:
        """Build the error for a request that exceeded the configured timeout.

        Example:
            >>> err = NetworkError.connection_timeout(30)
            >>> (err.message, err.status_code, err.context["timeout"])
            ('Connection timeout after 30 seconds', 408, 30)
        """
        return cls(
            f"Connection timeout after {timeout} seconds",
            original_error=original_error,
            context={"timeout": timeout, "error_type": NetworkSubtype.CONNECTION_TIMEOUT.value},
            status_code=408,
            subtype=NetworkSubtype.CONNECTION_TIMEOUT,
        )

    @classmethod
    def connection_failed(cls, url: str, *, original_error: BaseException | None = None) -> NetworkError:
        return cls(
            f"Failed to connect to {url}",
            original_error=original_error,
            context={"url": url, "error_type": NetworkSubtype.CONNECTION_FAILED.value},
            subtype=NetworkSubtype.CONNECTION_FAILED,
        )

    @classmethod
    def dns_resolution_failed(
        cls, host: str | None, *, original_error: BaseException | None = None
    ) -> NetworkError:
        return cls(
            f"DNS resolution failed for host: {host}",
            original_error=original_error,
            context={"host": host, "error_type": NetworkSubtype.DNS_RESOLUTION_FAILED.value},
            subtype=NetworkSubtype.DNS_RESOLUTION_FAILED,
        )

    @classmethod
    def ssl_error(cls, detail: str, *, original_error: BaseException | None = None) -> NetworkError:
        return cls(
            f"SSL/TLS error: {detail}",
            original_error=original_error,
            context={"error_type": NetworkSubtype.SSL_ERROR.value},
            subtype=NetworkSubtype.SSL_ERROR,
        )

    @classmethod
    def http_error(cls, status_code: int, message: str = "") -> NetworkError:
        """Build the error for a non-2xx status outside every known family.

        Example:
            >>> NetworkError.http_error(418).message
            'HTTP error occurred with status code: 418'
        """
        return cls(
            message or f"HTTP error occurred with status code: {status_code}",
            context={"error_type": NetworkSubtype.HTTP_ERROR.value},
            status_code=status_code,
            subtype=NetworkSubtype.HTTP_ERROR,
        )

    @classmethod
    def malformed_response(cls, response: str = "") -> NetworkError:
        return cls(
            "Received malformed response from server",
            context={"response": response, "error_type": NetworkSubtype.MALFORMED_RESPONSE.value},
            subtype=NetworkSubtype.MALFORMED_RESPONSE,
        )


__all__ = [
    "UPGRADE_URL",
    "AuthenticationError",
    "ConfigurationError",
    "ForbiddenError",
    "NetworkError",
    "PaymentError",
    "PoodleError",
    "RateLimitError",
    "ServerError",
    "ValidationError",
]
