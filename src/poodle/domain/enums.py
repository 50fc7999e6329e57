"""Type-safe domain enums for error kinds, error subtypes, HTTP verbs, and output formats."""

from __future__ import annotations

from enum import Enum


class OutputFormat(str, Enum):
    """Output format options for configuration display.

    Inherits from str to allow direct string comparison and Click integration.

    Example:
        >>> OutputFormat.HUMAN.value
        'human'
        >>> OutputFormat.JSON == "json"
        True
    """

    HUMAN = "human"
    JSON = "json"


class HttpVerb(str, Enum):
    """HTTP verbs supported by the request executor.

    Only the two verbs of the send-email API surface are modelled: POST
    creates an email, GET reads status.

    Example:
        >>> HttpVerb("post".upper())
        <HttpVerb.POST: 'POST'>
    """

    POST = "POST"
    GET = "GET"


class ErrorKind(str, Enum):
    """Closed set of failure kinds produced by response classification.

    Each kind corresponds to one HTTP status family (or to a transport
    failure for :attr:`NETWORK`).

    Example:
        >>> ErrorKind.RATE_LIMIT.value
        'rate_limit'
    """

    VALIDATION = "validation"
    AUTHENTICATION = "authentication"
    PAYMENT = "payment"
    FORBIDDEN = "forbidden"
    RATE_LIMIT = "rate_limit"
    SERVER = "server"
    NETWORK = "network"


class ValidationSubtype(str, Enum):
    """Subtypes of :attr:`ErrorKind.VALIDATION`."""

    VALIDATION_FAILED = "validation_failed"
    MISSING_FIELD = "missing_field"
    INVALID_EMAIL = "invalid_email"
    INVALID_CONTENT = "invalid_content"
    CONTENT_TOO_LARGE = "content_too_large"
    INVALID_FIELD_VALUE = "invalid_field_value"


class AuthenticationSubtype(str, Enum):
    """Subtypes of :attr:`ErrorKind.AUTHENTICATION`."""

    AUTHENTICATION_FAILED = "authentication_failed"
    INVALID_API_KEY = "invalid_api_key"
    MISSING_API_KEY = "missing_api_key"
    EXPIRED_API_KEY = "expired_api_key"


class PaymentSubtype(str, Enum):
    """Subtypes of :attr:`ErrorKind.PAYMENT`."""

    PAYMENT_REQUIRED = "payment_required"
    SUBSCRIPTION_EXPIRED = "subscription_expired"
    TRIAL_LIMIT_REACHED = "trial_limit_reached"
    MONTHLY_LIMIT_REACHED = "monthly_limit_reached"
    MONTHLY_LIMIT_EXCEEDED = "monthly_limit_exceeded"


class ForbiddenSubtype(str, Enum):
    """Subtypes of :attr:`ErrorKind.FORBIDDEN`."""

    FORBIDDEN = "forbidden"
    ACCOUNT_SUSPENDED = "account_suspended"
    INSUFFICIENT_PERMISSIONS = "insufficient_permissions"


class RateLimitSubtype(str, Enum):
    """Subtypes of :attr:`ErrorKind.RATE_LIMIT`."""

    RATE_LIMIT_EXCEEDED = "rate_limit_exceeded"


class ServerSubtype(str, Enum):
    """Subtypes of :attr:`ErrorKind.SERVER`, chosen by exact status code."""

    SERVER_ERROR = "server_error"
    INTERNAL_SERVER_ERROR = "internal_server_error"
    BAD_GATEWAY = "bad_gateway"
    SERVICE_UNAVAILABLE = "service_unavailable"
    GATEWAY_TIMEOUT = "gateway_timeout"


class NetworkSubtype(str, Enum):
    """Subtypes of :attr:`ErrorKind.NETWORK` (transport failures and unexpected statuses)."""

    NETWORK_ERROR = "network_error"
    CONNECTION_TIMEOUT = "connection_timeout"
    CONNECTION_FAILED = "connection_failed"
    DNS_RESOLUTION_FAILED = "dns_resolution_failed"
    SSL_ERROR = "ssl_error"
    HTTP_ERROR = "http_error"
    MALFORMED_RESPONSE = "malformed_response"


__all__ = [
    "AuthenticationSubtype",
    "ErrorKind",
    "ForbiddenSubtype",
    "HttpVerb",
    "NetworkSubtype",
    "OutputFormat",
    "PaymentSubtype",
    "RateLimitSubtype",
    "ServerSubtype",
    "ValidationSubtype",
]
