"""Domain layer - pure value types with no I/O or framework dependencies.

Contains the error taxonomy, enumerations, and the result value that form
the core vocabulary of the API client.

Contents:
    * :mod:`.enums` - Domain enumerations (ErrorKind, subtypes, HttpVerb, OutputFormat)
    * :mod:`.errors` - Typed exceptions for every failure kind
    * :mod:`.result` - EmailResult value returned on success
"""

from __future__ import annotations

from .enums import ErrorKind, HttpVerb, OutputFormat
from .errors import (
    AuthenticationError,
    ConfigurationError,
    ForbiddenError,
    NetworkError,
    PaymentError,
    PoodleError,
    RateLimitError,
    ServerError,
    ValidationError,
)
from .result import EmailResult

__all__ = [
    # Enums
    "ErrorKind",
    "HttpVerb",
    "OutputFormat",
    # Errors
    "AuthenticationError",
    "ConfigurationError",
    "ForbiddenError",
    "NetworkError",
    "PaymentError",
    "PoodleError",
    "RateLimitError",
    "ServerError",
    "ValidationError",
    # Values
    "EmailResult",
]
