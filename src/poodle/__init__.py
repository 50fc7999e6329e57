"""Public package surface of the Poodle email API client.

Routes imports through the architectural layers:
- Domain exports: error taxonomy and the EmailResult value
- Adapter exports: client facade, message, settings, executor
- Composition exports: layered configuration loader
- Metadata: package information
"""

from __future__ import annotations

# Metadata
from .__init__conf__ import print_info, version

# Adapter exports (client surface)
from .adapters.email import MAX_CONTENT_SIZE, Message, PoodleSettings, is_valid_address
from .adapters.http import PoodleClient, RequestExecutor, classify_response

# Composition exports (wired adapters)
from .composition import get_config

# Domain exports
from .domain import (
    AuthenticationError,
    ConfigurationError,
    EmailResult,
    ErrorKind,
    ForbiddenError,
    NetworkError,
    PaymentError,
    PoodleError,
    RateLimitError,
    ServerError,
    ValidationError,
)

__version__ = version

__all__ = [
    "MAX_CONTENT_SIZE",
    "AuthenticationError",
    "ConfigurationError",
    "EmailResult",
    "ErrorKind",
    "ForbiddenError",
    "Message",
    "NetworkError",
    "PaymentError",
    "PoodleClient",
    "PoodleError",
    "PoodleSettings",
    "RateLimitError",
    "RequestExecutor",
    "ServerError",
    "ValidationError",
    "__version__",
    "classify_response",
    "get_config",
    "is_valid_address",
    "print_info",
]
