"""HTTP adapter - request execution against the Poodle API over httpx.

Structure:
    * :mod:`.classify` - Response and transport-failure classification
    * :mod:`.transport` - httpx client wrapper and body decoding
    * :mod:`.executor` - RequestExecutor
    * :mod:`.client` - PoodleClient facade

Contents:
    * :class:`.client.PoodleClient` - Validate and send emails
    * :class:`.executor.RequestExecutor` - Execute requests, return EmailResult
    * :class:`.transport.HttpxTransport` - Pre-configured httpx.Client wrapper
    * :func:`.classify.classify_response` - Status/body/headers to typed error
"""

from __future__ import annotations

from .classify import classify_response, classify_transport_error, rate_limit_from_headers
from .client import SEND_EMAIL_PATH, PoodleClient, send_email_via_api
from .executor import RequestExecutor
from .transport import HttpxTransport, build_headers, decode_body

__all__ = [
    "SEND_EMAIL_PATH",
    "HttpxTransport",
    "PoodleClient",
    "RequestExecutor",
    "build_headers",
    "classify_response",
    "classify_transport_error",
    "decode_body",
    "rate_limit_from_headers",
    "send_email_via_api",
]
