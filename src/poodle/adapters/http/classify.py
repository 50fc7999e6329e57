"""Map failed exchanges onto the error taxonomy.

Two pure entry points:

* :func:`classify_response` - ``(status, body, headers)`` of a non-2xx
  response to exactly one :class:`~poodle.domain.errors.PoodleError`.
* :func:`classify_transport_error` - a failed httpx request to a
  :class:`~poodle.domain.errors.NetworkError`.

Response classification is an ordered table of ``(matches, build)`` rows
ending in a catch-all, so every status maps to some error.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING, Any, cast

import httpx

from poodle.domain.errors import (
    AuthenticationError,
    ForbiddenError,
    NetworkError,
    PaymentError,
    PoodleError,
    RateLimitError,
    ServerError,
    ValidationError,
)

if TYPE_CHECKING:
    from poodle.adapters.email.settings import PoodleSettings

_Matcher = Callable[[int], bool]
_Builder = Callable[[int, Any, httpx.Headers], PoodleError]

_PAYMENT_PATTERNS: tuple[tuple[re.Pattern[str], Callable[[], PaymentError]], ...] = (
    (re.compile(r"subscription.*expired", re.IGNORECASE), PaymentError.subscription_expired),
    (re.compile(r"trial.*limit", re.IGNORECASE), PaymentError.trial_limit_reached),
    (re.compile(r"monthly.*limit", re.IGNORECASE), PaymentError.monthly_limit_reached),
)

_SERVER_FACTORIES: Mapping[int, Callable[[str], ServerError]] = {
    500: ServerError.internal_server_error,
    502: ServerError.bad_gateway,
    503: ServerError.service_unavailable,
    504: ServerError.gateway_timeout,
}

_RATE_LIMIT_HEADERS: Mapping[str, tuple[str, ...]] = {
    "retry_after": ("retry-after",),
    "limit": ("x-ratelimit-limit", "ratelimit-limit"),
    "remaining": ("x-ratelimit-remaining", "ratelimit-remaining"),
    "reset_time": ("x-ratelimit-reset", "ratelimit-reset"),
}


def _first_present(data: Mapping[str, Any], *keys: str) -> Any:
    """Return the first value under ``keys`` that is neither ``None`` nor ``False``.

    Empty strings and empty containers count as present.
    """
    for key in keys:
        value = data.get(key)
        if value is not None and value is not False:
            return value
    return None


def extract_message(status: int, body: Any) -> str:
    """Return the human message carried by an error body.

    Prefers ``message``, then ``error``; an empty message still wins.
    Anything else (including a body that is not a map) yields
    ``"HTTP <status> error"``.

    Example:
        >>> extract_message(400, {"error": "Bad input"})
        'Bad input'
        >>> extract_message(502, "<html>oops</html>")
        'HTTP 502 error'
    """
    if isinstance(body, Mapping):
        value = _first_present(cast(Mapping[str, Any], body), "message", "error")
        if value is not None:
            return str(value)
    return f"HTTP {status} error"


def extract_field_errors(body: Any) -> dict[str, list[str]]:
    """Return per-field errors, coercing scalar values to one-element lists.

    Example:
        >>> extract_field_errors({"errors": {"to": "is invalid", "from": ["a", "b"]}})
        {'to': ['is invalid'], 'from': ['a', 'b']}
        >>> extract_field_errors({"errors": ["not", "a", "map"]})
        {}
    """
    if not isinstance(body, Mapping):
        return {}
    errors = _first_present(cast(Mapping[str, Any], body), "errors", "validation_errors")
    if not isinstance(errors, Mapping):
        return {}
    result: dict[str, list[str]] = {}
    for key, value in cast(Mapping[Any, Any], errors).items():
        items = cast(list[Any], value) if isinstance(value, (list, tuple)) else [value]
        result[str(key)] = [str(item) for item in items if item is not None]
    return result


def _parse_int(value: str | None) -> int | None:
    if value is None:
        return None
    try:
        return int(value.strip())
    except ValueError:
        return None


def rate_limit_from_headers(headers: httpx.Headers | Mapping[str, str]) -> RateLimitError:
    """Build a RateLimitError from response headers (case-insensitive).

    Missing or unparsable values leave the corresponding field ``None``.

    Example:
        >>> err = rate_limit_from_headers({"Retry-After": "60", "X-RateLimit-Limit": "100"})
        >>> err.retry_after, err.limit, err.remaining
        (60, 100, None)
    """
    lookup = headers if isinstance(headers, httpx.Headers) else httpx.Headers(headers)
    values: dict[str, int | None] = {}
    for field_name, names in _RATE_LIMIT_HEADERS.items():
        raw = next((lookup[name] for name in names if name in lookup), None)
        values[field_name] = _parse_int(raw)
    return RateLimitError.exceeded(**values)


def _validation(status: int, body: Any, _headers: httpx.Headers) -> PoodleError:
    return ValidationError(extract_message(status, body), errors=extract_field_errors(body), status_code=status)


def _authentication(_status: int, _body: Any, _headers: httpx.Headers) -> PoodleError:
    return AuthenticationError.invalid_api_key()


def _payment(status: int, body: Any, _headers: httpx.Headers) -> PoodleError:
    message = extract_message(status, body)
    for pattern, factory in _PAYMENT_PATTERNS:
        if pattern.search(message):
            return factory()
    return PaymentError(message)


def _forbidden(status: int, body: Any, _headers: httpx.Headers) -> PoodleError:
    message = extract_message(status, body)
    if "suspended" not in message:
        return ForbiddenError.insufficient_permissions()
    data = cast(Mapping[str, Any], body) if isinstance(body, Mapping) else {}
    return ForbiddenError.account_suspended(str(data.get("reason") or "unknown"), data.get("rate"))


def _rate_limit(_status: int, _body: Any, headers: httpx.Headers) -> PoodleError:
    return rate_limit_from_headers(headers)


def _server(status: int, body: Any, _headers: httpx.Headers) -> PoodleError:
    message = extract_message(status, body)
    factory = _SERVER_FACTORIES.get(status)
    if factory is not None:
        return factory(message)
    return ServerError(message, status_code=status)


def _unexpected(status: int, body: Any, _headers: httpx.Headers) -> PoodleError:
    return NetworkError.http_error(status, extract_message(status, body))


_RULES: tuple[tuple[_Matcher, _Builder], ...] = (
    (lambda status: status in (400, 422), _validation),
    (lambda status: status == 401, _authentication),
    (lambda status: status == 402, _payment),
    (lambda status: status == 403, _forbidden),
    (lambda status: status == 429, _rate_limit),
    (lambda status: 500 <= status <= 599, _server),
    (lambda _status: True, _unexpected),
)


def classify_response(
    status: int,
    body: Any,
    headers: httpx.Headers | Mapping[str, str] | None = None,
) -> PoodleError:
    """Return the error for a non-2xx response.

    Args:
        status: HTTP status code.
        body: Decoded body (map, text, or ``None``).
        headers: Response headers; looked up case-insensitively.

    Example:
        >>> classify_response(401, None).subtype.value
        'invalid_api_key'
        >>> classify_response(418, {"message": "teapot"})
        NetworkError('teapot')
    """
    lookup = headers if isinstance(headers, httpx.Headers) else httpx.Headers(headers or {})
    for matches, build in _RULES:
        if matches(status):
            return build(status, body, lookup)
    raise AssertionError("unreachable: catch-all rule matched nothing")  # pragma: no cover


def classify_transport_error(exc: httpx.RequestError, settings: PoodleSettings) -> NetworkError:
    """Return the NetworkError for a request that failed below the HTTP layer.

    Timeouts report the configured request timeout. Connect failures are
    refined by their description: ``SSL``/``certificate`` mean a TLS failure,
    ``resolve``/``DNS`` a name-resolution failure. Everything else, including
    undecodable content encodings and redirect loops, is a connection failure.
    """
    if isinstance(exc, httpx.TimeoutException):
        return NetworkError.connection_timeout(settings.timeout, original_error=exc)
    detail = str(exc)
    if isinstance(exc, httpx.ConnectError):
        if "SSL" in detail or "certificate" in detail:
            return NetworkError.ssl_error(detail, original_error=exc)
        if "resolve" in detail or "DNS" in detail:
            return NetworkError.dns_resolution_failed(settings.host, original_error=exc)
    return NetworkError.connection_failed(settings.base_url, original_error=exc)


__all__ = [
    "classify_response",
    "classify_transport_error",
    "extract_field_errors",
    "extract_message",
    "rate_limit_from_headers",
]
