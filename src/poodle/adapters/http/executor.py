"""Request executor: one call in, one EmailResult or one typed error out.

Provides :class:`RequestExecutor`, which binds validated settings and a
transport once and turns every exchange into either an
:class:`~poodle.domain.result.EmailResult` (2xx) or an exception from the
error taxonomy.
"""

from __future__ import annotations

import contextlib
import logging
from collections.abc import Mapping
from types import TracebackType
from typing import TYPE_CHECKING, Any, cast

import httpx
import orjson

from poodle.adapters.email.settings import PoodleSettings
from poodle.domain.enums import HttpVerb
from poodle.domain.errors import NetworkError
from poodle.domain.result import EmailResult

from .classify import classify_response, classify_transport_error
from .transport import HttpxTransport, decode_body

if TYPE_CHECKING:
    from poodle.application.ports import Transport

logger = logging.getLogger(__name__)


def _coerce_verb(verb: HttpVerb | str) -> HttpVerb:
    """Normalise ``verb`` to a supported HttpVerb.

    Raises:
        ValueError: For verbs other than POST and GET.

    Example:
        >>> _coerce_verb("post")
        <HttpVerb.POST: 'POST'>
        >>> _coerce_verb("DELETE")  # doctest: +IGNORE_EXCEPTION_DETAIL
        Traceback (most recent call last):
        ...
        ValueError: Unsupported HTTP method: DELETE
    """
    if isinstance(verb, HttpVerb):
        return verb
    try:
        return HttpVerb(str(verb).upper())
    except ValueError:
        raise ValueError(f"Unsupported HTTP method: {verb}") from None


class RequestExecutor:
    """Execute API requests and classify their outcome.

    Instances hold no per-request state and may be shared between threads;
    the underlying ``httpx.Client`` is thread-safe.

    Args:
        settings: Validated client settings.
        transport: Request transport; defaults to an :class:`HttpxTransport`
            built from ``settings``.

    Example:
        >>> def handler(request):
        ...     return httpx.Response(200, json={"success": True, "message": "Queued"})
        >>> settings = PoodleSettings(api_key="pk_test")
        >>> mock = HttpxTransport(settings, transport=httpx.MockTransport(handler))
        >>> with RequestExecutor(settings, mock) as executor:
        ...     executor.post("v1/send-email", {"to": "a@example.com"}).message
        'Queued'
    """

    def __init__(self, settings: PoodleSettings, transport: Transport | None = None) -> None:
        self._settings = settings
        self._transport: Transport = transport if transport is not None else HttpxTransport(settings)

    @property
    def settings(self) -> PoodleSettings:
        return self._settings

    def execute(
        self,
        verb: HttpVerb | str,
        path: str,
        payload: Mapping[str, Any] | None = None,
        extra_headers: Mapping[str, str] | None = None,
    ) -> EmailResult:
        """Send one request and return its result.

        Args:
            verb: ``POST`` (payload as JSON body) or ``GET`` (payload as query).
            path: Endpoint path joined onto ``settings.base_url``.
            payload: Request data; ``None`` means empty.
            extra_headers: Merged over the fixed headers for this call only.

        Returns:
            EmailResult built from the decoded 2xx body.

        Raises:
            ValueError: Unsupported verb (raised before any I/O).
            PoodleError: The classified failure for a non-2xx response.
            NetworkError: Transport failure or malformed 2xx body.
        """
        method = _coerce_verb(verb)
        url = self._settings.url_for(path)
        data = dict(payload or {})

        self._debug_request(method, url, data)
        try:
            response = self._transport.send(method, url, payload=data, headers=extra_headers)
        except httpx.RequestError as exc:
            raise classify_transport_error(exc, self._settings) from exc

        self._debug_status(response.status_code)
        body = decode_body(response)
        self._debug_body(body)

        if response.is_success:
            return _result_from_body(body)
        raise classify_response(response.status_code, body, response.headers)

    def post(
        self,
        path: str,
        data: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> EmailResult:
        return self.execute(HttpVerb.POST, path, data, headers)

    def get(
        self,
        path: str,
        params: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> EmailResult:
        return self.execute(HttpVerb.GET, path, params, headers)

    def close(self) -> None:
        self._transport.close()

    def __enter__(self) -> RequestExecutor:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def _debug_request(self, method: HttpVerb, url: str, data: Mapping[str, Any]) -> None:
        if not self._settings.debug:
            return
        # Debug output never changes the outcome of a request.
        with contextlib.suppress(Exception):
            logger.info("[Poodle] %s %s", method.value, url, extra={"method": method.value, "url": url})
            if data:
                logger.info("[Poodle] Request: %s", orjson.dumps(dict(data)).decode())

    def _debug_status(self, status: int) -> None:
        if not self._settings.debug:
            return
        with contextlib.suppress(Exception):
            logger.info("[Poodle] Response: %s", status, extra={"status_code": status})

    def _debug_body(self, body: Any) -> None:
        if not self._settings.debug or body is None:
            return
        with contextlib.suppress(Exception):
            logger.info("[Poodle] Body: %s", body)


def _result_from_body(body: Any) -> EmailResult:
    if body is None:
        return EmailResult.from_response({})
    if not isinstance(body, Mapping):
        raise NetworkError.malformed_response(str(body))
    return EmailResult.from_response(cast(Mapping[str, Any], body))


__all__ = ["RequestExecutor"]
