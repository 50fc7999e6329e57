"""httpx-backed transport and response body decoding.

:class:`HttpxTransport` owns one ``httpx.Client`` configured once from
:class:`~poodle.adapters.email.settings.PoodleSettings`: authorization and
content headers, connect and request timeouts, and any extra client options.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

import httpx
import orjson

from poodle.adapters.email.settings import PoodleSettings
from poodle.domain.enums import HttpVerb
from poodle.domain.errors import NetworkError

_JSON_CONTENT_TYPE = re.compile(r"\bjson$")


def build_headers(settings: PoodleSettings) -> dict[str, str]:
    """Return the fixed headers sent with every request.

    Example:
        >>> headers = build_headers(PoodleSettings(api_key="pk_1"))
        >>> headers["Authorization"], headers["Accept"]
        ('Bearer pk_1', 'application/json')
    """
    return {
        "Authorization": f"Bearer {settings.api_key}",
        "Content-Type": "application/json",
        "Accept": "application/json",
        "User-Agent": settings.user_agent,
    }


def decode_body(response: httpx.Response) -> Any:
    """Decode a response body.

    JSON content types are parsed with orjson. An undecodable JSON body is a
    malformed response on 2xx and plain text otherwise. Empty bodies decode
    to ``None``; other content types are returned as text.

    Raises:
        NetworkError: Malformed JSON body on a successful response.
    """
    if not response.content:
        return None
    content_type = response.headers.get("content-type", "").split(";", 1)[0].strip().lower()
    if not _JSON_CONTENT_TYPE.search(content_type):
        return response.text
    try:
        return orjson.loads(response.content)
    except orjson.JSONDecodeError as exc:
        if response.is_success:
            raise NetworkError.malformed_response(response.text) from exc
        return response.text


class HttpxTransport:
    """Send requests through a single, pre-configured ``httpx.Client``.

    Args:
        settings: Validated client settings.
        transport: Optional httpx transport (e.g. ``httpx.MockTransport``)
            mounted under the client instead of the network.
    """

    def __init__(self, settings: PoodleSettings, *, transport: httpx.BaseTransport | None = None) -> None:
        options: dict[str, Any] = dict(settings.http_options)
        headers = {**build_headers(settings), **dict(options.pop("headers", None) or {})}
        options.setdefault("timeout", httpx.Timeout(settings.timeout, connect=settings.connect_timeout))
        if transport is not None:
            options["transport"] = transport
        self._client = httpx.Client(headers=headers, **options)

    def send(
        self,
        verb: HttpVerb,
        url: str,
        *,
        payload: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> httpx.Response:
        """Perform one request; POST carries ``payload`` as JSON, GET as query params."""
        if verb is HttpVerb.POST:
            return self._client.post(url, content=orjson.dumps(dict(payload or {})), headers=headers)
        return self._client.get(url, params=dict(payload) if payload else None, headers=headers)

    def close(self) -> None:
        self._client.close()


__all__ = ["HttpxTransport", "build_headers", "decode_body"]
