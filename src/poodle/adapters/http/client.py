"""High-level client for the Poodle send-email API.

Provides :class:`PoodleClient`, the entry point most applications use, and
:func:`send_email_via_api`, the port-shaped function the CLI is wired to.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from types import TracebackType
from typing import TYPE_CHECKING, Any

from poodle import __init__conf__
from poodle.adapters.email.message import Message
from poodle.adapters.email.settings import PoodleSettings
from poodle.domain.result import EmailResult

from .executor import RequestExecutor
from .transport import HttpxTransport

if TYPE_CHECKING:
    import httpx

    from poodle.application.ports import Transport

logger = logging.getLogger(__name__)

SEND_EMAIL_PATH = "v1/send-email"


class PoodleClient:
    """Send emails through the Poodle API.

    Settings are taken from ``settings`` when given; otherwise they are
    read from ``POODLE_*`` environment variables with the keyword arguments
    taking precedence.

    Args:
        settings: Pre-built settings, used as-is.
        api_key: API key override.
        base_url: Base URL override.
        timeout: Request timeout override, in seconds.
        connect_timeout: Connect timeout override, in seconds.
        debug: Log requests and responses at INFO level.
        http_options: Extra ``httpx.Client`` keyword arguments.
        transport: Request transport replacing the default httpx one.
        http_transport: httpx transport mounted under the default client
            (for example ``httpx.MockTransport`` in tests).

    Raises:
        pydantic.ValidationError: When the resolved settings are invalid.

    Example:
        >>> import httpx
        >>> mock = httpx.MockTransport(lambda request: httpx.Response(
        ...     200, json={"success": True, "message": "Email queued for sending"}))
        >>> with PoodleClient(api_key="pk_test", http_transport=mock) as client:
        ...     result = client.send_text("a@example.com", "b@example.com", "Hi", "Hello")
        >>> str(result)
        'EmailResult[SUCCESS]: Email queued for sending'
    """

    def __init__(
        self,
        settings: PoodleSettings | None = None,
        *,
        api_key: str | None = None,
        base_url: str | None = None,
        timeout: int | None = None,
        connect_timeout: int | None = None,
        debug: bool | None = None,
        http_options: Mapping[str, Any] | None = None,
        transport: Transport | None = None,
        http_transport: httpx.BaseTransport | None = None,
    ) -> None:
        if settings is None:
            settings = PoodleSettings.from_env(
                api_key=api_key,
                base_url=base_url,
                timeout=timeout,
                connect_timeout=connect_timeout,
                debug=debug,
                http_options=dict(http_options) if http_options is not None else None,
            )
        self._settings = settings
        if transport is None and http_transport is not None:
            transport = HttpxTransport(settings, transport=http_transport)
        self._executor = RequestExecutor(settings, transport)

    @property
    def settings(self) -> PoodleSettings:
        return self._settings

    @property
    def executor(self) -> RequestExecutor:
        return self._executor

    @property
    def version(self) -> str:
        return __init__conf__.version

    def send_email(self, message: Message | Mapping[str, Any]) -> EmailResult:
        """Validate ``message`` and submit it to the send-email endpoint.

        Args:
            message: A :class:`Message` or a mapping with keys ``from``,
                ``to``, ``subject``, ``html``, ``text``.

        Raises:
            ValidationError: Local validation failed (no request is made).
            PoodleError: The API rejected the request or could not be reached.
        """
        msg = message if isinstance(message, Message) else Message.from_mapping(message)
        logger.debug("Submitting email", extra={"to": msg.to, "subject": msg.subject, "multipart": msg.is_multipart})
        return self._executor.post(SEND_EMAIL_PATH, msg.to_dict())

    def send(
        self,
        from_address: str,
        to: str,
        subject: str,
        html: str | None = None,
        text: str | None = None,
    ) -> EmailResult:
        return self.send_email(Message(from_address=from_address, to=to, subject=subject, html=html, text=text))

    def send_html(self, from_address: str, to: str, subject: str, html: str) -> EmailResult:
        return self.send(from_address, to, subject, html=html)

    def send_text(self, from_address: str, to: str, subject: str, text: str) -> EmailResult:
        return self.send(from_address, to, subject, text=text)

    def close(self) -> None:
        self._executor.close()

    def __enter__(self) -> PoodleClient:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


def send_email_via_api(
    *,
    settings: PoodleSettings,
    from_address: str,
    to: str,
    subject: str,
    html: str | None = None,
    text: str | None = None,
) -> EmailResult:
    """Send one email with a short-lived client.

    Validates the message before opening a connection, then logs the
    outcome at INFO level.

    Raises:
        ValidationError: Local validation failed.
        PoodleError: The API rejected the request or could not be reached.
    """
    message = Message(from_address=from_address, to=to, subject=subject, html=html, text=text)
    logger.info(
        "Sending email",
        extra={"sender": from_address, "recipient": to, "subject": subject, "has_html": message.has_html},
    )
    with PoodleClient(settings) as client:
        result = client.send_email(message)
    if result.success:
        logger.info("Email accepted by API", extra={"recipient": to, "api_message": result.message})
    else:
        logger.warning("API reported failure", extra={"recipient": to, "api_message": result.message})
    return result


__all__ = ["SEND_EMAIL_PATH", "PoodleClient", "send_email_via_api"]
