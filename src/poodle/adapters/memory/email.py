"""In-memory email adapters for testing.

Provides an email client double that satisfies the same shapes as the
production client and the ``SendEmail`` port but performs no HTTP requests.

Contents:
    * :class:`EmailSpy` - Captures deliveries for test assertions.
    * :func:`load_settings_from_dict_in_memory` - In-memory settings loader.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from poodle import __init__conf__
from poodle.domain.result import EmailResult

from ..email.message import Message
from ..email.settings import PoodleSettings

TEST_MODE_MESSAGE = "Email queued for sending (test mode)"


def _empty_delivery_list() -> list[dict[str, Any]]:
    """Create an empty typed list for delivery records."""
    return []


@dataclass
class EmailSpy:
    """Captures email deliveries for test assertions.

    Each test should create its own EmailSpy instance to avoid cross-test
    pollution. Messages are validated exactly like the real client, so an
    invalid payload raises ``ValidationError`` and is not recorded.

    Attributes:
        deliveries: Captured deliveries (from, to, subject, html, text, sent_at).
        sent_settings: Settings passed through :meth:`send_email_via_api`.
        should_fail: When True, results report ``success=False``.
        raise_exception: When set, send operations raise this exception
            after recording the delivery.

    Example:
        >>> spy = EmailSpy()
        >>> spy.send_text("a@example.com", "b@example.com", "Hi", "Hello").data
        {'test_mode': True, 'delivery_id': 1}
        >>> spy.sent_to("b@example.com")
        True
    """

    deliveries: list[dict[str, Any]] = field(default_factory=_empty_delivery_list)
    sent_settings: list[PoodleSettings] = field(default_factory=list)
    should_fail: bool = False
    raise_exception: Exception | None = None

    def clear(self) -> None:
        """Reset captured data for next test."""
        self.deliveries.clear()
        self.sent_settings.clear()
        self.raise_exception = None

    def send_email(self, message: Message | Mapping[str, Any]) -> EmailResult:
        """Record ``message`` and return a test-mode result.

        Raises:
            ValidationError: When the message is invalid.
            Exception: If raise_exception is set, raises that exception.
        """
        msg = message if isinstance(message, Message) else Message.from_mapping(message)
        self.deliveries.append(
            {
                "from": msg.from_address,
                "to": msg.to,
                "subject": msg.subject,
                "html": msg.html,
                "text": msg.text,
                "sent_at": datetime.now(timezone.utc),
            }
        )
        if self.raise_exception is not None:
            raise self.raise_exception
        return EmailResult(
            success=not self.should_fail,
            message=TEST_MODE_MESSAGE,
            data={"test_mode": True, "delivery_id": len(self.deliveries)},
        )

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

    def send_email_via_api(
        self,
        *,
        settings: PoodleSettings,
        from_address: str,
        to: str,
        subject: str,
        html: str | None = None,
        text: str | None = None,
    ) -> EmailResult:
        """Satisfy the SendEmail port; settings are captured for assertions."""
        self.sent_settings.append(settings)
        return self.send(from_address, to, subject, html=html, text=text)

    @property
    def last_delivery(self) -> dict[str, Any] | None:
        return self.deliveries[-1] if self.deliveries else None

    @property
    def version(self) -> str:
        return __init__conf__.version

    def sent_to(self, address: str) -> bool:
        return any(delivery["to"] == address for delivery in self.deliveries)

    def deliveries_to(self, address: str) -> list[dict[str, Any]]:
        return [delivery for delivery in self.deliveries if delivery["to"] == address]

    def deliveries_with_subject(self, fragment: str) -> list[dict[str, Any]]:
        """Return deliveries whose subject contains ``fragment``."""
        return [delivery for delivery in self.deliveries if fragment in delivery["subject"]]

    def assert_email_sent(self, count: int = 1) -> None:
        actual = len(self.deliveries)
        if actual != count:
            raise AssertionError(f"Expected {count} email(s) to be sent, but {actual} were sent")

    def assert_email_sent_to(self, address: str) -> None:
        if not self.sent_to(address):
            raise AssertionError(f"Expected email to be sent to {address}")

    def assert_email_sent_with_subject(self, fragment: str) -> None:
        if not self.deliveries_with_subject(fragment):
            raise AssertionError(f"Expected email to be sent with subject containing '{fragment}'")

    def assert_no_emails_sent(self) -> None:
        if self.deliveries:
            raise AssertionError(f"Expected no emails to be sent, but {len(self.deliveries)} were sent")


def load_settings_from_dict_in_memory(
    config_dict: Mapping[str, Any],
) -> PoodleSettings:
    """Parse settings from dict using the real Pydantic model, without environment fallback."""
    section = config_dict.get("poodle", {})
    return PoodleSettings.model_validate(section if section else {})


__all__ = [
    "TEST_MODE_MESSAGE",
    "EmailSpy",
    "load_settings_from_dict_in_memory",
]
