"""Validated email payload sent to the Poodle API."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from poodle.domain.errors import ValidationError

from .validation import validate_address

#: Maximum size of each body, in UTF-8 bytes (10 MiB).
MAX_CONTENT_SIZE = 10 * 1024 * 1024

_REQUIRED_FIELDS = (("from", "from_address"), ("to", "to"), ("subject", "subject"))


@dataclass(frozen=True, slots=True)
class Message:
    """Immutable email payload, validated on construction.

    Checks run in a fixed order and stop at the first failure: required
    fields, sender and recipient address syntax, presence of a body, then
    body sizes (html before text).

    Attributes:
        from_address: Sender address.
        to: Recipient address.
        subject: Subject line.
        html: Optional HTML body.
        text: Optional plain-text body.

    Raises:
        ValidationError: On the first failed check.

    Example:
        >>> msg = Message("a@example.com", "b@example.com", "Hi", text="Hello")
        >>> msg.to_dict()
        {'from': 'a@example.com', 'to': 'b@example.com', 'subject': 'Hi', 'text': 'Hello'}
        >>> msg.is_multipart
        False
    """

    from_address: str
    to: str
    subject: str
    html: str | None = None
    text: str | None = None

    def __post_init__(self) -> None:
        for wire_name, attr in _REQUIRED_FIELDS:
            if not getattr(self, attr):
                raise ValidationError.missing_field(wire_name)

        validate_address(self.from_address, field="from")
        validate_address(self.to, field="to")

        if not self.html and not self.text:
            raise ValidationError.invalid_content()

        for field_name in ("html", "text"):
            body = getattr(self, field_name)
            if body and len(body.encode("utf-8")) > MAX_CONTENT_SIZE:
                raise ValidationError.content_too_large(field_name, MAX_CONTENT_SIZE)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> Message:
        """Build a message from a wire-shaped mapping.

        Accepts the keys ``from``, ``to``, ``subject``, ``html`` and ``text``;
        ``from_address`` is accepted as an alias of ``from``.

        Example:
            >>> Message.from_mapping({"from": "a@example.com", "to": "b@example.com",
            ...                       "subject": "S", "html": "<p>x</p>"}).has_html
            True
        """
        from_address = data.get("from", data.get("from_address"))
        for wire_name, value in (("from", from_address), ("to", data.get("to")), ("subject", data.get("subject"))):
            if not value:
                raise ValidationError.missing_field(wire_name)
        return cls(
            from_address=str(from_address),
            to=str(data["to"]),
            subject=str(data["subject"]),
            html=data.get("html"),
            text=data.get("text"),
        )

    @property
    def has_html(self) -> bool:
        return bool(self.html)

    @property
    def has_text(self) -> bool:
        return bool(self.text)

    @property
    def is_multipart(self) -> bool:
        return self.has_html and self.has_text

    @property
    def content_size(self) -> int:
        """Return the combined UTF-8 byte length of both bodies."""
        return sum(len(body.encode("utf-8")) for body in (self.html, self.text) if body)

    def to_dict(self) -> dict[str, str]:
        """Serialize to the flat wire shape, omitting absent bodies."""
        payload = {"from": self.from_address, "to": self.to, "subject": self.subject}
        if self.html is not None:
            payload["html"] = self.html
        if self.text is not None:
            payload["text"] = self.text
        return payload


__all__ = ["MAX_CONTENT_SIZE", "Message"]
