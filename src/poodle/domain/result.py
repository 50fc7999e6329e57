"""Outcome value returned for every successful API exchange."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True, slots=True)
class EmailResult:
    """Outcome of a 2xx API exchange.

    ``data`` holds the entire decoded response body, not only a nested
    ``data`` member, so callers can read any top-level key the API returns.

    Example:
        >>> result = EmailResult.from_response({"success": True, "message": "Queued"})
        >>> result.success, result.message
        (True, 'Queued')
        >>> str(result)
        'EmailResult[SUCCESS]: Queued'
    """

    success: bool
    message: str = ""
    data: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_response(cls, body: Mapping[str, Any] | None) -> EmailResult:
        """Build a result from a decoded response body.

        Missing keys fall back to ``success=False`` and an empty message; an
        absent body is treated as an empty map.

        Example:
            >>> EmailResult.from_response(None)
            EmailResult(success=False, message='', data={})
        """
        data = dict(body) if body else {}
        return cls(
            success=bool(data.get("success") or False),
            message=str(data.get("message") or ""),
            data=data,
        )

    @property
    def failed(self) -> bool:
        return not self.success

    def to_dict(self) -> dict[str, Any]:
        return {"success": self.success, "message": self.message, "data": dict(self.data)}

    def __str__(self) -> str:
        status = "SUCCESS" if self.success else "FAILED"
        return f"EmailResult[{status}]: {self.message}"


__all__ = ["EmailResult"]
