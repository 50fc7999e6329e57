"""Email address validation shared between the client and the test doubles.

Wraps btx_lib_mail's syntax check so callers receive the client's
:class:`~poodle.domain.errors.ValidationError` rather than the library's
plain ``ValueError``.
"""

from __future__ import annotations

from btx_lib_mail import validate_email_address

from poodle.domain.errors import ValidationError


def validate_address(address: str, *, field: str = "email") -> None:
    """Validate a single email address.

    Args:
        address: Email address to validate.
        field: Payload field name reported in ``ValidationError.errors``.

    Raises:
        ValidationError: When the email address is invalid.

    Example:
        >>> validate_address("valid@example.com")  # no exception
        >>> validate_address("invalid", field="to")  # doctest: +IGNORE_EXCEPTION_DETAIL
        Traceback (most recent call last):
        ...
        ValidationError: Invalid email address provided
    """
    try:
        validate_email_address(address)
    except ValueError as e:
        raise ValidationError.invalid_email(address, field=field) from e


def is_valid_address(address: str) -> bool:
    """Return True when ``address`` passes the syntax check.

    Example:
        >>> is_valid_address("user@example.com"), is_valid_address("nope")
        (True, False)
    """
    try:
        validate_email_address(address)
    except ValueError:
        return False
    return True


__all__ = ["is_valid_address", "validate_address"]
