"""Shared utilities for the email CLI command.

Contains settings resolution, the error-to-exit-code table, and the option
decorator for API connection overrides.
"""

from __future__ import annotations

import functools
import logging
import os
from collections.abc import Callable, Mapping
from typing import Any, NoReturn, cast

import rich_click as click
from lib_layered_config import Config
from pydantic import ValidationError as SettingsValidationError

from poodle import __init__conf__
from poodle.adapters.email.settings import PoodleSettings
from poodle.application.ports import LoadSettingsFromDict
from poodle.domain.enums import NetworkSubtype
from poodle.domain.errors import (
    AuthenticationError,
    ConfigurationError,
    ForbiddenError,
    NetworkError,
    PaymentError,
    PoodleError,
    RateLimitError,
    ServerError,
    ValidationError,
)
from poodle.domain.result import EmailResult

from ...exit_codes import ExitCode

logger = logging.getLogger(__name__)

#: Ordered (error type, predicate, exit code, label); first match wins.
_ERROR_EXIT_CODES: tuple[tuple[type[PoodleError], Callable[[PoodleError], bool], ExitCode, str], ...] = (
    (ValidationError, lambda _e: True, ExitCode.INVALID_ARGUMENT, "Invalid email"),
    (AuthenticationError, lambda _e: True, ExitCode.PERMISSION_DENIED, "Authentication failed"),
    (ForbiddenError, lambda _e: True, ExitCode.PERMISSION_DENIED, "Access forbidden"),
    (PaymentError, lambda _e: True, ExitCode.NO_PERMISSION, "Payment required"),
    (RateLimitError, lambda _e: True, ExitCode.TEMP_FAILURE, "Rate limited"),
    (
        NetworkError,
        lambda e: e.subtype is NetworkSubtype.CONNECTION_TIMEOUT,
        ExitCode.TIMEOUT,
        "Request timed out",
    ),
    (NetworkError, lambda _e: True, ExitCode.SERVICE_UNAVAILABLE, "Network error"),
    (ServerError, lambda _e: True, ExitCode.SERVICE_UNAVAILABLE, "Server error"),
)


def filter_sentinels(**kwargs: Any) -> dict[str, Any]:
    """Drop options the user did not pass (``None``).

    Example:
        >>> filter_sentinels(timeout=None, debug=False, base_url="http://h")
        {'debug': False, 'base_url': 'http://h'}
    """
    return {key: value for key, value in kwargs.items() if value is not None}


def classify_exit(exc: PoodleError) -> tuple[ExitCode, str]:
    """Return the exit code and user-facing label for ``exc``.

    Example:
        >>> classify_exit(RateLimitError.exceeded(retry_after=5))
        (<ExitCode.TEMP_FAILURE: 75>, 'Rate limited')
        >>> classify_exit(NetworkError.connection_timeout(30))[0]
        <ExitCode.TIMEOUT: 110>
    """
    for error_type, matches, exit_code, label in _ERROR_EXIT_CODES:
        if isinstance(exc, error_type) and matches(exc):
            return exit_code, label
    return ExitCode.GENERAL_ERROR, "Request failed"


def connection_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Add options overriding the ``[poodle]`` configuration for one call."""
    options = [
        click.option("--api-key", default=None, help="Override the Poodle API key"),
        click.option("--base-url", default=None, help="Override the API base URL"),
        click.option("--timeout", type=int, default=None, help="Override request timeout in seconds"),
        click.option("--connect-timeout", type=int, default=None, help="Override connect timeout in seconds"),
        click.option("--debug/--no-debug", default=None, help="Log requests and responses"),
    ]
    return functools.reduce(lambda f, opt: opt(f), reversed(options), func)


def resolve_settings(
    config: Config,
    loader: LoadSettingsFromDict,
    overrides: Mapping[str, Any],
) -> PoodleSettings:
    """Build PoodleSettings from the ``[poodle]`` section plus CLI overrides.

    Raises:
        SystemExit: CONFIG_ERROR when no API key is configured,
            INVALID_ARGUMENT for any other invalid setting.
    """
    config_dict = config.as_dict()
    section: Any = config_dict.get("poodle", {})
    merged = {**(cast(Mapping[str, Any], section) if isinstance(section, Mapping) else {}), **overrides}
    try:
        return loader({**config_dict, "poodle": merged})
    except SettingsValidationError as exc:
        if any(error["loc"] and error["loc"][0] == "api_key" for error in exc.errors()):
            logger.error("No API key configured")
            click.echo("\nError: No API key configured.", err=True)
            click.echo(
                f"Set POODLE_API_KEY, pass --api-key, or use: {__init__conf__.shell_command} --set poodle.api_key=...",
                err=True,
            )
            raise SystemExit(ExitCode.CONFIG_ERROR) from exc
        _fail(exc, "Invalid configuration", "Invalid option value", ExitCode.INVALID_ARGUMENT)


def execute_with_api_error_handling(
    *,
    operation: Callable[[], EmailResult],
    recipient: str,
) -> EmailResult:
    """Run ``operation`` and translate failures into exit codes.

    Exceptions are handled in specificity order: configuration errors, the
    API error taxonomy (see :func:`classify_exit`), then a catch-all.

    Raises:
        SystemExit: On any error, or when the API reports ``success=False``.
        Exception: Re-raised when DEVELOPMENT_MODE is set and the error is unexpected.
    """
    try:
        result = operation()
    except ConfigurationError as exc:
        _fail(exc, "Email configuration error", "Configuration error", ExitCode.CONFIG_ERROR)
    except PoodleError as exc:
        exit_code, label = classify_exit(exc)
        _fail_api(exc, label, exit_code)
    except Exception as exc:
        # In development mode, re-raise to surface bugs with full traceback
        if os.environ.get("DEVELOPMENT_MODE"):
            raise
        _fail(exc, "Unexpected error sending email", "Unexpected error", ExitCode.GENERAL_ERROR, log_traceback=True)

    if not result.success:
        logger.warning("API did not accept email", extra={"recipient": recipient, "api_message": result.message})
        click.echo(f"\nEmail sending failed. {result.message}".rstrip(), err=True)
        raise SystemExit(ExitCode.SERVICE_UNAVAILABLE)

    logger.info("Email sent via CLI", extra={"recipient": recipient})
    click.echo("\nEmail sent successfully!")
    if result.message:
        click.echo(result.message)
    return result


def _fail_api(exc: PoodleError, label: str, exit_code: ExitCode) -> NoReturn:
    logger.error(
        label,
        extra={"error": exc.message, "error_type": type(exc).__name__, "status_code": exc.status_code},
    )
    click.echo(f"\nError: {label} - {exc.message}", err=True)
    if isinstance(exc, ValidationError):
        for field, messages in exc.errors.items():
            for message in messages:
                click.echo(f"  {field}: {message}", err=True)
    if isinstance(exc, PaymentError) and exc.upgrade_url:
        click.echo(f"Upgrade at: {exc.upgrade_url}", err=True)
    raise SystemExit(exit_code)


def _fail(
    exc: Exception,
    log_message: str,
    user_message: str,
    exit_code: ExitCode,
    *,
    log_traceback: bool = False,
) -> NoReturn:
    logger.error(
        log_message,
        extra={"error": str(exc), "error_type": type(exc).__name__},
        exc_info=log_traceback,
    )
    click.echo(f"\nError: {user_message} - {exc}", err=True)
    raise SystemExit(exit_code)


__all__ = [
    "classify_exit",
    "connection_options",
    "execute_with_api_error_handling",
    "filter_sentinels",
    "resolve_settings",
]
