"""Send email CLI command.

Provides the send-email command, which submits one message to the Poodle API.
"""

from __future__ import annotations

import functools
import logging

import lib_log_rich.runtime
import rich_click as click

from poodle.adapters.logging import enable_request_debug

from ...constants import CLICK_CONTEXT_SETTINGS
from ...context import get_cli_context
from ._common import (
    connection_options,
    execute_with_api_error_handling,
    filter_sentinels,
    resolve_settings,
)

logger = logging.getLogger(__name__)


@click.command("send-email", context_settings=CLICK_CONTEXT_SETTINGS)
@click.option("--from", "from_address", required=True, help="Sender email address")
@click.option("--to", required=True, help="Recipient email address")
@click.option("--subject", required=True, help="Email subject line")
@click.option("--html", default=None, help="HTML email body")
@click.option("--text", default=None, help="Plain-text email body")
@connection_options
@click.pass_context
def cli_send_email(
    ctx: click.Context,
    from_address: str,
    to: str,
    subject: str,
    html: str | None,
    text: str | None,
    api_key: str | None,
    base_url: str | None,
    timeout: int | None,
    connect_timeout: int | None,
    debug: bool | None,
) -> None:
    """Send an email through the Poodle API.

    At least one of --html or --text is required. Connection settings come
    from the [poodle] configuration section unless overridden here.

    Example:
        >>> from click.testing import CliRunner
        >>> runner = CliRunner()
        >>> # Real invocation tested in test_cli_email.py
    """
    cli_ctx = get_cli_context(ctx)
    extra = {"command": "send-email", "recipient": to, "subject": subject}

    with lib_log_rich.runtime.bind(job_id="cli-send-email", extra=extra):
        overrides = filter_sentinels(
            api_key=api_key,
            base_url=base_url,
            timeout=timeout,
            connect_timeout=connect_timeout,
            debug=debug,
        )
        settings = resolve_settings(cli_ctx.config, cli_ctx.services.load_settings_from_dict, overrides)
        if settings.debug:
            enable_request_debug()

        logger.info("Sending email", extra={"recipient": to, "subject": subject, "has_html": bool(html)})
        execute_with_api_error_handling(
            operation=functools.partial(
                cli_ctx.services.send_email,
                settings=settings,
                from_address=from_address,
                to=to,
                subject=subject,
                html=html,
                text=text,
            ),
            recipient=to,
        )


__all__ = ["cli_send_email"]
