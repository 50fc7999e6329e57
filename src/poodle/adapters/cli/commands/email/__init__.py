"""Email sending CLI commands.

Provides the command for sending emails through the Poodle API.

Contents:
    * :func:`.send_email.cli_send_email` - Send one email with HTML and/or text body.
"""

from __future__ import annotations

from ._common import classify_exit, filter_sentinels
from .send_email import cli_send_email

__all__ = ["classify_exit", "cli_send_email", "filter_sentinels"]
