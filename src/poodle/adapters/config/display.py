"""Render the merged configuration with the API key masked.

Delegates rendering to lib_layered_config's Rich display and flushes
pending lib_log_rich output first so log lines and configuration output
never interleave.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import lib_log_rich.runtime
from lib_layered_config import Config
from lib_layered_config import OutputFormat as LibOutputFormat
from lib_layered_config import display_config as _lib_display
from rich.console import Console

from poodle.domain.enums import OutputFormat

REDACTED = "[REDACTED]"


def redact_secrets(config: Config) -> Config:
    """Return ``config`` with a non-empty ``poodle.api_key`` replaced by a marker.

    Example:
        >>> cfg = Config({"poodle": {"api_key": "pk_live_123"}}, {})
        >>> redact_secrets(cfg)["poodle"]["api_key"]
        '[REDACTED]'
        >>> empty = Config({"poodle": {"api_key": ""}}, {})
        >>> redact_secrets(empty) is empty
        True
    """
    section: Any = config.get("poodle", default={})
    if isinstance(section, Mapping) and section.get("api_key"):
        return config.with_overrides({"poodle": {"api_key": REDACTED}})
    return config


def display_config(
    config: Config,
    *,
    output_format: OutputFormat = OutputFormat.HUMAN,
    section: str | None = None,
    console: Console | None = None,
    profile: str | None = None,
) -> None:
    """Print ``config`` (or one ``section``) as TOML-like text or JSON.

    Args:
        config: Loaded layered configuration.
        output_format: Human-readable or JSON output.
        section: Limit output to one top-level section.
        console: Rich console to write to; the library default when None.
        profile: Profile name shown in provenance comments.

    Raises:
        ValueError: ``section`` does not exist.
    """
    if lib_log_rich.runtime.is_initialised():
        lib_log_rich.runtime.flush()

    _lib_display(
        redact_secrets(config),
        output_format=LibOutputFormat(output_format.value),
        section=section,
        profile=profile,
        console=console,
    )


__all__ = ["REDACTED", "display_config", "redact_secrets"]
