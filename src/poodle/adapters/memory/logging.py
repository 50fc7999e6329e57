"""In-memory logging adapter for tests.

``init_logging_in_memory`` leaves the lib_log_rich runtime untouched, so
stdlib records from the client stay with whatever handlers pytest installs.
"""

from __future__ import annotations

from lib_layered_config import Config


def init_logging_in_memory(config: Config) -> None:
    """Accept the configuration and start nothing."""


__all__ = ["init_logging_in_memory"]
