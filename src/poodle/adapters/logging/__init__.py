"""Logging adapter - lib_log_rich setup.

Provides centralized logging initialization for all entry points.

Contents:
    * :func:`.setup.init_logging` - Idempotent logging initialization
    * :func:`.setup.enable_request_debug` - Route request debug lines to the runtime
"""

from __future__ import annotations

from .setup import enable_request_debug, init_logging

__all__ = ["enable_request_debug", "init_logging"]
