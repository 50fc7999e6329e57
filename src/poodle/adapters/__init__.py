"""Adapters layer - infrastructure and framework integrations.

Contains adapter implementations that connect the application to external
systems and frameworks (HTTP API, CLI, configuration, logging).

Contents:
    * :mod:`.http` - Client facade, request executor, and response classification
    * :mod:`.email` - Message model, address validation, and client settings
    * :mod:`.config` - Layered configuration loading, overrides, and display
    * :mod:`.logging` - Logging setup with lib_log_rich
    * :mod:`.memory` - In-memory test doubles for every port
    * :mod:`.cli` - Click CLI framework integration
"""

from __future__ import annotations

__all__: list[str] = []
