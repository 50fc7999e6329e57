"""Application layer - port definitions.

Contains the port protocols that define the interfaces for adapter
implementations.

Contents:
    * :mod:`.ports` - Protocol definitions for adapter functions and the HTTP transport
"""

from __future__ import annotations

from .ports import (
    DisplayConfig,
    GetConfig,
    InitLogging,
    LoadSettingsFromDict,
    SendEmail,
    Transport,
)

__all__ = [
    "DisplayConfig",
    "GetConfig",
    "InitLogging",
    "LoadSettingsFromDict",
    "SendEmail",
    "Transport",
]
