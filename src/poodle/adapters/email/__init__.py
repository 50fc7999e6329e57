"""Email adapter - payload and settings models.

Structure:
    * :mod:`.settings` - Client settings model and loaders
    * :mod:`.message` - Validated email payload
    * :mod:`.validation` - Address validation via btx_lib_mail

Contents:
    * :class:`.settings.PoodleSettings` - Validated client settings
    * :func:`.settings.load_settings_from_dict` - Config dict loader
    * :class:`.message.Message` - Email payload sent to the API
"""

from __future__ import annotations

from .message import MAX_CONTENT_SIZE, Message
from .settings import PoodleSettings, load_settings_from_dict
from .validation import is_valid_address, validate_address

__all__ = [
    "MAX_CONTENT_SIZE",
    "Message",
    "PoodleSettings",
    "is_valid_address",
    "load_settings_from_dict",
    "validate_address",
]
