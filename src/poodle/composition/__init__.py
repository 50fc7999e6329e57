"""Composition root wiring adapters to application ports."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

# Configuration services
from ..adapters.config.display import display_config
from ..adapters.config.loader import get_config

# Email services
from ..adapters.email.settings import load_settings_from_dict
from ..adapters.http.client import send_email_via_api

# Logging services
from ..adapters.logging.setup import init_logging

# Static conformance assertions: pyright verifies that each adapter function
# structurally satisfies its corresponding Protocol at type-check time.
if TYPE_CHECKING:
    from ..adapters.memory.email import EmailSpy
    from ..application.ports import (
        DisplayConfig,
        GetConfig,
        InitLogging,
        LoadSettingsFromDict,
        SendEmail,
    )

    _assert_get_config: GetConfig = get_config
    _assert_display_config: DisplayConfig = display_config
    _assert_send_email: SendEmail = send_email_via_api
    _assert_load_settings_from_dict: LoadSettingsFromDict = load_settings_from_dict
    _assert_init_logging: InitLogging = init_logging


@dataclass(frozen=True, slots=True)
class AppServices:
    """Frozen container holding all application port implementations."""

    get_config: GetConfig
    display_config: DisplayConfig
    send_email: SendEmail
    load_settings_from_dict: LoadSettingsFromDict
    init_logging: InitLogging


def build_production() -> AppServices:
    """Wire production adapters (layered config, httpx client, lib_log_rich)."""
    return AppServices(
        get_config=get_config,
        display_config=display_config,
        send_email=send_email_via_api,
        load_settings_from_dict=load_settings_from_dict,
        init_logging=init_logging,
    )


def build_testing(*, spy: EmailSpy | None = None) -> AppServices:
    """Wire in-memory adapters into an AppServices container.

    Args:
        spy: EmailSpy capturing sends; a fresh one is created when None.
            Pass your own to assert on deliveries.
    """
    from ..adapters.memory import (
        EmailSpy,
        display_config_in_memory,
        get_config_in_memory,
        init_logging_in_memory,
        load_settings_from_dict_in_memory,
    )

    email_spy = spy if spy is not None else EmailSpy()

    return AppServices(
        get_config=get_config_in_memory,
        display_config=display_config_in_memory,
        send_email=email_spy.send_email_via_api,
        load_settings_from_dict=load_settings_from_dict_in_memory,
        init_logging=init_logging_in_memory,
    )


__all__ = [
    # Configuration
    "display_config",
    "get_config",
    # Email
    "load_settings_from_dict",
    "send_email_via_api",
    # Logging
    "init_logging",
    # Composition
    "AppServices",
    "build_production",
    "build_testing",
]
