"""lib_log_rich runtime setup shared by every entry point.

Library modules (executor, client) only log through stdlib ``logging``;
:func:`init_logging` starts the lib_log_rich runtime once and bridges the
stdlib loggers into it, so request debug lines and CLI events end up in the
same console and backends.

Contents:
    * :class:`LoggingConfigModel` - typed ``[lib_log_rich]`` section.
    * :func:`build_runtime_config` - section to ``RuntimeConfig``.
    * :func:`enable_request_debug` - open the stdlib threshold for ``[Poodle]`` lines.
    * :func:`init_logging` - idempotent runtime start.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, cast

import lib_log_rich.config
import lib_log_rich.runtime
from lib_layered_config import Config
from pydantic import BaseModel, ConfigDict

from poodle import __init__conf__

REQUEST_LOGGER_NAME = "poodle.adapters.http"


class LoggingConfigModel(BaseModel):
    """Typed view of the ``[lib_log_rich]`` section.

    Unknown keys are kept and forwarded to ``RuntimeConfig`` unchanged.

    Example:
        >>> LoggingConfigModel(console_level="DEBUG").model_dump()
        {'service': None, 'environment': 'prod', 'console_level': 'DEBUG'}
    """

    service: str | None = None
    environment: str = "prod"

    model_config = ConfigDict(extra="allow")


def build_runtime_config(config: Config) -> lib_log_rich.runtime.RuntimeConfig:
    """Translate the ``[lib_log_rich]`` section into a RuntimeConfig.

    An empty ``service`` becomes the package name.
    """
    section: object = config.get("lib_log_rich", default={})
    parsed = LoggingConfigModel.model_validate(cast("dict[str, object]", section) if section else {})
    passthrough = parsed.model_dump(exclude={"service", "environment"}, exclude_none=True)
    return lib_log_rich.runtime.RuntimeConfig(
        service=parsed.service or __init__conf__.name,
        environment=parsed.environment,
        **passthrough,
    )


def request_debug_configured(config: Config) -> bool:
    """Return True when the ``[poodle]`` section turns request debugging on.

    Example:
        >>> request_debug_configured(Config({"poodle": {"debug": True}}, {}))
        True
        >>> request_debug_configured(Config({}, {}))
        False
    """
    section: object = config.get("poodle", default={})
    if not isinstance(section, Mapping):
        return False
    return bool(cast(Mapping[str, Any], section).get("debug"))


def enable_request_debug() -> None:
    """Let the executor's INFO-level ``[Poodle]`` lines pass the stdlib threshold.

    The executor only emits them when ``settings.debug`` is set, so lowering
    the level is silent for clients running without debug.
    """
    request_logger = logging.getLogger(REQUEST_LOGGER_NAME)
    if request_logger.getEffectiveLevel() > logging.INFO:
        request_logger.setLevel(logging.INFO)


def init_logging(config: Config) -> None:
    """Start lib_log_rich from ``config`` unless it is already running.

    Loads ``.env`` so ``LOG_*`` variables apply, initialises the runtime,
    and attaches stdlib logging. ``[poodle] debug = true`` also opens the
    request logger; that check runs on every call because ``--set`` can
    change it after the runtime started.

    Example:
        >>> init_logging(Config({"lib_log_rich": {"environment": "test"}}, {}))  # doctest: +SKIP
    """
    if request_debug_configured(config):
        enable_request_debug()
    if lib_log_rich.runtime.is_initialised():
        return
    lib_log_rich.config.enable_dotenv()
    lib_log_rich.runtime.init(build_runtime_config(config))
    lib_log_rich.runtime.attach_std_logging()


__all__ = [
    "REQUEST_LOGGER_NAME",
    "LoggingConfigModel",
    "build_runtime_config",
    "enable_request_debug",
    "init_logging",
    "request_debug_configured",
]
