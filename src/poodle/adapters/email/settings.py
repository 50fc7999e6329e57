"""Client settings model and loaders.

Provides the PoodleSettings Pydantic model for validated, immutable client
settings, environment-variable defaults, and the loader that builds settings
from a lib_layered_config dictionary.
"""

from __future__ import annotations

import os
import platform
from collections.abc import Mapping
from typing import Any, cast

import httpx
from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from poodle import __init__conf__

DEFAULT_BASE_URL = "https://api.usepoodle.com"
DEFAULT_TIMEOUT = 30
DEFAULT_CONNECT_TIMEOUT = 10

_ENV_VARS: Mapping[str, str] = {
    "api_key": "POODLE_API_KEY",
    "base_url": "POODLE_BASE_URL",
    "timeout": "POODLE_TIMEOUT",
    "connect_timeout": "POODLE_CONNECT_TIMEOUT",
    "debug": "POODLE_DEBUG",
}
_TRUTHY = frozenset({"true", "1", "yes"})


class PoodleSettings(BaseModel):
    """Validated, immutable client settings.

    All fields are checked together; a failing instance is never built.

    Example:
        >>> settings = PoodleSettings(api_key="pk_test")
        >>> settings.base_url, settings.timeout, settings.connect_timeout
        ('https://api.usepoodle.com', 30, 10)
        >>> settings.url_for("/v1/send-email")
        'https://api.usepoodle.com/v1/send-email'
    """

    model_config = ConfigDict(frozen=True)

    api_key: str = Field(default="", validate_default=True)
    base_url: str = DEFAULT_BASE_URL
    timeout: int = DEFAULT_TIMEOUT
    connect_timeout: int = DEFAULT_CONNECT_TIMEOUT
    debug: bool = False
    http_options: dict[str, Any] = Field(default_factory=dict)

    @field_validator("api_key", mode="before")
    @classmethod
    def _coerce_none_to_empty(cls, v: Any) -> Any:
        return "" if v is None else v

    @field_validator("api_key")
    @classmethod
    def _require_api_key(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("API key is required")
        return v

    @field_validator("base_url", mode="before")
    @classmethod
    def _default_empty_base_url(cls, v: Any) -> Any:
        """Treat an empty or missing base URL as "use the default".

        Example:
            >>> PoodleSettings._default_empty_base_url("  ")
            'https://api.usepoodle.com'
        """
        if v is None or (isinstance(v, str) and not v.strip()):
            return DEFAULT_BASE_URL
        return v

    @field_validator("base_url")
    @classmethod
    def _validate_base_url(cls, v: str) -> str:
        try:
            url = httpx.URL(v.strip())
        except httpx.InvalidURL as exc:
            raise ValueError("base_url must be a valid HTTP or HTTPS URL") from exc
        if url.scheme not in ("http", "https") or not url.host:
            raise ValueError("base_url must be a valid HTTP or HTTPS URL")
        return v.strip()

    @field_validator("timeout", "connect_timeout", mode="before")
    @classmethod
    def _reject_bool(cls, v: Any, info: ValidationInfo) -> Any:
        if isinstance(v, bool):
            raise ValueError(f"{info.field_name} must be a positive integer")
        return v

    @field_validator("timeout", "connect_timeout")
    @classmethod
    def _require_positive(cls, v: int, info: ValidationInfo) -> int:
        if v <= 0:
            raise ValueError(f"{info.field_name} must be a positive integer")
        return v

    @field_validator("http_options", mode="before")
    @classmethod
    def _coerce_none_to_dict(cls, v: Any) -> Any:
        return {} if v is None else v

    @property
    def host(self) -> str:
        """Return the hostname portion of ``base_url``.

        Example:
            >>> PoodleSettings(api_key="k", base_url="http://localhost:8080/api").host
            'localhost'
        """
        return httpx.URL(self.base_url).host

    @property
    def user_agent(self) -> str:
        return f"poodle-python/{__init__conf__.version} (Python {platform.python_version()})"

    def url_for(self, endpoint: str) -> str:
        """Join ``base_url`` and ``endpoint`` with exactly one slash.

        Example:
            >>> PoodleSettings(api_key="k", base_url="https://x.test/").url_for("v1/a")
            'https://x.test/v1/a'
        """
        return f"{self.base_url.rstrip('/')}/{endpoint.lstrip('/')}"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None, **overrides: Any) -> PoodleSettings:
        """Build settings from ``POODLE_*`` environment variables.

        Explicit keyword overrides win over environment values; overrides
        passed as ``None`` are ignored so callers can forward optional
        arguments unchanged.

        Args:
            environ: Mapping to read instead of ``os.environ``.
            **overrides: Field values taking precedence over the environment.

        Raises:
            pydantic.ValidationError: When the combined values are invalid.

        Example:
            >>> env = {"POODLE_API_KEY": "pk_env", "POODLE_TIMEOUT": "45", "POODLE_DEBUG": "yes"}
            >>> settings = PoodleSettings.from_env(env, timeout=None)
            >>> settings.api_key, settings.timeout, settings.debug
            ('pk_env', 45, True)
        """
        env = os.environ if environ is None else environ
        values: dict[str, Any] = {}
        for field_name, env_name in _ENV_VARS.items():
            raw = env.get(env_name)
            if raw:
                values[field_name] = raw
        if "debug" in values:
            values["debug"] = str(values["debug"]).strip().lower() in _TRUTHY
        values.update({key: value for key, value in overrides.items() if value is not None})
        return cls.model_validate(values)

    def __repr__(self) -> str:
        """Return string representation with api_key redacted.

        Example:
            >>> settings = PoodleSettings(api_key="secret123")
            >>> "secret123" in repr(settings)
            False
            >>> "[REDACTED]" in repr(settings)
            True
        """
        fields: list[str] = []
        for name, value in self:
            if name == "api_key" and value:
                fields.append(f"{name}='[REDACTED]'")
            else:
                fields.append(f"{name}={value!r}")
        return f"PoodleSettings({', '.join(fields)})"


def load_settings_from_dict(
    config_dict: Mapping[str, Any],
    environ: Mapping[str, str] | None = None,
) -> PoodleSettings:
    """Load PoodleSettings from a configuration dictionary.

    Bridges lib_layered_config's dictionary output with the typed
    PoodleSettings model. Reads the ``[poodle]`` section; an empty
    ``api_key`` falls back to the ``POODLE_API_KEY`` environment variable.

    Args:
        config_dict: Configuration dictionary typically from lib_layered_config.
        environ: Mapping to read instead of ``os.environ``.

    Example:
        >>> config_dict = {"poodle": {"api_key": "pk_cfg", "timeout": 12}}
        >>> settings = load_settings_from_dict(config_dict, environ={})
        >>> settings.api_key, settings.timeout
        ('pk_cfg', 12)
    """
    section: Any = config_dict.get("poodle", {})

    # Handle non-dict section (e.g. "poodle": "invalid")
    if not isinstance(section, Mapping):
        return PoodleSettings.model_validate(section)

    raw: dict[str, Any] = dict(cast(Mapping[str, Any], section))
    if not raw.get("api_key"):
        env = os.environ if environ is None else environ
        raw["api_key"] = env.get(_ENV_VARS["api_key"], "")
    return PoodleSettings.model_validate(raw)


__all__ = [
    "DEFAULT_BASE_URL",
    "DEFAULT_CONNECT_TIMEOUT",
    "DEFAULT_TIMEOUT",
    "PoodleSettings",
    "load_settings_from_dict",
]
