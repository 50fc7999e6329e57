"""Application ports: Protocol definitions for adapter functions and the HTTP transport.

Each callable Protocol defines a ``__call__`` method whose signature exactly
matches the corresponding adapter function. Existing module-level functions
satisfy these protocols automatically via structural subtyping (PEP 544).

System Role:
    Sits between domain and adapters. Infrastructure types (``Config``,
    ``PoodleSettings``, ``httpx.Response``) are imported under
    ``TYPE_CHECKING`` only so that import-linter layer contracts remain
    satisfied at runtime.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Protocol

from ..domain.enums import HttpVerb, OutputFormat
from ..domain.result import EmailResult

if TYPE_CHECKING:
    import httpx
    from lib_layered_config import Config

    from ..adapters.email.settings import PoodleSettings


class GetConfig(Protocol):
    """Load layered configuration with application defaults."""

    def __call__(self, *, profile: str | None = ..., start_dir: str | None = ...) -> Config: ...


class DisplayConfig(Protocol):
    """Display the provided configuration in the requested format."""

    def __call__(
        self, config: Config, *, output_format: OutputFormat = ..., section: str | None = ..., profile: str | None = ...
    ) -> None: ...


class SendEmail(Protocol):
    """Send one email through the Poodle API."""

    def __call__(
        self,
        *,
        settings: PoodleSettings,
        from_address: str,
        to: str,
        subject: str,
        html: str | None = ...,
        text: str | None = ...,
    ) -> EmailResult: ...


class LoadSettingsFromDict(Protocol):
    """Load PoodleSettings from a configuration dictionary."""

    def __call__(self, config_dict: Mapping[str, Any]) -> PoodleSettings: ...


class InitLogging(Protocol):
    """Initialize lib_log_rich runtime with the provided configuration."""

    def __call__(self, config: Config) -> None: ...


class Transport(Protocol):
    """Perform one HTTP exchange for the request executor."""

    def send(
        self,
        verb: HttpVerb,
        url: str,
        *,
        payload: Mapping[str, Any] | None = ...,
        headers: Mapping[str, str] | None = ...,
    ) -> httpx.Response: ...

    def close(self) -> None: ...


__all__ = [
    "DisplayConfig",
    "GetConfig",
    "InitLogging",
    "LoadSettingsFromDict",
    "SendEmail",
    "Transport",
]
