"""Shared pytest fixtures for client, CLI, and module-entry tests.

Centralizes test infrastructure:
- HTTP exchanges are served by ``httpx.MockTransport`` handlers, never the network
- CLI tests inject configuration and an EmailSpy through AppServices
- Fixtures use descriptive names that read as plain English
"""

from __future__ import annotations

import contextlib
import os
import re
import tempfile
from collections.abc import Callable, Iterator
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import TYPE_CHECKING, Any

import httpx
import lib_cli_exit_tools
import pytest
from click.testing import CliRunner
from lib_layered_config import Config

if TYPE_CHECKING:
    from poodle.adapters.email.settings import PoodleSettings
    from poodle.adapters.memory.email import EmailSpy
    from poodle.composition import AppServices

_COVERAGE_BASENAME = ".coverage.poodle"


def _purge_stale_coverage_files(cov_path: Path) -> None:
    """Delete leftover SQLite database and journal files from crashed runs."""
    for suffix in ("", "-journal", "-wal", "-shm"):
        with contextlib.suppress(FileNotFoundError):
            Path(str(cov_path) + suffix).unlink()


def pytest_configure(config: pytest.Config) -> None:
    """Redirect the coverage database to a local temp directory.

    Runs before ``pytest-cov`` creates its ``Coverage()`` object, so the
    ``COVERAGE_FILE`` value applies however pytest is invoked.
    """
    if "COVERAGE_FILE" not in os.environ:
        cov_path = Path(tempfile.gettempdir()) / _COVERAGE_BASENAME
        _purge_stale_coverage_files(cov_path)
        os.environ["COVERAGE_FILE"] = str(cov_path)


def _load_dotenv() -> None:
    """Load .env file when it exists for integration test configuration."""
    from dotenv import load_dotenv

    env_file = Path(__file__).parent.parent / ".env"
    if env_file.exists():
        load_dotenv(env_file)


_load_dotenv()

ANSI_ESCAPE_PATTERN = re.compile(r"\x1B\[[0-?]*[ -/]*[@-~]")
CONFIG_FIELDS: tuple[str, ...] = tuple(f.name for f in fields(type(lib_cli_exit_tools.config)))

TEST_API_KEY = "pk_test_123"


def _remove_ansi_codes(text: str) -> str:
    """Return *text* stripped of ANSI escape sequences."""
    return ANSI_ESCAPE_PATTERN.sub("", text)


def _snapshot_cli_config() -> dict[str, object]:
    """Capture every attribute from ``lib_cli_exit_tools.config``."""
    return {name: getattr(lib_cli_exit_tools.config, name) for name in CONFIG_FIELDS}


def _restore_cli_config(snapshot: dict[str, object]) -> None:
    """Reapply a configuration snapshot captured by ``_snapshot_cli_config``."""
    for name, value in snapshot.items():
        setattr(lib_cli_exit_tools.config, name, value)


# ======================== Environment isolation ========================


@pytest.fixture(autouse=True)
def _isolate_poodle_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove POODLE_* variables so a developer's shell never leaks into tests."""
    for name in ("POODLE_API_KEY", "POODLE_BASE_URL", "POODLE_TIMEOUT", "POODLE_CONNECT_TIMEOUT", "POODLE_DEBUG"):
        monkeypatch.delenv(name, raising=False)


# ======================== HTTP fixtures ========================


@dataclass
class RecordingHandler:
    """MockTransport handler that replays one canned response and records requests.

    Attributes:
        status: Status code of every response.
        response_kwargs: Keyword arguments for each fresh ``httpx.Response``.
        error: When set, raised instead of responding.
        requests: Every request the transport received, in order.
    """

    status: int = 200
    response_kwargs: dict[str, Any] = field(default_factory=lambda: {"json": {"success": True}})
    error: Exception | None = None
    requests: list[httpx.Request] = field(default_factory=lambda: [])

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return httpx.Response(self.status, **self.response_kwargs)

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture
def settings() -> PoodleSettings:
    """Valid settings pointing at a test host."""
    from poodle.adapters.email.settings import PoodleSettings

    return PoodleSettings(api_key=TEST_API_KEY, base_url="https://api.poodle.test")


@pytest.fixture
def recording_handler() -> RecordingHandler:
    """A handler answering ``200 {"success": true}`` until told otherwise."""
    return RecordingHandler()


@pytest.fixture
def respond_with(recording_handler: RecordingHandler) -> Callable[..., RecordingHandler]:
    """Configure the shared handler's canned response.

    Example:
        def test_queued(respond_with) -> None:
            respond_with(200, json={"success": True, "message": "Queued"})
    """

    def _configure(status: int, **kwargs: Any) -> RecordingHandler:
        recording_handler.status = status
        recording_handler.response_kwargs = kwargs
        return recording_handler

    return _configure


@pytest.fixture
def mock_transport(recording_handler: RecordingHandler) -> httpx.MockTransport:
    """An httpx transport routed to ``recording_handler``."""
    return httpx.MockTransport(recording_handler)


# ======================== CLI fixtures ========================


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a fresh CliRunner per test.

    Use ``result.stdout`` for clean output; log lines go to stderr.
    """
    return CliRunner()


@pytest.fixture
def production_factory() -> Callable[[], AppServices]:
    """Provide the production services factory for tests."""
    from poodle.composition import build_production

    return build_production


@pytest.fixture
def strip_ansi() -> Callable[[str], str]:
    """Return a helper that strips ANSI escape sequences from a string."""

    def _strip(value: str) -> str:
        return _remove_ansi_codes(value)

    return _strip


@pytest.fixture
def managed_traceback_state() -> Iterator[None]:
    """Reset traceback flags to a known baseline and restore after the test."""
    lib_cli_exit_tools.reset_config()
    lib_cli_exit_tools.config.traceback = False
    lib_cli_exit_tools.config.traceback_force_color = False
    snapshot = _snapshot_cli_config()
    try:
        yield
    finally:
        _restore_cli_config(snapshot)


@pytest.fixture
def clear_config_cache() -> Iterator[None]:
    """Clear the get_config cache before each test.

    Only clears before, not after, because a test may monkeypatch the
    loader and lose ``cache_clear``.
    """
    from poodle.adapters.config import loader as config_mod

    config_mod.get_config.cache_clear()
    yield


@pytest.fixture
def config_factory() -> Callable[[dict[str, Any]], Config]:
    """Create real Config instances from test data dicts (no provenance)."""

    def _factory(data: dict[str, Any]) -> Config:
        return Config(data, {})

    return _factory


def _services_with(config: Config, **replacements: Any) -> AppServices:
    """Production services with a fixed config loader and selected replacements."""
    from poodle.composition import AppServices, build_production

    prod = build_production()

    def _fake_get_config(**_kwargs: Any) -> Config:
        return config

    wiring: dict[str, Any] = {
        "get_config": _fake_get_config,
        "display_config": prod.display_config,
        "send_email": prod.send_email,
        "load_settings_from_dict": prod.load_settings_from_dict,
        "init_logging": prod.init_logging,
    }
    wiring.update(replacements)
    return AppServices(**wiring)


@pytest.fixture
def config_cli_context(
    clear_config_cache: None,
) -> Callable[[dict[str, Any]], Callable[[], AppServices]]:
    """Return a factory turning a config dict into a services factory for ``obj=``.

    Example:
        def test_config_display(cli_runner, config_cli_context) -> None:
            factory = config_cli_context({"poodle": {"timeout": 5}})
            result = cli_runner.invoke(cli, ["config"], obj=factory)
    """

    def _create(config_data: dict[str, Any]) -> Callable[[], AppServices]:
        services = _services_with(Config(config_data, {}))
        return lambda: services

    return _create


@pytest.fixture
def inject_config_with_profile_capture(
    clear_config_cache: None,
) -> Callable[[Config, list[str | None]], Callable[[], AppServices]]:
    """Return a factory whose get_config records the profile it was asked for."""

    def _inject(config: Config, captured_profiles: list[str | None]) -> Callable[[], AppServices]:
        def _capturing_get_config(*, profile: str | None = None, **_kwargs: Any) -> Config:
            captured_profiles.append(profile)
            return config

        services = _services_with(config, get_config=_capturing_get_config)
        return lambda: services

    return _inject


@dataclass
class EmailCliContext:
    """Services factory and EmailSpy for one send-email CLI test.

    Attributes:
        factory: Callable that returns wired AppServices for CLI invocation.
        spy: EmailSpy recording deliveries and the settings they used.
    """

    factory: Callable[[], Any]
    spy: EmailSpy


@pytest.fixture
def email_cli_context(
    clear_config_cache: None,
) -> Callable[[dict[str, Any]], EmailCliContext]:
    """Create a send-email CLI context from the ``[poodle]`` section contents.

    Configuration comes from the given dict only (no environment fallback)
    and sends are captured by an EmailSpy.

    Example:
        def test_send(cli_runner, email_cli_context) -> None:
            ctx = email_cli_context({"api_key": "pk_test"})
            result = cli_runner.invoke(cli, ["send-email", ...], obj=ctx.factory)
            ctx.spy.assert_email_sent()
    """
    from poodle.adapters.memory import load_settings_from_dict_in_memory
    from poodle.adapters.memory.email import EmailSpy as EmailSpyImpl

    def _create(poodle_section: dict[str, Any]) -> EmailCliContext:
        spy = EmailSpyImpl()
        services = _services_with(
            Config({"poodle": poodle_section}, {}),
            send_email=spy.send_email_via_api,
            load_settings_from_dict=load_settings_from_dict_in_memory,
        )
        return EmailCliContext(factory=lambda: services, spy=spy)

    return _create


@pytest.fixture
def email_cli_with_sender(
    clear_config_cache: None,
) -> Callable[[Callable[..., Any]], Callable[[], AppServices]]:
    """Create a CLI services factory whose SendEmail port is ``sender``.

    Lets a test make the send operation raise any error of the taxonomy.
    """
    from poodle.adapters.memory import load_settings_from_dict_in_memory

    def _create(sender: Callable[..., Any]) -> Callable[[], AppServices]:
        services = _services_with(
            Config({"poodle": {"api_key": TEST_API_KEY}}, {}),
            send_email=sender,
            load_settings_from_dict=load_settings_from_dict_in_memory,
        )
        return lambda: services

    return _create
