"""CLI --set override stories."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import pytest
from click.testing import CliRunner, Result

from poodle.adapters import cli as cli_mod


@pytest.mark.os_agnostic
def test_when_set_override_is_passed_config_reflects_change(
    cli_runner: CliRunner,
    config_cli_context: Callable[[dict[str, Any]], Callable[[], Any]],
) -> None:
    """An override replaces the configured value in config output."""
    factory = config_cli_context({"poodle": {"base_url": "https://api.usepoodle.com"}})

    result: Result = cli_runner.invoke(
        cli_mod.cli,
        ["--set", "poodle.base_url=https://staging.poodle.test", "config", "--section", "poodle"],
        obj=factory,
    )

    assert result.exit_code == 0
    assert "https://staging.poodle.test" in result.output


@pytest.mark.os_agnostic
def test_when_multiple_set_overrides_are_passed_all_apply(
    cli_runner: CliRunner,
    config_cli_context: Callable[[dict[str, Any]], Callable[[], Any]],
) -> None:
    """Every --set applies, across sections."""
    factory = config_cli_context(
        {
            "poodle": {"timeout": 30},
            "lib_log_rich": {"console_level": "INFO"},
        }
    )

    result: Result = cli_runner.invoke(
        cli_mod.cli,
        [
            "--set",
            "poodle.timeout=77",
            "--set",
            "lib_log_rich.console_level=DEBUG",
            "config",
            "--format",
            "json",
        ],
        obj=factory,
    )

    assert result.exit_code == 0
    assert "77" in result.stdout
    assert "DEBUG" in result.stdout


@pytest.mark.os_agnostic
def test_when_set_override_has_nested_key_it_creates_the_table(
    cli_runner: CliRunner,
    config_cli_context: Callable[[dict[str, Any]], Callable[[], Any]],
) -> None:
    """SECTION.SUB.KEY=VALUE reaches into http_options."""
    factory = config_cli_context({"poodle": {"http_options": {}}})

    result: Result = cli_runner.invoke(
        cli_mod.cli,
        ["--set", "poodle.http_options.max_redirects=3", "config", "--format", "json"],
        obj=factory,
    )

    assert result.exit_code == 0
    assert "max_redirects" in result.stdout


@pytest.mark.os_agnostic
@pytest.mark.parametrize(
    "override",
    ["invalid_no_equals", "nodot=value", "", ".timeout=1", "poodle..timeout=1"],
    ids=["no-equals", "no-dot", "empty", "empty-section", "empty-key"],
)
def test_when_set_override_is_malformed_it_is_a_usage_error(
    cli_runner: CliRunner,
    config_cli_context: Callable[[dict[str, Any]], Callable[[], Any]],
    override: str,
) -> None:
    """Malformed overrides exit with Click's usage error code."""
    factory = config_cli_context({"poodle": {}})

    result: Result = cli_runner.invoke(cli_mod.cli, ["--set", override, "config"], obj=factory)

    assert result.exit_code == 2
    assert "Invalid override" in result.output


@pytest.mark.os_agnostic
def test_when_no_set_overrides_config_is_unchanged(
    cli_runner: CliRunner,
    config_cli_context: Callable[[dict[str, Any]], Callable[[], Any]],
) -> None:
    """Without --set the configured values are shown as-is."""
    factory = config_cli_context({"lib_log_rich": {"console_level": "WARNING"}})

    result: Result = cli_runner.invoke(cli_mod.cli, ["config", "--section", "lib_log_rich"], obj=factory)

    assert result.exit_code == 0
    assert "WARNING" in result.output
