"""``--set SECTION.KEY=VALUE`` overrides for the layered configuration.

Lets one CLI invocation change any configured value, for example
``--set poodle.timeout=60`` or ``--set poodle.http_options.verify=false``,
without touching configuration files.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import cast

import orjson
from lib_layered_config import Config

CoercedValue = str | int | float | bool | None | list[object] | dict[str, object]
"""Values an override string can decode to."""


@dataclass(frozen=True, slots=True)
class ConfigOverride:
    """One parsed ``--set`` argument."""

    section: str
    key_path: tuple[str, ...]
    value: CoercedValue


def coerce_value(raw: str) -> CoercedValue:
    """Decode ``raw`` as JSON, keeping it as a plain string when that fails.

    Examples:
        >>> coerce_value("60"), coerce_value("false"), coerce_value("null")
        (60, False, None)
        >>> coerce_value("https://api.example.test")
        'https://api.example.test'
        >>> coerce_value("")
        ''
    """
    if raw == "":
        return ""
    try:
        return orjson.loads(raw)
    except (orjson.JSONDecodeError, ValueError):
        return raw


def parse_override(raw: str) -> ConfigOverride:
    """Parse ``SECTION.KEY[.SUBKEY...]=VALUE``.

    The first ``=`` ends the path; the first ``.`` of the path ends the section.

    Raises:
        ValueError: Missing ``=``, missing dot, or an empty path component.

    Examples:
        >>> parse_override("poodle.timeout=60")
        ConfigOverride(section='poodle', key_path=('timeout',), value=60)
        >>> parse_override("poodle.http_options.verify=false").key_path
        ('http_options', 'verify')
        >>> parse_override("poodle.base_url=http://h/?a=b").value
        'http://h/?a=b'
    """
    if "=" not in raw:
        raise ValueError(f"Invalid override {raw!r}: must contain '='")
    path, value = raw.split("=", maxsplit=1)
    if "." not in path:
        raise ValueError(f"Invalid override {raw!r}: key must contain at least one dot (SECTION.KEY)")

    section, *keys = path.split(".")
    if not section:
        raise ValueError(f"Invalid override {raw!r}: section name is empty")
    if not all(keys):
        raise ValueError(f"Invalid override {raw!r}: key path contains empty component")
    return ConfigOverride(section=section, key_path=tuple(keys), value=coerce_value(value))


def _merge_into(tree: dict[str, dict[str, object]], override: ConfigOverride) -> None:
    """Place ``override.value`` into ``tree``, creating intermediate tables.

    Raises:
        TypeError: A scalar already occupies an intermediate key.

    Example:
        >>> tree: dict[str, dict[str, object]] = {}
        >>> _merge_into(tree, ConfigOverride("poodle", ("http_options", "verify"), False))
        >>> tree
        {'poodle': {'http_options': {'verify': False}}}
    """
    node: dict[str, object] = tree.setdefault(override.section, {})
    for key in override.key_path[:-1]:
        child = node.setdefault(key, {})
        if not isinstance(child, dict):
            raise TypeError(f"Expected dict at key {key!r}, got {type(child).__name__}")
        node = cast("dict[str, object]", child)
    node[override.key_path[-1]] = override.value


def apply_overrides(config: Config, raw_overrides: tuple[str, ...]) -> Config:
    """Return ``config`` with every ``--set`` override deep-merged on top.

    Later overrides of the same key win. With no overrides the original
    object is returned unchanged.

    Raises:
        ValueError: A malformed override string.

    Example:
        >>> cfg = Config({"poodle": {"timeout": 30}}, {})
        >>> apply_overrides(cfg, ("poodle.timeout=5",))["poodle"]["timeout"]
        5
        >>> apply_overrides(cfg, ()) is cfg
        True
    """
    if not raw_overrides:
        return config
    tree: dict[str, dict[str, object]] = {}
    for raw in raw_overrides:
        _merge_into(tree, parse_override(raw))
    return config.with_overrides(tree)


__all__ = [
    "CoercedValue",
    "ConfigOverride",
    "apply_overrides",
    "coerce_value",
    "parse_override",
]
