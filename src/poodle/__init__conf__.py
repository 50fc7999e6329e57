"""Static package metadata surfaced to CLI commands and documentation.

Values here mirror ``pyproject.toml`` so the runtime (User-Agent header,
``info`` command, layered configuration paths) never needs to query
installed distribution metadata.

Contents:
    * Module-level metadata constants (name, version, shell command, ...).
    * ``LAYEREDCONF_*`` identifiers used by lib_layered_config path discovery.
    * :func:`print_info` - render the metadata block for the ``info`` command.
"""

from __future__ import annotations

#: Distribution name declared in ``pyproject.toml``.
name = "poodle"
#: Human-readable summary shown in CLI help output.
title = "Python client for the Poodle email sending API"
#: Current release version.
version = "1.0.0"
#: Repository homepage presented to users.
homepage = "https://github.com/usepoodle/poodle-python"
#: Author attribution surfaced in CLI output.
author = "Poodle"
#: Contact email surfaced in CLI output.
author_email = "support@usepoodle.com"
#: Console-script name published by the package.
shell_command = "poodle"

#: Vendor identifier for lib_layered_config paths (macOS/Windows).
LAYEREDCONF_VENDOR: str = "Poodle"
#: Application display name for lib_layered_config paths (macOS/Windows).
LAYEREDCONF_APP: str = "Poodle"
#: Configuration slug for lib_layered_config Linux paths and environment variables.
LAYEREDCONF_SLUG: str = "poodle"


def print_info() -> None:
    """Print the summarised metadata block used by the CLI ``info`` command.

    Example:
        >>> print_info()  # doctest: +ELLIPSIS
        Info for poodle:
        ...
    """
    fields = [
        ("name", name),
        ("title", title),
        ("version", version),
        ("homepage", homepage),
        ("author", author),
        ("author_email", author_email),
        ("shell_command", shell_command),
    ]
    pad = max(len(label) for label, _ in fields)
    lines = [f"Info for {name}:", ""]
    lines.extend(f"    {label.ljust(pad)} = {value}" for label, value in fields)
    print("\n".join(lines))
