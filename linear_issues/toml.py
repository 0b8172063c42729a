"""Project-level defaults from pyproject.toml.

Repos can pin the team keys, report path, and workspace slug once in
``[tool.linear-issues]`` instead of repeating them in every workflow::

    [tool.linear-issues]
    team-keys = ["ENG", "PROD"]
    output-file = "reports/linear-issues.json"
    workspace-slug = "acme"

Uses tomlkit to read the file, the same parser that tooling in the repo
would use to edit it.
"""

from __future__ import annotations

from pathlib import Path

import tomlkit

from .errors import ConfigError

TOOL_TABLE = "linear-issues"
DEFAULT_KEYS = ("team-keys", "output-file", "workspace-slug")


def load_pyproject(path: Path) -> tomlkit.TOMLDocument:
    """Load and parse a pyproject.toml file."""
    return tomlkit.parse(path.read_text())


def get_tool_config(doc: tomlkit.TOMLDocument) -> dict[str, str]:
    """Extract input defaults from [tool.linear-issues].

    List values (e.g. team-keys) are joined with commas so they read the
    same as a workflow input. Unknown keys are ignored.

    Raises:
        ConfigError: If a known key has a value that is not a string or
                     a list of strings.
    """
    table = doc.get("tool", {}).get(TOOL_TABLE, {})
    defaults: dict[str, str] = {}
    for name in DEFAULT_KEYS:
        value = table.get(name)
        if value is None:
            continue
        if isinstance(value, str):
            defaults[name] = str(value)
        elif isinstance(value, list) and all(isinstance(v, str) for v in value):
            defaults[name] = ",".join(str(v) for v in value)
        else:
            raise ConfigError(
                f"[tool.{TOOL_TABLE}] {name} must be a string or a list of strings"
            )
    return defaults


def load_project_defaults(root: Path | None = None) -> dict[str, str]:
    """Read input defaults from ``<root>/pyproject.toml``, if there is one."""
    pyproject = (root or Path.cwd()) / "pyproject.toml"
    if not pyproject.exists():
        return {}
    return get_tool_config(load_pyproject(pyproject))
