"""Parse and validate scan inputs.

Input names follow the GitHub Actions inputs of the scan step
(``linear-api-key``, ``commits-count``, ...). Values arrive as raw strings,
from CLI options or ``INPUT_*`` environment variables, and are validated
here into an ActionInputs model.
"""

from __future__ import annotations

from collections.abc import Mapping

from pydantic import TypeAdapter, ValidationError

from .errors import ConfigError
from .models import ActionInputs, Changeset

DEFAULT_OUTPUT_FILE = "linear-issues.json"

# Input that marks a changeset group as present → changeset type.
# time-range is checked separately since it needs both ends.
SELECTOR_INPUTS: list[tuple[str, str]] = [
    ("releases-count", "releases-count"),
    ("commits-count", "commits-count"),
    ("commits-since-sha", "commits-since-sha"),
    ("commits-shas", "commits-shas"),
    ("commits-start-sha", "commits-range"),
    ("tags-start", "tags-range"),
]

NO_CHANGESET_MESSAGE = (
    "No changeset specification provided. Please specify one of: "
    "releases-count, time-range-start/end, commits-count, commits-since-sha, "
    "commits-shas, commits-start-sha/end-sha, or tags-start/end"
)
MULTIPLE_CHANGESETS_MESSAGE = (
    "Multiple changeset types specified. Please specify only one changeset type."
)

_changeset_adapter: TypeAdapter[Changeset] = TypeAdapter(Changeset)


def _value(raw: Mapping[str, str | None], name: str) -> str:
    return (raw.get(name) or "").strip()


def _split_list(value: str) -> list[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


def _parse_int(raw: Mapping[str, str | None], name: str) -> int:
    value = _value(raw, name)
    try:
        return int(value)
    except ValueError:
        raise ConfigError(f"Invalid number for {name}: {value!r}") from None


def validate_changeset(raw: Mapping[str, str | None]) -> Changeset:
    """Build the single changeset selected by the raw inputs.

    Exactly one selector group must be present. time-range-start and
    time-range-end count as one group and are only present together.

    Args:
        raw: Input name → raw string value. Missing and empty are the same.

    Returns:
        The validated changeset.

    Raises:
        ConfigError: If no group or more than one group is given, or if a
                     value does not validate (e.g. a non-numeric count).
    """
    has_time_range = bool(
        _value(raw, "time-range-start") and _value(raw, "time-range-end")
    )
    specified = [kind for name, kind in SELECTOR_INPUTS if _value(raw, name)]
    total = len(specified) + (1 if has_time_range else 0)

    if total == 0:
        raise ConfigError(NO_CHANGESET_MESSAGE)
    if total > 1:
        raise ConfigError(MULTIPLE_CHANGESETS_MESSAGE)

    kind = "time-range" if has_time_range else specified[0]
    if kind == "time-range":
        data = {
            "type": kind,
            "time_range_start": _value(raw, "time-range-start"),
            "time_range_end": _value(raw, "time-range-end"),
        }
    elif kind == "releases-count":
        data = {"type": kind, "releases_count": _parse_int(raw, "releases-count")}
    elif kind == "commits-count":
        data = {"type": kind, "commits_count": _parse_int(raw, "commits-count")}
    elif kind == "commits-since-sha":
        data = {"type": kind, "commits_since_sha": _value(raw, "commits-since-sha")}
    elif kind == "commits-shas":
        data = {"type": kind, "commits_shas": _split_list(_value(raw, "commits-shas"))}
    elif kind == "commits-range":
        data = {
            "type": kind,
            "commits_start_sha": _value(raw, "commits-start-sha"),
            "commits_end_sha": _value(raw, "commits-end-sha") or "HEAD",
            "include_start_commit": (
                _value(raw, "include-start-commit").lower() == "true"
            ),
        }
    else:
        data = {
            "type": kind,
            "tags_start": _value(raw, "tags-start"),
            "tags_end": _value(raw, "tags-end") or "HEAD",
        }

    try:
        return _changeset_adapter.validate_python(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid {kind} changeset: {exc}") from exc


def parse_inputs(
    raw: Mapping[str, str | None],
    defaults: Mapping[str, str] | None = None,
) -> ActionInputs:
    """Validate all scan inputs.

    Args:
        raw: Input name → raw string value, as given to the step.
        defaults: Fallback values (e.g. from [tool.linear-issues]) used
                  where raw has no value.

    Raises:
        ConfigError: If the API key is missing or the changeset is invalid.
    """
    merged: dict[str, str | None] = dict(defaults or {})
    merged.update({name: value for name, value in raw.items() if value})

    api_key = _value(merged, "linear-api-key")
    if not api_key:
        raise ConfigError("Input required and not supplied: linear-api-key")

    team_keys = [k.upper() for k in _split_list(_value(merged, "team-keys"))]

    return ActionInputs(
        linear_api_key=api_key,
        team_keys=team_keys or None,
        output_file=_value(merged, "output-file") or DEFAULT_OUTPUT_FILE,
        workspace_slug=_value(merged, "workspace-slug"),
        changeset=validate_changeset(merged),
    )
