"""Build and write the scan report, and expose step outputs."""

from __future__ import annotations

import os
from collections.abc import Sequence
from datetime import datetime, timezone
from pathlib import Path

from .models import Changeset, IssueReference, OutputArtifact, OutputMetadata


def _utc_timestamp() -> str:
    """Current UTC time as ISO-8601 with milliseconds, e.g. 2024-01-01T00:00:00.000Z."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _repository() -> str:
    return os.environ.get("GITHUB_REPOSITORY") or "unknown/unknown"


def build_output_artifact(
    issues: Sequence[IssueReference],
    changeset: Changeset,
    linear_base_url: str,
    total_commits: int,
    repository: str | None = None,
) -> OutputArtifact:
    """Assemble the report document.

    Args:
        issues: Issue references, already sorted by key.
        changeset: The changeset that selected the commits.
        linear_base_url: Base URL of the Linear app.
        total_commits: Number of commits scanned (not just matching ones).
        repository: "<owner>/<repo>"; defaults to $GITHUB_REPOSITORY.
    """
    return OutputArtifact(
        metadata=OutputMetadata(
            generated_at=_utc_timestamp(),
            linear_base_url=linear_base_url,
            repository=repository or _repository(),
            changeset=changeset,
            total_issues=len(issues),
            total_commits=total_commits,
        ),
        issues=list(issues),
    )


def write_output_file(path: str | Path, artifact: OutputArtifact) -> None:
    """Write the report as 2-space indented JSON, replacing any existing file."""
    Path(path).write_text(artifact.model_dump_json(by_alias=True, indent=2))


def _write_output(output_path: str, name: str, value: str) -> None:
    with open(output_path, "a") as fh:
        fh.write(f"{name}={value}\n")


def set_action_outputs(
    issues: Sequence[IssueReference], github_output: str | None = None
) -> dict[str, str]:
    """Publish issue-keys, issue-links and issue-count as step outputs.

    Outputs are appended to the $GITHUB_OUTPUT file (or github_output if
    given). Outside of Actions they are printed instead.

    Returns:
        The outputs that were set.
    """
    outputs = {
        "issue-keys": ",".join(issue.key for issue in issues),
        "issue-links": ",".join(issue.url for issue in issues),
        "issue-count": str(len(issues)),
    }

    output_path = github_output or os.environ.get("GITHUB_OUTPUT")
    for name, value in outputs.items():
        if output_path:
            _write_output(output_path, name, value)
        else:
            print(f"  {name}={value}")
    return outputs
