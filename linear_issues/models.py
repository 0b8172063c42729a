"""Data models for linear-issues.

These Pydantic models represent the changeset selectors, the commits they
resolve to, and the JSON report written at the end of a scan.

Report field names are camelCase (``commitsCount``, ``generatedAt``) while
Python attributes stay snake_case. Models accept either spelling on input;
dump with ``by_alias=True`` to get the report format.
"""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, SecretStr
from pydantic.alias_generators import to_camel


class ReportModel(BaseModel):
    """Base for every model that ends up in the JSON report."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class FrozenModel(ReportModel):
    model_config = ConfigDict(frozen=True)


class CommitsCountChangeset(FrozenModel):
    """The most recent N commits reachable from HEAD."""

    type: Literal["commits-count"] = "commits-count"
    commits_count: int = Field(gt=0)


class CommitsSinceShaChangeset(FrozenModel):
    """All commits after a given SHA, up to HEAD."""

    type: Literal["commits-since-sha"] = "commits-since-sha"
    commits_since_sha: str


class CommitsShasChangeset(FrozenModel):
    """Exactly the listed commits, resolved one by one in input order."""

    type: Literal["commits-shas"] = "commits-shas"
    commits_shas: list[str]


class CommitsRangeChangeset(FrozenModel):
    """Commits between two revisions.

    Attributes:
        commits_start_sha: Lower bound. Excluded unless include_start_commit.
        commits_end_sha: Upper bound (inclusive), HEAD by default.
        include_start_commit: Also report the start commit itself.
    """

    type: Literal["commits-range"] = "commits-range"
    commits_start_sha: str
    commits_end_sha: str = "HEAD"
    include_start_commit: bool = False


class TimeRangeChangeset(FrozenModel):
    """Commits dated within [start, end], both ISO-8601 strings."""

    type: Literal["time-range"] = "time-range"
    time_range_start: str
    time_range_end: str


class ReleasesCountChangeset(FrozenModel):
    """Everything since the Nth most recently created ``v*`` tag."""

    type: Literal["releases-count"] = "releases-count"
    releases_count: int = Field(default=1, gt=0)


class TagsRangeChangeset(FrozenModel):
    """Commits after tags_start, up to and including tags_end."""

    type: Literal["tags-range"] = "tags-range"
    tags_start: str
    tags_end: str = "HEAD"


Changeset = Annotated[
    Union[
        CommitsCountChangeset,
        CommitsSinceShaChangeset,
        CommitsShasChangeset,
        CommitsRangeChangeset,
        TimeRangeChangeset,
        ReleasesCountChangeset,
        TagsRangeChangeset,
    ],
    Field(discriminator="type"),
]


class Commit(FrozenModel):
    """A single commit: full hash and trimmed subject line."""

    sha: str = Field(min_length=1)
    message: str


class IssueMatch(ReportModel):
    """An issue key and the commits that mention it, before URLs are known.

    Attributes:
        key: Uppercased issue key, e.g. "ENG-123".
        commits: SHAs in the order they were first seen, without duplicates.
    """

    key: str
    commits: list[str] = Field(default_factory=list)


class IssueReference(ReportModel):
    key: str
    url: str
    commits: list[str] = Field(default_factory=list)


class OutputMetadata(ReportModel):
    generated_at: str
    linear_base_url: str
    repository: str
    changeset: Changeset
    total_issues: int
    total_commits: int


class OutputArtifact(ReportModel):
    """The JSON document written to the configured output file."""

    metadata: OutputMetadata
    issues: list[IssueReference] = Field(default_factory=list)


class ActionInputs(ReportModel):
    """Validated inputs for a single scan.

    Attributes:
        linear_api_key: Linear personal API key (masked in reprs).
        team_keys: Uppercase team keys to restrict the scan to, or None for
                   every team in the workspace.
        output_file: Where the JSON report is written.
        workspace_slug: Linear workspace URL key used in issue links. May be
                        empty, Linear redirects to the right workspace.
        changeset: Which commits to scan.
    """

    linear_api_key: SecretStr
    team_keys: list[str] | None = None
    output_file: str = "linear-issues.json"
    workspace_slug: str = ""
    changeset: Changeset
