"""Commit source: turn a changeset into commits from git history.

Every query asks git for ``<hash>NUL<subject>NUL`` per commit. NUL cannot
appear in a hash or a one-line subject, so the output splits cleanly no
matter what the commit messages contain.
"""

from __future__ import annotations

from .models import (
    Changeset,
    Commit,
    CommitsCountChangeset,
    CommitsRangeChangeset,
    CommitsShasChangeset,
    CommitsSinceShaChangeset,
    ReleasesCountChangeset,
    TagsRangeChangeset,
    TimeRangeChangeset,
)
from .shell import git

GIT_FORMAT = "%H%x00%s%x00"
RELEASE_TAG_PATTERN = "v*"


def parse_git_output(output: str) -> list[Commit]:
    """Parse NUL-delimited ``git log`` output into commits.

    Whitespace-only fragments are dropped, the rest are paired up as
    (sha, subject). A trailing sha without a subject is ignored.
    """
    if not output.strip():
        return []

    parts = [p.strip() for p in output.split("\x00") if p.strip()]
    return [
        Commit(sha=sha, message=message)
        for sha, message in zip(parts[0::2], parts[1::2])
    ]


def run_git_log(*args: str) -> list[Commit]:
    """Run ``git log`` with the commit format and extra revision arguments.

    Raises:
        GitError: If git exits non-zero.
    """
    return parse_git_output(git("log", f"--format={GIT_FORMAT}", *args))


def list_release_tags() -> list[str]:
    """List release tags (v* pattern), most recently created first."""
    output = git("tag", "--list", RELEASE_TAG_PATTERN, "--sort=-creatordate")
    return [t.strip() for t in output.splitlines() if t.strip()]


def _fetch_shas(shas: list[str]) -> list[Commit]:
    # One query per SHA, in order. SHAs that resolve to nothing are skipped,
    # a failing query is not.
    commits: list[Commit] = []
    for sha in shas:
        result = run_git_log("-n", "1", sha)
        if result:
            commits.append(result[0])
    return commits


def _fetch_since_releases(count: int) -> list[Commit]:
    tags = list_release_tags()[:count]
    if not tags:
        print("  No release tags found")
        return []
    # Oldest of the last N releases: everything since N releases ago.
    oldest = tags[-1]
    print(f"  Since release tag {oldest}")
    return run_git_log(f"{oldest}..HEAD")


def fetch_commits(changeset: Changeset) -> list[Commit]:
    """Resolve a changeset into commits, newest first as git reports them.

    Args:
        changeset: One of the changeset variants from models.

    Returns:
        The selected commits.

    Raises:
        GitError: If any underlying git query fails.
        ValueError: If the changeset type is not recognized.
    """
    if isinstance(changeset, CommitsCountChangeset):
        return run_git_log("-n", str(changeset.commits_count))

    if isinstance(changeset, CommitsSinceShaChangeset):
        return run_git_log(f"{changeset.commits_since_sha}..HEAD")

    if isinstance(changeset, CommitsShasChangeset):
        return _fetch_shas(changeset.commits_shas)

    if isinstance(changeset, CommitsRangeChangeset):
        # start^ makes the start commit part of the range
        start = changeset.commits_start_sha
        if changeset.include_start_commit:
            start = f"{start}^"
        return run_git_log(f"{start}..{changeset.commits_end_sha}")

    if isinstance(changeset, TimeRangeChangeset):
        return run_git_log(
            f"--since={changeset.time_range_start}",
            f"--until={changeset.time_range_end}",
        )

    if isinstance(changeset, ReleasesCountChangeset):
        return _fetch_since_releases(changeset.releases_count)

    if isinstance(changeset, TagsRangeChangeset):
        return run_git_log(f"{changeset.tags_start}..{changeset.tags_end}")

    raise ValueError(
        f"Unknown changeset type: {getattr(changeset, 'type', type(changeset).__name__)}"
    )
