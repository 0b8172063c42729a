"""Find Linear issue keys in commit messages.

An issue key is a team key followed by a dash and digits (``ENG-123``).
Matching is case-insensitive; keys are reported uppercase.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence

from .models import Commit, IssueMatch

# Lookahead that can never succeed
_NEVER_MATCHES = r"(?!)"


def build_issue_pattern(team_keys: Iterable[str]) -> re.Pattern[str]:
    """Compile a case-insensitive pattern for ``<TEAM>-<digits>``.

    Args:
        team_keys: Team key prefixes, e.g. ["ENG", "PROD"].

    Returns:
        A pattern matching an issue key of any of the given teams, or a
        pattern that matches nothing when no keys are given.
    """
    keys = [re.escape(k) for k in team_keys]
    if not keys:
        return re.compile(_NEVER_MATCHES)
    # A key glued to a longer alphanumeric prefix belongs to another team
    return re.compile(
        rf"(?<![A-Za-z0-9])(?:{'|'.join(keys)})-\d+", re.IGNORECASE
    )


def scan_commits_for_issues(
    commits: Sequence[Commit], team_keys: Sequence[str]
) -> list[IssueMatch]:
    """Collect every issue key mentioned in the commit messages.

    Each key lists the commits that mention it in the order the commits
    were given, each commit at most once. Keys are sorted ascending.

    Args:
        commits: Commits to scan, typically straight from fetch_commits().
        team_keys: Team key prefixes to look for.

    Returns:
        One IssueMatch per distinct key.
    """
    if not team_keys:
        return []

    pattern = build_issue_pattern(team_keys)
    found: dict[str, list[str]] = {}

    for commit in commits:
        # A message can reference several issues, or the same one twice
        for match in pattern.finditer(commit.message):
            shas = found.setdefault(match.group(0).upper(), [])
            if commit.sha not in shas:
                shas.append(commit.sha)

    return [IssueMatch(key=key, commits=found[key]) for key in sorted(found)]
