"""Scan pipeline: inputs → teams → commits → issues → report.

This module orchestrates a single scan:
1. Look up team keys in Linear (optionally filtered)
2. Resolve the changeset into commits from git history
3. Scan commit subjects for issue keys
4. Attach issue URLs
5. Write the JSON report
6. Publish step outputs

Any failure propagates to the caller. The report is only written once
every earlier step has succeeded, so a failed scan leaves no partial file.
"""

from __future__ import annotations

from .git import fetch_commits
from .linear import LINEAR_APP_URL, build_issue_url, create_linear_client, fetch_team_keys
from .models import ActionInputs, IssueReference
from .output import build_output_artifact, set_action_outputs, write_output_file
from .scanner import scan_commits_for_issues
from .shell import step


def run_scan(inputs: ActionInputs) -> list[IssueReference]:
    """Execute the full scan.

    Args:
        inputs: Validated scan inputs.

    Returns:
        The issue references written to the report.
    """
    step("Fetching team keys from Linear")
    client = create_linear_client(inputs.linear_api_key.get_secret_value())
    team_keys = fetch_team_keys(client, inputs.team_keys)
    print(f"  Found {len(team_keys)} team(s): {', '.join(team_keys)}")

    step(f"Fetching commits ({inputs.changeset.type})")
    commits = fetch_commits(inputs.changeset)
    print(f"  Found {len(commits)} commit(s)")

    step("Scanning commits for Linear issues")
    matches = scan_commits_for_issues(commits, team_keys)
    issues = [
        IssueReference(
            key=match.key,
            url=build_issue_url(inputs.workspace_slug, match.key),
            commits=match.commits,
        )
        for match in matches
    ]
    for issue in issues:
        print(f"  {issue.key} ({len(issue.commits)} commit(s))")
    if not issues:
        print("  <none>")

    step(f"Writing report to {inputs.output_file}")
    artifact = build_output_artifact(
        issues, inputs.changeset, LINEAR_APP_URL, len(commits)
    )
    write_output_file(inputs.output_file, artifact)
    set_action_outputs(issues)

    print(
        f"\n{'=' * 60}\n"
        f"Found {len(issues)} issue(s) in {len(commits)} commit(s).\n"
        f"{'=' * 60}"
    )
    return issues
