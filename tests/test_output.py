"""Tests for linear_issues.output."""

from __future__ import annotations

import json
import re
from pathlib import Path

import pytest

from linear_issues.models import (
    CommitsCountChangeset,
    CommitsRangeChangeset,
    IssueReference,
)
from linear_issues.output import (
    build_output_artifact,
    set_action_outputs,
    write_output_file,
)


@pytest.fixture
def issues() -> list[IssueReference]:
    return [
        IssueReference(
            key="ENG-123",
            url="https://linear.app/company/issue/ENG-123",
            commits=["abc"],
        ),
        IssueReference(
            key="ENG-456",
            url="https://linear.app/company/issue/ENG-456",
            commits=["def", "abc"],
        ),
    ]


class TestBuildOutputArtifact:
    def test_builds_metadata(
        self, issues: list[IssueReference], monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("GITHUB_REPOSITORY", "test-owner/test-repo")
        changeset = CommitsCountChangeset(commits_count=10)

        result = build_output_artifact(
            issues, changeset, "https://linear.app/company", 5
        )

        assert result.metadata.linear_base_url == "https://linear.app/company"
        assert result.metadata.repository == "test-owner/test-repo"
        assert result.metadata.total_issues == 2
        assert result.metadata.total_commits == 5
        assert result.metadata.changeset == changeset
        assert result.issues == issues
        assert re.match(
            r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z$",
            result.metadata.generated_at,
        )

    def test_explicit_repository(
        self, issues: list[IssueReference], clean_env: None
    ) -> None:
        result = build_output_artifact(
            issues, CommitsCountChangeset(commits_count=1), "", 1, repository="o/r"
        )

        assert result.metadata.repository == "o/r"

    def test_repository_outside_actions(self, clean_env: None) -> None:
        result = build_output_artifact(
            [], CommitsCountChangeset(commits_count=1), "https://linear.app", 0
        )

        assert result.metadata.repository == "unknown/unknown"
        assert result.metadata.total_issues == 0


class TestWriteOutputFile:
    def test_writes_camel_case_json(
        self, tmp_path: Path, issues: list[IssueReference]
    ) -> None:
        artifact = build_output_artifact(
            issues,
            CommitsRangeChangeset(commits_start_sha="abc"),
            "https://linear.app",
            5,
            repository="owner/repo",
        )
        path = tmp_path / "linear-issues.json"

        write_output_file(path, artifact)

        text = path.read_text()
        assert '\n  "metadata": {\n    "generatedAt"' in text
        data = json.loads(text)
        assert list(data) == ["metadata", "issues"]
        assert list(data["metadata"]) == [
            "generatedAt",
            "linearBaseUrl",
            "repository",
            "changeset",
            "totalIssues",
            "totalCommits",
        ]
        assert data["metadata"]["changeset"] == {
            "type": "commits-range",
            "commitsStartSha": "abc",
            "commitsEndSha": "HEAD",
            "includeStartCommit": False,
        }
        assert data["issues"][1] == {
            "key": "ENG-456",
            "url": "https://linear.app/company/issue/ENG-456",
            "commits": ["def", "abc"],
        }

    def test_overwrites_existing_file(
        self, tmp_path: Path, issues: list[IssueReference]
    ) -> None:
        path = tmp_path / "out.json"
        path.write_text("stale content that is longer than nothing" * 100)
        artifact = build_output_artifact(
            issues, CommitsCountChangeset(commits_count=1), "", 1, repository="o/r"
        )

        write_output_file(str(path), artifact)

        assert json.loads(path.read_text())["metadata"]["totalIssues"] == 2


class TestSetActionOutputs:
    def test_appends_to_github_output(
        self, tmp_path: Path, issues: list[IssueReference]
    ) -> None:
        output_file = tmp_path / "github_output.txt"
        output_file.write_text("previous=1\n")

        set_action_outputs(issues, github_output=str(output_file))

        assert output_file.read_text() == (
            "previous=1\n"
            "issue-keys=ENG-123,ENG-456\n"
            "issue-links=https://linear.app/company/issue/ENG-123,"
            "https://linear.app/company/issue/ENG-456\n"
            "issue-count=2\n"
        )

    def test_reads_github_output_env(
        self,
        tmp_path: Path,
        issues: list[IssueReference],
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        output_file = tmp_path / "out.txt"
        monkeypatch.setenv("GITHUB_OUTPUT", str(output_file))

        set_action_outputs(issues)

        assert "issue-count=2" in output_file.read_text()

    def test_no_issues(self, clean_env: None, capsys: pytest.CaptureFixture) -> None:
        outputs = set_action_outputs([])

        assert outputs == {"issue-keys": "", "issue-links": "", "issue-count": "0"}
        assert "issue-count=0" in capsys.readouterr().out
