"""Shared test fixtures."""

from __future__ import annotations

import os
import subprocess
from collections.abc import Callable

import pytest

from linear_issues.models import Commit


@pytest.fixture
def completed() -> Callable[..., subprocess.CompletedProcess[str]]:
    """Factory for fake subprocess results."""

    def _completed(
        stdout: str = "", stderr: str = "", returncode: int = 0
    ) -> subprocess.CompletedProcess[str]:
        return subprocess.CompletedProcess(
            args=["git"], returncode=returncode, stdout=stdout, stderr=stderr
        )

    return _completed


@pytest.fixture
def sample_commits() -> list[Commit]:
    """A few commits with a mix of issue references."""
    return [
        Commit(sha="abc123", message="feat: add feature ENG-123"),
        Commit(sha="def456", message="fix: bug PROD-456, follow-up to eng-123"),
        Commit(sha="ghi789", message="chore: update deps"),
    ]


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove GitHub Actions and input variables that could leak into tests."""
    for name in list(os.environ):
        if name.startswith("INPUT_") or name in {
            "GITHUB_OUTPUT",
            "GITHUB_REPOSITORY",
            "LINEAR_API_KEY",
        }:
            monkeypatch.delenv(name, raising=False)
