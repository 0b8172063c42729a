"""Shell and git utilities.

Provides thin wrappers around subprocess calls for git, plus the output
helpers used to report progress and failures in CI logs.
"""

from __future__ import annotations

import subprocess
import sys

from .errors import GitError


def git(*args: str) -> str:
    """Run a git command and return its raw stdout.

    stdout and stderr are captured separately. Output is returned untouched
    (not stripped) since callers may parse NUL-delimited records.

    Args:
        *args: Arguments to pass to git (e.g., "log", "-n", "5").

    Raises:
        GitError: If git exits non-zero. The message embeds git's stderr.
    """
    result = subprocess.run(["git", *args], capture_output=True, text=True)
    if result.returncode != 0:
        raise GitError(result.stderr.strip())
    return result.stdout


def step(msg: str) -> None:
    """Print a visually distinct step header.

    Used to separate the phases of a scan in CI output.
    """
    print(f"\n{'─' * 60}\n{msg}\n{'─' * 60}")


def report_failure(msg: str) -> None:
    """Print a GitHub Actions error annotation and exit with code 1.

    This is the single place where a failed scan is reported.
    """
    print(f"::error::{msg}", file=sys.stderr)
    sys.exit(1)
