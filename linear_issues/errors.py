"""linear-issues exception hierarchy.

All errors raised by the scan pipeline inherit from LinearIssuesError and
are reported once, by the CLI.
"""


class LinearIssuesError(Exception):
    """Base exception for all linear-issues errors."""


class ConfigError(LinearIssuesError):
    """Raised for missing or conflicting inputs."""


class GitError(LinearIssuesError):
    """Raised when a git query exits non-zero.

    The message carries git's stderr so the CI log shows the real cause.
    """

    def __init__(self, stderr: str) -> None:
        self.stderr = stderr
        super().__init__(f"Git error: {stderr}")


class LinearAPIError(LinearIssuesError):
    """Raised when talking to the Linear API fails."""

    def __init__(self, message: str) -> None:
        super().__init__(f"Linear API error: {message}")
