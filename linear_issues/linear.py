"""Read-only access to the Linear GraphQL API.

Only team keys are needed: they decide which prefixes count as issue keys.
"""

from __future__ import annotations

from typing import Any

import requests

from .errors import LinearAPIError

LINEAR_API_URL = "https://api.linear.app/graphql"
LINEAR_APP_URL = "https://linear.app"

TEAMS_QUERY = """
query Teams($after: String) {
  teams(first: 250, after: $after) {
    nodes {
      key
    }
    pageInfo {
      hasNextPage
      endCursor
    }
  }
}
"""


class LinearClient:
    """Minimal Linear GraphQL client authenticated with a personal API key."""

    def __init__(
        self, api_key: str, api_url: str = LINEAR_API_URL, timeout: int = 30
    ) -> None:
        self.api_url = api_url
        self.timeout = timeout
        self.session = requests.Session()
        # Personal API keys go in the header as-is, without "Bearer"
        self.session.headers.update(
            {"Authorization": api_key, "Content-Type": "application/json"}
        )

    def query(self, query: str, variables: dict[str, Any] | None = None) -> dict:
        """Run a GraphQL query and return its ``data`` object.

        Raises:
            requests.HTTPError: On a non-2xx response.
            RuntimeError: If the response carries GraphQL errors.
        """
        response = self.session.post(
            self.api_url,
            json={"query": query, "variables": variables or {}},
            timeout=self.timeout,
        )
        response.raise_for_status()
        payload = response.json()
        if payload.get("errors"):
            messages = "; ".join(
                e.get("message", "unknown error") for e in payload["errors"]
            )
            raise RuntimeError(messages)
        return payload.get("data") or {}

    def teams(self) -> list[str]:
        """Return the keys of every team visible to the API key."""
        keys: list[str] = []
        cursor: str | None = None
        while True:
            data = self.query(TEAMS_QUERY, {"after": cursor})
            teams = data.get("teams") or {}
            keys.extend(node["key"] for node in teams.get("nodes", []))
            page_info = teams.get("pageInfo") or {}
            if not page_info.get("hasNextPage"):
                return keys
            cursor = page_info.get("endCursor")


def create_linear_client(api_key: str) -> LinearClient:
    return LinearClient(api_key)


def fetch_team_keys(
    client: LinearClient, filter_keys: list[str] | None = None
) -> list[str]:
    """Fetch team keys, optionally restricted to the given keys.

    Filtering is case-insensitive on both sides and keeps Linear's order.

    Raises:
        LinearAPIError: On any failure talking to Linear.
    """
    try:
        all_keys = client.teams()
    except Exception as exc:
        raise LinearAPIError(str(exc) or "Unknown error") from exc

    if not filter_keys:
        return all_keys

    wanted = {k.upper() for k in filter_keys}
    return [key for key in all_keys if key.upper() in wanted]


def build_issue_url(workspace_slug: str, issue_key: str) -> str:
    """Link to an issue. An empty slug still resolves via Linear's redirect."""
    return f"{LINEAR_APP_URL}/{workspace_slug}/issue/{issue_key}"
