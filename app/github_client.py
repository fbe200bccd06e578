"""GitHub API client for issue lookups and updates."""

from typing import Any

import httpx

from app.config import Settings
from shared.constants import GITHUB_REST_ACCEPT, ISSUE_NODE_QUERY


class GitHubClient:
    """Wraps a shared httpx client with GitHub endpoints and credentials.

    All methods raise ``httpx.HTTPError`` subclasses on transport failures
    and non-2xx responses; callers turn those into result objects.
    """

    def __init__(self, settings: Settings, http: httpx.AsyncClient) -> None:
        """Initialize the client.

        Args:
            settings: Application settings holding the token and base URLs
            http: Open async HTTP client, owned by the caller
        """
        self.settings = settings
        self.http = http

    def get_graphql_headers(self) -> dict[str, str]:
        """Get headers for GraphQL requests."""
        return {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.settings.github_token}",
        }

    def get_rest_headers(self) -> dict[str, str]:
        """Get headers for REST issue requests."""
        return {
            "Authorization": f"token {self.settings.github_token}",
            "Accept": GITHUB_REST_ACCEPT,
        }

    def issue_url(self, api_path: str) -> str:
        return f"{self.settings.github_api_url.rstrip('/')}{api_path}"

    async def query_issue_node(self, node_id: str) -> dict[str, Any]:
        """Run the issue node query for a content node ID.

        Args:
            node_id: GitHub global node ID

        Returns:
            Decoded GraphQL response (may contain an ``errors`` list)
        """
        response = await self.http.post(
            self.settings.github_graphql_url,
            headers=self.get_graphql_headers(),
            json={"query": ISSUE_NODE_QUERY, "variables": {"id": node_id}},
        )
        response.raise_for_status()
        return response.json()

    async def get_issue(self, api_path: str) -> dict[str, Any]:
        """Fetch an issue.

        Args:
            api_path: REST path like ``/repos/{owner}/{repo}/issues/{number}``

        Returns:
            Issue data
        """
        response = await self.http.get(self.issue_url(api_path), headers=self.get_rest_headers())
        response.raise_for_status()
        return response.json()

    async def update_issue_body(self, api_path: str, body: str) -> dict[str, Any]:
        """Replace an issue body.

        Args:
            api_path: REST path like ``/repos/{owner}/{repo}/issues/{number}``
            body: New issue body

        Returns:
            Updated issue data
        """
        response = await self.http.patch(
            self.issue_url(api_path),
            headers=self.get_rest_headers(),
            json={"body": body},
        )
        response.raise_for_status()
        return response.json()
