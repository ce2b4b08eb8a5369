"""
turnup GitHub client.

Aggregates the GitHub REST resource clients over one shared transport.
"""

import os
from typing import Any

import httpx

from turnup.clients import ContentsClient, PullsClient, RefsClient, ReposClient
from turnup.exceptions import ConfigurationError
from turnup.transport import AsyncHTTPTransport, RetryConfig


class GitHubClient:
    """
    Async client for the parts of the GitHub API turnup uses.

    Example:
        ```python
        from turnup import GitHubClient

        async with GitHubClient.from_env() as client:
            repo = await client.repos.get("octo/widgets")
            manifest = await client.contents.get(repo.full_name, "package.json")
        ```
    """

    DEFAULT_BASE_URL = "https://api.github.com"
    DEFAULT_TIMEOUT = 30.0

    def __init__(
        self,
        token: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        retry_config: RetryConfig | None = None,
        http_transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Initialize the GitHub client.

        Args:
            token: Personal access token or GitHub App token
            base_url: API base URL (override for GitHub Enterprise Server)
            timeout: Request timeout in seconds (default: 30.0)
            retry_config: Configuration for retry behavior (optional)
            http_transport: Optional httpx transport, mainly for tests
        """
        if not token:
            raise ConfigurationError("A GitHub access token is required")

        self.base_url = base_url
        self.timeout = timeout

        self._transport = AsyncHTTPTransport(
            base_url=base_url,
            token=token,
            timeout=timeout,
            retry_config=retry_config,
            http_transport=http_transport,
        )

        self.repos = ReposClient(self._transport)
        self.contents = ContentsClient(self._transport)
        self.refs = RefsClient(self._transport)
        self.pulls = PullsClient(self._transport)

    @classmethod
    def from_env(
        cls,
        timeout: float = DEFAULT_TIMEOUT,
        retry_config: RetryConfig | None = None,
    ) -> "GitHubClient":
        """
        Create a client from environment variables.

        Environment variables:
            GITHUB_TOKEN: Access token (falls back to GH_TOKEN)
            GITHUB_API_URL: API base URL (optional, default: https://api.github.com)

        Raises:
            ConfigurationError: If no token is set
        """
        token = os.environ.get("GITHUB_TOKEN") or os.environ.get("GH_TOKEN")
        base_url = os.environ.get("GITHUB_API_URL", cls.DEFAULT_BASE_URL)

        if not token:
            raise ConfigurationError(
                "GITHUB_TOKEN (or GH_TOKEN) environment variable not set"
            )

        return cls(
            token=token,
            base_url=base_url,
            timeout=timeout,
            retry_config=retry_config,
        )

    @property
    def transport(self) -> AsyncHTTPTransport:
        """Get the underlying HTTP transport (for advanced use cases)."""
        return self._transport

    async def close(self) -> None:
        """Close the client and release resources."""
        await self._transport.close()

    async def __aenter__(self) -> "GitHubClient":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    def __repr__(self) -> str:
        return f"GitHubClient(base_url={self.base_url!r})"
