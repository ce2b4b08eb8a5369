"""Pull requests resource client."""

from typing import TYPE_CHECKING, Any

from turnup.types.pulls import PullRequest

if TYPE_CHECKING:
    from turnup.transport import AsyncHTTPTransport


class PullsClient:
    """Client for pull request operations."""

    def __init__(self, transport: "AsyncHTTPTransport") -> None:
        """
        Initialize the pulls client.

        Args:
            transport: HTTP transport for making requests
        """
        self.transport = transport

    async def create(
        self,
        full_name: str,
        head: str,
        base: str,
        title: str,
        body: str | None = None,
    ) -> PullRequest:
        """
        Create a pull request.

        Args:
            full_name: Repository in "owner/name" form
            head: Branch containing changes
            base: Branch to merge into
            title: Pull request title
            body: Optional pull request description

        Returns:
            PullRequest with number and html url

        Raises:
            ValidationError: If the branch has no changes or a PR already exists
            NotFoundError: If repository not found
        """
        payload: dict[str, Any] = {
            "title": title,
            "head": head,
            "base": base,
        }
        if body:
            payload["body"] = body

        data = await self.transport.request(
            "POST",
            f"/repos/{full_name}/pulls",
            body=payload,
        )
        return self._parse_pull_request(data)

    def _parse_pull_request(self, data: dict[str, Any]) -> PullRequest:
        """Parse pull request data from API response."""
        return PullRequest(
            number=data["number"],
            url=data.get("html_url", ""),
            title=data["title"],
            head=data.get("head", {}).get("ref", ""),
            base=data.get("base", {}).get("ref", ""),
            state=data.get("state", "open"),
        )
