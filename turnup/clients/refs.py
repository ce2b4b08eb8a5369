"""Git references resource client."""

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from turnup.transport import AsyncHTTPTransport


class RefsClient:
    """Client for branch reference operations."""

    def __init__(self, transport: "AsyncHTTPTransport") -> None:
        self.transport = transport

    async def get_branch_sha(self, full_name: str, branch: str) -> str:
        """
        Resolve the commit sha a branch points at.

        Raises:
            NotFoundError: If the branch does not exist
        """
        data = await self.transport.request(
            "GET",
            f"/repos/{full_name}/git/ref/heads/{branch}",
        )
        return data["object"]["sha"]

    async def create_branch(self, full_name: str, branch: str, sha: str) -> dict[str, Any]:
        """
        Create ``branch`` pointing at ``sha``.

        Raises:
            ValidationError: If the branch already exists (GitHub answers 422)
        """
        return await self.transport.request(
            "POST",
            f"/repos/{full_name}/git/refs",
            body={"ref": f"refs/heads/{branch}", "sha": sha},
        )
