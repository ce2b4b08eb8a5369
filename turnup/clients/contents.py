"""Repository contents resource client."""

import base64
from typing import TYPE_CHECKING, Any

from turnup.types.repos import FileContents

if TYPE_CHECKING:
    from turnup.transport import AsyncHTTPTransport


class ContentsClient:
    """Client for reading and writing repository files."""

    def __init__(self, transport: "AsyncHTTPTransport") -> None:
        """
        Initialize the contents client.

        Args:
            transport: HTTP transport for making requests
        """
        self.transport = transport

    async def get(self, full_name: str, path: str, ref: str | None = None) -> FileContents:
        """
        Get a file and decode its base64 content.

        Args:
            full_name: Repository in "owner/name" form
            path: File path within the repository
            ref: Optional branch, tag or commit (default branch if omitted)

        Returns:
            FileContents with decoded text and blob sha

        Raises:
            NotFoundError: If the file (or repository) does not exist
        """
        params = {"ref": ref} if ref else None
        data = await self.transport.request(
            "GET",
            f"/repos/{full_name}/contents/{path}",
            params=params,
        )

        encoded = data.get("content", "")
        content = base64.b64decode(encoded).decode("utf-8") if encoded else ""
        return FileContents(path=data.get("path", path), sha=data["sha"], content=content)

    async def put(
        self,
        full_name: str,
        path: str,
        content: str,
        message: str,
        branch: str,
        sha: str | None = None,
    ) -> dict[str, Any]:
        """
        Create or update a file, producing one commit on ``branch``.

        Args:
            full_name: Repository in "owner/name" form
            path: File path within the repository
            content: New file text
            message: Commit message
            branch: Branch to commit to
            sha: Blob sha of the file being replaced (required for updates)

        Returns:
            API response with "content" and "commit" objects

        Raises:
            ConflictError: If ``sha`` does not match the current blob
        """
        body: dict[str, Any] = {
            "message": message,
            "content": base64.b64encode(content.encode("utf-8")).decode("ascii"),
            "branch": branch,
        }
        if sha:
            body["sha"] = sha

        return await self.transport.request(
            "PUT",
            f"/repos/{full_name}/contents/{path}",
            body=body,
        )
