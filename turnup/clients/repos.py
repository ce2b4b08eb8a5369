"""Repositories resource client."""

from typing import TYPE_CHECKING, Any

from turnup.exceptions import NotFoundError
from turnup.types.repos import ListingOutcome, OwnerListing, RepositoryEntity

if TYPE_CHECKING:
    from turnup.transport import AsyncHTTPTransport

# GitHub caps list endpoints at 100 items per page
PAGE_SIZE = 100


def _parse_repository(data: dict[str, Any]) -> RepositoryEntity:
    """Create a repository entity from a REST API payload."""
    return RepositoryEntity(
        name=data["name"],
        full_name=data["full_name"],
        default_branch=data.get("default_branch", "main"),
    )


class ReposClient:
    """Client for repository lookup and listing."""

    def __init__(self, transport: "AsyncHTTPTransport") -> None:
        """
        Initialize the repos client.

        Args:
            transport: HTTP transport for making requests
        """
        self.transport = transport

    async def get(self, full_name: str) -> RepositoryEntity:
        """
        Get a single repository.

        Args:
            full_name: Repository in "owner/name" form

        Returns:
            RepositoryEntity with name, full name and default branch

        Raises:
            NotFoundError: If repository not found
        """
        data = await self.transport.request("GET", f"/repos/{full_name}")
        return _parse_repository(data)

    async def list_for_user(self, owner: str) -> OwnerListing:
        """
        List public repositories of a user.

        Args:
            owner: User login

        Returns:
            OwnerListing; NOT_FOUND when the login is unknown
        """
        return await self._list(f"/users/{owner}/repos")

    async def list_for_org(self, owner: str) -> OwnerListing:
        """
        List repositories of an organization.

        Args:
            owner: Organization login

        Returns:
            OwnerListing; NOT_FOUND when the organization is unknown
        """
        return await self._list(f"/orgs/{owner}/repos")

    async def _list(self, path: str) -> OwnerListing:
        repositories: list[RepositoryEntity] = []
        page = 1

        while True:
            try:
                data = await self.transport.request(
                    "GET",
                    path,
                    params={"per_page": PAGE_SIZE, "page": page},
                )
            except NotFoundError:
                return OwnerListing(outcome=ListingOutcome.NOT_FOUND)

            if not isinstance(data, list):
                break

            repositories.extend(_parse_repository(repo) for repo in data)

            if len(data) < PAGE_SIZE:
                break
            page += 1

        return OwnerListing.from_repositories(repositories)
