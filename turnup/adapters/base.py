"""Platform adapter protocol.

The update pipeline only talks to hosting platforms through this interface.
"""

from typing import Protocol, runtime_checkable

from turnup.types.pulls import PullRequest
from turnup.types.repos import LockfileEntity, RepositoryEntity


@runtime_checkable
class PlatformAdapter(Protocol):
    """Capabilities a hosting platform must provide."""

    def get_name(self) -> str:
        """Human readable platform name, e.g. "GitHub"."""
        ...

    def get_key(self) -> str:
        """Registry key, e.g. "github"."""
        ...

    async def fetch_repositories(self, names: list[str]) -> list[RepositoryEntity]:
        """Fetch repositories by full name, in the order given."""
        ...

    async def fetch_repositories_by_owner(self, owner: str) -> list[RepositoryEntity]:
        """Fetch a user's repositories, falling back to the organization's."""
        ...

    async def fetch_package_definitions(
        self, repositories: list[RepositoryEntity]
    ) -> list[RepositoryEntity]:
        """Attach package definitions; repositories without one come back unchanged."""
        ...

    async def fetch_lockfile_definition(
        self, repository: RepositoryEntity
    ) -> LockfileEntity | None:
        """Fetch the repository's lockfile, or None when it has none."""
        ...

    async def create_branch(self, repository: RepositoryEntity, branch_name: str) -> None:
        """Create ``branch_name`` from the head of the default branch."""
        ...

    async def commit_package_definition(
        self,
        repository: RepositoryEntity,
        branch_name: str,
        package_definition: str,
        lockfile: str | None,
        message: str,
    ) -> None:
        """Write the manifest (then the lockfile, if given) to ``branch_name``."""
        ...

    async def create_pull_request(
        self,
        repository: RepositoryEntity,
        branch_name: str,
        title: str,
        body: str,
    ) -> PullRequest:
        """Open a pull request from ``branch_name`` into the default branch."""
        ...
