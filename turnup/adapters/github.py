"""GitHub platform adapter.

Implements :class:`~turnup.adapters.base.PlatformAdapter` on top of
:class:`~turnup.client.GitHubClient`. Reads fan out concurrently with
``asyncio.gather``; writes are issued one at a time.
"""

import asyncio
import json

from turnup.client import GitHubClient
from turnup.exceptions import ManifestError, NotFoundError, TurnupError
from turnup.logging import get_logger
from turnup.packages.lockfile import PACKAGE_MANAGERS
from turnup.types.pulls import PullRequest
from turnup.types.repos import (
    ListingOutcome,
    LockfileEntity,
    PackageDefinition,
    RepositoryEntity,
)

logger = get_logger("adapters.github")

MANIFEST_PATH = "package.json"


class GitHubAdapter:
    """Platform adapter for github.com and GitHub Enterprise Server."""

    def __init__(self, client: GitHubClient) -> None:
        """
        Initialize the adapter.

        Args:
            client: Authenticated GitHubClient
        """
        self.client = client

    @classmethod
    def from_token(cls, token: str, base_url: str = GitHubClient.DEFAULT_BASE_URL) -> "GitHubAdapter":
        """Create an adapter with its own client."""
        return cls(GitHubClient(token=token, base_url=base_url))

    def get_name(self) -> str:
        return "GitHub"

    def get_key(self) -> str:
        return "github"

    async def close(self) -> None:
        await self.client.close()

    async def fetch_repositories(self, names: list[str]) -> list[RepositoryEntity]:
        """
        Fetch repositories by "owner/name".

        Raises:
            NotFoundError: If any named repository does not exist
        """
        return list(await asyncio.gather(*(self.client.repos.get(name) for name in names)))

    async def fetch_repositories_by_owner(self, owner: str) -> list[RepositoryEntity]:
        """
        List an owner's repositories.

        The owner is tried as a user first; only when that yields nothing is
        it listed as an organization.
        """
        listing = await self.client.repos.list_for_user(owner)

        if listing.outcome is not ListingOutcome.FOUND:
            logger.debug("No user repositories for %s (%s), trying organization", owner, listing.outcome.value)
            listing = await self.client.repos.list_for_org(owner)

        return list(listing.repositories)

    async def fetch_package_definitions(
        self, repositories: list[RepositoryEntity]
    ) -> list[RepositoryEntity]:
        """
        Attach each repository's package.json.

        Repositories without a package.json are returned unchanged.

        Raises:
            ManifestError: If a package.json is not valid JSON
        """
        return list(await asyncio.gather(
            *(self._fetch_package_definition(repository) for repository in repositories)
        ))

    async def _fetch_package_definition(self, repository: RepositoryEntity) -> RepositoryEntity:
        try:
            contents = await self.client.contents.get(repository.full_name, MANIFEST_PATH)
        except NotFoundError:
            logger.debug("%s has no %s", repository.full_name, MANIFEST_PATH)
            return repository

        try:
            decoded = json.loads(contents.content)
        except json.JSONDecodeError as e:
            raise ManifestError(repository.full_name, f"{MANIFEST_PATH} is not valid JSON: {e}") from e

        if not isinstance(decoded, dict):
            raise ManifestError(repository.full_name, f"{MANIFEST_PATH} is not a JSON object")

        return repository.evolve(
            package_definition=PackageDefinition(decoded=decoded, sha=contents.sha)
        )

    async def fetch_lockfile_definition(
        self, repository: RepositoryEntity
    ) -> LockfileEntity | None:
        """
        Fetch the first lockfile found on the default branch.

        npm's package-lock.json is preferred over yarn.lock.

        Returns:
            LockfileEntity, or None when the repository has no lockfile
        """
        for manager in PACKAGE_MANAGERS.values():
            try:
                contents = await self.client.contents.get(repository.full_name, manager.lockfile)
            except NotFoundError:
                continue

            return LockfileEntity(
                package_manager=manager.name,
                path=contents.path,
                content=contents.content,
                sha=contents.sha,
            )

        return None

    async def create_branch(self, repository: RepositoryEntity, branch_name: str) -> None:
        sha = await self.client.refs.get_branch_sha(repository.full_name, repository.default_branch)
        await self.client.refs.create_branch(repository.full_name, branch_name, sha)

    async def commit_package_definition(
        self,
        repository: RepositoryEntity,
        branch_name: str,
        package_definition: str,
        lockfile: str | None,
        message: str,
    ) -> None:
        """
        Write package.json, then the lockfile, to ``branch_name``.

        The remote lockfile is looked up on the branch before anything is
        written. If it is missing, only package.json is committed. Any other
        lookup failure is raised before the first write.
        """
        if repository.package_definition is None:
            raise ManifestError(repository.full_name, "no package definition to commit")

        writes = [(MANIFEST_PATH, package_definition, repository.package_definition.sha)]

        if lockfile is not None:
            lockfile_path = (
                repository.lockfile_entity.path
                if repository.lockfile_entity is not None
                else PACKAGE_MANAGERS["npm"].lockfile
            )
            try:
                remote = await self.client.contents.get(
                    repository.full_name, lockfile_path, ref=branch_name
                )
            except NotFoundError as e:
                logger.warning(
                    "%s has no %s on %s, committing %s only: %s",
                    repository.full_name, lockfile_path, branch_name, MANIFEST_PATH, e,
                )
            except TurnupError as e:
                logger.error("Could not look up %s in %s: %s", lockfile_path, repository.full_name, e)
                raise
            else:
                writes.append((lockfile_path, lockfile, remote.sha))

        for path, content, sha in writes:
            await self.client.contents.put(
                repository.full_name,
                path,
                content,
                message=f"{message} - {path}",
                branch=branch_name,
                sha=sha,
            )

    async def create_pull_request(
        self,
        repository: RepositoryEntity,
        branch_name: str,
        title: str,
        body: str,
    ) -> PullRequest:
        return await self.client.pulls.create(
            repository.full_name,
            head=branch_name,
            base=repository.default_branch,
            title=title,
            body=body,
        )
