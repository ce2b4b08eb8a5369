"""Repository gathering."""

from collections.abc import Iterable

from turnup.adapters.base import PlatformAdapter
from turnup.config import UpdateOptions
from turnup.types.repos import RepositoryEntity


def dedupe_repositories(repositories: Iterable[RepositoryEntity]) -> list[RepositoryEntity]:
    """Drop repeated full names, keeping the first occurrence in order."""
    seen: set[str] = set()
    unique: list[RepositoryEntity] = []
    for repository in repositories:
        if repository.full_name in seen:
            continue
        seen.add(repository.full_name)
        unique.append(repository)
    return unique


async def fetch_repositories(
    adapter: PlatformAdapter, options: UpdateOptions
) -> list[RepositoryEntity]:
    """
    Gather repositories named in ``options.repos`` and owned by ``options.owner``.

    Named repositories come first, then the owner's. Duplicates are removed.
    An empty result is returned as-is; callers decide whether that is fatal.
    """
    repositories: list[RepositoryEntity] = []

    if options.repos:
        repositories.extend(await adapter.fetch_repositories(options.repos))

    if options.owner:
        repositories.extend(await adapter.fetch_repositories_by_owner(options.owner))

    return dedupe_repositories(repositories)
