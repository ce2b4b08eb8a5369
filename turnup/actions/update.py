"""
Update orchestration.

Drives a whole run: gather repositories, fetch their manifests, decide which
are out of date, let the operator choose, then publish each chosen
repository in turn. The first publish failure stops the run; repositories
after it are never attempted.
"""

from collections.abc import Sized
from typing import Protocol

from turnup.actions.gather import fetch_repositories
from turnup.actions.publish import (
    ACTION,
    ALL_ACTION,
    PublishResult,
    update_repository,
    update_repository_all,
)
from turnup.adapters.base import PlatformAdapter
from turnup.config import UpdateOptions
from turnup.exceptions import NoRepositoriesFoundError
from turnup.logging import Notifier
from turnup.packages.filter import repositories_by_dependency_upgrade, repositories_with_manifest
from turnup.packages.parse import parse_package
from turnup.selector import Choice, InteractiveSelector
from turnup.types.repos import RepositoryEntity


class Selector(Protocol):
    def select(self, choices: list[Choice]) -> list[RepositoryEntity]: ...


def pluralize_repo(items: Sized) -> str:
    count = len(items)
    return f"{count} repositor{'y' if count == 1 else 'ies'}"


def describe_upgrade(repository: RepositoryEntity) -> str:
    """Label for a classified repository in the selection prompt."""
    rel = repository.dependency_relationship
    definition = repository.package_definition
    name = (definition.name if definition is not None else None) or repository.name
    if rel is None:
        return name
    return f"{name} ({rel.type} dependency of {rel.current_version})"


async def update(
    package_spec: str,
    adapter: PlatformAdapter,
    options: UpdateOptions | None = None,
    *,
    selector: Selector | None = None,
    notifier: Notifier | None = None,
) -> list[PublishResult]:
    """
    Update one package across repositories.

    Args:
        package_spec: "name@version" to update to
        adapter: Hosting platform adapter
        options: Run options (default: UpdateOptions())
        selector: Operator prompt (default: InteractiveSelector)
        notifier: Progress reporter (default: Notifier("turnup.update"))

    Returns:
        One PublishResult per updated repository, in update order. Empty when
        nothing was out of date or nothing was selected.

    Raises:
        PackageParseError: If ``package_spec`` is malformed (before any request)
        NoRepositoriesFoundError: If no repositories were gathered
        TurnupError: The first publish failure; later repositories are skipped
    """
    options = options or UpdateOptions()
    notifier = notifier or Notifier(ACTION)
    notifier.notify(f"Using adapter {adapter.get_name()}.")

    try:
        parsed = parse_package(package_spec)

        repositories = await fetch_repositories(adapter, options)
        if not repositories:
            raise NoRepositoriesFoundError()
        notifier.notify(f"Found {pluralize_repo(repositories)}.")

        repositories = await adapter.fetch_package_definitions(repositories)
        repositories = repositories_by_dependency_upgrade(repositories, parsed.name, parsed.version)

        if not repositories:
            notifier.notify("No repositories require updating.")
            return []
        notifier.notify(f"Found {pluralize_repo(repositories)} out of date.")

        if not options.skip_selection:
            chooser = selector or InteractiveSelector()
            repositories = chooser.select(
                [Choice(name=describe_upgrade(repo), value=repo) for repo in repositories]
            )

        if not repositories:
            notifier.notify("No selected repos.")
            return []
        notifier.notify(f"Updating {pluralize_repo(repositories)} with {parsed}")

        results: list[PublishResult] = []
        for repository in repositories:
            results.append(
                await update_repository(
                    adapter, repository, parsed.name, parsed.version, options, notifier
                )
            )

        notifier.notify(f"Updated {pluralize_repo(results)}.")
        return results
    except Exception as e:
        notifier.fatal(e)
        raise


async def update_all(
    adapter: PlatformAdapter,
    options: UpdateOptions | None = None,
    *,
    selector: Selector | None = None,
    notifier: Notifier | None = None,
) -> list[PublishResult]:
    """
    Refresh every dependency of every repository that has a package.json.

    Same flow and errors as :func:`update`, without version classification.
    """
    options = options or UpdateOptions()
    notifier = notifier or Notifier(ALL_ACTION)
    notifier.notify(f"Using adapter {adapter.get_name()}.")

    try:
        repositories = await fetch_repositories(adapter, options)
        if not repositories:
            raise NoRepositoriesFoundError()
        notifier.notify(f"Found {pluralize_repo(repositories)}.")

        repositories = await adapter.fetch_package_definitions(repositories)
        repositories = repositories_with_manifest(repositories)

        if not repositories:
            notifier.notify("No repositories have a package.json.")
            return []

        if not options.skip_selection:
            chooser = selector or InteractiveSelector()
            repositories = chooser.select(
                [Choice(name=repo.name, value=repo) for repo in repositories]
            )

        if not repositories:
            notifier.notify("No selected repos.")
            return []
        notifier.notify(f"Updating all dependencies of {pluralize_repo(repositories)}")

        results: list[PublishResult] = []
        for repository in repositories:
            results.append(await update_repository_all(adapter, repository, options, notifier))

        notifier.notify(f"Updated {pluralize_repo(results)}.")
        return results
    except Exception as e:
        notifier.fatal(e)
        raise
