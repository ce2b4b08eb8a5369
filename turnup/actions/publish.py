"""
Publish pipeline.

Takes one repository from an updated manifest to an open pull request:

    mutate manifest -> format -> lockfile -> branch -> commit -> pull request

Each step waits for the previous one. Any error propagates to the caller
untouched; the pipeline keeps no state between repositories.
"""

import re
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from turnup.adapters.base import PlatformAdapter
from turnup.config import UpdateOptions
from turnup.exceptions import ManifestError
from turnup.logging import Notifier
from turnup.packages import lockfile
from turnup.packages.format import format_package
from turnup.types.pulls import PullRequest
from turnup.types.repos import RepositoryEntity

ACTION = "turnup.update"
ALL_ACTION = "turnup.update.all"

BRANCH_PREFIX = "turnup"
UPDATE_ALL_BRANCH = f"{BRANCH_PREFIX}/update-all"

# Characters git check-ref-format rejects
_REF_UNSAFE_RE = re.compile(r"[\s~^:?*\[\\]+")

TURNUP_NOTICE = "This PR was automatically generated by the `turnup` CLI."
FORMAT_DISCLAIMER = (
    "**Note**: formatting may have changed for package.json. "
    "Keys are reordered and dependency lists sorted alphabetically."
)

LockfileStrategy = Callable[..., Awaitable[str]]


@dataclass(frozen=True)
class PublishResult:
    """Outcome of publishing one repository."""

    repository: RepositoryEntity
    branch_name: str
    pull_request: PullRequest | None = None


def get_branch_name(package_name: str, package_version: str) -> str:
    """
    Branch for a single-package update.

    Characters git refuses in ref names (range operators, wildcards,
    whitespace) are collapsed to "-", so "^4.17.0" gives "turnup/pkg@4.17.0"
    and "1.2.3 - 1.4.0" gives "turnup/pkg@1.2.3-1.4.0".
    """
    version = _REF_UNSAFE_RE.sub("-", package_version)
    version = re.sub(r"-{2,}", "-", version.replace("..", ".")).strip("-")
    return f"{BRANCH_PREFIX}/{package_name}@{version or 'x'}"


def get_commit_message(repository: RepositoryEntity, action: str) -> str:
    rel = repository.dependency_relationship
    if action == ACTION and rel is not None:
        return f"[turnup] Auto update of {rel.type} dependency {rel.dep_string}"
    return "[turnup] Auto update of package dependencies"


def get_pull_request(repository: RepositoryEntity, action: str) -> tuple[str, str]:
    """Return the (title, body) of the pull request for ``repository``."""
    rel = repository.dependency_relationship
    if action == ACTION and rel is not None:
        title = f"Update Dependency - {rel.dep_string}"
        body = (
            f"Update the package.json {rel.type} dependency `{rel.package_name}` "
            f"from `{rel.current_version}` to `{rel.package_version}`. {TURNUP_NOTICE}"
        )
    else:
        title = "Update Dependencies"
        body = f"Update the package.json dependencies within specified range. {TURNUP_NOTICE}"

    return title, f"{body}\n\n{FORMAT_DISCLAIMER}"


async def update_repository(
    adapter: PlatformAdapter,
    repository: RepositoryEntity,
    package_name: str,
    package_version: str,
    options: UpdateOptions,
    notifier: Notifier | None = None,
) -> PublishResult:
    """
    Pin one dependency in ``repository`` and publish the change.

    ``repository`` must carry the dependency relationship recorded by
    :func:`~turnup.packages.filter.repositories_by_dependency_upgrade`.
    """
    notifier = notifier or Notifier(ACTION)
    notifier.notify(f"Updating {repository.full_name}")

    rel = repository.dependency_relationship
    if repository.package_definition is None or rel is None:
        raise ManifestError(repository.full_name, f"not classified for {package_name}")

    repository = repository.evolve(
        package_definition=repository.package_definition.with_dependency(
            rel.type, package_name, package_version
        )
    )

    return await commit_updates(
        ACTION,
        adapter,
        options,
        repository,
        get_branch_name(package_name, package_version),
        lockfile.create,
        notifier,
    )


async def update_repository_all(
    adapter: PlatformAdapter,
    repository: RepositoryEntity,
    options: UpdateOptions,
    notifier: Notifier | None = None,
) -> PublishResult:
    """Publish a bulk update: manifest as-is, lockfile refreshed with ``lockfile.update``."""
    notifier = notifier or Notifier(ALL_ACTION)
    notifier.notify(f"Running dependency update against {repository.full_name}")

    if repository.package_definition is None:
        raise ManifestError(repository.full_name, "no package definition")

    return await commit_updates(
        ALL_ACTION,
        adapter,
        options,
        repository,
        UPDATE_ALL_BRANCH,
        lockfile.update,
        notifier,
    )


async def commit_updates(
    action: str,
    adapter: PlatformAdapter,
    options: UpdateOptions,
    repository: RepositoryEntity,
    branch_name: str,
    lockfile_strategy: LockfileStrategy,
    notifier: Notifier,
) -> PublishResult:
    """
    Format, regenerate the lockfile, branch, commit and open the pull request.

    The repository value produced by each step is the one handed to the next.
    """
    if repository.package_definition is None:
        raise ManifestError(repository.full_name, "no package definition")

    formatted = format_package(repository.package_definition.decoded)

    updated_lockfile: str | None = None

    if not options.no_lockfile:
        notifier.notify("Generating lockfile.")
        current = await adapter.fetch_lockfile_definition(repository)

        if current is None:
            notifier.warn("No lockfile found, skipping lockfile generation.")
        else:
            repository = repository.evolve(lockfile_entity=current)
            updated_lockfile = await lockfile_strategy(
                formatted,
                current.package_manager,
                options.registry,
                current_lockfile=current.content,
            )

    notifier.notify("Creating branch.")
    await adapter.create_branch(repository, branch_name)

    notifier.notify("Creating commit.")
    await adapter.commit_package_definition(
        repository,
        branch_name,
        formatted,
        updated_lockfile,
        get_commit_message(repository, action),
    )

    pull_request: PullRequest | None = None
    if not options.no_pull_request:
        notifier.notify("Creating pull request.")
        title, body = get_pull_request(repository, action)
        pull_request = await adapter.create_pull_request(repository, branch_name, title, body)
        notifier.notify(f"Opened {pull_request.url or f'pull request #{pull_request.number}'}")

    return PublishResult(repository=repository, branch_name=branch_name, pull_request=pull_request)
