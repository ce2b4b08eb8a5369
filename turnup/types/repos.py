"""Repository-related data models.

Every model here is frozen. State transitions go through ``evolve`` and
``with_dependency``, which return new values and leave the original intact.
"""

import copy
import dataclasses
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Literal

DependencyType = Literal["dev", "prod"]

# Manifest section holding each dependency type
DEPENDENCY_SECTIONS: dict[str, str] = {
    "prod": "dependencies",
    "dev": "devDependencies",
}


@dataclass(frozen=True)
class PackageDefinition:
    """A decoded package.json and the blob sha it was read from."""

    decoded: dict[str, Any]
    sha: str

    @property
    def name(self) -> str | None:
        return self.decoded.get("name")

    def with_dependency(
        self, dep_type: DependencyType, package_name: str, version: str
    ) -> "PackageDefinition":
        """Return a copy of this definition with one dependency pinned."""
        decoded = copy.deepcopy(self.decoded)
        section = DEPENDENCY_SECTIONS[dep_type]
        decoded.setdefault(section, {})[package_name] = version
        return PackageDefinition(decoded=decoded, sha=self.sha)


@dataclass(frozen=True)
class DependencyRelationship:
    """How a repository depends on the package being updated."""

    type: DependencyType
    package_name: str
    package_version: str  # target version
    current_version: str  # version declared before the update

    @property
    def dep_string(self) -> str:
        return f"{self.package_name}@{self.package_version}"


@dataclass(frozen=True)
class LockfileEntity:
    """A lockfile fetched from the repository's default branch."""

    package_manager: str  # "npm" or "yarn"
    path: str
    content: str
    sha: str


@dataclass(frozen=True)
class RepositoryEntity:
    """Repository identity plus the state accumulated while updating it."""

    name: str
    full_name: str
    default_branch: str
    package_definition: PackageDefinition | None = None
    dependency_relationship: DependencyRelationship | None = None
    lockfile_entity: LockfileEntity | None = None

    def evolve(self, **changes: Any) -> "RepositoryEntity":
        """Return a new entity with ``changes`` applied."""
        return dataclasses.replace(self, **changes)

    @property
    def has_manifest(self) -> bool:
        return self.package_definition is not None


class ListingOutcome(Enum):
    """Result kind of listing an owner's repositories."""

    FOUND = "found"
    EMPTY = "empty"
    NOT_FOUND = "not_found"


@dataclass(frozen=True)
class OwnerListing:
    """Repositories listed for a user or organization."""

    outcome: ListingOutcome
    repositories: tuple[RepositoryEntity, ...] = field(default_factory=tuple)

    @classmethod
    def from_repositories(cls, repositories: list[RepositoryEntity]) -> "OwnerListing":
        outcome = ListingOutcome.FOUND if repositories else ListingOutcome.EMPTY
        return cls(outcome=outcome, repositories=tuple(repositories))


@dataclass(frozen=True)
class FileContents:
    """A decoded file from the contents API."""

    path: str
    sha: str
    content: str
