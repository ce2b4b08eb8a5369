"""Repository filters over fetched package definitions."""

from collections.abc import Iterable

from turnup.types.repos import DEPENDENCY_SECTIONS, DependencyRelationship, RepositoryEntity


def classify_dependency(
    manifest: dict, package_name: str, package_version: str
) -> DependencyRelationship | None:
    """
    Work out whether a manifest needs ``package_name`` moved to ``package_version``.

    ``dependencies`` is checked before ``devDependencies``; the first section
    declaring the package decides.

    Returns:
        The relationship when the declared version differs from the target,
        otherwise None (not declared, or already at the target)
    """
    for dep_type, section in DEPENDENCY_SECTIONS.items():
        declared = manifest.get(section) or {}
        if not isinstance(declared, dict) or package_name not in declared:
            continue

        current_version = declared[package_name]
        if current_version == package_version:
            return None

        return DependencyRelationship(
            type=dep_type,
            package_name=package_name,
            package_version=package_version,
            current_version=str(current_version),
        )

    return None


def repositories_by_dependency_upgrade(
    repositories: Iterable[RepositoryEntity],
    package_name: str,
    package_version: str,
) -> list[RepositoryEntity]:
    """
    Keep the repositories that are out of date for a package.

    Repositories without a package definition are dropped. Kept repositories
    are new values carrying their ``dependency_relationship``; input order is
    preserved.
    """
    out_of_date: list[RepositoryEntity] = []

    for repository in repositories:
        if repository.package_definition is None:
            continue

        relationship = classify_dependency(
            repository.package_definition.decoded, package_name, package_version
        )
        if relationship is not None:
            out_of_date.append(repository.evolve(dependency_relationship=relationship))

    return out_of_date


def repositories_with_manifest(
    repositories: Iterable[RepositoryEntity],
) -> list[RepositoryEntity]:
    """Keep every repository that has a package definition."""
    return [repository for repository in repositories if repository.has_manifest]
