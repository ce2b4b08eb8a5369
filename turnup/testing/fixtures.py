"""
Pytest fixtures for turnup testing.

Provides common fixtures and builders for tests that drive turnup against
a MockPlatformAdapter.
"""

from collections.abc import Generator
from typing import Any

import pytest

from turnup.config import UpdateOptions
from turnup.testing.mock import MockPlatformAdapter
from turnup.types.pulls import PullRequest
from turnup.types.repos import (
    DependencyRelationship,
    LockfileEntity,
    PackageDefinition,
    RepositoryEntity,
)


# ============================================================================
# Mock Adapter Fixtures
# ============================================================================


@pytest.fixture
def mock_adapter() -> Generator[MockPlatformAdapter, None, None]:
    """
    Provide a MockPlatformAdapter for testing.

    Example:
        ```python
        async def test_my_feature(mock_adapter):
            mock_adapter.add_repository(create_mock_repository("octo/a"))
            result = await fetch_repositories(mock_adapter, UpdateOptions(repos=["octo/a"]))
            assert mock_adapter.was_called("fetch_repositories")
        ```
    """
    adapter = MockPlatformAdapter()
    yield adapter
    adapter.reset()


@pytest.fixture
def no_prompt_options() -> UpdateOptions:
    """Options that skip the interactive selection and lockfile generation."""
    return UpdateOptions(skip_selection=True, no_lockfile=True)


# ============================================================================
# Sample Data Fixtures
# ============================================================================


@pytest.fixture
def sample_manifest() -> dict[str, Any]:
    """Provide a sample decoded package.json."""
    return {
        "name": "widgets",
        "version": "1.0.0",
        "scripts": {"test": "jest"},
        "dependencies": {"lodash": "4.17.20", "express": "^4.18.0"},
        "devDependencies": {"jest": "^29.0.0"},
    }


@pytest.fixture
def sample_repository(sample_manifest: dict[str, Any]) -> RepositoryEntity:
    """Provide a sample RepositoryEntity with a package definition."""
    return create_mock_repository("octo/widgets", manifest=sample_manifest)


@pytest.fixture
def sample_lockfile() -> LockfileEntity:
    """Provide a sample npm lockfile."""
    return create_mock_lockfile()


@pytest.fixture
def sample_pull_request() -> PullRequest:
    """Provide a sample PullRequest object."""
    return PullRequest(
        number=7,
        url="https://github.com/octo/widgets/pull/7",
        title="Update Dependency - lodash@4.17.21",
        head="turnup/lodash@4.17.21",
        base="main",
        state="open",
    )


@pytest.fixture
def mock_adapter_with_repos(
    mock_adapter: MockPlatformAdapter,
    sample_manifest: dict[str, Any],
) -> MockPlatformAdapter:
    """
    Provide a MockPlatformAdapter holding three repositories of one owner.

    ``octo/widgets`` and ``octo/gadgets`` depend on lodash 4.17.20;
    ``octo/docs`` has no package.json.

    Example:
        ```python
        async def test_owner_run(mock_adapter_with_repos, no_prompt_options):
            results = await update("lodash@4.17.21", mock_adapter_with_repos, no_prompt_options)
        ```
    """
    mock_adapter.add_repository(create_mock_repository("octo/widgets"), manifest=sample_manifest)
    mock_adapter.add_repository(
        create_mock_repository("octo/gadgets"),
        manifest={"name": "gadgets", "dependencies": {"lodash": "4.17.20"}},
    )
    mock_adapter.add_repository(create_mock_repository("octo/docs"))
    return mock_adapter


# ============================================================================
# Helper Functions
# ============================================================================


def create_mock_repository(
    full_name: str = "octo/widgets",
    default_branch: str = "main",
    manifest: dict[str, Any] | None = None,
    **kwargs: Any,
) -> RepositoryEntity:
    """
    Create a RepositoryEntity with customizable fields.

    Args:
        full_name: "owner/name"
        default_branch: Default branch name
        manifest: Decoded package.json to attach as the package definition
        **kwargs: Additional fields to override

    Returns:
        RepositoryEntity object
    """
    defaults: dict[str, Any] = {
        "name": full_name.split("/", 1)[-1],
        "package_definition": (
            PackageDefinition(decoded=manifest, sha=f"sha-{full_name}")
            if manifest is not None
            else None
        ),
    }
    defaults.update(kwargs)
    return RepositoryEntity(full_name=full_name, default_branch=default_branch, **defaults)


def create_mock_relationship(
    package_name: str = "lodash",
    package_version: str = "4.17.21",
    current_version: str = "4.17.20",
    type: str = "prod",
) -> DependencyRelationship:
    """Create a DependencyRelationship."""
    return DependencyRelationship(
        type=type,  # type: ignore[arg-type]
        package_name=package_name,
        package_version=package_version,
        current_version=current_version,
    )


def create_mock_lockfile(
    package_manager: str = "npm",
    content: str = '{"lockfileVersion": 3}\n',
    **kwargs: Any,
) -> LockfileEntity:
    """
    Create a LockfileEntity with customizable fields.

    Args:
        package_manager: "npm" or "yarn"
        content: Lockfile text
        **kwargs: Additional fields to override

    Returns:
        LockfileEntity object
    """
    defaults = {
        "path": "yarn.lock" if package_manager == "yarn" else "package-lock.json",
        "sha": f"sha-{package_manager}-lock",
    }
    defaults.update(kwargs)
    return LockfileEntity(package_manager=package_manager, content=content, **defaults)


__all__ = [
    # Fixtures (exported for documentation, actual fixtures are auto-discovered)
    "mock_adapter",
    "mock_adapter_with_repos",
    "no_prompt_options",
    "sample_manifest",
    "sample_repository",
    "sample_lockfile",
    "sample_pull_request",
    # Helper functions
    "create_mock_repository",
    "create_mock_relationship",
    "create_mock_lockfile",
]
