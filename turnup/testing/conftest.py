"""
Pytest plugin for turnup testing fixtures.

This module re-exports all fixtures from fixtures.py so they can be
automatically discovered by pytest when this package is installed.

To use these fixtures in your tests, add this to your conftest.py:

    pytest_plugins = ["turnup.testing.conftest"]

Or import the fixtures directly:

    from turnup.testing.fixtures import mock_adapter, sample_repository
"""

# Re-export all fixtures for pytest auto-discovery
from turnup.testing.fixtures import (
    mock_adapter,
    mock_adapter_with_repos,
    no_prompt_options,
    sample_lockfile,
    sample_manifest,
    sample_pull_request,
    sample_repository,
)

__all__ = [
    "mock_adapter",
    "mock_adapter_with_repos",
    "no_prompt_options",
    "sample_manifest",
    "sample_repository",
    "sample_lockfile",
    "sample_pull_request",
]
