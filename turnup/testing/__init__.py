"""turnup testing utilities.

Provides a mock platform adapter and fixtures for testing code that drives
turnup without a hosting platform.
"""

from turnup.testing.fixtures import (
    create_mock_lockfile,
    create_mock_relationship,
    create_mock_repository,
)
from turnup.testing.mock import MockCall, MockPlatformAdapter, MockResponse

__all__ = [
    # Mock adapter
    "MockPlatformAdapter",
    "MockCall",
    "MockResponse",
    # Helper functions
    "create_mock_repository",
    "create_mock_relationship",
    "create_mock_lockfile",
]
