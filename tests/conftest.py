import pytest
from github_fakes import FakeGitHub

pytest_plugins = ["turnup.testing.conftest"]


@pytest.fixture
def fake_github() -> FakeGitHub:
    """Provide an empty FakeGitHub; unrouted requests answer 404."""
    return FakeGitHub()
