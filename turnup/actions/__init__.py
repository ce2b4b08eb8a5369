"""Update actions: gathering, publishing and orchestration."""

from turnup.actions.gather import dedupe_repositories, fetch_repositories
from turnup.actions.publish import (
    PublishResult,
    commit_updates,
    update_repository,
    update_repository_all,
)
from turnup.actions.update import update, update_all

__all__ = [
    "update",
    "update_all",
    "fetch_repositories",
    "dedupe_repositories",
    "update_repository",
    "update_repository_all",
    "commit_updates",
    "PublishResult",
]
