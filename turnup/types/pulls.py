"""Pull request-related data models."""

from dataclasses import dataclass


@dataclass(frozen=True)
class PullRequest:
    """Pull request opened for an updated repository."""

    number: int
    url: str
    title: str
    head: str  # branch containing the update
    base: str  # default branch it targets
    state: str  # "open", "closed"
