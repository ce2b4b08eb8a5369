"""GitHub REST resource clients."""

from turnup.clients.contents import ContentsClient
from turnup.clients.pulls import PullsClient
from turnup.clients.refs import RefsClient
from turnup.clients.repos import ReposClient

__all__ = [
    "ReposClient",
    "ContentsClient",
    "RefsClient",
    "PullsClient",
]
