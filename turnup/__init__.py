"""turnup - bulk dependency updates across repositories."""

from turnup.actions import PublishResult, update, update_all
from turnup.adapters import GitHubAdapter, PlatformAdapter, get_adapter
from turnup.client import GitHubClient
from turnup.config import UpdateOptions
from turnup.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConfigurationError,
    ConflictError,
    LockfileGenerationError,
    ManifestError,
    NoRepositoriesFoundError,
    NotFoundError,
    PackageParseError,
    RateLimitedError,
    ServerError,
    TurnupError,
    ValidationError,
)
from turnup.logging import Notifier, configure_logging, get_logger
from turnup.packages import format_package, parse_package
from turnup.transport import AsyncHTTPTransport, RetryConfig
from turnup.types import (
    DependencyRelationship,
    LockfileEntity,
    PackageDefinition,
    ParsedPackage,
    PullRequest,
    RepositoryEntity,
)

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Actions
    "update",
    "update_all",
    "PublishResult",
    "UpdateOptions",
    # Adapters
    "PlatformAdapter",
    "GitHubAdapter",
    "get_adapter",
    # Client
    "GitHubClient",
    # Types
    "RepositoryEntity",
    "PackageDefinition",
    "DependencyRelationship",
    "LockfileEntity",
    "ParsedPackage",
    "PullRequest",
    # Packages
    "parse_package",
    "format_package",
    # Exceptions
    "TurnupError",
    "AuthenticationError",
    "AuthorizationError",
    "NotFoundError",
    "ConflictError",
    "RateLimitedError",
    "ValidationError",
    "ServerError",
    "ConfigurationError",
    "NoRepositoriesFoundError",
    "PackageParseError",
    "ManifestError",
    "LockfileGenerationError",
    # Transport
    "AsyncHTTPTransport",
    "RetryConfig",
    # Logging
    "Notifier",
    "configure_logging",
    "get_logger",
]
