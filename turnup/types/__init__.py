"""turnup type definitions.

This module exports all data model types used by turnup.
"""

from turnup.types.packages import ParsedPackage
from turnup.types.pulls import PullRequest
from turnup.types.repos import (
    DEPENDENCY_SECTIONS,
    DependencyRelationship,
    DependencyType,
    FileContents,
    ListingOutcome,
    LockfileEntity,
    OwnerListing,
    PackageDefinition,
    RepositoryEntity,
)

__all__ = [
    # Repository types
    "RepositoryEntity",
    "PackageDefinition",
    "DependencyRelationship",
    "DependencyType",
    "DEPENDENCY_SECTIONS",
    "LockfileEntity",
    "ListingOutcome",
    "OwnerListing",
    "FileContents",
    # Pull request types
    "PullRequest",
    # Package types
    "ParsedPackage",
]
