"""Package-level helpers: specifier parsing, filtering, formatting and lockfiles."""

from turnup.packages import lockfile
from turnup.packages.filter import (
    classify_dependency,
    repositories_by_dependency_upgrade,
    repositories_with_manifest,
)
from turnup.packages.format import ManifestFormatter, format_package
from turnup.packages.parse import parse_package

__all__ = [
    "lockfile",
    "parse_package",
    "classify_dependency",
    "repositories_by_dependency_upgrade",
    "repositories_with_manifest",
    "ManifestFormatter",
    "format_package",
]
