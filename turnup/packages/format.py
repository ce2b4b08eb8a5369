"""
package.json formatting.

Produces deterministic manifest text so that every updated repository gets
the same layout regardless of how its package.json was written:

1. Well-known top-level keys in conventional order
2. Remaining keys alphabetically after them
3. Dependency maps sorted by package name
4. Two-space indentation and a trailing newline
"""

import json
from typing import Any

# Conventional top-level key order for package.json
KEY_ORDER = [
    "$schema",
    "name",
    "version",
    "private",
    "description",
    "license",
    "author",
    "maintainers",
    "contributors",
    "homepage",
    "repository",
    "bugs",
    "keywords",
    "type",
    "main",
    "module",
    "browser",
    "types",
    "typings",
    "exports",
    "bin",
    "man",
    "files",
    "directories",
    "workspaces",
    "scripts",
    "config",
    "dependencies",
    "devDependencies",
    "peerDependencies",
    "peerDependenciesMeta",
    "optionalDependencies",
    "bundledDependencies",
    "bundleDependencies",
    "overrides",
    "resolutions",
    "engines",
    "os",
    "cpu",
    "publishConfig",
    "packageManager",
]

# Keys whose object values are sorted by key
SORTED_KEYS = {
    "dependencies",
    "devDependencies",
    "peerDependencies",
    "peerDependenciesMeta",
    "optionalDependencies",
    "overrides",
    "resolutions",
    "engines",
}

_KEY_RANK = {key: index for index, key in enumerate(KEY_ORDER)}


class ManifestFormatter:
    """
    Canonical package.json formatter.

    Args:
        indent: Indentation width (default: 2)
    """

    def __init__(self, indent: int = 2) -> None:
        self.indent = indent

    def format(self, manifest: dict[str, Any]) -> str:
        """
        Format a decoded manifest to package.json text.

        Args:
            manifest: Decoded package.json object

        Returns:
            Formatted JSON text ending in a newline

        Raises:
            TypeError: If ``manifest`` is not a dict
        """
        if not isinstance(manifest, dict):
            raise TypeError(f"Cannot format manifest of type: {type(manifest).__name__}")

        ordered = self._order(manifest)
        return json.dumps(ordered, indent=self.indent, ensure_ascii=False) + "\n"

    def _order(self, manifest: dict[str, Any]) -> dict[str, Any]:
        """Reorder top-level keys and sort dependency-like maps."""
        keys = sorted(
            manifest.keys(),
            key=lambda k: (0, _KEY_RANK[k], "") if k in _KEY_RANK else (1, 0, k),
        )

        ordered: dict[str, Any] = {}
        for key in keys:
            value = manifest[key]
            if key in SORTED_KEYS and isinstance(value, dict):
                value = {name: value[name] for name in sorted(value)}
            ordered[key] = value
        return ordered


# Module-level convenience function
_formatter = ManifestFormatter()


def format_package(manifest: dict[str, Any]) -> str:
    """
    Format a manifest with the default ManifestFormatter.

    Args:
        manifest: Decoded package.json object

    Returns:
        Formatted package.json text
    """
    return _formatter.format(manifest)
