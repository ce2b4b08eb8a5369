"""Package specifier parsing.

Splits ``name@version`` (including scoped ``@scope/name@version``) into its
parts. Parsing is purely local: nothing here touches the network.
"""

import re

from turnup.exceptions import PackageParseError
from turnup.types.packages import ParsedPackage

# npm package names: lowercase, url-safe, optional @scope/ prefix
_NAME_RE = re.compile(r"^(?:@[a-z0-9][a-z0-9._~-]*/)?[a-z0-9][a-z0-9._~-]*$")

# One version position: a number or an x-range wildcard
_PART = r"(?:\d+|[xX*])"

# 1, 1.2, 1.2.3, 4.x, v1.2.3-rc.1+build
_PARTIAL = rf"v?{_PART}(?:\.{_PART}(?:\.{_PART}(?:-[0-9A-Za-z.-]+)?(?:\+[0-9A-Za-z.-]+)?)?)?"

# A partial with an optional operator (>=1.2.0, <2, ^1.2.3, ~1.2, *)
_COMPARATOR_RE = re.compile(rf"^(?:[<>]=?|=|~>?|\^)?{_PARTIAL}$")

# 1.2.3 - 2.3.4
_HYPHEN_RE = re.compile(rf"^{_PARTIAL}\s+-\s+{_PARTIAL}$")

# npm tolerates whitespace between an operator and its version (">= 1.2.0")
_OPERATOR_GAP_RE = re.compile(r"([<>]=?|=|~>?|\^)\s+")

# Dist tags such as "latest" or "next"
_TAG_RE = re.compile(r"^[A-Za-z][A-Za-z0-9._-]*$")

_MAX_NAME_LENGTH = 214


def is_version_range(version: str) -> bool:
    """
    Check ``version`` against npm's range grammar.

    Accepts ``||`` alternatives, each either a hyphen range or a
    whitespace separated set of comparators.
    """
    for alternative in version.split("||"):
        comparators = _OPERATOR_GAP_RE.sub(r"\1", alternative.strip())
        if not comparators:
            return False
        if _HYPHEN_RE.match(comparators):
            continue
        if not all(_COMPARATOR_RE.match(part) for part in comparators.split()):
            return False
    return True


def parse_package(spec: str) -> ParsedPackage:
    """
    Parse a package specifier.

    Args:
        spec: "name@version" or "@scope/name@version"; the version may be
            any npm range (">=4.17.0 <5", "4.x", "1.2.3 - 1.4.0") or a dist-tag

    Returns:
        ParsedPackage with name and version

    Raises:
        PackageParseError: If the name or version is missing or malformed
    """
    if not isinstance(spec, str) or not spec.strip():
        raise PackageParseError(str(spec), "empty package specifier")

    text = spec.strip()

    # Skip the scope marker when looking for the version separator
    separator = text.rfind("@")
    if separator <= 0:
        raise PackageParseError(spec, "expected <name>@<version>")

    name, version = text[:separator], text[separator + 1:]

    if len(name) > _MAX_NAME_LENGTH or not _NAME_RE.match(name):
        raise PackageParseError(spec, f"invalid package name {name!r}")

    if not version:
        raise PackageParseError(spec, "missing version")

    if not (is_version_range(version) or _TAG_RE.match(version)):
        raise PackageParseError(spec, f"invalid version {version!r}")

    return ParsedPackage(name=name, version=version)
