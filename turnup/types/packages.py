"""Package specifier data models."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ParsedPackage:
    """A package name and the version it should be updated to."""

    name: str
    version: str

    def __str__(self) -> str:
        return f"{self.name}@{self.version}"
