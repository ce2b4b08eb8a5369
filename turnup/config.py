"""Options controlling an update run."""

from dataclasses import dataclass, field


@dataclass
class UpdateOptions:
    """Configuration for ``update`` and ``update_all``."""

    repos: list[str] = field(default_factory=list)  # "owner/name" entries
    owner: str | None = None  # user or organization login
    no_lockfile: bool = False
    no_pull_request: bool = False
    skip_selection: bool = False  # --continue: update every candidate without prompting
    registry: str | None = None  # registry URL handed to the package manager

    def __post_init__(self) -> None:
        # Accept comma separated entries ("a/b,c/d") as well as repeated values
        names: list[str] = []
        for entry in self.repos:
            names.extend(part.strip() for part in entry.split(",") if part.strip())
        self.repos = names

        if self.owner is not None:
            self.owner = self.owner.strip() or None
