"""
Interactive repository selection.

Shows the candidate repositories in a table and asks the operator which of
them to update.
"""

from dataclasses import dataclass

from rich.console import Console
from rich.prompt import Prompt
from rich.table import Table

from turnup.types.repos import RepositoryEntity

PROMPT = "Which repositories would you like to update?"


@dataclass(frozen=True)
class Choice:
    """A labelled candidate shown to the operator."""

    name: str
    value: RepositoryEntity


def parse_selection(answer: str, count: int) -> list[int] | None:
    """
    Parse a selection answer into zero-based indices.

    Accepts "all", "none" or an empty answer, and comma separated 1-based
    indices and ranges such as "1,3-5".

    Returns:
        Sorted unique indices, or None if the answer is invalid
    """
    text = answer.strip().lower()
    if text in ("", "none", "n"):
        return []
    if text in ("all", "a", "*"):
        return list(range(count))

    indices: set[int] = set()
    for part in text.split(","):
        part = part.strip()
        if not part:
            continue
        start_text, sep, end_text = part.partition("-")
        try:
            start = int(start_text)
            end = int(end_text) if sep else start
        except ValueError:
            return None
        if start < 1 or end > count or start > end:
            return None
        indices.update(range(start - 1, end))

    return sorted(indices)


class InteractiveSelector:
    """
    Checklist-style selector backed by rich.

    Example:
        ```python
        selector = InteractiveSelector()
        chosen = selector.select([Choice(name=repo.name, value=repo) for repo in repos])
        ```
    """

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def select(self, choices: list[Choice]) -> list[RepositoryEntity]:
        """
        Ask the operator to pick from ``choices``.

        Blocks until a valid answer is given.

        Returns:
            The chosen repositories, in the order they were listed
        """
        if not choices:
            return []

        self.console.print(self._render(choices))

        while True:
            answer = Prompt.ask(
                f"[bold]{PROMPT}[/bold] [dim](e.g. 1,3-4, all, none)[/dim]",
                console=self.console,
            )
            indices = parse_selection(answer, len(choices))
            if indices is not None:
                return [choices[i].value for i in indices]
            self.console.print(f"[red]Invalid selection:[/red] {answer!r}")

    def _render(self, choices: list[Choice]) -> Table:
        table = Table(title=f"{len(choices)} candidate(s)", show_header=True, header_style="bold")
        table.add_column("#", justify="right", style="cyan")
        table.add_column("Repository")
        table.add_column("Details")

        for index, choice in enumerate(choices, start=1):
            table.add_row(str(index), choice.value.full_name, choice.name)

        return table
