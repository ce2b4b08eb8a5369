"""turnup command line interface."""

import asyncio
import logging
import sys
from collections.abc import Awaitable, Callable
from typing import Any

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from turnup import __version__
from turnup.actions import PublishResult, update, update_all
from turnup.adapters import ADAPTERS, PlatformAdapter, get_adapter
from turnup.client import GitHubClient
from turnup.config import UpdateOptions
from turnup.exceptions import TurnupError
from turnup.logging import configure_logging

err_console = Console(stderr=True)

Action = Callable[[PlatformAdapter, UpdateOptions], Awaitable[list[PublishResult]]]


def _common_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Options shared by ``update`` and ``update-all``."""
    options = [
        click.option("--repo", "-r", "repos", multiple=True,
                     help="Repository as owner/name. Repeat or comma separate for several."),
        click.option("--owner", "-o", help="User or organization whose repositories to update."),
        click.option("--no-lockfile", is_flag=True, help="Do not regenerate the lockfile."),
        click.option("--no-pull-request", is_flag=True, help="Push the branch without opening a pull request."),
        click.option("--continue", "skip_selection", is_flag=True,
                     help="Update every candidate without asking."),
        click.option("--registry", metavar="URL", help="Registry the package manager resolves against."),
        click.option("--adapter", "adapter_key", type=click.Choice(sorted(ADAPTERS)), default="github",
                     show_default=True, help="Hosting platform."),
        click.option("--token", envvar=["GITHUB_TOKEN", "GH_TOKEN"], show_envvar=True,
                     help="Platform access token."),
        click.option("--api-url", envvar="GITHUB_API_URL", default=GitHubClient.DEFAULT_BASE_URL,
                     show_default=True, help="API base URL."),
        click.option("--verbose", "-v", count=True, help="-v for debug output, -vv to trace HTTP."),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def _configure_logging(verbose: int) -> None:
    handler = RichHandler(console=err_console, show_path=False, show_time=False)
    configure_logging(
        level=logging.DEBUG if verbose else logging.INFO,
        http_level=logging.DEBUG if verbose > 1 else logging.WARNING,
        handler=handler,
        format_string="%(message)s",
    )


async def _execute(action: Action, adapter: PlatformAdapter, options: UpdateOptions) -> list[PublishResult]:
    try:
        return await action(adapter, options)
    finally:
        close = getattr(adapter, "close", None)
        if close is not None:
            await close()


def _report(results: list[PublishResult]) -> None:
    for result in results:
        line = f"{result.repository.full_name}: {result.branch_name}"
        if result.pull_request is not None:
            line += f" -> {result.pull_request.url or '#' + str(result.pull_request.number)}"
        click.echo(line)


def _run(
    action: Action,
    *,
    repos: tuple[str, ...],
    owner: str | None,
    no_lockfile: bool,
    no_pull_request: bool,
    skip_selection: bool,
    registry: str | None,
    adapter_key: str,
    token: str | None,
    api_url: str,
    verbose: int,
) -> None:
    if not repos and not owner:
        raise click.UsageError("Pass at least one --repo or an --owner.")

    _configure_logging(verbose)

    options = UpdateOptions(
        repos=list(repos),
        owner=owner,
        no_lockfile=no_lockfile,
        no_pull_request=no_pull_request,
        skip_selection=skip_selection,
        registry=registry,
    )

    try:
        adapter = get_adapter(adapter_key, token=token or "", base_url=api_url)
        results = asyncio.run(_execute(action, adapter, options))
    except TurnupError as e:
        err_console.print(f"[red]Error:[/red] {escape(e.message)}")
        sys.exit(1)
    except KeyboardInterrupt:
        err_console.print("[yellow]Aborted.[/yellow]")
        sys.exit(130)
    except Exception as e:
        err_console.print(f"[red]Unexpected error:[/red] {escape(str(e))}")
        sys.exit(1)

    _report(results)


@click.group()
@click.version_option(version=__version__, prog_name="turnup")
def cli() -> None:
    """turnup - update a dependency across many repositories at once."""


@cli.command("update")
@click.argument("package")
@_common_options
def update_cmd(package: str, **kwargs: Any) -> None:
    """Update PACKAGE (name@version) wherever it is out of date."""

    async def action(adapter: PlatformAdapter, options: UpdateOptions) -> list[PublishResult]:
        return await update(package, adapter, options)

    _run(action, **kwargs)


@cli.command("update-all")
@_common_options
def update_all_cmd(**kwargs: Any) -> None:
    """Refresh every dependency within its declared range."""
    _run(update_all, **kwargs)


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
