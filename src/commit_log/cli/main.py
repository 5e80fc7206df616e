"""Command line interface for the commit log."""

import logging
import os
from typing import List, Optional, Tuple

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table
from rich.text import Text

from commit_log.core.repository import CommitLog
from commit_log.exceptions import InvalidArgumentError
from commit_log.settings import (
    DEFAULT_SETTINGS,
    LOG_LEVEL_ENV_VAR,
    LOG_LEVELS,
    CommitLogSettings,
)

console = Console()
logger = logging.getLogger(__name__)


def setup_logging(*, is_verbose: bool, settings: CommitLogSettings) -> None:
    """Configure logging based on verbosity.

    Args:
        is_verbose: Whether to enable debug logging.
        settings: Settings providing the default level.
    """
    log_level = os.environ.get(LOG_LEVEL_ENV_VAR, settings.log_level).upper()
    if log_level not in LOG_LEVELS:
        log_level = settings.log_level
    if is_verbose:
        log_level = "DEBUG"

    logging.basicConfig(
        level=log_level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True, show_path=False)],
    )


def _settings(ctx: click.Context) -> CommitLogSettings:
    return ctx.obj.get("settings", DEFAULT_SETTINGS) if ctx.obj else DEFAULT_SETTINGS


def _fail(error: Exception) -> None:
    console.print(Text(f"Error: {error}", style="red"), soft_wrap=True)
    raise click.Abort() from error


def _commits_table(repo: CommitLog, limit: int) -> Table:
    settings = repo.settings
    table = Table(title=repo.name)
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Timestamp", style="green")
    table.add_column("Message")

    for index, commit in enumerate(repo.iter_commits()):
        if index == limit:
            break
        table.add_row(
            commit.id,
            commit.format_timestamp(settings.timestamp_format, settings.tzinfo),
            Text(commit.message),
        )
    return table


def _show(repo: CommitLog, limit: int, oneline: bool) -> None:
    console.print(Text(repo.describe(), style="bold"), soft_wrap=True)
    if repo.size == 0:
        return
    if oneline:
        console.print(Text(repo.get_history(limit)), end="", soft_wrap=True)
    else:
        console.print(_commits_table(repo, limit))


@click.group()
@click.version_option(package_name="commit-log")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    help="Path to a JSON settings file",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
@click.pass_context
def main(ctx: click.Context, config_path: Optional[str], verbose: bool):
    """Commit Log - an in-memory commit history playground."""
    settings = DEFAULT_SETTINGS
    if config_path:
        try:
            settings = CommitLogSettings.from_file(config_path)
        except InvalidArgumentError as e:
            _fail(e)

    setup_logging(is_verbose=verbose, settings=settings)
    ctx.ensure_object(dict)
    ctx.obj["settings"] = settings


@main.command()
@click.argument("messages", nargs=-1, required=True)
@click.option("--name", default="repo", show_default=True, help="Repository name")
@click.option(
    "--limit",
    default=10,
    show_default=True,
    type=click.IntRange(min=1),
    help="Number of commits to show",
)
@click.option("--oneline", is_flag=True, help="Show compact one-line format")
@click.option("--drop", "drop_ids", multiple=True, help="Commit id to drop (repeatable)")
@click.pass_context
def log(
    ctx: click.Context,
    messages: Tuple[str, ...],
    name: str,
    limit: int,
    oneline: bool,
    drop_ids: Tuple[str, ...],
):
    """Commit MESSAGES to a fresh repository and show its history."""
    try:
        repo = CommitLog(name, settings=_settings(ctx))
        for message in messages:
            repo.commit(message)
        for commit_id in drop_ids:
            if not repo.drop(commit_id):
                console.print(Text(f"No commit {commit_id} in {name}", style="yellow"))
        _show(repo, limit, oneline)
    except InvalidArgumentError as e:
        _fail(e)


@main.command()
@click.option("--left", "left_messages", multiple=True, help="Message committed to the left repository")
@click.option("--right", "right_messages", multiple=True, help="Message committed to the right repository")
@click.option("--left-name", default="left", show_default=True)
@click.option("--right-name", default="right", show_default=True)
@click.option(
    "--limit",
    default=10,
    show_default=True,
    type=click.IntRange(min=1),
    help="Number of commits to show",
)
@click.option("--oneline", is_flag=True, help="Show compact one-line format")
@click.pass_context
def sync(
    ctx: click.Context,
    left_messages: Tuple[str, ...],
    right_messages: Tuple[str, ...],
    left_name: str,
    right_name: str,
    limit: int,
    oneline: bool,
):
    """Synchronize the right repository into the left one."""
    settings = _settings(ctx)
    try:
        left = _build(left_name, left_messages, settings)
        right = _build(right_name, right_messages, settings)

        left.synchronize(right)

        _show(left, limit, oneline)
        console.print(Text(right.describe()), soft_wrap=True)
    except InvalidArgumentError as e:
        _fail(e)


def _build(name: str, messages: Tuple[str, ...], settings: CommitLogSettings) -> CommitLog:
    repo = CommitLog(name, settings=settings)
    ids: List[str] = [repo.commit(message) for message in messages]
    logger.info("Built %s with commits %s", name, ids)
    return repo


if __name__ == "__main__":
    main()
