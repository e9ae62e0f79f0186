#!/usr/bin/env python3
"""
Obsidian Tasks - query TaskNotes task notes from the command line

Scans a TaskNotes folder for markdown notes, reads each note's YAML
frontmatter and prints the matching tasks as JSON, or only how many there
are (handy for a waybar module).

Usage:
    obsidian-tasks --path ~/vault/TaskNotes overdue
    obsidian-tasks --path ~/vault/TaskNotes count --today
"""

import logging
import sys
from dataclasses import dataclass
from datetime import date, datetime
from pathlib import Path
from typing import List, NoReturn, Optional

import click
from rich.console import Console
from rich.markup import escape

from config_loader import ConfigLoader
from tasknotes import (
    Command,
    Task,
    TaskNotesError,
    check_root_access,
    collect_tasks,
    count_tasks,
    local_today,
    render_listing,
    resolve_count_command,
    select_tasks,
)

# stdout carries only task output
console = Console(stderr=True)
logger = logging.getLogger("obsidian_tasks")


@dataclass
class QuerySettings:
    tasks_path: Path
    include_archive: bool
    archive_folder: str
    as_of: date


def setup_logging(level: str = "WARNING") -> None:
    """Log to stderr; repeated calls replace the handler instead of stacking"""
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter('%(asctime)s - %(levelname)s - %(message)s'))
    handler.set_name("obsidian_tasks")

    root_logger = logging.getLogger()
    for existing in list(root_logger.handlers):
        if existing.get_name() == "obsidian_tasks":
            root_logger.removeHandler(existing)
    root_logger.addHandler(handler)
    root_logger.setLevel(level)


def fail(error: Exception) -> NoReturn:
    console.print(f"[red]Error: {escape(str(error))}[/red]")
    sys.exit(1)


def load_tasks(settings: QuerySettings) -> List[Task]:
    check_root_access(settings.tasks_path)
    return collect_tasks(
        settings.tasks_path,
        include_archive=settings.include_archive,
        archive_folder=settings.archive_folder,
    )


def print_listing(settings: QuerySettings, command: Command) -> None:
    try:
        tasks = load_tasks(settings)
        output = render_listing(select_tasks(tasks, command, settings.as_of))
    except TaskNotesError as e:
        fail(e)
    click.echo(output)


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.option("--path", "-p", "tasks_path", type=click.Path(path_type=Path),
              help="Path to your Obsidian vault's TaskNotes folder (or set vault.tasks_path / TASKNOTES_PATH)")
@click.option("--archive/--no-archive", "include_archive", default=None,
              help="Also scan the Archive folder next to the TaskNotes folder (default: on)")
@click.option("--as-of", type=click.DateTime(formats=["%Y-%m-%d"]),
              help="Treat this date (YYYY-MM-DD) as today")
@click.option("--config", "config_path", type=click.Path(exists=True, dir_okay=False, path_type=Path),
              help="Config file (default: ~/.config/obsidian-tasks/config.yaml)")
@click.option("--verbose", "-v", is_flag=True, help="Log skipped notes and scan details to stderr")
@click.pass_context
def cli(
    ctx: click.Context,
    tasks_path: Optional[Path],
    include_archive: Optional[bool],
    as_of: Optional[datetime],
    config_path: Optional[Path],
    verbose: bool,
):
    """Parse and filter tasks from Obsidian TaskNotes"""
    try:
        config = ConfigLoader(config_path=config_path)
        setup_logging("DEBUG" if verbose else config.get_log_level())

        if tasks_path is None:
            tasks_path = config.get_tasks_path()
        if include_archive is None:
            include_archive = config.include_archive()
        archive_folder = config.get_archive_folder()
    except TaskNotesError as e:
        fail(e)

    if tasks_path is None:
        raise click.UsageError("Missing option '--path' / '-p' (no vault.tasks_path configured)", ctx=ctx)

    ctx.obj = QuerySettings(
        tasks_path=tasks_path,
        include_archive=include_archive,
        archive_folder=archive_folder,
        as_of=as_of.date() if as_of else local_today(),
    )
    logger.debug(f"Querying {tasks_path} as of {ctx.obj.as_of} (archive: {include_archive})")


@cli.command("all")
@click.pass_obj
def all_tasks(settings: QuerySettings):
    """Show all tasks"""
    print_listing(settings, Command.ALL)


@cli.command()
@click.pass_obj
def today(settings: QuerySettings):
    """Show today's tasks (due today)"""
    print_listing(settings, Command.TODAY)


@cli.command()
@click.pass_obj
def overdue(settings: QuerySettings):
    """Show overdue tasks"""
    print_listing(settings, Command.OVERDUE)


@cli.command()
@click.pass_obj
def pending(settings: QuerySettings):
    """Show pending (not done) tasks"""
    print_listing(settings, Command.PENDING)


@cli.command("completed-today")
@click.pass_obj
def completed_today(settings: QuerySettings):
    """Show tasks completed today"""
    print_listing(settings, Command.COMPLETED_TODAY)


@cli.command()
@click.option("--today", is_flag=True, help="Count tasks due today")
@click.option("--overdue", is_flag=True, help="Count overdue tasks")
@click.option("--completed-today", is_flag=True, help="Count tasks completed today")
@click.pass_obj
def count(settings: QuerySettings, today: bool, overdue: bool, completed_today: bool):
    """Show only count (for waybar); pending tasks unless a flag is given"""
    command = resolve_count_command(today=today, overdue=overdue, completed_today=completed_today)
    try:
        total = count_tasks(load_tasks(settings), command, settings.as_of)
    except TaskNotesError as e:
        fail(e)
    click.echo(total)


if __name__ == "__main__":
    cli()
