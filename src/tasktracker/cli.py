"""CLI interface for task-tracker."""

from __future__ import annotations

import shlex
from collections.abc import Sequence
from pathlib import Path
from typing import TextIO

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from tasktracker import __version__
from tasktracker.commands import (
    AddCommand,
    Command,
    CommandResult,
    DeleteCommand,
    ListCommand,
    MarkCommand,
    UpdateCommand,
    parse_command,
    run_batch,
)
from tasktracker.config import TrackerConfig
from tasktracker.errors import InvalidArgumentError, TaskTrackerError
from tasktracker.logging_setup import setup_logging
from tasktracker.models import STATUS_DONE, STATUS_IN_PROGRESS, STATUSES, Task

console = Console()
err_console = Console(stderr=True)

STATUS_STYLES = {
    "todo": "yellow",
    "in-progress": "cyan",
    "done": "green",
}


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="task-cli")
@click.option(
    "--file",
    "-f",
    "tasks_file",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Tasks file to use (default: tasks.json)",
)
@click.option("--verbose", "-v", is_flag=True, help="Log loads and saves to stderr")
@click.pass_context
def main(ctx: click.Context, tasks_file: Path | None, verbose: bool) -> None:
    """task-cli - Track tasks from the command line.

    Tasks live in tasks.json in the current directory.

    \b
    Examples:
      task-cli add "Buy groceries"
      task-cli mark-in-progress 1
      task-cli list done
    """
    try:
        config = TrackerConfig.load()
    except TaskTrackerError as e:
        err_console.print(f"[red]Error:[/red] {escape(str(e))}")
        ctx.exit(1)

    setup_logging("DEBUG" if verbose else config.log_level, console=err_console)

    ctx.ensure_object(dict)
    ctx.obj["config"] = config
    ctx.obj["path"] = tasks_file or config.tasks_path

    # If no subcommand, show help
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


def _execute(ctx: click.Context, commands: Sequence[Command]) -> None:
    """Run commands in one session and print their results."""
    config: TrackerConfig = ctx.obj["config"]

    try:
        results = run_batch(commands, path=ctx.obj["path"], atomic=config.atomic_writes)
    except TaskTrackerError as e:
        err_console.print(f"[red]Error:[/red] {escape(str(e))}")
        ctx.exit(1)

    for result in results:
        _print_result(result, config)


def _print_result(result: CommandResult, config: TrackerConfig) -> None:
    if result.tasks:
        console.print(_task_table(result.tasks, show_timestamps=config.show_timestamps))
    elif result.dirty:
        console.print(f"[green]{escape(result.message)}[/green]")
    else:
        console.print(f"[dim]{escape(result.message)}[/dim]")


def _task_table(tasks: Sequence[Task], show_timestamps: bool = True) -> Table:
    table = Table(show_header=True)
    table.add_column("ID", style="cyan", justify="right")
    table.add_column("Status", style="white")
    table.add_column("Description", style="white")
    if show_timestamps:
        table.add_column("Updated", style="dim")

    for task in tasks:
        style = STATUS_STYLES.get(task.status, "white")
        row = [
            str(task.id),
            f"[{style}]{escape(task.status)}[/{style}]",
            escape(task.description),
        ]
        if show_timestamps:
            row.append(task.updated_at.strftime("%Y-%m-%d %H:%M"))
        table.add_row(*row)

    return table


@main.command()
@click.argument("description")
@click.pass_context
def add(ctx: click.Context, description: str) -> None:
    """Add a new task.

    Example:

        task-cli add "Buy groceries"
    """
    _execute(ctx, [AddCommand(description=description)])


@main.command()
@click.argument("task_id", type=int)
@click.argument("description")
@click.pass_context
def update(ctx: click.Context, task_id: int, description: str) -> None:
    """Change a task's description."""
    _execute(ctx, [UpdateCommand(task_id=task_id, description=description)])


@main.command()
@click.argument("task_id", type=int)
@click.pass_context
def delete(ctx: click.Context, task_id: int) -> None:
    """Delete a task. Its ID is never reused."""
    _execute(ctx, [DeleteCommand(task_id=task_id)])


@main.command("mark-in-progress")
@click.argument("task_id", type=int)
@click.pass_context
def mark_in_progress(ctx: click.Context, task_id: int) -> None:
    """Mark a task as in progress."""
    _execute(ctx, [MarkCommand(task_id=task_id, status=STATUS_IN_PROGRESS)])


@main.command("mark-done")
@click.argument("task_id", type=int)
@click.pass_context
def mark_done(ctx: click.Context, task_id: int) -> None:
    """Mark a task as done."""
    _execute(ctx, [MarkCommand(task_id=task_id, status=STATUS_DONE)])


@main.command()
@click.argument("task_id", type=int)
@click.argument("status", type=click.Choice(STATUSES))
@click.pass_context
def mark(ctx: click.Context, task_id: int, status: str) -> None:
    """Set a task to any status, including back to todo."""
    _execute(ctx, [MarkCommand(task_id=task_id, status=status)])


@main.command("list")
@click.argument("status_filter", required=False, default="")
@click.pass_context
def list_command(ctx: click.Context, status_filter: str) -> None:
    """List tasks, optionally only those with STATUS_FILTER.

    \b
    Examples:
      task-cli list
      task-cli list todo
      task-cli list in-progress
      task-cli list done
    """
    _execute(ctx, [ListCommand(status_filter=status_filter or None)])


@main.command()
@click.argument("script", type=click.File("r"), default="-")
@click.pass_context
def batch(ctx: click.Context, script: TextIO) -> None:
    """Run several commands with one load and one save.

    Reads one command per line from SCRIPT (or stdin), written the way you
    would type it after task-cli. Blank lines and # comments are skipped.
    If any command fails, nothing is saved.

    \b
    Example:
      printf 'add "Write docs"\\nmark-done 1\\n' | task-cli batch
    """
    try:
        commands = _parse_script(script)
    except InvalidArgumentError as e:
        err_console.print(f"[red]Error:[/red] {escape(str(e))}")
        ctx.exit(1)

    if not commands:
        console.print("[dim]No commands to run.[/dim]")
        return

    _execute(ctx, commands)


def _parse_script(script: TextIO) -> list[Command]:
    commands: list[Command] = []
    for lineno, line in enumerate(script, 1):
        try:
            args = shlex.split(line, comments=True)
        except ValueError as e:
            raise InvalidArgumentError(f"Line {lineno}: {e}") from e
        if not args:
            continue
        try:
            commands.append(parse_command(args))
        except InvalidArgumentError as e:
            raise InvalidArgumentError(f"Line {lineno}: {e}") from e
    return commands
