"""Command-line interface for the todo shell."""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.prompt import Prompt
from rich.table import Table
from rich.text import Text

from . import __version__
from .commands import (
    AddCommand,
    Command,
    CommandName,
    CommandResult,
    DeleteCommand,
    ExitCommand,
    ListCommand,
    ToggleCommand,
    command_names,
    dispatch,
    parse_command_name,
    parse_position,
    parse_title,
)
from .config import ConfigModel, load_config
from .exceptions import CommandError, ConfigError, InvalidIndexError, PersistenceError
from .manager import TodoManager
from .storage import BACKEND_NAMES, create_storage
from .todo import Todo


logger = logging.getLogger(__name__)

console = Console()

MAIN_PROMPT = f"What would you like to do? ({', '.join(command_names())})"


@dataclass
class ShellContext:
    """Objects shared by the shell and the one-shot subcommands."""
    config: ConfigModel
    manager: TodoManager


def setup_logging(level: str) -> None:
    """Send log records to stderr through rich."""
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def status_icon(todo: Todo, use_emoji: bool = True) -> str:
    if use_emoji:
        return "✅" if todo.is_completed else "❌"
    return "[x]" if todo.is_completed else "[ ]"


def render_todos(rows, use_emoji: bool = True) -> None:
    """Print the todo list, or the empty state."""
    if not rows:
        console.print("[yellow]No todos found.[/yellow]")
        return

    table = Table(title="📝 Your Todos" if use_emoji else "Your Todos", show_header=True, header_style="bold magenta")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Done", justify="center")
    table.add_column("Title")

    for position, todo in rows:
        table.add_row(
            str(position),
            Text(status_icon(todo, use_emoji)),
            Text(todo.title, style="dim" if todo.is_completed else ""),
        )

    console.print(table)


def render_result(result: CommandResult, config: ConfigModel) -> None:
    command = result.command
    if isinstance(command, ListCommand):
        render_todos(result.rows, config.use_emoji)
    elif isinstance(command, AddCommand):
        console.print("[green]Todo added![/green]")
    elif isinstance(command, ToggleCommand):
        console.print("[green]Todo completion status toggled![/green]")
    elif isinstance(command, DeleteCommand):
        console.print("[green]Todo deleted![/green]")
    elif isinstance(command, ExitCommand):
        console.print("Thanks for using todo-shell! See you next time!")


def run_command(command: Command, shell: ShellContext) -> Optional[CommandResult]:
    """Dispatch a command and report errors; returns None on failure."""
    try:
        result = dispatch(command, shell.manager)
    except InvalidIndexError as e:
        logger.debug(str(e))
        console.print("[red]Invalid todo index.[/red]")
        return None
    except PersistenceError as e:
        logger.debug(str(e))
        console.print("[red]Failed to save todos.[/red]")
        return None

    render_result(result, shell.config)
    return result


def read_command(name: CommandName) -> Command:
    """Prompt for the arguments a command needs and build it."""
    if name is CommandName.ADD:
        return AddCommand(parse_title(Prompt.ask("Enter todo title", console=console)))
    if name is CommandName.TOGGLE:
        return ToggleCommand(parse_position(Prompt.ask("Enter the number of the todo to toggle", console=console)))
    if name is CommandName.DELETE:
        return DeleteCommand(parse_position(Prompt.ask("Enter the number of the todo to delete", console=console)))
    if name is CommandName.LIST:
        return ListCommand()
    return ExitCommand()


def run_shell(shell: ShellContext) -> None:
    """Interactive read-eval-print loop."""
    console.print("[bold cyan]Welcome to todo-shell![/bold cyan]")

    while True:
        try:
            command = read_command(parse_command_name(Prompt.ask(MAIN_PROMPT, console=console)))
        except CommandError as e:
            console.print(Text(str(e), style="red"))
            continue
        except (EOFError, KeyboardInterrupt):
            console.print()
            command = ExitCommand()

        result = run_command(command, shell)
        if result is not None and result.should_exit:
            return


def _run_one(ctx: click.Context, command: Command) -> None:
    if run_command(command, ctx.obj) is None:
        ctx.exit(1)


@click.group(invoke_without_command=True)
@click.option("--config", "config_path", type=click.Path(dir_okay=False, path_type=Path), help="Path to config file")
@click.option("--data-dir", type=click.Path(file_okay=False, path_type=Path), help="Directory holding the todo file")
@click.option("--backend", type=click.Choice(BACKEND_NAMES), help="Storage backend")
@click.option("--verbose", "-v", is_flag=True, help="Verbose output")
@click.version_option(__version__, prog_name="todo-shell")
@click.pass_context
def main(ctx, config_path, data_dir, backend, verbose):
    """todo-shell - manage a todo list from the terminal.

    Without a command, starts the interactive shell.
    """
    config = load_config(config_path)
    if data_dir:
        config.data_dir = str(data_dir)
    if backend:
        config.backend = backend

    setup_logging("DEBUG" if verbose else config.log_level)

    try:
        storage = create_storage(config)
    except ConfigError as e:
        console.print(Text(f"Error: {e}", style="red"))
        ctx.exit(1)

    logger.debug(f"Using {type(storage).__name__} backend")
    ctx.obj = ShellContext(config=config, manager=TodoManager(storage))

    if ctx.invoked_subcommand is None:
        run_shell(ctx.obj)


@main.command()
@click.argument("title")
@click.pass_context
def add(ctx, title):
    """Add a new todo."""
    try:
        command = AddCommand(parse_title(title))
    except CommandError as e:
        console.print(Text(str(e), style="red"))
        ctx.exit(1)
    _run_one(ctx, command)


@main.command(name="list")
@click.pass_context
def list_cmd(ctx):
    """List todos."""
    _run_one(ctx, ListCommand())


@main.command(context_settings={"ignore_unknown_options": True})
@click.argument("number", type=int)
@click.pass_context
def toggle(ctx, number):
    """Toggle completion of todo NUMBER."""
    _run_one(ctx, ToggleCommand(number))


@main.command(context_settings={"ignore_unknown_options": True})
@click.argument("number", type=int)
@click.pass_context
def delete(ctx, number):
    """Delete todo NUMBER."""
    _run_one(ctx, DeleteCommand(number))


if __name__ == "__main__":
    main()
