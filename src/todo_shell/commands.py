"""Shell commands and their dispatch onto the todo manager.

Parsing turns raw user strings into command objects; :func:`dispatch` maps
each command to a single manager call. Neither does any terminal I/O.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple, Union

from .exceptions import CommandError
from .manager import TodoManager
from .todo import Todo


class CommandName(Enum):
    """Words the interactive shell accepts."""
    ADD = "add"
    LIST = "list"
    TOGGLE = "toggle"
    DELETE = "delete"
    EXIT = "exit"


@dataclass(frozen=True)
class AddCommand:
    title: str


@dataclass(frozen=True)
class ListCommand:
    pass


@dataclass(frozen=True)
class ToggleCommand:
    position: int


@dataclass(frozen=True)
class DeleteCommand:
    position: int


@dataclass(frozen=True)
class ExitCommand:
    pass


Command = Union[AddCommand, ListCommand, ToggleCommand, DeleteCommand, ExitCommand]


@dataclass
class CommandResult:
    """Outcome of a dispatched command."""
    command: Command
    todo: Optional[Todo] = None  # added, toggled or deleted todo
    rows: List[Tuple[int, Todo]] = field(default_factory=list)
    should_exit: bool = False


def command_names() -> List[str]:
    return [name.value for name in CommandName]


def parse_command_name(text: str) -> CommandName:
    """Parse a command word, ignoring case and surrounding whitespace.

    Raises:
        CommandError: for an unknown command.
    """
    word = text.strip().lower()
    try:
        return CommandName(word)
    except ValueError:
        raise CommandError(f"Invalid command '{word}'. Try one of: {', '.join(command_names())}")


def parse_title(text: str) -> str:
    """Trim a todo title, rejecting empty input."""
    title = text.strip()
    if not title:
        raise CommandError("Title cannot be empty.")
    return title


def parse_position(text: str) -> int:
    """Parse a todo number. Range is checked by the manager, not here."""
    try:
        return int(text.strip())
    except ValueError:
        raise CommandError(f"Invalid input '{text.strip()}': expected a number.")


def dispatch(command: Command, manager: TodoManager) -> CommandResult:
    """Run ``command`` against ``manager``.

    Manager errors (invalid index, failed save) propagate to the caller.
    """
    if isinstance(command, AddCommand):
        return CommandResult(command, todo=manager.add_todo(command.title))
    if isinstance(command, ListCommand):
        return CommandResult(command, rows=list(manager.list_todos()))
    if isinstance(command, ToggleCommand):
        return CommandResult(command, todo=manager.toggle_todo(command.position))
    if isinstance(command, DeleteCommand):
        return CommandResult(command, todo=manager.delete_todo(command.position))
    if isinstance(command, ExitCommand):
        return CommandResult(command, should_exit=True)
    raise TypeError(f"Unsupported command: {command!r}")
