"""Exception types raised by the todo shell."""

from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .todo import Todo


class TodoError(Exception):
    """Base class for all todo shell errors."""


class InvalidIndexError(TodoError):
    """A position outside ``1..size`` was given to a manager operation."""

    def __init__(self, position: int, size: int):
        self.position = position
        self.size = size
        super().__init__(f"Invalid todo index {position} (expected 1-{size})")


class PersistenceError(TodoError):
    """The storage backend reported a failed save."""

    def __init__(self, message: str, todo: Optional["Todo"] = None):
        self.todo = todo
        super().__init__(message)


class CommandError(TodoError):
    """User input could not be turned into a command."""


class ConfigError(TodoError):
    """Invalid configuration value."""
