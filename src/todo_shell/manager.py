"""Todo collection manager.

Every operation reloads the full collection from the storage backend,
applies its change in memory and writes the full collection back. The
manager keeps no todo state of its own between calls.
"""

import logging
from typing import Iterator, List, Tuple

from .exceptions import InvalidIndexError, PersistenceError
from .storage import StorageBackend
from .todo import Todo


logger = logging.getLogger(__name__)


class TodoListing:
    """Restartable view of ``(position, todo)`` pairs.

    Each iteration reads a fresh copy of the collection from storage.
    """

    def __init__(self, manager: "TodoManager"):
        self._manager = manager

    def __iter__(self) -> Iterator[Tuple[int, Todo]]:
        return enumerate(self._manager.load(), start=1)


class TodoManager:
    """CRUD operations over a todo collection held by a storage backend."""

    def __init__(self, storage: StorageBackend):
        self.storage = storage

    def load(self) -> List[Todo]:
        """Load the collection, treating "absent" as empty."""
        return self.storage.load() or []

    def save(self, todos: List[Todo]) -> bool:
        """Persist the full collection."""
        return self.storage.save(todos)

    def count(self) -> int:
        """Number of persisted todos."""
        return len(self.load())

    def list_todos(self) -> TodoListing:
        """Enumerate todos as ``(position, todo)`` with 1-based positions."""
        return TodoListing(self)

    def add_todo(self, title: str) -> Todo:
        """Append a new todo and persist the collection.

        Raises:
            PersistenceError: if the backend failed to save.
        """
        todos = self.load()
        todo = Todo.create(title)
        todos.append(todo)

        if not self.save(todos):
            raise PersistenceError("Failed to save new todo", todo)

        logger.debug(f"Added todo {todo.id} at position {len(todos)}")
        return todo

    def toggle_todo(self, position: int) -> Todo:
        """Flip completion of the todo at ``position`` and persist.

        Raises:
            InvalidIndexError: if ``position`` is outside ``1..len``.
            PersistenceError: if the backend failed to save.
        """
        todos = self.load()
        self._check_position(position, todos)

        todo = todos[position - 1]
        todo.toggle()

        if not self.save(todos):
            raise PersistenceError("Failed to save toggled todo", todo)

        logger.debug(f"Toggled todo {todo.id} to completed={todo.is_completed}")
        return todo

    def delete_todo(self, position: int) -> Todo:
        """Remove the todo at ``position`` and persist.

        Later todos move up one position.

        Raises:
            InvalidIndexError: if ``position`` is outside ``1..len``.
            PersistenceError: if the backend failed to save.
        """
        todos = self.load()
        self._check_position(position, todos)

        todo = todos.pop(position - 1)

        if not self.save(todos):
            raise PersistenceError("Failed to save after deleting todo", todo)

        logger.debug(f"Deleted todo {todo.id} from position {position}")
        return todo

    @staticmethod
    def _check_position(position: int, todos: List[Todo]) -> None:
        if not 1 <= position <= len(todos):
            raise InvalidIndexError(position, len(todos))
