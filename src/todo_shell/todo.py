"""Todo data model for the todo shell."""

import uuid
from dataclasses import dataclass, field
from typing import Any, Dict


def new_todo_id() -> str:
    """Return a fresh, globally unique todo id."""
    return str(uuid.uuid4())


@dataclass
class Todo:
    """A single todo item.

    ``id`` and ``title`` never change after creation; only the completion
    flag is mutated, through :meth:`toggle`.
    """

    title: str
    is_completed: bool = False
    id: str = field(default_factory=new_todo_id)

    @classmethod
    def create(cls, title: str) -> "Todo":
        """Create a new, not yet completed todo with a fresh id."""
        return cls(title=title)

    def toggle(self) -> None:
        """Flip the completion state."""
        self.is_completed = not self.is_completed

    @property
    def description(self) -> str:
        """Human-readable summary, derived from title and completion state."""
        return f"{self.title} - Completed: {str(self.is_completed).lower()}"

    def to_dict(self) -> Dict[str, Any]:
        """Convert the Todo to its persisted record."""
        return {
            "id": self.id,
            "title": self.title,
            "isCompleted": self.is_completed,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Todo":
        """Create a Todo from a persisted record.

        Raises:
            KeyError: if a field is missing.
            TypeError: if a field has the wrong type.
        """
        if not isinstance(data, dict):
            raise TypeError(f"Todo record must be a mapping, got {type(data).__name__}")

        todo_id = data["id"]
        title = data["title"]
        completed = data["isCompleted"]

        if not isinstance(todo_id, str) or not isinstance(title, str):
            raise TypeError("Todo 'id' and 'title' must be strings")
        if not isinstance(completed, bool):
            raise TypeError("Todo 'isCompleted' must be a boolean")

        return cls(id=todo_id, title=title, is_completed=completed)
