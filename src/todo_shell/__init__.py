"""todo-shell - an interactive command-line todo list."""

__version__ = "0.1.0"

from .todo import Todo
from .manager import TodoManager
from .storage import StorageBackend, InMemoryStorage, JSONFileStorage, YAMLFileStorage

__all__ = [
    "Todo",
    "TodoManager",
    "StorageBackend",
    "InMemoryStorage",
    "JSONFileStorage",
    "YAMLFileStorage",
    "__version__",
]
