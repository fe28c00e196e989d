"""Storage backends for the todo shell.

A backend persists the whole ordered todo collection at once and hands it
back on load. The manager never knows which backend it talks to.
"""

import json
import logging
import os
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, List, Optional

import yaml

from .config import ConfigModel
from .exceptions import ConfigError
from .todo import Todo


logger = logging.getLogger(__name__)


class StorageBackend(ABC):
    """Persistence strategy for the full todo collection."""

    @abstractmethod
    def save(self, todos: List[Todo]) -> bool:
        """Replace any persisted state with ``todos``.

        Returns:
            True if the collection was stored, False on any I/O or
            serialization failure.
        """

    @abstractmethod
    def load(self) -> Optional[List[Todo]]:
        """Return the persisted collection, or None if there is none."""


class InMemoryStorage(StorageBackend):
    """Process-local storage, used for tests and throwaway sessions."""

    def __init__(self, todos: Optional[List[Todo]] = None):
        self._todos: List[Todo] = _copy_todos(todos or [])

    def save(self, todos: List[Todo]) -> bool:
        self._todos = _copy_todos(todos)
        return True

    def load(self) -> Optional[List[Todo]]:
        if not self._todos:
            return None
        return _copy_todos(self._todos)


class FileStorage(StorageBackend):
    """Base class for backends that keep the collection in a single file.

    Subclasses provide :meth:`encode` and :meth:`decode`; this class takes
    care of atomic writes and of turning read failures into "absent".
    """

    def __init__(self, path: Path):
        self.path = Path(path)

    @abstractmethod
    def encode(self, records: List[dict]) -> str:
        """Serialize a list of todo records to text."""

    @abstractmethod
    def decode(self, content: str) -> Any:
        """Parse text back into a list of todo records."""

    def save(self, todos: List[Todo]) -> bool:
        try:
            content = self.encode([todo.to_dict() for todo in todos])
            _atomic_write(self.path, content)
        except Exception as e:
            logger.error(f"Error saving todos to {self.path}: {e}")
            return False

        logger.debug(f"Saved {len(todos)} todos to {self.path}")
        return True

    def load(self) -> Optional[List[Todo]]:
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                content = f.read()
        except FileNotFoundError:
            logger.debug(f"No todo file at {self.path}")
            return None
        except OSError as e:
            logger.warning(f"Error reading todos from {self.path}: {e}")
            return None

        try:
            records = self.decode(content)
            if not isinstance(records, list):
                raise TypeError(f"expected a list of todos, got {type(records).__name__}")

            return [Todo.from_dict(record) for record in records]

        except Exception as e:
            logger.warning(f"Error loading todos from {self.path}: {e}")
            return None


class JSONFileStorage(FileStorage):
    """Stores todos as a JSON array of ``{id, title, isCompleted}`` records."""

    def encode(self, records: List[dict]) -> str:
        return json.dumps(records, indent=2, ensure_ascii=False)

    def decode(self, content: str) -> Any:
        return json.loads(content)


class YAMLFileStorage(FileStorage):
    """Stores todos as a YAML sequence of records."""

    def encode(self, records: List[dict]) -> str:
        return yaml.safe_dump(records, default_flow_style=False, sort_keys=False, allow_unicode=True)

    def decode(self, content: str) -> Any:
        return yaml.safe_load(content)


FILE_BACKENDS = {
    "json": JSONFileStorage,
    "yaml": YAMLFileStorage,
}

BACKEND_NAMES = ["json", "yaml", "memory"]


def create_storage(config: ConfigModel) -> StorageBackend:
    """Build the storage backend named by ``config.backend``.

    Raises:
        ConfigError: if the backend name is unknown.
    """
    if config.backend == "memory":
        return InMemoryStorage()

    backend_cls = FILE_BACKENDS.get(config.backend)
    if backend_cls is None:
        raise ConfigError(
            f"Unknown storage backend '{config.backend}' "
            f"(choose from: {', '.join(BACKEND_NAMES)})"
        )

    return backend_cls(config.storage_path)


def _copy_todos(todos: List[Todo]) -> List[Todo]:
    return [Todo(id=t.id, title=t.title, is_completed=t.is_completed) for t in todos]


def _atomic_write(path: Path, content: str) -> None:
    """Write ``content`` to ``path`` so readers see the old or the new file, never a mix."""
    path.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(content)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_name, path)
    except BaseException:
        try:
            os.remove(tmp_name)
        except OSError:
            pass
        raise
