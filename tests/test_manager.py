"""Tests for the todo collection manager."""

from unittest.mock import Mock

import pytest

from todo_shell.exceptions import InvalidIndexError, PersistenceError
from todo_shell.manager import TodoManager
from todo_shell.storage import InMemoryStorage, JSONFileStorage, StorageBackend, YAMLFileStorage
from todo_shell.todo import Todo


def titles(manager):
    return [todo.title for _, todo in manager.list_todos()]


def snapshot(manager):
    return [(position, todo.title, todo.is_completed) for position, todo in manager.list_todos()]


@pytest.fixture
def populated(manager):
    for title in ["one", "two", "three"]:
        manager.add_todo(title)
    return manager


class TestList:

    def test_empty_when_never_saved(self, manager):
        assert list(manager.list_todos()) == []
        assert manager.count() == 0

    def test_positions_are_one_based(self, populated):
        assert [position for position, _ in populated.list_todos()] == [1, 2, 3]
        assert titles(populated) == ["one", "two", "three"]

    def test_listing_is_restartable(self, populated):
        listing = populated.list_todos()

        assert list(listing) == list(listing)

    def test_listing_reflects_later_changes(self, populated):
        listing = populated.list_todos()
        populated.add_todo("four")

        assert len(list(listing)) == 4

    def test_corrupt_file_lists_nothing(self, json_storage):
        json_storage.path.write_text("[{\"oops\": true}]", encoding="utf-8")
        manager = TodoManager(json_storage)

        assert list(manager.list_todos()) == []

    def test_listing_does_not_save(self):
        storage = Mock(spec=StorageBackend)
        storage.load.return_value = [Todo.create("a")]

        list(TodoManager(storage).list_todos())

        storage.save.assert_not_called()


class TestAdd:

    def test_appends_at_end(self, populated):
        existing_ids = {todo.id for _, todo in populated.list_todos()}

        todo = populated.add_todo("four")

        rows = list(populated.list_todos())
        assert len(rows) == 4
        assert rows[-1] == (4, todo)
        assert todo.title == "four"
        assert todo.is_completed is False
        assert todo.id not in existing_ids

    def test_title_is_not_validated(self, manager):
        manager.add_todo("   ")

        assert titles(manager) == ["   "]

    def test_save_failure_raises(self):
        storage = Mock(spec=StorageBackend)
        storage.load.return_value = None
        storage.save.return_value = False

        with pytest.raises(PersistenceError) as exc_info:
            TodoManager(storage).add_todo("lost")

        assert exc_info.value.todo.title == "lost"


class TestToggle:

    def test_toggles_only_target(self, populated):
        todo = populated.toggle_todo(2)

        assert todo.title == "two"
        assert todo.is_completed is True
        assert snapshot(populated) == [(1, "one", False), (2, "two", True), (3, "three", False)]

    def test_toggle_twice_restores(self, populated):
        before = snapshot(populated)

        populated.toggle_todo(3)
        populated.toggle_todo(3)

        assert snapshot(populated) == before

    def test_keeps_id(self, populated):
        original = dict(populated.list_todos())[1]

        assert populated.toggle_todo(1).id == original.id

    def test_save_failure_raises(self):
        storage = Mock(spec=StorageBackend)
        storage.load.return_value = [Todo.create("a")]
        storage.save.return_value = False

        with pytest.raises(PersistenceError):
            TodoManager(storage).toggle_todo(1)


class TestDelete:

    def test_later_positions_shift_down(self, populated):
        removed = populated.delete_todo(2)

        assert removed.title == "two"
        assert snapshot(populated) == [(1, "one", False), (2, "three", False)]

    def test_delete_last(self, populated):
        populated.delete_todo(3)

        assert titles(populated) == ["one", "two"]

    def test_delete_only_todo(self, manager):
        manager.add_todo("only")
        manager.delete_todo(1)

        assert list(manager.list_todos()) == []

    def test_save_failure_raises(self):
        storage = Mock(spec=StorageBackend)
        storage.load.return_value = [Todo.create("a")]
        storage.save.return_value = False

        with pytest.raises(PersistenceError) as exc_info:
            TodoManager(storage).delete_todo(1)

        assert exc_info.value.todo.title == "a"


class TestInvalidIndex:

    @pytest.mark.parametrize("operation", ["toggle_todo", "delete_todo"])
    @pytest.mark.parametrize("position", [0, 4, -1, 100])
    def test_out_of_range(self, populated, operation, position):
        before = snapshot(populated)

        with pytest.raises(InvalidIndexError) as exc_info:
            getattr(populated, operation)(position)

        assert exc_info.value.position == position
        assert exc_info.value.size == 3
        assert snapshot(populated) == before

    @pytest.mark.parametrize("operation", ["toggle_todo", "delete_todo"])
    def test_empty_collection(self, manager, operation):
        with pytest.raises(InvalidIndexError):
            getattr(manager, operation)(1)

    @pytest.mark.parametrize("operation", ["toggle_todo", "delete_todo"])
    @pytest.mark.parametrize("position", [0, 3])
    def test_file_untouched(self, json_storage, operation, position):
        manager = TodoManager(json_storage)
        manager.add_todo("a")
        manager.add_todo("b")
        before = json_storage.path.read_bytes()
        mtime = json_storage.path.stat().st_mtime_ns

        with pytest.raises(InvalidIndexError):
            getattr(manager, operation)(position)

        assert json_storage.path.read_bytes() == before
        assert json_storage.path.stat().st_mtime_ns == mtime

    def test_no_save_attempted(self):
        storage = Mock(spec=StorageBackend)
        storage.load.return_value = [Todo.create("a")]

        with pytest.raises(InvalidIndexError):
            TodoManager(storage).delete_todo(2)

        storage.save.assert_not_called()


class TestPersistence:

    def test_state_survives_new_manager(self, json_storage):
        TodoManager(json_storage).add_todo("persisted")
        TodoManager(json_storage).toggle_todo(1)

        fresh = TodoManager(JSONFileStorage(json_storage.path))
        assert snapshot(fresh) == [(1, "persisted", True)]

    def test_backends_agree(self, tmp_path):
        managers = [
            TodoManager(InMemoryStorage()),
            TodoManager(JSONFileStorage(tmp_path / "todos.json")),
            TodoManager(YAMLFileStorage(tmp_path / "todos.yaml")),
        ]
        steps = [
            ("add_todo", "a"),
            ("add_todo", "b"),
            ("add_todo", "c"),
            ("toggle_todo", 2),
            ("delete_todo", 1),
            ("add_todo", "d"),
            ("toggle_todo", 3),
            ("delete_todo", 2),
            ("delete_todo", 2),
            ("delete_todo", 1),
        ]

        for name, arg in steps:
            states = []
            for manager in managers:
                getattr(manager, name)(arg)
                states.append(snapshot(manager))
            assert states[0] == states[1] == states[2], f"after {name}({arg!r})"
