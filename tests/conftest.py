"""Pytest configuration and shared fixtures."""

import sys
from pathlib import Path

import pytest

# Ensure src directory is in Python path for all tests
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from todo_shell.manager import TodoManager
from todo_shell.storage import InMemoryStorage, JSONFileStorage, YAMLFileStorage


@pytest.fixture
def json_storage(tmp_path):
    return JSONFileStorage(tmp_path / "todos.json")


@pytest.fixture
def yaml_storage(tmp_path):
    return YAMLFileStorage(tmp_path / "todos.yaml")


@pytest.fixture(params=["memory", "json", "yaml"])
def storage(request, tmp_path):
    """Each storage backend in turn."""
    if request.param == "memory":
        return InMemoryStorage()
    if request.param == "json":
        return JSONFileStorage(tmp_path / "todos.json")
    return YAMLFileStorage(tmp_path / "todos.yaml")


@pytest.fixture
def manager(storage):
    return TodoManager(storage)
