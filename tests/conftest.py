import importlib
import json
from pathlib import Path
from typing import Any

import pytest


def import_required(module_name: str):
    """Import a project module with a clearer failure message than ModuleNotFoundError."""
    try:
        return importlib.import_module(module_name)
    except ModuleNotFoundError as e:
        pytest.fail(f"Required module '{module_name}.py' could not be imported: {e}")


@pytest.fixture
def maze_module():
    return import_required("maze")


@pytest.fixture
def db_module():
    return import_required("db")


@pytest.fixture(params=["json", "sqlite"])
def repo(request, tmp_path, db_module):
    if request.param == "sqlite":
        store = db_module.SqliteMazeRepository(tmp_path / "mazes.db")
        yield store
        store.close()
    else:
        yield db_module.JsonMazeRepository(tmp_path / "mazes")


class ScriptedSource:
    """Random source that replays fixed values, then repeats the last one."""

    def __init__(self, *values: float):
        self.values = list(values) or [0.0]
        self.calls = 0

    def __call__(self) -> float:
        value = self.values[min(self.calls, len(self.values) - 1)]
        self.calls += 1
        return value


@pytest.fixture
def scripted():
    return ScriptedSource


def read_json(path: Path) -> dict[str, Any]:
    return json.loads(path.read_text(encoding="utf-8"))
