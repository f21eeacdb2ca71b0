import os
import sys

import pytest

# Ensure repository root importable early
ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

from mazerunner import create_app  # noqa: E402


def pytest_configure(config):  # register custom marker
    config.addinivalue_line("markers", "performance: generation timing guardrails")


@pytest.fixture(autouse=True)
def _clean_maze_env(monkeypatch):
    """Keep developer shells from leaking MAZE_* overrides into generation."""
    for key in ("MAZE_MAX_ATTEMPTS", "MAZE_ENABLE_GENERATION_METRICS"):
        monkeypatch.delenv(key, raising=False)
    yield


@pytest.fixture()
def test_app():
    app = create_app()
    saved = dict(app.config)
    app.config.update(
        {
            "TESTING": True,
            "MAZE_DISABLE_CACHE": False,
            "MAZE_MAX_ATTEMPTS": 25,
            "MAZE_ENABLE_GENERATION_METRICS": True,
            "MAZE_DEFAULT_DIFFICULTY": "medium",
        }
    )
    from mazerunner.routes.maze_api import _maze_cache, _maze_cache_lock

    with _maze_cache_lock:
        _maze_cache.clear()
    yield app
    app.config.clear()
    app.config.update(saved)


@pytest.fixture()
def client(test_app):
    return test_app.test_client()
