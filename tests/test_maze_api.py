import hashlib

import pytest

from mazerunner.maze import DIFFICULTIES
from mazerunner.routes import maze_api
from mazerunner.routes.maze_api import SEED_MAX, _coerce_seed
from maze_test_utils import bfs_reachable, find_tile


def test_difficulties_listing(client):
    resp = client.get("/api/maze/difficulties")
    assert resp.status_code == 200
    data = resp.get_json()
    assert data["default"] == "medium"
    assert data["difficulties"] == {name: list(size) for name, size in DIFFICULTIES.items()}


def test_maze_payload_shape(client):
    resp = client.get("/api/maze?difficulty=easy&seed=42")
    assert resp.status_code == 200
    data = resp.get_json()
    assert data["seed"] == 42
    assert data["difficulty"] == "easy"
    assert (data["rows"], data["cols"]) == (11, 11)
    assert data["start"] == [1, 1]
    tiles = data["tiles"]
    assert len(tiles) == 11
    assert find_tile(tiles, "S") == (1, 1)
    goal = find_tile(tiles, "E")
    assert list(goal) == data["goal"]
    assert goal in bfs_reachable(tiles, (1, 1))


def test_same_seed_same_maze(client):
    a = client.get("/api/maze?difficulty=hard&seed=9").get_json()
    b = client.get("/api/maze?difficulty=HARD&seed=9").get_json()
    assert a == b


def test_default_difficulty_from_config(client, test_app):
    test_app.config["MAZE_DEFAULT_DIFFICULTY"] = "extreme"
    data = client.get("/api/maze?seed=1").get_json()
    assert (data["rows"], data["cols"]) == (31, 31)


def test_string_seed_is_hashed(client):
    data = client.get("/api/maze?difficulty=easy&seed=crimson-gate").get_json()
    assert data["seed"] == _coerce_seed("crimson-gate")
    assert 0 <= data["seed"] < SEED_MAX


def test_unicode_digit_seed_is_hashed(client):
    # Superscript two passes str.isdigit() but is not an int() literal
    resp = client.get("/api/maze?difficulty=easy&seed=%C2%B2")
    assert resp.status_code == 200
    assert resp.get_json()["seed"] == _coerce_seed("\u00b2")


def test_unknown_difficulty_is_400(client):
    resp = client.get("/api/maze?difficulty=nightmare")
    assert resp.status_code == 400
    assert "nightmare" in resp.get_json()["error"]


def test_generation_failure_is_503(client, test_app, monkeypatch):
    from mazerunner.maze import pipeline

    test_app.config["MAZE_MAX_ATTEMPTS"] = 2
    monkeypatch.setattr(pipeline, "is_reachable", lambda grid, start, goal: False)
    resp = client.get("/api/maze?difficulty=easy&seed=5")
    assert resp.status_code == 503
    body = resp.get_json()
    assert body["seed"] == 5
    assert body["attempts"] == 2


def test_metrics_endpoint(client):
    data = client.get("/api/maze/metrics?difficulty=medium&seed=3").get_json()
    assert data["seed"] == 3
    assert data["size"] == [15, 15]
    assert data["flags"] == {"enable_metrics": True}
    assert data["metrics"]["attempts"] >= 1
    assert "phase_ms" in data["metrics"]


def test_metrics_disabled(client, test_app):
    test_app.config["MAZE_ENABLE_GENERATION_METRICS"] = False
    data = client.get("/api/maze/metrics?difficulty=easy&seed=4").get_json()
    assert data["metrics"] == {}
    assert data["flags"] == {"enable_metrics": False}


def test_cache_reuses_instances(test_app):
    with test_app.app_context():
        first = maze_api.get_cached_maze(10, "easy")
        assert maze_api.get_cached_maze(10, "easy") is first
        test_app.config["MAZE_DISABLE_CACHE"] = True
        assert maze_api.get_cached_maze(10, "easy") is not first


def test_cache_is_bounded(test_app):
    with test_app.app_context():
        for seed in range(maze_api._MAZE_CACHE_MAX + 5):
            maze_api.get_cached_maze(seed, "easy")
    assert len(maze_api._maze_cache) == maze_api._MAZE_CACHE_MAX


@pytest.mark.parametrize(
    "raw, expected",
    [
        (17, 17),
        ("17", 17),
        (" 42 ", 42),
        (SEED_MAX + 3, 3),
        (str(SEED_MAX + 3), 3),
        ("007", 7),
    ],
)
def test_coerce_seed_numeric(raw, expected):
    assert _coerce_seed(raw) == expected


def test_coerce_seed_random_and_hashed():
    assert 1 <= _coerce_seed(None) <= 1_000_000
    assert 1 <= _coerce_seed("   ") <= 1_000_000
    assert _coerce_seed("abc") == _coerce_seed("abc")
    assert _coerce_seed("abc") != _coerce_seed("abd")


@pytest.mark.parametrize("raw", ["\u00b2", "\u0663", "12\u00b3", "\uff11\uff12"])
def test_coerce_seed_non_ascii_digits_are_hashed(raw):
    digest = hashlib.sha256(raw.encode("utf-8")).digest()
    assert _coerce_seed(raw) == int.from_bytes(digest[:8], "big") % SEED_MAX
