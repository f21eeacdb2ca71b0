"""
project: Maze Runner
module: maze_api.py
License: MIT

Maze retrieval API routes.

Serves generated mazes as JSON for game clients: layout tiles, start and
goal, plus generation metrics for diagnostics.
"""

import hashlib
import random
import threading

from flask import Blueprint, current_app, jsonify, request

from mazerunner.maze import DIFFICULTIES, GenerationError, Maze, MazeConfig, MazeConfigError

bp_maze = Blueprint("maze", __name__)

SEED_MAX = 2**63 - 1

# Simple in-process cache (seed, difficulty) -> Maze. Lock guards concurrent request threads.
_maze_cache = {}
_maze_cache_lock = threading.Lock()
_MAZE_CACHE_MAX = 16


def _coerce_seed(raw):
    """Convert a provided seed (int or str) into a bounded non-negative int."""
    if raw is None:
        return random.randint(1, 1_000_000)
    if isinstance(raw, int):
        return raw % SEED_MAX
    s = str(raw).strip()
    if not s:
        return random.randint(1, 1_000_000)
    # ASCII digits only: int() rejects superscripts that isdigit() accepts
    if s.isascii() and s.isdecimal():
        return int(s) % SEED_MAX
    h = hashlib.sha256(s.encode("utf-8")).digest()
    return int.from_bytes(h[:8], "big") % SEED_MAX


def _build_config(difficulty: str) -> MazeConfig:
    cfg = current_app.config
    return MazeConfig.for_difficulty(
        difficulty,
        max_attempts=cfg.get("MAZE_MAX_ATTEMPTS", 25),
        enable_metrics=cfg.get("MAZE_ENABLE_GENERATION_METRICS", True),
    )


def get_cached_maze(seed: int, difficulty: str) -> Maze:
    if current_app.config.get("MAZE_DISABLE_CACHE"):
        return Maze(_build_config(difficulty), seed=seed)
    key = (seed, difficulty)
    with _maze_cache_lock:
        maze = _maze_cache.get(key)
        if maze is not None:
            return maze
    maze = Maze(_build_config(difficulty), seed=seed)
    with _maze_cache_lock:
        _maze_cache[key] = maze
        if len(_maze_cache) > _MAZE_CACHE_MAX:
            first_key = next(iter(_maze_cache.keys()))
            if first_key != key:
                _maze_cache.pop(first_key, None)
    return maze


def _maze_from_request() -> Maze:
    difficulty = (request.args.get("difficulty") or current_app.config.get("MAZE_DEFAULT_DIFFICULTY", "medium")).lower()
    seed = _coerce_seed(request.args.get("seed"))
    return get_cached_maze(seed, difficulty)


@bp_maze.errorhandler(MazeConfigError)
def _config_error(e):
    return jsonify({"error": str(e)}), 400


@bp_maze.errorhandler(GenerationError)
def _generation_error(e):
    current_app.logger.error("maze generation failed seed=%s attempts=%s", e.seed, e.attempts)
    return jsonify({"error": str(e), "seed": e.seed, "attempts": e.attempts}), 503


@bp_maze.route("/api/maze/difficulties")
def maze_difficulties():
    """Response: { 'difficulties': {name: [rows, cols]}, 'default': <name> }"""
    return jsonify(
        {
            "difficulties": {name: list(size) for name, size in DIFFICULTIES.items()},
            "default": current_app.config.get("MAZE_DEFAULT_DIFFICULTY", "medium"),
        }
    )


@bp_maze.route("/api/maze")
def maze_layout():
    """
    Return a generated maze.
    Query: difficulty=<easy|medium|hard|extreme>, seed=<int|str> (optional; random when omitted)
    Response: { seed, difficulty, rows, cols, start: [r, c], goal: [r, c], attempts, tiles: [str] }
    Tiles use W (wall), P (path), S (start), E (goal).
    """
    return jsonify(_maze_from_request().to_dict())


@bp_maze.route("/api/maze/metrics")
def maze_metrics():
    """Generation metrics for a maze; empty metrics object when collection is disabled."""
    maze = _maze_from_request()
    return jsonify(
        {
            "seed": maze.seed,
            "size": [maze.rows, maze.cols],
            "metrics": maze.metrics,
            "flags": {"enable_metrics": maze.config.enable_metrics},
        }
    )
