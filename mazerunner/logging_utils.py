"""Structured event logging for maze generation and the API server.

Every record is one line: either ``key=value`` pairs or a JSON object, always
carrying ``level``, ``ts`` and ``logger``. Generation binds the maze's seed
and size once so every attempt event can be traced back to a reproducible
maze:

    from mazerunner.logging_utils import get_logger
    events = get_logger("mazerunner.maze").bind(seed=42, rows=15, cols=15)
    events.warn(event="maze_attempt_failed", attempt=1, goal=(3, 7))
    # level=warn ts=... event=maze_attempt_failed attempt=1 goal=3,7 seed=42 rows=15 cols=15 logger=mazerunner.maze

Grid positions render as ``row,col`` in key=value mode and as ``[row, col]``
in JSON mode. Other non-numeric values are str()'d with spaces replaced.
Reserved keys: level, ts.

Environment:
    MAZERUNNER_LOG_LEVEL  debug|info|warn|error (default info)
    MAZERUNNER_LOG_JSON   1/true/yes/on for JSON lines
"""

from __future__ import annotations

import json
import os
import sys
import time

LEVELS = {"debug": 10, "info": 20, "warn": 30, "error": 40}
CURRENT_LEVEL = LEVELS.get(os.getenv("MAZERUNNER_LOG_LEVEL", "info").lower(), 20)
JSON_MODE = os.getenv("MAZERUNNER_LOG_JSON", "0").lower() in ("1", "true", "yes", "on")


def set_level(level: str) -> None:
    global CURRENT_LEVEL
    if level not in LEVELS:
        raise ValueError(f"unknown log level {level!r}")
    CURRENT_LEVEL = LEVELS[level]


def _is_position(v) -> bool:
    return isinstance(v, tuple) and len(v) == 2 and all(isinstance(x, int) for x in v)


def _render(v) -> str:
    if isinstance(v, (int, float)):
        return str(v)
    if _is_position(v):
        return f"{v[0]},{v[1]}"
    return str(v).replace(" ", "_")


def _format(level: str, **fields) -> str:
    if JSON_MODE:
        rec = {k: v for k, v in fields.items() if v is not None}
        rec["level"] = level
        rec["ts"] = int(time.time())
        return json.dumps(rec, separators=(",", ":"), default=str)
    parts = [f"level={level}", f"ts={int(time.time())}"]
    parts.extend(f"{k}={_render(v)}" for k, v in fields.items() if v is not None)
    return " ".join(parts)


class _Logger:
    def __init__(self, name: str | None = None, context: dict | None = None):
        self.name = name or "mazerunner"
        self.context = dict(context or {})

    def bind(self, **fields) -> "_Logger":
        """Child logger that adds ``fields`` to every record it emits."""
        return _Logger(self.name, {**self.context, **fields})

    def _log(self, lvl: str, **fields):
        if LEVELS[lvl] < CURRENT_LEVEL:
            return
        # Per-call fields win over bound context
        for k, v in self.context.items():
            fields.setdefault(k, v)
        fields.setdefault("logger", self.name)
        print(_format(lvl, **fields), file=sys.stderr if lvl == "error" else sys.stdout)

    def debug(self, **fields):
        self._log("debug", **fields)

    def info(self, **fields):
        self._log("info", **fields)

    def warn(self, **fields):
        self._log("warn", **fields)

    def error(self, **fields):
        self._log("error", **fields)


_LOGGER_CACHE = {}


def get_logger(name: str) -> _Logger:
    if name not in _LOGGER_CACHE:
        _LOGGER_CACHE[name] = _Logger(name)
    return _LOGGER_CACHE[name]


log = get_logger("mazerunner")
