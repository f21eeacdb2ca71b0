"""Maze generation pipeline.

Phases, in order, for each attempt:
    * carve     randomized depth-first spanning tree over the cell-center lattice
    * loops     extra connectors between carved centers
    * branches  winding dead-end spurs (plus occasional reconnect loops)
    * prune     dead-end cleanup to a fixed point
    * goal      goal placement far from the start
    * validate  BFS start -> goal

A failed validation throws the whole grid away and starts over with fresh
draws from the same RNG, up to ``config.max_attempts`` times, after which
``GenerationError`` is raised. A finished Maze never changes; queries are pure.

Public contract:
    Maze(config=None, *, difficulty=None, seed=None, rng=None)
    Attributes: rows, cols, start_position, goal_position, seed, config,
                attempts, metrics, loop_connectors, reconnect_connectors
    Queries: cell_type(r, c), is_wall(r, c), is_valid_move(r, c)

``seed`` reproduces the maze when the Maze drew its own RNG. With an injected
``rng`` it is whatever seed the caller passed (None if none was passed); the
injected stream is used as-is.
"""
from __future__ import annotations

import os
import random
import time
from typing import Any, Dict, List, Optional

from ..logging_utils import get_logger
from .branches import inject_branches
from .carver import carve_perfect_maze
from .config import DEFAULT_DIFFICULTY, MazeConfig, MazeConfigError
from .connectivity import is_reachable
from .goal import manhattan, place_goal
from .grid import Grid, Position
from .loops import add_loops
from .metrics import init_metrics
from .pruning import prune_dead_ends
from .tiles import END, PATH, START, WALL

log = get_logger("mazerunner.maze")

START_POSITION: Position = (1, 1)

_RENDER = {WALL: "#", PATH: " ", START: "S", END: "G"}


class GenerationError(RuntimeError):
    """Raised when no attempt produced a goal reachable from the start."""

    def __init__(self, message: str, *, attempts: int, seed: Optional[int]):
        super().__init__(message)
        self.attempts = attempts
        self.seed = seed


def _apply_env_overrides(config: MazeConfig) -> MazeConfig:
    raw_attempts = os.environ.get("MAZE_MAX_ATTEMPTS")
    if raw_attempts:
        try:
            config.max_attempts = int(raw_attempts)
        except ValueError:
            raise MazeConfigError(f"MAZE_MAX_ATTEMPTS must be an integer, got {raw_attempts!r}") from None
    if "MAZE_ENABLE_GENERATION_METRICS" in os.environ:
        val = os.environ.get("MAZE_ENABLE_GENERATION_METRICS", "").lower()
        config.enable_metrics = val not in {"0", "false", "no", ""}
    return config


class Maze:
    def __init__(
        self,
        config: MazeConfig | None = None,
        *,
        difficulty: str | None = None,
        seed: int | None = None,
        rng: random.Random | None = None,
    ):
        # Accept either a config object or a difficulty name
        if config is None:
            config = MazeConfig.for_difficulty(difficulty or DEFAULT_DIFFICULTY)
        elif difficulty is not None:
            raise MazeConfigError("pass either a config or a difficulty, not both")
        else:
            config = config.with_overrides()
        if seed is not None:
            config.seed = seed
        self.config = _apply_env_overrides(config).validate()
        if rng is not None:
            # Caller owns the random stream; only an explicit seed is reported
            self._rng = rng
        else:
            if self.config.seed is None:
                self.config.seed = random.randint(0, 2**31 - 1)
            # Owned RNG: concurrent generations never share random state
            self._rng = random.Random(self.config.seed)
        self.seed = self.config.seed
        self.start_position: Position = START_POSITION
        self.goal_position: Optional[Position] = None
        self.attempts = 0
        self.loop_connectors: List[Position] = []
        self.reconnect_connectors: List[Position] = []
        self.metrics: Dict[str, Any] = init_metrics() if self.config.enable_metrics else {}
        self._grid: Grid | None = None
        self._generate()

    @property
    def rows(self) -> int:
        return self.config.rows

    @property
    def cols(self) -> int:
        return self.config.cols

    @property
    def difficulty(self) -> Optional[str]:
        return self.config.difficulty

    # ------------------------------------------------------------------
    # Generation
    # ------------------------------------------------------------------
    def _generate(self) -> None:
        cfg = self.config
        rng = self._rng
        events = log.bind(seed=self.seed, rows=cfg.rows, cols=cfg.cols)
        started = time.perf_counter()
        phase_times: Dict[str, float] = {}

        def _phase(label, fn, *a, **k):
            ps = time.perf_counter()
            r = fn(*a, **k)
            phase_times[label] = phase_times.get(label, 0.0) + (time.perf_counter() - ps) * 1000
            return r

        for attempt in range(1, cfg.max_attempts + 1):
            self.attempts = attempt
            grid = Grid(cfg.rows, cfg.cols)
            path_cells = _phase("carve", carve_perfect_maze, grid, START_POSITION, rng)
            loops = _phase("loops", add_loops, grid, path_cells, cfg.loop_density, rng)
            branches = _phase("branches", inject_branches, grid, path_cells, cfg, rng)
            pruned = _phase("prune", prune_dead_ends, grid, cfg, (START_POSITION,), rng)
            goal = _phase("goal", place_goal, grid, START_POSITION, cfg.goal_strategy, cfg.goal_samples, rng)
            if _phase("validate", is_reachable, grid, START_POSITION, goal):
                self._grid = grid
                self.goal_position = goal
                self.loop_connectors = list(loops)
                self.reconnect_connectors = list(branches.reconnects)
                if cfg.enable_metrics:
                    self.metrics.update(
                        attempts=attempt,
                        centers_carved=sum(1 for r, c in path_cells if r % 2 == 1 and c % 2 == 1),
                        path_cells=grid.count(PATH),
                        loops_added=len(loops),
                        branches_carved=branches.branches,
                        branch_cells=branches.cells,
                        side_branches=branches.side_branches,
                        reconnects=len(branches.reconnects),
                        dead_ends_pruned=pruned.removed,
                        dead_ends_extended=pruned.extended,
                        prune_passes=pruned.passes,
                        goal_distance=manhattan(START_POSITION, goal),
                        runtime_ms=round((time.perf_counter() - started) * 1000, 3),
                        phase_ms={k: round(v, 3) for k, v in phase_times.items()},
                    )
                events.debug(event="maze_generated", attempts=attempt, goal=goal)
                return
            events.warn(event="maze_attempt_failed", attempt=attempt, goal=goal)
        events.error(event="maze_generation_failed", attempts=cfg.max_attempts)
        raise GenerationError(
            f"no solvable maze after {cfg.max_attempts} attempts (seed={self.seed})",
            attempts=cfg.max_attempts,
            seed=self.seed,
        )

    # ------------------------------------------------------------------
    # Queries (out-of-bounds resolves to WALL, never raises)
    # ------------------------------------------------------------------
    def cell_type(self, row: int, col: int) -> str:
        if (row, col) == self.start_position:
            return START
        if (row, col) == self.goal_position:
            return END
        return self._grid.get(row, col)

    def is_wall(self, row: int, col: int) -> bool:
        return self._grid.is_wall(row, col)

    def is_valid_move(self, row: int, col: int) -> bool:
        return self._grid.in_bounds(row, col) and not self._grid.is_wall(row, col)

    def grid_snapshot(self) -> Grid:
        """Detached copy of the WALL/PATH grid for analysis or rendering."""
        return self._grid.copy()

    def rows_as_strings(self) -> List[str]:
        return ["".join(self.cell_type(r, c) for c in range(self.cols)) for r in range(self.rows)]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "seed": self.seed,
            "difficulty": self.difficulty,
            "rows": self.rows,
            "cols": self.cols,
            "start": list(self.start_position),
            "goal": list(self.goal_position),
            "attempts": self.attempts,
            "tiles": self.rows_as_strings(),
        }

    def __str__(self) -> str:
        return "\n".join(
            "".join(_RENDER[self.cell_type(r, c)] for c in range(self.cols)) for r in range(self.rows)
        )

    def __repr__(self) -> str:
        return f"Maze(rows={self.rows}, cols={self.cols}, seed={self.seed}, goal={self.goal_position})"
