"""Structural diagnostics for generated mazes (tests and scripts/diagnose_seeds.py)."""
from __future__ import annotations

from typing import Any, Dict, List

from .connectivity import is_reachable, reachable_from
from .grid import Grid, Position
from .pruning import find_prunable_dead_ends


def border_breaches(grid: Grid) -> List[Position]:
    out = []
    for r in range(grid.rows):
        for c in range(grid.cols):
            if (r in (0, grid.rows - 1) or c in (0, grid.cols - 1)) and not grid.is_wall(r, c):
                out.append((r, c))
    return out


def open_blocks(grid: Grid) -> List[Position]:
    """Top-left corners of every 2x2 window with no WALL (a 2-wide corridor)."""
    out = []
    for r in range(grid.rows - 1):
        for c in range(grid.cols - 1):
            if all(grid.is_path(r + dr, c + dc) for dr, dc in ((0, 0), (0, 1), (1, 0), (1, 1))):
                out.append((r, c))
    return out


def analyze(maze) -> Dict[str, Any]:
    grid = maze.grid_snapshot()
    reachable = reachable_from(grid, maze.start_position)
    return {
        "seed": maze.seed,
        "size": [maze.rows, maze.cols],
        "goal": list(maze.goal_position) if maze.goal_position else None,
        "goal_reachable": is_reachable(grid, maze.start_position, maze.goal_position),
        "border_breaches": border_breaches(grid),
        "open_blocks": open_blocks(grid),
        "unreachable_cells": [p for p in grid.path_cells() if p not in reachable],
        "prunable_dead_ends": find_prunable_dead_ends(grid, (maze.start_position,)),
    }
