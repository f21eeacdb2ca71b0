from __future__ import annotations

import random
from typing import Optional

from .connectivity import bfs_distances
from .grid import Grid, Position


def manhattan(a: Position, b: Position) -> int:
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


def place_goal_sampled(grid: Grid, start: Position, samples: int = 50, rng=None) -> Optional[Position]:
    """Best-of-N: sample interior cells, keep the open one farthest from ``start``.

    Returns None when every sample hit a wall; the pipeline treats that as a
    failed attempt and regenerates.
    """
    if rng is None:
        rng = random
    best: Optional[Position] = None
    best_distance = 0
    for _ in range(samples):
        r = rng.randrange(1, grid.rows - 1)
        c = rng.randrange(1, grid.cols - 1)
        if grid.is_wall(r, c):
            continue
        d = manhattan((r, c), start)
        if d > best_distance:
            best_distance = d
            best = (r, c)
    return best


def place_goal_farthest(grid: Grid, start: Position) -> Optional[Position]:
    """Exact variant: the reachable cell with the greatest step distance from ``start``.

    Ties break toward the larger Manhattan distance, then row-major order.
    """
    dist = bfs_distances(grid, start)
    dist.pop(start, None)
    if not dist:
        return None
    return max(sorted(dist), key=lambda p: (dist[p], manhattan(p, start)))


def place_goal(grid: Grid, start: Position, strategy: str = "sampled", samples: int = 50, rng=None) -> Optional[Position]:
    if strategy == "farthest":
        return place_goal_farthest(grid, start)
    return place_goal_sampled(grid, start, samples, rng)
