"""Breadth-first reachability over non-WALL cells."""
from __future__ import annotations

from collections import deque
from typing import Dict, Optional, Set

from .grid import DIRECTIONS, Grid, Position


def bfs_distances(grid: Grid, start: Position) -> Dict[Position, int]:
    """Step distance from ``start`` to every reachable non-WALL cell."""
    if grid.is_wall(*start):
        return {}
    dist = {start: 0}
    q = deque([start])
    while q:
        cr, cc = q.popleft()
        for dr, dc in DIRECTIONS:
            nr, nc = cr + dr, cc + dc
            if (nr, nc) not in dist and grid.in_bounds(nr, nc) and not grid.is_wall(nr, nc):
                dist[(nr, nc)] = dist[(cr, cc)] + 1
                q.append((nr, nc))
    return dist


def reachable_from(grid: Grid, start: Position) -> Set[Position]:
    return set(bfs_distances(grid, start))


def is_reachable(grid: Grid, start: Position, goal: Optional[Position]) -> bool:
    """True iff ``goal`` is a non-WALL cell connected to ``start``."""
    if goal is None or grid.is_wall(*start) or grid.is_wall(*goal):
        return False
    seen = {start}
    q = deque([start])
    while q:
        cur = q.popleft()
        if cur == goal:
            return True
        for dr, dc in DIRECTIONS:
            nxt = (cur[0] + dr, cur[1] + dc)
            if nxt not in seen and grid.in_bounds(*nxt) and not grid.is_wall(*nxt):
                seen.add(nxt)
                q.append(nxt)
    return False
