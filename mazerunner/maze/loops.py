from __future__ import annotations

import random
from typing import List, Sequence

from .grid import CELL_STEPS, Grid, Position, is_cell_center


def loop_target(path_cells: Sequence[Position], density: float) -> int:
    return int(len(path_cells) * density)


def add_loops(grid: Grid, path_cells: Sequence[Position], density: float, rng=None) -> List[Position]:
    """Open extra connectors between already-carved cell centers.

    Each attempt opens at most one connector; attempts that find no eligible
    neighbour are simply spent. Only cell centers seed attempts: stepping two
    cells from a connector lands on an even/even pillar, and opening one of
    those would leave a 2x2 open block. Returns the connectors opened.
    """
    if rng is None:
        rng = random
    centers = [p for p in path_cells if is_cell_center(p)]
    if not centers:
        return []
    opened: List[Position] = []
    for _ in range(loop_target(path_cells, density)):
        r, c = rng.choice(centers)
        steps = list(CELL_STEPS)
        rng.shuffle(steps)
        for dr, dc in steps:
            nr, nc = r + dr, c + dc
            wr, wc = r + dr // 2, c + dc // 2
            if grid.in_interior(nr, nc) and grid.is_path(nr, nc) and grid.is_wall(wr, wc):
                grid.carve(wr, wc)
                opened.append((wr, wc))
                break
    return opened
