"""Randomized depth-first backtracking over the offset-2 cell-center lattice."""
from __future__ import annotations

import random
from typing import List, Tuple

from .grid import CELL_STEPS, Grid, Position


def carve_perfect_maze(grid: Grid, start: Position, rng=None) -> List[Position]:
    """Carve a spanning tree of passages rooted at ``start``.

    Uses an explicit stack of (center, remaining directions) frames instead of
    recursion so Extreme-sized grids never approach the interpreter's
    recursion limit. Returns every carved cell (centers and connectors) in
    carve order; the caller keeps it as the path-cell registry for the
    enrichment passes.
    """
    if rng is None:
        rng = random
    sr, sc = start
    if not grid.in_interior(sr, sc) or sr % 2 == 0 or sc % 2 == 0:
        raise ValueError(f"start {start} must be an interior cell center")
    carved: List[Position] = []

    def _frame(pos: Position) -> Tuple[Position, List[Position]]:
        dirs = list(CELL_STEPS)
        rng.shuffle(dirs)
        return pos, dirs

    grid.carve(sr, sc)
    carved.append(start)
    stack = [_frame(start)]
    while stack:
        (r, c), remaining = stack[-1]
        if not remaining:
            stack.pop()
            continue
        dr, dc = remaining.pop()
        nr, nc = r + dr, c + dc
        if not grid.in_interior(nr, nc) or not grid.is_wall(nr, nc):
            continue
        wr, wc = r + dr // 2, c + dc // 2
        grid.carve(wr, wc)
        grid.carve(nr, nc)
        carved.append((wr, wc))
        carved.append((nr, nc))
        stack.append(_frame((nr, nc)))
    return carved
