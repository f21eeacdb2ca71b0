"""Winding dead-end branches carved off the existing passages.

Every cell a branch adds passes ``admissible_extension``: its only open
neighbour may be the cell it grows from. Without that check a spur can brush
an unrelated corridor, silently merging into it and opening a 2-wide passage
or an unrecorded loop. The only deliberate merges are the reconnects, and
their connectors are returned so callers can account for the extra loops.
"""
from __future__ import annotations

import random
from typing import List, NamedTuple, Optional, Sequence, Tuple

from .config import MazeConfig
from .grid import DIRECTIONS, Grid, Position, admissible_extension


class BranchReport(NamedTuple):
    branches: int
    cells: int
    side_branches: int
    reconnects: List[Position]


def branch_target(grid: Grid, density: float) -> int:
    return int(grid.rows * grid.cols * density)


def can_start_branch(grid: Grid, origin: Position, direction: Position, min_length: int) -> bool:
    """Straight-line pre-check before committing to a branch from ``origin``.

    The first cell must be carvable under the exclusion rule and the next
    ``min_length`` cells along ``direction`` must all be interior WALL.
    """
    dr, dc = direction
    first = (origin[0] + dr, origin[1] + dc)
    if not admissible_extension(grid, first, origin):
        return False
    r, c = first
    for _ in range(min_length):
        r, c = r + dr, c + dc
        if not grid.in_interior(r, c) or not grid.is_wall(r, c):
            return False
    return True


def carve_branch(
    grid: Grid, origin: Position, direction: Position, config: MazeConfig, rng=None
) -> Tuple[int, int, Optional[Position]]:
    """Carve one winding branch; returns (cells carved, side branches, reconnect connector or None)."""
    if rng is None:
        rng = random
    heading = direction
    cur = (origin[0] + heading[0], origin[1] + heading[1])
    grid.carve(*cur)
    cells = 1
    sides = 0
    length = rng.randrange(config.min_branch_length, config.max_branch_length)
    for step in range(length):
        options = [d for d in DIRECTIONS if admissible_extension(grid, (cur[0] + d[0], cur[1] + d[1]), cur)]
        if not options:
            break
        if heading in options and rng.random() < config.heading_bias:
            nxt = heading
        else:
            nxt = rng.choice(options)
        heading = nxt
        cur = (cur[0] + heading[0], cur[1] + heading[1])
        grid.carve(*cur)
        cells += 1
        if step > 2 and rng.random() < config.side_branch_chance:
            added = add_side_branch(grid, cur, rng)
            if added:
                sides += 1
                cells += added
    connector = None
    if rng.random() < config.reconnect_chance:
        connector = reconnect_to_nearby_path(grid, cur, rng)
    return cells, sides, connector


def add_side_branch(grid: Grid, at: Position, rng=None) -> int:
    """Grow a 1-3 cell straight spur from ``at``; returns cells carved."""
    if rng is None:
        rng = random
    dirs = list(DIRECTIONS)
    rng.shuffle(dirs)
    for dr, dc in dirs:
        first = (at[0] + dr, at[1] + dc)
        if not admissible_extension(grid, first, at):
            continue
        grid.carve(*first)
        carved = 1
        cur = first
        for _ in range(rng.randrange(3)):
            nxt = (cur[0] + dr, cur[1] + dc)
            if not admissible_extension(grid, nxt, cur):
                break
            grid.carve(*nxt)
            carved += 1
            cur = nxt
        return carved
    return 0


def reconnect_to_nearby_path(grid: Grid, end: Position, rng=None) -> Optional[Position]:
    """Open the wall between ``end`` and a PATH cell two steps away.

    The connector's two lateral neighbours must be WALL so the new opening
    closes a loop without widening any corridor. Returns the connector.
    """
    if rng is None:
        rng = random
    dirs = list(DIRECTIONS)
    rng.shuffle(dirs)
    for dr, dc in dirs:
        wr, wc = end[0] + dr, end[1] + dc
        if not grid.in_interior(wr, wc) or not grid.is_wall(wr, wc):
            continue
        if not grid.is_path(wr + dr, wc + dc):
            continue
        if grid.is_path(wr + dc, wc + dr) or grid.is_path(wr - dc, wc - dr):
            continue
        grid.carve(wr, wc)
        return wr, wc
    return None


def inject_branches(grid: Grid, path_cells: Sequence[Position], config: MazeConfig, rng=None) -> BranchReport:
    if rng is None:
        rng = random
    if not path_cells:
        return BranchReport(0, 0, 0, [])
    branches = cells = sides = 0
    reconnects: List[Position] = []
    for _ in range(branch_target(grid, config.branch_density)):
        origin = rng.choice(path_cells)
        dirs = list(DIRECTIONS)
        rng.shuffle(dirs)
        for direction in dirs:
            if not can_start_branch(grid, origin, direction, config.min_branch_length):
                continue
            carved, added_sides, connector = carve_branch(grid, origin, direction, config, rng)
            branches += 1
            cells += carved
            sides += added_sides
            if connector is not None:
                reconnects.append(connector)
            break
    return BranchReport(branches, cells, sides, reconnects)
