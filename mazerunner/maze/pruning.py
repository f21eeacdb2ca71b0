"""Dead-end cleanup pass.

Scans interior PATH cells until a full pass changes nothing. A cell is
prunable when exactly three of its neighbours are WALL, it is not protected
(start / goal), and its single open neighbour is not a junction. A junction
here is a PATH cell with at most two WALL neighbours; a dead end hanging off
one is a legitimate spur and is left alone.
"""
from __future__ import annotations

import random
from typing import Collection, List, NamedTuple, Optional

from .config import MazeConfig
from .grid import Grid, Position, admissible_extension


class PruneReport(NamedTuple):
    removed: int
    extended: int
    passes: int


def is_junction(grid: Grid, pos: Position) -> bool:
    return grid.is_path(*pos) and grid.wall_count(*pos) <= 2


def open_neighbor_of_dead_end(grid: Grid, pos: Position) -> Optional[Position]:
    r, c = pos
    if not grid.is_path(r, c) or grid.wall_count(r, c) != 3:
        return None
    opens = grid.open_neighbors(r, c)
    return opens[0] if len(opens) == 1 else None


def is_prunable(grid: Grid, pos: Position, protected: Collection[Position] = ()) -> bool:
    if pos in protected:
        return False
    neighbor = open_neighbor_of_dead_end(grid, pos)
    if neighbor is None:
        return False
    return not is_junction(grid, neighbor)


def find_prunable_dead_ends(grid: Grid, protected: Collection[Position] = ()) -> List[Position]:
    found = []
    for r in range(1, grid.rows - 1):
        for c in range(1, grid.cols - 1):
            if is_prunable(grid, (r, c), protected):
                found.append((r, c))
    return found


def extend_dead_end(grid: Grid, pos: Position, continue_chance: float, rng=None) -> int:
    """Push a dead end straight away from its open neighbour; returns cells added."""
    if rng is None:
        rng = random
    neighbor = open_neighbor_of_dead_end(grid, pos)
    if neighbor is None:
        return 0
    dr, dc = pos[0] - neighbor[0], pos[1] - neighbor[1]
    cur = pos
    added = 0
    while True:
        nxt = (cur[0] + dr, cur[1] + dc)
        if not admissible_extension(grid, nxt, cur):
            break
        grid.carve(*nxt)
        added += 1
        cur = nxt
        if rng.random() >= continue_chance:
            break
    return added


def prune_dead_ends(
    grid: Grid, config: MazeConfig, protected: Collection[Position] = (), rng=None
) -> PruneReport:
    """Remove (or occasionally extend) prunable dead ends until a fixed point.

    An extension that cannot add a single cell falls back to removal so no
    prunable cell survives the final pass; running this again on its own
    output is therefore a no-op.
    """
    if rng is None:
        rng = random
    protected = set(protected)
    removed = extended = passes = 0
    changed = True
    while changed:
        changed = False
        passes += 1
        for r in range(1, grid.rows - 1):
            for c in range(1, grid.cols - 1):
                if not is_prunable(grid, (r, c), protected):
                    continue
                if rng.random() < config.dead_end_extend_chance:
                    if extend_dead_end(grid, (r, c), config.extend_continue_chance, rng):
                        extended += 1
                        changed = True
                        continue
                grid.fill(r, c)
                removed += 1
                changed = True
    return PruneReport(removed, extended, passes)
