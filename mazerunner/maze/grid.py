"""Rectangular WALL/PATH cell storage with fail-safe bounds handling."""
from __future__ import annotations

from typing import Iterator, List, Tuple

from .tiles import PATH, WALL

Position = Tuple[int, int]

# Unit steps (up, right, down, left) and their offset-2 lattice counterparts
DIRECTIONS: Tuple[Position, ...] = ((-1, 0), (0, 1), (1, 0), (0, -1))
CELL_STEPS: Tuple[Position, ...] = ((-2, 0), (0, 2), (2, 0), (0, -2))


def is_cell_center(pos: Position) -> bool:
    return pos[0] % 2 == 1 and pos[1] % 2 == 1


class Grid:
    """Row-major ``cells[row][col]`` grid; every cell starts as WALL.

    Reads outside the grid resolve to WALL so neighbour scans along the border
    never need their own bounds checks. Writes are restricted to the interior,
    keeping the outer ring permanently WALL.
    """

    __slots__ = ("rows", "cols", "cells")

    def __init__(self, rows: int, cols: int):
        self.rows = rows
        self.cols = cols
        self.cells: List[List[str]] = [[WALL for _ in range(cols)] for _ in range(rows)]

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols

    def in_interior(self, row: int, col: int) -> bool:
        return 0 < row < self.rows - 1 and 0 < col < self.cols - 1

    def get(self, row: int, col: int) -> str:
        if not self.in_bounds(row, col):
            return WALL
        return self.cells[row][col]

    def is_wall(self, row: int, col: int) -> bool:
        return self.get(row, col) == WALL

    def is_path(self, row: int, col: int) -> bool:
        return self.get(row, col) == PATH

    def carve(self, row: int, col: int) -> None:
        if not self.in_interior(row, col):
            raise IndexError(f"cannot carve border or outside cell {(row, col)}")
        self.cells[row][col] = PATH

    def fill(self, row: int, col: int) -> None:
        if self.in_bounds(row, col):
            self.cells[row][col] = WALL

    def neighbors(self, row: int, col: int) -> Iterator[Position]:
        for dr, dc in DIRECTIONS:
            yield row + dr, col + dc

    def open_neighbors(self, row: int, col: int) -> List[Position]:
        return [(nr, nc) for nr, nc in self.neighbors(row, col) if self.is_path(nr, nc)]

    def wall_count(self, row: int, col: int) -> int:
        return sum(1 for nr, nc in self.neighbors(row, col) if self.is_wall(nr, nc))

    def path_cells(self) -> Iterator[Position]:
        for r in range(self.rows):
            for c in range(self.cols):
                if self.cells[r][c] == PATH:
                    yield r, c

    def count(self, tile: str) -> int:
        return sum(row.count(tile) for row in self.cells)

    def copy(self) -> "Grid":
        clone = Grid.__new__(Grid)
        clone.rows = self.rows
        clone.cols = self.cols
        clone.cells = [list(row) for row in self.cells]
        return clone

    def rows_as_strings(self) -> List[str]:
        return ["".join(row) for row in self.cells]

    @classmethod
    def from_strings(cls, lines: List[str]) -> "Grid":
        """Build a grid from 'W'/'P' rows (fixtures and diagnostics)."""
        grid = cls(len(lines), len(lines[0]) if lines else 0)
        for r, line in enumerate(lines):
            if len(line) != grid.cols:
                raise ValueError(f"row {r} has length {len(line)}, expected {grid.cols}")
            for c, ch in enumerate(line):
                if ch not in (WALL, PATH):
                    raise ValueError(f"unknown tile {ch!r} at {(r, c)}")
                grid.cells[r][c] = ch
        return grid


def admissible_extension(grid: Grid, target: Position, came_from: Position) -> bool:
    """True when ``target`` can be carved without touching any path other than ``came_from``.

    Shared exclusion rule for branches, side branches and dead-end extensions:
    the target must be an interior WALL whose other three neighbours are WALL.
    """
    tr, tc = target
    if not grid.in_interior(tr, tc) or not grid.is_wall(tr, tc):
        return False
    for nr, nc in grid.neighbors(tr, tc):
        if (nr, nc) != came_from and grid.is_path(nr, nc):
            return False
    return True
