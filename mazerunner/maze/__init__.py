"""Public maze package interface."""

from .config import DIFFICULTIES, MazeConfig, MazeConfigError  # noqa: F401
from .grid import Grid  # noqa: F401
from .pipeline import START_POSITION, GenerationError, Maze  # noqa: F401
from .tiles import END, PATH, START, WALL  # noqa: F401

__all__ = [
    "Maze",
    "MazeConfig",
    "MazeConfigError",
    "GenerationError",
    "Grid",
    "DIFFICULTIES",
    "START_POSITION",
    "WALL",
    "PATH",
    "START",
    "END",
]
