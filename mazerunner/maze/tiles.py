# Cell-state constants stored in the grid
WALL = "W"
PATH = "P"

# Query-time roles resolved by coordinate, never stored per cell
START = "S"
END = "E"

__all__ = ["WALL", "PATH", "START", "END"]
