from dataclasses import dataclass, replace
from typing import Dict, Optional, Tuple


class MazeConfigError(ValueError):
    """Raised when a maze configuration cannot produce a valid lattice."""


# Preset name -> (rows, cols). Odd sizes so offset-2 cell centers tile evenly.
DIFFICULTIES: Dict[str, Tuple[int, int]] = {
    "easy": (11, 11),
    "medium": (15, 15),
    "hard": (21, 21),
    "extreme": (31, 31),
}

DEFAULT_DIFFICULTY = "medium"
MIN_DIMENSION = 5
GOAL_STRATEGIES = ("sampled", "farthest")


@dataclass
class MazeConfig:
    rows: int = 15
    cols: int = 15
    difficulty: Optional[str] = None
    seed: Optional[int] = None
    loop_density: float = 0.025
    branch_density: float = 0.4 / 15
    min_branch_length: int = 4
    max_branch_length: int = 10
    heading_bias: float = 0.7
    side_branch_chance: float = 0.2
    reconnect_chance: float = 0.3
    dead_end_extend_chance: float = 0.2
    extend_continue_chance: float = 0.5
    goal_samples: int = 50
    goal_strategy: str = "sampled"
    max_attempts: int = 25
    enable_metrics: bool = True

    @classmethod
    def for_difficulty(cls, name: str, **overrides) -> "MazeConfig":
        key = (name or "").strip().lower()
        if key not in DIFFICULTIES:
            raise MazeConfigError(f"unknown difficulty {name!r} (expected one of {', '.join(DIFFICULTIES)})")
        rows, cols = DIFFICULTIES[key]
        return cls(rows=rows, cols=cols, difficulty=key, **overrides)

    def with_overrides(self, **changes) -> "MazeConfig":
        return replace(self, **changes)

    def validate(self) -> "MazeConfig":
        """Reject configurations the generator cannot honour.

        Returns self so callers can chain ``MazeConfig(...).validate()``.
        """
        for label, value in (("rows", self.rows), ("cols", self.cols)):
            if not isinstance(value, int) or isinstance(value, bool):
                raise MazeConfigError(f"{label} must be an int, got {value!r}")
            if value < MIN_DIMENSION:
                raise MazeConfigError(f"{label}={value} is too small (minimum {MIN_DIMENSION})")
            if value % 2 == 0:
                raise MazeConfigError(f"{label}={value} must be odd")
        if self.difficulty is not None:
            key = str(self.difficulty).strip().lower()
            if key not in DIFFICULTIES:
                raise MazeConfigError(f"unknown difficulty {self.difficulty!r}")
            self.difficulty = key
            if DIFFICULTIES[key] != (self.rows, self.cols):
                raise MazeConfigError(
                    f"difficulty {self.difficulty!r} expects {DIFFICULTIES[self.difficulty]}, got {(self.rows, self.cols)}"
                )
        for label in (
            "loop_density",
            "branch_density",
            "heading_bias",
            "side_branch_chance",
            "reconnect_chance",
            "dead_end_extend_chance",
            "extend_continue_chance",
        ):
            value = getattr(self, label)
            if not 0.0 <= value <= 1.0:
                raise MazeConfigError(f"{label}={value} must be within [0, 1]")
        if self.min_branch_length < 1:
            raise MazeConfigError("min_branch_length must be at least 1")
        if self.max_branch_length <= self.min_branch_length:
            raise MazeConfigError("max_branch_length must exceed min_branch_length")
        if self.goal_samples < 1:
            raise MazeConfigError("goal_samples must be positive")
        if self.goal_strategy not in GOAL_STRATEGIES:
            raise MazeConfigError(f"goal_strategy must be one of {GOAL_STRATEGIES}, got {self.goal_strategy!r}")
        if self.max_attempts < 1:
            raise MazeConfigError("max_attempts must be positive")
        return self


__all__ = [
    "MazeConfig",
    "MazeConfigError",
    "DIFFICULTIES",
    "DEFAULT_DIFFICULTY",
    "GOAL_STRATEGIES",
    "MIN_DIMENSION",
]
