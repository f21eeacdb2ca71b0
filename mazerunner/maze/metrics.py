from typing import Dict


def init_metrics() -> Dict[str, int | float | dict]:
    return {
        'attempts': 0,
        'centers_carved': 0,
        'path_cells': 0,
        'loops_added': 0,
        'branches_carved': 0,
        'branch_cells': 0,
        'side_branches': 0,
        'reconnects': 0,
        'dead_ends_pruned': 0,
        'dead_ends_extended': 0,
        'prune_passes': 0,
        'goal_distance': 0,
        'runtime_ms': 0.0,
        'phase_ms': {},
    }
