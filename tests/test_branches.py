import random

from mazerunner.maze import Grid, Maze, MazeConfig
from mazerunner.maze.branches import (
    add_side_branch,
    branch_target,
    can_start_branch,
    carve_branch,
    inject_branches,
    reconnect_to_nearby_path,
)
from mazerunner.maze.carver import carve_perfect_maze
from mazerunner.maze.connectivity import reachable_from
from mazerunner.maze.debug_checks import open_blocks


def _single_cell_grid(size=11, at=(1, 1)):
    g = Grid(size, size)
    g.carve(*at)
    return g


def test_can_start_branch_straight_lookahead():
    g = _single_cell_grid()
    assert can_start_branch(g, (1, 1), (0, 1), 4)
    # Lookahead would run into the border
    assert not can_start_branch(g, (1, 1), (0, 1), 8)
    # Adjacent cell is the border itself
    assert not can_start_branch(g, (1, 1), (-1, 0), 1)


def test_can_start_branch_rejects_premature_contact():
    g = _single_cell_grid()
    g.carve(1, 5)
    assert not can_start_branch(g, (1, 1), (0, 1), 4)
    assert can_start_branch(g, (1, 1), (0, 1), 2)


def test_can_start_branch_rejects_first_cell_touching_other_path():
    g = _single_cell_grid(at=(1, 1))
    g.carve(2, 2)
    assert not can_start_branch(g, (1, 1), (0, 1), 1)


def test_carve_branch_straight_with_full_heading_bias():
    g = Grid(21, 21)
    g.carve(1, 10)
    cfg = MazeConfig(
        rows=21,
        cols=21,
        min_branch_length=4,
        max_branch_length=5,
        heading_bias=1.0,
        side_branch_chance=0.0,
        reconnect_chance=0.0,
    )
    cells, sides, connector = carve_branch(g, (1, 10), (1, 0), cfg, random.Random(5))
    assert (cells, sides, connector) == (5, 0, None)
    for r in range(2, 7):
        assert g.is_path(r, 10)
    assert g.count("P") == 6


def test_side_branch_is_short_and_straight():
    for seed in range(10):
        g = _single_cell_grid(size=11, at=(5, 5))
        added = add_side_branch(g, (5, 5), random.Random(seed))
        assert 1 <= added <= 3
        assert g.count("P") == 1 + added
        cells = sorted(g.path_cells())
        rows = {r for r, _ in cells}
        cols = {c for _, c in cells}
        assert len(rows) == 1 or len(cols) == 1


def test_side_branch_gives_up_when_boxed_in():
    g = Grid.from_strings(
        [
            "WWWWW",
            "WPPPW",
            "WPPPW",
            "WPPPW",
            "WWWWW",
        ]
    )
    assert add_side_branch(g, (2, 2), random.Random(0)) == 0


def _reconnect_grid():
    return Grid.from_strings(
        [
            "WWWWWWW",
            "WWWPWWW",
            "WWWWWWW",
            "WWWPWWW",
            "WWWWWWW",
        ]
    )


def test_reconnect_opens_wall_to_path_beyond():
    g = _reconnect_grid()
    assert reconnect_to_nearby_path(g, (1, 3), random.Random(0)) == (2, 3)
    assert g.is_path(2, 3)


def test_reconnect_refuses_to_widen_corridor():
    g = _reconnect_grid()
    g.carve(2, 2)
    assert reconnect_to_nearby_path(g, (1, 3), random.Random(0)) is None
    assert g.is_wall(2, 3)


def test_reconnect_without_nearby_path():
    g = Grid(7, 7)
    g.carve(3, 3)
    assert reconnect_to_nearby_path(g, (3, 3), random.Random(0)) is None


def test_inject_branches_from_single_corridor():
    g = Grid(21, 21)
    corridor = [(1, c) for c in range(1, 20)]
    for r, c in corridor:
        g.carve(r, c)
    report = inject_branches(g, corridor, MazeConfig(rows=21, cols=21), random.Random(3))
    assert report.branches >= 1
    assert report.cells >= report.branches
    assert g.count("P") == len(corridor) + report.cells + len(report.reconnects)
    assert open_blocks(g) == []
    assert reachable_from(g, (1, 1)) == set(g.path_cells())


def test_branch_target_scales_with_area():
    assert branch_target(Grid(15, 15), 0.25) == 56
    assert branch_target(Grid(31, 31), 0.5) == 480
    assert branch_target(Grid(11, 11), 0.0) == 0


def test_branches_on_carved_maze_keep_structure():
    for seed in range(20):
        rng = random.Random(seed)
        g = Grid(31, 31)
        cells = carve_perfect_maze(g, (1, 1), rng)
        before = g.count("P")
        report = inject_branches(g, cells, MazeConfig(rows=31, cols=31), rng)
        assert g.count("P") == before + report.cells + len(report.reconnects)
        assert open_blocks(g) == [], f"seed {seed} produced a 2-wide corridor"
        assert reachable_from(g, (1, 1)) == set(g.path_cells())
        for r, c in report.reconnects:
            assert g.is_path(r, c)


def test_empty_registry_is_noop():
    g = Grid(11, 11)
    assert inject_branches(g, [], MazeConfig(rows=11, cols=11), random.Random(0)) == (0, 0, 0, [])


def test_branches_on_fully_tiled_lattice_stop_at_one_pillar():
    # Every center is already open, so only a pillar is admissible and nothing beyond it
    for seed in range(15):
        maze = Maze(difficulty="extreme", seed=seed)
        m = maze.metrics
        assert m["branch_cells"] == m["branches_carved"]
        assert m["side_branches"] == 0
        assert m["reconnects"] == 0 and maze.reconnect_connectors == []
