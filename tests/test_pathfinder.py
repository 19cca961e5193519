# tests/test_pathfinder.py
"""Tests for the greedy Manhattan-distance seek with backtracking."""

import pytest

from mower_sim.model.agent import Direction, Mower
from mower_sim.model.errors import OutOfBoundsError
from mower_sim.model.grid import CellKind, GardenGrid
from mower_sim.model.pathfinder import PathFinder, manhattan
from mower_sim.model.state import SeekStatus

from conftest import grid_from_text

D, U, L, R = Direction.DOWN, Direction.UP, Direction.LEFT, Direction.RIGHT

POCKET = """
    ...
    .#.
    ##.
    ...
"""


def test_manhattan() -> None:
    assert manhattan((0, 0), (3, 4)) == 7
    assert manhattan((2, 5), (2, 5)) == 0
    assert manhattan((4, 1), (1, 3)) == 5


def test_straight_line_on_open_ground() -> None:
    mower = Mower(GardenGrid(3, 6), (0, 0))

    result = PathFinder(mower).seek(0, 5)

    assert result.status is SeekStatus.REACHED
    assert result.moves == 5
    assert result.path == [R] * 5
    assert mower.position == (0, 5)


def test_already_at_target() -> None:
    grid = GardenGrid(2, 2)
    mower = Mower(grid, (1, 1))

    result = PathFinder(mower).seek(1, 1)

    assert result.reached
    assert result.moves == 0
    assert grid.kind_at(1, 1) is CellKind.AGENT_HERE


def test_detour_around_single_obstacle() -> None:
    grid = GardenGrid(5, 5)
    grid.set_kind(0, 1, CellKind.OBSTACLE)
    mower = Mower(grid, (0, 0))

    result = PathFinder(mower).seek(0, 4)

    assert result.status is SeekStatus.REACHED
    assert result.moves > 4
    assert result.path == [D, R, R, U, R, R]
    assert mower.position == (0, 4)
    assert grid.kind_at(0, 4) is CellKind.AGENT_HERE


def test_ties_prefer_earlier_direction() -> None:
    mower = Mower(GardenGrid(3, 3), (0, 0))

    result = PathFinder(mower).seek(2, 2)

    # DOWN and RIGHT tie at every step until a wall is hit
    assert result.path == [D, D, R, R]


def test_backtracks_out_of_a_pocket() -> None:
    grid = grid_from_text(POCKET)
    mower = Mower(grid, (0, 0))

    result = PathFinder(mower).seek(3, 0)

    assert result.status is SeekStatus.REACHED
    assert result.path == [D, U, R, R, D, D, D, L, L]
    assert mower.position == (3, 0)
    assert grid.kind_at(1, 0) is CellKind.VISITED


def test_corner_trap_is_unreachable() -> None:
    grid = grid_from_text("""
        .#.
        #..
        ...
    """)
    mower = Mower(grid, (0, 0))

    result = PathFinder(mower).seek(2, 2)

    assert result.status is SeekStatus.UNREACHABLE
    assert result.moves == 0
    assert result.position == (0, 0)
    assert grid.kind_at(0, 0) is CellKind.VISITED


def test_enclosed_target_exhausts_history_and_stops() -> None:
    grid = grid_from_text("""
        ...
        ..#
        .#.
    """)
    mower = Mower(grid, (0, 0))

    result = PathFinder(mower).seek(2, 2)

    assert result.status is SeekStatus.UNREACHABLE
    assert result.position == (0, 0)
    assert mower.position == (0, 0)
    assert grid.count(CellKind.VISITED) == 6
    assert result.moves % 2 == 0


def test_obstacle_target_is_unreachable() -> None:
    grid = grid_from_text("""
        ..
        .#
    """)
    result = PathFinder(Mower(grid, (0, 0))).seek(1, 1)

    assert result.status is SeekStatus.UNREACHABLE


def test_home_is_never_reentered() -> None:
    grid = grid_from_text("""
        .H.
    """)
    result = PathFinder(Mower(grid, (0, 0))).seek(0, 2)

    assert result.status is SeekStatus.UNREACHABLE
    assert grid.kind_at(0, 1) is CellKind.HOME


def test_seek_is_deterministic() -> None:
    paths = []
    for _ in range(3):
        grid = grid_from_text(POCKET)
        paths.append(PathFinder(Mower(grid, (0, 0))).seek(3, 0).path)

    assert paths[0] == paths[1] == paths[2]


def test_target_out_of_bounds_is_rejected_before_any_change(event_log) -> None:
    grid = GardenGrid(3, 3)
    grid.add_listener(event_log)
    mower = Mower(grid, (0, 0))

    with pytest.raises(OutOfBoundsError):
        PathFinder(mower).seek(3, 3)

    assert event_log.events == []
    assert mower.steps == 0


def test_events_follow_each_move(event_log) -> None:
    grid = GardenGrid(1, 3)
    grid.add_listener(event_log)

    PathFinder(Mower(grid, (0, 0))).seek(0, 2)

    assert event_log.events == [
        (0, 0, CellKind.AGENT_HERE),
        (0, 0, CellKind.VISITED),
        (0, 1, CellKind.AGENT_HERE),
        (0, 1, CellKind.VISITED),
        (0, 2, CellKind.AGENT_HERE),
    ]
