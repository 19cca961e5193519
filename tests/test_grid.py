# tests/test_grid.py
"""Unit tests for GardenGrid bounds, validation and events."""

import pytest

from mower_sim.model.errors import MalformedGridError, OutOfBoundsError
from mower_sim.model.grid import CellKind, GardenGrid

from conftest import grid_from_text


def test_new_grid_is_all_open() -> None:
    grid = GardenGrid(3, 4)

    assert grid.shape == (3, 4)
    assert grid.count(CellKind.OPEN) == 12
    assert grid.kind_at(2, 3) is CellKind.OPEN


@pytest.mark.parametrize("row, col", [(-1, 0), (3, 0), (0, -1), (0, 4)])
def test_kind_at_rejects_out_of_bounds(row: int, col: int) -> None:
    grid = GardenGrid(3, 4)

    with pytest.raises(OutOfBoundsError):
        grid.kind_at(row, col)


def test_out_of_bounds_is_an_index_error() -> None:
    grid = GardenGrid(2, 2)

    with pytest.raises(IndexError):
        grid.kind_at(2, 0)


def test_set_kind_out_of_bounds_leaves_grid_untouched(event_log) -> None:
    grid = GardenGrid(2, 2)
    grid.add_listener(event_log)

    with pytest.raises(OutOfBoundsError):
        grid.set_kind(0, 2, CellKind.OBSTACLE)

    assert event_log.events == []
    assert grid.count(CellKind.OPEN) == 4


@pytest.mark.parametrize("rows, cols", [(0, 3), (3, 0), (-1, -1)])
def test_invalid_dimensions_are_rejected(rows: int, cols: int) -> None:
    with pytest.raises(MalformedGridError):
        GardenGrid(rows, cols)


def test_jagged_rows_are_rejected() -> None:
    with pytest.raises(MalformedGridError):
        GardenGrid.from_rows([[0, 0, 0], [0, 0]])

    with pytest.raises(MalformedGridError):
        GardenGrid.from_rows([])


def test_from_rows_keeps_kinds() -> None:
    grid = grid_from_text("""
        H.#
        .v.
    """)

    assert grid.kind_at(0, 0) is CellKind.HOME
    assert grid.kind_at(0, 2) is CellKind.OBSTACLE
    assert grid.kind_at(1, 1) is CellKind.VISITED
    assert grid.positions_of(CellKind.OPEN) == [(0, 1), (1, 0), (1, 2)]


def test_listeners_see_events_in_order(event_log) -> None:
    grid = GardenGrid(2, 2)
    grid.add_listener(event_log)

    grid.set_kind(1, 1, CellKind.OBSTACLE)
    grid.set_kind(0, 0, CellKind.HOME)
    grid.set_kind(1, 1, CellKind.OPEN)

    assert event_log.events == [
        (1, 1, CellKind.OBSTACLE),
        (0, 0, CellKind.HOME),
        (1, 1, CellKind.OPEN),
    ]

    grid.remove_listener(event_log)
    grid.set_kind(0, 1, CellKind.VISITED)
    assert len(event_log.events) == 3


def test_replace_turns_kinds_into_another() -> None:
    grid = grid_from_text("""
        vv#
        .vH
    """)

    grid.replace((CellKind.VISITED,), CellKind.OPEN)

    assert grid.count(CellKind.VISITED) == 0
    assert grid.count(CellKind.OPEN) == 4
    assert grid.kind_at(1, 2) is CellKind.HOME
