# tests/test_garden_file.py
"""Tests for .garden snapshot files."""

from pathlib import Path

import numpy as np
import pytest

from mower_sim.export.garden_file import GardenSnapshot, load_garden, save_garden
from mower_sim.model.errors import GardenFileError
from mower_sim.model.grid import CellKind

from conftest import grid_from_text


def test_layout_and_waypoints_survive_a_round_trip(tmp_path: Path) -> None:
    grid = grid_from_text("""
        H..#
        .#..
        ....
    """)
    path = tmp_path / "yard.garden"

    save_garden(path, GardenSnapshot(grid, waypoint_start=(2, 0), waypoint_end=(0, 2)))
    loaded = load_garden(path)

    assert np.array_equal(loaded.grid.cells, grid.cells)
    assert loaded.waypoint_start == (2, 0)
    assert loaded.waypoint_end == (0, 2)


def test_file_layout_is_little_endian_int32(tmp_path: Path) -> None:
    grid = grid_from_text("""
        H#.
    """)
    path = tmp_path / "strip.garden"

    save_garden(path, GardenSnapshot(grid, waypoint_end=(0, 2)))

    data = np.frombuffer(path.read_bytes(), dtype='<i4')
    assert data.tolist() == [1, 3, 3, 2, 0, -1, -1, 2, 0]


def test_trail_is_not_saved(tmp_path: Path) -> None:
    grid = grid_from_text("""
        Hv.
    """)
    grid.set_kind(0, 2, CellKind.AGENT_HERE)
    path = tmp_path / "mowed.garden"

    save_garden(path, GardenSnapshot(grid))
    loaded = load_garden(path)

    assert loaded.grid.count(CellKind.OPEN) == 2
    assert loaded.waypoint_start is None and loaded.waypoint_end is None


def test_missing_file(tmp_path: Path) -> None:
    with pytest.raises(GardenFileError):
        load_garden(tmp_path / "nothing.garden")


def test_truncated_file(tmp_path: Path) -> None:
    path = tmp_path / "short.garden"
    path.write_bytes(np.array([4, 4, 0, 0], dtype='<i4').tobytes())

    with pytest.raises(GardenFileError):
        load_garden(path)


def test_bad_dimensions(tmp_path: Path) -> None:
    path = tmp_path / "zero.garden"
    path.write_bytes(np.array([0, 3, -1, -1, -1, -1], dtype='<i4').tobytes())

    with pytest.raises(GardenFileError):
        load_garden(path)


def test_unknown_cell_kind(tmp_path: Path) -> None:
    path = tmp_path / "odd.garden"
    path.write_bytes(np.array([1, 2, 0, 42, -1, -1, -1, -1], dtype='<i4').tobytes())

    with pytest.raises(GardenFileError):
        load_garden(path)


def test_waypoint_outside_garden(tmp_path: Path) -> None:
    path = tmp_path / "lost.garden"
    path.write_bytes(np.array([1, 2, 0, 0, 5, 5, -1, -1], dtype='<i4').tobytes())

    with pytest.raises(GardenFileError):
        load_garden(path)


def test_save_adds_the_garden_extension(tmp_path: Path) -> None:
    grid = grid_from_text("H.")

    written = save_garden(tmp_path / "plain", GardenSnapshot(grid))

    assert written == tmp_path / "plain.garden"
    assert np.array_equal(load_garden(written).grid.cells, grid.cells)
