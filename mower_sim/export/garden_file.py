"""Binary garden snapshot files (.garden)."""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple

import numpy as np

from ..model.errors import GardenFileError, MalformedGridError
from ..model.grid import CellKind, GardenGrid

GARDEN_SUFFIX = ".garden"

# Every field is a little-endian 32-bit integer
_INT = np.dtype('<i4')

# Trail and marker kinds are not persisted
_TRANSIENT = (CellKind.VISITED, CellKind.AGENT_HERE,
              CellKind.WAYPOINT_START, CellKind.WAYPOINT_END)


@dataclass
class GardenSnapshot:
    """A garden layout plus optional waypoint coordinates."""
    grid: GardenGrid
    waypoint_start: Optional[Tuple[int, int]] = None
    waypoint_end: Optional[Tuple[int, int]] = None


def _xy(position: Optional[Tuple[int, int]]) -> Tuple[int, int]:
    """(row, col) to the stored (col, row) pair, -1 when absent."""
    if position is None:
        return -1, -1
    return position[1], position[0]


def save_garden(path: Path, snapshot: GardenSnapshot) -> Path:
    """
    Write a garden snapshot and return the path written.

    A path without an extension gets `GARDEN_SUFFIX`. Trail and waypoint
    marks are written as OPEN; the waypoints live in the trailing fields.

    Layout: rows, cols, rows*cols cell kinds (row-major), then start col,
    start row, end col, end row.
    """
    cells = snapshot.grid.copy_kinds().astype(_INT)
    for kind in _TRANSIENT:
        cells[cells == int(kind)] = int(CellKind.OPEN)

    header = np.array([snapshot.grid.rows, snapshot.grid.cols], dtype=_INT)
    footer = np.array(_xy(snapshot.waypoint_start) + _xy(snapshot.waypoint_end),
                      dtype=_INT)

    path = Path(path)
    if not path.suffix:
        path = path.with_suffix(GARDEN_SUFFIX)
    path.parent.mkdir(parents=True, exist_ok=True)
    try:
        with open(path, 'wb') as f:
            f.write(header.tobytes())
            f.write(cells.tobytes())
            f.write(footer.tobytes())
    except OSError as e:
        raise GardenFileError(f"Cannot write garden file {path}: {e}") from e
    return path


def _waypoint(col: int, row: int, grid: GardenGrid) -> Optional[Tuple[int, int]]:
    if col < 0 or row < 0:
        return None
    if not grid.in_bounds(row, col):
        raise GardenFileError(f"Waypoint ({row}, {col}) is outside the garden")
    return row, col


def load_garden(path: Path) -> GardenSnapshot:
    """Read a garden snapshot written by save_garden."""
    path = Path(path)
    try:
        data = np.fromfile(path, dtype=_INT)
    except OSError as e:
        raise GardenFileError(f"Cannot read garden file {path}: {e}") from e

    if data.size < 2:
        raise GardenFileError(f"{path} is too short to be a garden file")
    rows, cols = int(data[0]), int(data[1])
    if rows < 1 or cols < 1:
        raise GardenFileError(f"{path} declares an invalid {rows}x{cols} garden")
    if data.size != 2 + rows * cols + 4:
        raise GardenFileError(
            f"{path} has {data.size} fields, expected {2 + rows * cols + 4}"
        )

    cells = data[2:2 + rows * cols].reshape(rows, cols)
    valid = [int(k) for k in CellKind]
    if not np.isin(cells, valid).all():
        raise GardenFileError(f"{path} contains unknown cell kinds")

    try:
        grid = GardenGrid(rows, cols)
    except MalformedGridError as e:
        raise GardenFileError(str(e)) from e
    grid.cells[:, :] = cells.astype(np.int8)

    start_col, start_row, end_col, end_row = (int(v) for v in data[-4:])
    return GardenSnapshot(
        grid=grid,
        waypoint_start=_waypoint(start_col, start_row, grid),
        waypoint_end=_waypoint(end_col, end_row, grid),
    )
