"""Garden grid management for the mower simulation."""

from enum import IntEnum
from typing import Callable, Iterable, List, Sequence, Tuple

import numpy as np

from .errors import MalformedGridError, OutOfBoundsError
from .state import CellEvent


class CellKind(IntEnum):
    """What occupies a garden cell. Values are stored in garden files."""
    OPEN = 0
    VISITED = 1
    OBSTACLE = 2
    HOME = 3
    AGENT_HERE = 4
    WAYPOINT_START = 5
    WAYPOINT_END = 6


CellListener = Callable[[CellEvent], None]


class GardenGrid:
    """
    Rectangular matrix of cell kinds.

    Coordinate convention: (row, col) everywhere, [row, col] for array indexing.
    The grid only checks bounds; uniqueness of HOME and the waypoints is up
    to the caller.
    """

    def __init__(self, rows: int, cols: int):
        if rows < 1 or cols < 1:
            raise MalformedGridError(
                f"Garden must be at least 1x1, got {rows}x{cols}"
            )
        self.rows = rows
        self.cols = cols

        # One CellKind value per cell
        self.cells = np.full((rows, cols), int(CellKind.OPEN), dtype=np.int8)

        self._listeners: List[CellListener] = []

    @classmethod
    def from_rows(cls, kinds: Sequence[Sequence[int]]) -> "GardenGrid":
        """Build a grid from nested rows of cell kinds."""
        if len(kinds) == 0 or len(kinds[0]) == 0:
            raise MalformedGridError("Garden must have at least one row and column")
        width = len(kinds[0])
        for index, row in enumerate(kinds):
            if len(row) != width:
                raise MalformedGridError(
                    f"Row {index} has {len(row)} cells, expected {width}"
                )

        grid = cls(len(kinds), width)
        for r, row in enumerate(kinds):
            for c, kind in enumerate(row):
                grid.cells[r, c] = int(CellKind(kind))
        return grid

    @property
    def shape(self) -> Tuple[int, int]:
        return self.rows, self.cols

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols

    def _check(self, row: int, col: int) -> None:
        if not self.in_bounds(row, col):
            raise OutOfBoundsError(row, col, self.rows, self.cols)

    def kind_at(self, row: int, col: int) -> CellKind:
        """Return the kind of a cell."""
        self._check(row, col)
        return CellKind(int(self.cells[row, col]))

    def set_kind(self, row: int, col: int, kind: CellKind) -> None:
        """Overwrite a cell and notify listeners."""
        self._check(row, col)
        kind = CellKind(kind)
        self.cells[row, col] = int(kind)

        event = CellEvent(row=row, col=col, kind=kind)
        for listener in list(self._listeners):
            listener(event)

    def add_listener(self, listener: CellListener) -> None:
        """Register a callable receiving every CellEvent in order."""
        self._listeners.append(listener)

    def remove_listener(self, listener: CellListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def count(self, kind: CellKind) -> int:
        """Number of cells of the given kind."""
        return int(np.count_nonzero(self.cells == int(kind)))

    def positions_of(self, kind: CellKind) -> List[Tuple[int, int]]:
        """Return all (row, col) positions holding the given kind."""
        rs, cs = np.where(self.cells == int(kind))
        return [(int(r), int(c)) for r, c in zip(rs, cs)]

    def replace(self, old: Iterable[CellKind], new: CellKind) -> None:
        """Turn every cell of one of the `old` kinds into `new`."""
        for r, c in sorted(
            pos for kind in old for pos in self.positions_of(kind)
        ):
            self.set_kind(r, c, new)

    def copy_kinds(self) -> np.ndarray:
        """Copy of the underlying kind matrix."""
        return self.cells.copy()

    def __repr__(self) -> str:
        return f"GardenGrid(rows={self.rows}, cols={self.cols})"
