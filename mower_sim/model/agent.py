"""Mower agent: position, sensing and movement primitives."""

import threading
from enum import Enum
from typing import Optional, Tuple

from .errors import OutOfBoundsError, RunCancelled
from .grid import CellKind, GardenGrid
from .pacing import NullPacer


class Direction(Enum):
    """Moves in canonical priority order: UP < DOWN < LEFT < RIGHT."""
    UP = (-1, 0)
    DOWN = (1, 0)
    LEFT = (0, -1)
    RIGHT = (0, 1)

    @property
    def d_row(self) -> int:
        return self.value[0]

    @property
    def d_col(self) -> int:
        return self.value[1]

    @property
    def inverse(self) -> "Direction":
        return _INVERSE[self]


_INVERSE = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}

# Iteration order of the Enum is the tie-break order
DIRECTIONS = tuple(Direction)

# Kinds the mower can never step onto
_IMPASSABLE = (CellKind.OBSTACLE, CellKind.HOME)


class Mower:
    """
    The mowing agent.

    Sensing (`is_blocked`) and actuation (`move`) are kept separate: `move`
    trusts the caller to have sensed first. Every move bumps `steps` and
    hands control to the pacer, which is the only place a run can wait or
    be cancelled.
    """

    def __init__(self, grid: GardenGrid,
                 position: Tuple[int, int] = (0, 0),
                 pace: float = 0.0,
                 pacer=None):
        if pace < 0:
            raise ValueError(f"pace must be non-negative, got {pace}")
        self.grid = grid
        self.row, self.col = 0, 0
        self.teleport(*position)
        self.pace = pace
        self.pacer = pacer if pacer is not None else NullPacer()
        self.steps = 0
        self._cancel = threading.Event()

    @property
    def position(self) -> Tuple[int, int]:
        return self.row, self.col

    def neighbor(self, direction: Direction) -> Tuple[int, int]:
        """Cell one step away; may lie outside the grid."""
        return self.row + direction.d_row, self.col + direction.d_col

    def is_blocked(self, direction: Direction) -> bool:
        """True if the step leaves the garden or lands on an obstacle or home."""
        r, c = self.neighbor(direction)
        if not self.grid.in_bounds(r, c):
            return True
        return self.grid.kind_at(r, c) in _IMPASSABLE

    def move(self, direction: Direction) -> None:
        """Shift one cell without checking; callers sense first."""
        if self._cancel.is_set():
            raise RunCancelled("Run cancelled")
        self.row += direction.d_row
        self.col += direction.d_col
        self.steps += 1
        self.pacer.pause(self.pace, self._cancel)

    def teleport(self, row: int, col: int) -> None:
        """Place the mower directly, bypassing counters and pacing."""
        if not self.grid.in_bounds(row, col):
            raise OutOfBoundsError(row, col, self.grid.rows, self.grid.cols)
        self.row, self.col = row, col

    def cancel(self) -> None:
        """Request the current run to stop at its next move."""
        self._cancel.set()

    def reset_cancel(self) -> None:
        self._cancel.clear()

    @property
    def cancelled(self) -> bool:
        return self._cancel.is_set()

    def set_pace(self, pace: float, pacer: Optional[object] = None) -> None:
        if pace < 0:
            raise ValueError(f"pace must be non-negative, got {pace}")
        self.pace = pace
        if pacer is not None:
            self.pacer = pacer

    def __repr__(self) -> str:
        return f"Mower(pos={self.position}, steps={self.steps})"
