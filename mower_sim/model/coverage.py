"""Exhaustive depth-first coverage of every reachable cell."""

import logging
from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple

from .agent import DIRECTIONS, Direction, Mower
from .grid import CellKind
from .state import CoverageResult

logger = logging.getLogger(__name__)


@dataclass
class _Frame:
    """One level of the depth-first walk."""
    position: Tuple[int, int]
    entered_by: Optional[Direction]
    next_index: int = 0


class CoverageTraversal:
    """
    Mows every cell reachable from the mower's position and brings the
    mower back to where it started.

    The walk uses an explicit frame stack instead of recursion, so depth is
    limited only by the number of cells. A cell is marked VISITED when the
    mower leaves it; the cell the mower stands on shows AGENT_HERE. If the
    run starts on the HOME cell, that cell keeps HOME as its trail mark.

    Every cell entered is left again exactly once, so a finished run makes
    2 * (cells_visited - 1) moves.
    """

    def __init__(self, mower: Mower):
        self.mower = mower
        self.grid = mower.grid
        self.cells_visited = 0
        self.moves = 0
        self._origin: Tuple[int, int] = mower.position
        self._origin_is_home = False

    def _trail_kind(self, position: Tuple[int, int]) -> CellKind:
        if self._origin_is_home and position == self._origin:
            return CellKind.HOME
        return CellKind.VISITED

    def _can_enter(self, direction: Direction) -> bool:
        if self.mower.is_blocked(direction):
            return False
        return self.grid.kind_at(*self.mower.neighbor(direction)) != CellKind.VISITED

    def _step(self, direction: Direction) -> None:
        self.mower.move(direction)
        self.moves += 1

    def iter_moves(self) -> Iterator[Direction]:
        """
        Run the traversal lazily, yielding each direction after it is moved.

        Closing the generator early leaves the grid and mower wherever the
        walk had got to.
        """
        self._origin = self.mower.position
        self._origin_is_home = self.grid.kind_at(*self._origin) == CellKind.HOME
        self.cells_visited = 1
        self.moves = 0

        stack: List[_Frame] = [_Frame(self._origin, None)]
        while stack:
            frame = stack[-1]

            advanced = False
            while frame.next_index < len(DIRECTIONS):
                direction = DIRECTIONS[frame.next_index]
                frame.next_index += 1
                if not self._can_enter(direction):
                    continue

                self.grid.set_kind(*frame.position, self._trail_kind(frame.position))
                self._step(direction)
                self.grid.set_kind(*self.mower.position, CellKind.AGENT_HERE)
                self.cells_visited += 1
                stack.append(_Frame(self.mower.position, direction))
                advanced = True
                yield direction
                break

            if advanced:
                continue

            # Dead end: return to the parent cell
            stack.pop()
            if frame.entered_by is None:
                continue
            back = frame.entered_by.inverse
            self.grid.set_kind(*frame.position, self._trail_kind(frame.position))
            self._step(back)
            self.grid.set_kind(*self.mower.position, CellKind.AGENT_HERE)
            yield back

        self.grid.set_kind(*self._origin, CellKind.AGENT_HERE)

    def run(self) -> CoverageResult:
        """Mow everything reachable and return the totals."""
        logger.debug("Coverage starting at %s", self.mower.position)
        for _ in self.iter_moves():
            pass
        result = CoverageResult(
            origin=self._origin,
            moves=self.moves,
            cells_visited=self.cells_visited,
        )
        logger.info("Coverage finished: %d cells in %d moves",
                    result.cells_visited, result.moves)
        return result
