"""Greedy point-to-point navigation with backtracking."""

import logging
from typing import List, Optional, Tuple

from .agent import DIRECTIONS, Direction, Mower
from .errors import OutOfBoundsError
from .grid import CellKind
from .state import SeekResult, SeekStatus

logger = logging.getLogger(__name__)


def manhattan(a: Tuple[int, int], b: Tuple[int, int]) -> int:
    """Sum of absolute row and column differences."""
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


class PathFinder:
    """
    Hill-climbing seek towards a target cell.

    At each cell the mower steps to the unvisited, unblocked neighbour
    closest to the target (Manhattan distance, ties to the earlier
    direction in UP, DOWN, LEFT, RIGHT order). Forward moves are pushed
    on a history stack; when the mower is boxed in it pops the last move
    and walks it back. An empty history while boxed in means the target
    cannot be reached.

    Not a shortest-path search: it is only optimal on open ground.
    """

    def __init__(self, mower: Mower):
        self.mower = mower
        self.grid = mower.grid

    def best_direction(self, target: Tuple[int, int]) -> Optional[Direction]:
        """Closest valid neighbour direction, or None when boxed in."""
        best: Optional[Direction] = None
        best_distance = -1
        for direction in DIRECTIONS:
            if self.mower.is_blocked(direction):
                continue
            neighbor = self.mower.neighbor(direction)
            if self.grid.kind_at(*neighbor) == CellKind.VISITED:
                continue
            distance = manhattan(neighbor, target)
            if best is None or distance < best_distance:
                best = direction
                best_distance = distance
        return best

    def seek(self, row: int, col: int) -> SeekResult:
        """Drive the mower towards (row, col) until reached or stuck."""
        if not self.grid.in_bounds(row, col):
            raise OutOfBoundsError(row, col, self.grid.rows, self.grid.cols)
        target = (row, col)

        history: List[Direction] = []
        path: List[Direction] = []
        self.grid.set_kind(*self.mower.position, CellKind.AGENT_HERE)
        logger.debug("Seeking %s from %s", target, self.mower.position)

        while self.mower.position != target:
            direction = self.best_direction(target)
            self.grid.set_kind(*self.mower.position, CellKind.VISITED)

            if direction is None:
                if not history:
                    logger.info("Target %s unreachable, stopped at %s after %d moves",
                                target, self.mower.position, len(path))
                    return SeekResult(
                        status=SeekStatus.UNREACHABLE,
                        target=target,
                        position=self.mower.position,
                        path=path,
                    )
                direction = history.pop().inverse
            else:
                history.append(direction)

            self.mower.move(direction)
            path.append(direction)
            self.grid.set_kind(*self.mower.position, CellKind.AGENT_HERE)

        logger.info("Reached %s in %d moves", target, len(path))
        return SeekResult(
            status=SeekStatus.REACHED,
            target=target,
            position=self.mower.position,
            path=path,
        )
