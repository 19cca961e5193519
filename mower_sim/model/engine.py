"""Simulation shell: garden set-up and run orchestration."""

import logging
import time
from typing import Dict, Optional, Tuple, TYPE_CHECKING, Any

import numpy as np

from .agent import Mower
from .coverage import CoverageTraversal
from .errors import ConfigError
from .grid import CellKind, GardenGrid
from .pacing import NullPacer
from .pathfinder import PathFinder
from .state import CoverageResult, SeekResult, TrialReport

if TYPE_CHECKING:
    from ..config import SimulationConfig

logger = logging.getLogger(__name__)


class MowerSimulation:
    """
    Owns one garden and one mower and runs the algorithms on them.

    Implements:
    1. Garden initialization (home, obstacles, random layout, waypoints)
    2. Reset of the mowed trail between runs
    3. Full-garden mowing, point-to-point seeking and timed trials

    The single HOME cell and the at-most-one waypoint of each kind are kept
    here; the model underneath does not enforce them.
    """

    def __init__(self, config: "SimulationConfig",
                 grid: Optional[GardenGrid] = None,
                 pacer=None):
        self.config = config
        self.rng = np.random.default_rng(config.seed)

        self.home: Optional[Tuple[int, int]] = None
        self.waypoint_start: Optional[Tuple[int, int]] = None
        self.waypoint_end: Optional[Tuple[int, int]] = None

        if grid is None:
            # Initialize garden from config
            self.grid = GardenGrid(config.garden.rows, config.garden.cols)
            self._setup_home()
            self._setup_obstacles()
            self._setup_random_layout()
            self._setup_waypoints()
        else:
            self.grid = grid
            homes = grid.positions_of(CellKind.HOME)
            self.home = homes[0] if homes else None
            self._setup_waypoints()

        self.mower = Mower(self.grid, self.home or (0, 0),
                           pace=config.mower.pace, pacer=pacer)

        self.last_coverage: Optional[CoverageResult] = None
        self.last_seek: Optional[SeekResult] = None

    def _setup_home(self) -> None:
        """Place the home cell from config."""
        home = self.config.garden.home
        if home is None:
            return
        if not self.grid.in_bounds(*home):
            raise ConfigError(f"Home {home} is outside the garden")
        self.home = home
        self.grid.set_kind(*home, CellKind.HOME)

    def _put_obstacle(self, row: int, col: int) -> None:
        if self.grid.in_bounds(row, col) and (row, col) != self.home:
            self.grid.set_kind(row, col, CellKind.OBSTACLE)

    def _setup_obstacles(self) -> None:
        """Configure obstacles from config."""
        for spec in self.config.layout.obstacles:
            if spec.obstacle_type == "rectangle":
                # Clamp to garden boundaries
                r0 = max(0, spec.data['row'])
                c0 = max(0, spec.data['col'])
                r1 = min(spec.data['row'] + spec.data['height'], self.grid.rows)
                c1 = min(spec.data['col'] + spec.data['width'], self.grid.cols)
                for r in range(r0, r1):
                    for c in range(c0, c1):
                        self._put_obstacle(r, c)
            elif spec.obstacle_type == "points":
                for r, c in spec.data['coords']:
                    self._put_obstacle(r, c)

    def _setup_random_layout(self) -> None:
        """Scatter obstacles at random and optionally pick waypoints."""
        spec = self.config.layout.random
        if spec is None:
            return

        # Without a home the mower starts at (0, 0)
        spared = self.home if self.home is not None else (0, 0)
        mask = self.rng.random(self.grid.shape) * 100 < spec.obstacle_percent
        for r in range(self.grid.rows):
            for c in range(self.grid.cols):
                if (r, c) == spared:
                    continue
                kind = CellKind.OBSTACLE if mask[r, c] else CellKind.OPEN
                self.grid.set_kind(r, c, kind)

        if spec.waypoints and self.grid.rows * self.grid.cols > 2:
            start = self._random_cell(self.home)
            self.set_waypoint_start(*start)
            self.set_waypoint_end(*self._random_cell(self.home, start))

    def _random_cell(self, *exclude: Optional[Tuple[int, int]]) -> Tuple[int, int]:
        """Random cell not in `exclude`."""
        while True:
            r = int(self.rng.integers(0, self.grid.rows))
            c = int(self.rng.integers(0, self.grid.cols))
            if (r, c) not in exclude:
                return r, c

    def _setup_waypoints(self) -> None:
        waypoints = self.config.waypoints
        if waypoints.start is not None:
            self.set_waypoint_start(*waypoints.start)
        if waypoints.end is not None:
            self.set_waypoint_end(*waypoints.end)

    def _check_waypoint(self, row: int, col: int) -> Tuple[int, int]:
        if not self.grid.in_bounds(row, col):
            raise ConfigError(f"Waypoint ({row}, {col}) is outside the garden")
        if (row, col) == self.home:
            raise ConfigError("A waypoint cannot be placed on the home cell")
        return row, col

    def set_waypoint_start(self, row: int, col: int) -> None:
        """Place the start waypoint, replacing any previous one."""
        position = self._check_waypoint(row, col)
        if self.waypoint_start is not None:
            self.grid.set_kind(*self.waypoint_start, CellKind.OPEN)
        if position == self.waypoint_end:
            self.waypoint_end = None
        self.waypoint_start = position
        self.grid.set_kind(*position, CellKind.WAYPOINT_START)

    def set_waypoint_end(self, row: int, col: int) -> None:
        """Place the end waypoint, replacing any previous one."""
        position = self._check_waypoint(row, col)
        if self.waypoint_end is not None:
            self.grid.set_kind(*self.waypoint_end, CellKind.OPEN)
        if position == self.waypoint_start:
            self.waypoint_start = None
        self.waypoint_end = position
        self.grid.set_kind(*position, CellKind.WAYPOINT_END)

    def clear_waypoints(self) -> None:
        for position in (self.waypoint_start, self.waypoint_end):
            if position is not None:
                self.grid.set_kind(*position, CellKind.OPEN)
        self.waypoint_start = None
        self.waypoint_end = None

    def reset(self) -> None:
        """Regrow the mowed trail and restore home and waypoint marks."""
        self.grid.replace((CellKind.VISITED, CellKind.AGENT_HERE), CellKind.OPEN)
        if self.home is not None:
            self.grid.set_kind(*self.home, CellKind.HOME)
        if self.waypoint_start is not None:
            self.grid.set_kind(*self.waypoint_start, CellKind.WAYPOINT_START)
        if self.waypoint_end is not None:
            self.grid.set_kind(*self.waypoint_end, CellKind.WAYPOINT_END)

    def start_position(self) -> Tuple[int, int]:
        """Home, or the first cell in row-major order that is not an obstacle."""
        if self.home is not None:
            return self.home
        free = np.argwhere(self.grid.cells != int(CellKind.OBSTACLE))
        if free.size == 0:
            raise ConfigError("The garden has no free cell to start mowing from")
        return int(free[0][0]), int(free[0][1])

    def mow(self) -> CoverageResult:
        """Mow every reachable cell starting from `start_position()`."""
        self.reset()
        # Waypoint cells are grass too
        for position in (self.waypoint_start, self.waypoint_end):
            if position is not None:
                self.grid.set_kind(*position, CellKind.OPEN)

        self.mower.reset_cancel()
        self.mower.teleport(*self.start_position())
        self.last_coverage = CoverageTraversal(self.mower).run()
        return self.last_coverage

    def find_path(self) -> SeekResult:
        """Drive from the start waypoint to the end waypoint."""
        if self.waypoint_start is None or self.waypoint_end is None:
            raise ConfigError("Both start and end waypoints are required")
        self.reset()

        self.mower.reset_cancel()
        self.mower.teleport(*self.waypoint_start)
        self.last_seek = PathFinder(self.mower).seek(*self.waypoint_end)
        return self.last_seek

    def cut_percent(self) -> float:
        """Share of grass cells mowed by the last coverage run."""
        cut = self.grid.count(CellKind.VISITED)
        total = cut + self.grid.count(CellKind.OPEN)
        if total == 0:
            return 100.0
        return cut * 100.0 / total

    def run_trial(self) -> TrialReport:
        """
        Run both algorithms without pacing and collect metrics.

        The garden is reset afterwards.
        """
        saved_pace, saved_pacer = self.mower.pace, self.mower.pacer
        self.mower.set_pace(0.0, NullPacer())
        try:
            started = time.perf_counter()
            coverage = self.mow()
            mow_time_ms = (time.perf_counter() - started) * 1000
            report = TrialReport(
                cut_percent=self.cut_percent(),
                mow_moves=coverage.moves,
                mow_time_ms=mow_time_ms,
            )
            self.reset()

            if self.waypoint_start is not None and self.waypoint_end is not None:
                started = time.perf_counter()
                seek = self.find_path()
                report.path_time_ms = (time.perf_counter() - started) * 1000
                report.path_moves = seek.moves
                report.path_status = seek.status
                self.reset()
            else:
                logger.warning("Trial skipped path finding: waypoints missing")
        finally:
            self.mower.set_pace(saved_pace, saved_pacer)

        return report

    def get_summary(self) -> Dict[str, Any]:
        """Get summary statistics for the garden and the last runs."""
        summary: Dict[str, Any] = {
            'rows': self.grid.rows,
            'cols': self.grid.cols,
            'obstacles': self.grid.count(CellKind.OBSTACLE),
            'home': self.home,
            'waypoint_start': self.waypoint_start,
            'waypoint_end': self.waypoint_end,
            'total_moves': self.mower.steps,
        }
        if self.last_coverage is not None:
            summary['mow_moves'] = self.last_coverage.moves
            summary['cells_mowed'] = self.last_coverage.cells_visited
        if self.last_seek is not None:
            summary['path_moves'] = self.last_seek.moves
            summary['path_status'] = self.last_seek.status.value
        return summary
