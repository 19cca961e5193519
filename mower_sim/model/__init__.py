"""Model package for the mower simulation."""

from .errors import (
    MowerSimError,
    OutOfBoundsError,
    MalformedGridError,
    RunCancelled,
    GardenFileError,
    ConfigError,
)
from .state import CellEvent, CoverageResult, SeekStatus, SeekResult, TrialReport
from .grid import CellKind, GardenGrid
from .pacing import NullPacer, SleepPacer, RecordingPacer
from .agent import Direction, DIRECTIONS, Mower
from .coverage import CoverageTraversal
from .pathfinder import PathFinder, manhattan
from .engine import MowerSimulation

__all__ = [
    'MowerSimError',
    'OutOfBoundsError',
    'MalformedGridError',
    'RunCancelled',
    'GardenFileError',
    'ConfigError',
    'CellEvent',
    'CoverageResult',
    'SeekStatus',
    'SeekResult',
    'TrialReport',
    'CellKind',
    'GardenGrid',
    'NullPacer',
    'SleepPacer',
    'RecordingPacer',
    'Direction',
    'DIRECTIONS',
    'Mower',
    'CoverageTraversal',
    'PathFinder',
    'manhattan',
    'MowerSimulation',
]
