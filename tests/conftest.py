# tests/conftest.py

import sys
from pathlib import Path

import pytest

# Ensure the project root is importable without an editable install.
PROJECT_ROOT = Path(__file__).resolve().parents[1]

if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from mower_sim.model.grid import CellKind, GardenGrid  # noqa: E402

_SYMBOLS = {
    '.': CellKind.OPEN,
    '#': CellKind.OBSTACLE,
    'H': CellKind.HOME,
    'v': CellKind.VISITED,
}


def grid_from_text(text: str) -> GardenGrid:
    """
    Build a grid from a picture, one row per line:
    '.' open, '#' obstacle, 'H' home, 'v' visited.
    """
    lines = [line.strip() for line in text.strip().splitlines()]
    return GardenGrid.from_rows([[_SYMBOLS[ch] for ch in line] for line in lines])


@pytest.fixture
def event_log():
    """A listener that records every CellEvent as (row, col, kind)."""
    events = []

    def listener(event):
        events.append((event.row, event.col, event.kind))

    listener.events = events
    return listener
