"""Event and result dataclasses for the mower simulation."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple, TYPE_CHECKING

if TYPE_CHECKING:
    from .agent import Direction
    from .grid import CellKind


@dataclass(frozen=True)
class CellEvent:
    """A single cell changing kind, in execution order."""
    row: int
    col: int
    kind: "CellKind"

    def to_csv_row(self, seq: int) -> Dict[str, Any]:
        return {
            "seq": seq,
            "row": self.row,
            "col": self.col,
            "kind": self.kind.name.lower(),
        }


@dataclass
class CoverageResult:
    """Outcome of one exhaustive coverage run."""
    origin: Tuple[int, int]
    moves: int
    cells_visited: int


class SeekStatus(Enum):
    """Terminal states of a point-to-point seek."""
    REACHED = "reached"
    UNREACHABLE = "unreachable"


@dataclass
class SeekResult:
    """Outcome of one PathFinder.seek call."""
    status: SeekStatus
    target: Tuple[int, int]
    position: Tuple[int, int]
    path: List["Direction"] = field(default_factory=list)

    @property
    def moves(self) -> int:
        return len(self.path)

    @property
    def reached(self) -> bool:
        return self.status is SeekStatus.REACHED


@dataclass
class TrialReport:
    """Metrics gathered by running both algorithms back to back."""
    cut_percent: float
    mow_moves: int
    mow_time_ms: float
    path_moves: Optional[int] = None
    path_time_ms: Optional[float] = None
    path_status: Optional[SeekStatus] = None
