"""CSV export of cell mutation events."""

import csv
from pathlib import Path
from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from ..model.state import CellEvent


class CSVWriter:
    """
    Logs cell events to CSV incrementally. Register `append` as a grid
    listener.

    Output format:
        seq,row,col,kind
        0,0,0,home
        1,1,0,agent_here
        ...
    """

    def __init__(self, output_path: Path):
        self.output_path = Path(output_path)
        self.file: Optional[object] = None
        self.writer: Optional[csv.DictWriter] = None
        self.seq = 0
        self._is_open = False

    def open(self) -> None:
        """Initialize file and write header."""
        self.output_path.parent.mkdir(parents=True, exist_ok=True)
        self.file = open(self.output_path, 'w', newline='')
        self.writer = csv.DictWriter(
            self.file,
            fieldnames=['seq', 'row', 'col', 'kind']
        )
        self.writer.writeheader()
        self._is_open = True

    def append(self, event: "CellEvent") -> None:
        """Write one event."""
        if not self._is_open:
            self.open()
        self.writer.writerow(event.to_csv_row(self.seq))
        self.seq += 1

    __call__ = append

    def close(self) -> None:
        """Close file handle."""
        if self.file:
            self.file.close()
            self.file = None
            self.writer = None
            self._is_open = False

    def __enter__(self):
        self.open()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False
