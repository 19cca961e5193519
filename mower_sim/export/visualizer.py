"""Visualization and export for the mower simulation."""

import numpy as np
import matplotlib
matplotlib.use('Agg')  # Use non-interactive backend
import matplotlib.pyplot as plt
from matplotlib.patches import Patch
from pathlib import Path
from typing import List, Optional, TYPE_CHECKING
from PIL import Image
import io

from ..model.grid import CellKind

if TYPE_CHECKING:
    from ..model.grid import GardenGrid
    from ..model.state import CellEvent


class Visualizer:
    """
    Renders the garden with matplotlib.

    Acts as a grid listener: it keeps its own copy of the cell kinds and
    buffers a frame every `frame_every` events for the GIF.

    Supports:
    - Single PNG snapshots
    - Animated GIF compilation
    """

    # Minimap color scheme (RGB 0-255)
    COLORS = {
        CellKind.OPEN: (0, 128, 0),
        CellKind.VISITED: (0, 187, 0),
        CellKind.OBSTACLE: (128, 64, 0),
        CellKind.HOME: (255, 0, 0),
        CellKind.AGENT_HERE: (255, 0, 0),
        CellKind.WAYPOINT_START: (0, 128, 255),
        CellKind.WAYPOINT_END: (255, 32, 64),
    }

    LABELS = {
        CellKind.OPEN: 'Uncut',
        CellKind.VISITED: 'Cut',
        CellKind.OBSTACLE: 'Obstacle',
        CellKind.HOME: 'Home / Mower',
        CellKind.WAYPOINT_START: 'Point A',
        CellKind.WAYPOINT_END: 'Point B',
    }

    def __init__(self, grid: "GardenGrid", frame_every: int = 5):
        self.rows = grid.rows
        self.cols = grid.cols
        self.kinds = grid.copy_kinds()
        self.frame_every = max(1, frame_every)
        self.events_seen = 0
        self.frames: List[Image.Image] = []
        self.buffering = False

        # Lookup table from kind value to normalized RGB
        self._palette = np.zeros((len(CellKind), 3))
        for kind, rgb in self.COLORS.items():
            self._palette[int(kind)] = np.array(rgb) / 255.0

    def on_event(self, event: "CellEvent") -> None:
        """Apply a cell event and buffer a frame when due."""
        self.kinds[event.row, event.col] = int(event.kind)
        self.events_seen += 1
        if self.buffering and self.events_seen % self.frame_every == 0:
            self.buffer_frame()

    __call__ = on_event

    def _create_figure(self, title: Optional[str] = None) -> plt.Figure:
        """Create matplotlib figure of the current garden."""
        # Determine figure size based on garden aspect ratio
        aspect = self.cols / self.rows
        fig_height = 6
        fig_width = max(6, fig_height * aspect)
        fig, ax = plt.subplots(figsize=(fig_width, fig_height))

        image = self._palette[self.kinds.astype(int)]
        ax.imshow(image, origin='upper', aspect='equal', interpolation='nearest',
                  extent=[-0.5, self.cols - 0.5, self.rows - 0.5, -0.5])

        cut = int(np.count_nonzero(self.kinds == int(CellKind.VISITED)))
        ax.set_title(title or f'Events: {self.events_seen} | Cut cells: {cut}')
        ax.set_xlabel('Column')
        ax.set_ylabel('Row')

        legend_elements = [
            Patch(facecolor=self._palette[int(kind)], label=label)
            for kind, label in self.LABELS.items()
        ]
        ax.legend(handles=legend_elements, loc='upper left',
                  bbox_to_anchor=(1.01, 1.0), fontsize=8)

        plt.tight_layout()
        return fig

    def buffer_frame(self) -> None:
        """Store frame for GIF generation."""
        fig = self._create_figure()

        # Convert to PIL Image
        buf = io.BytesIO()
        fig.savefig(buf, format='png', dpi=80)
        buf.seek(0)
        img = Image.open(buf).copy()
        self.frames.append(img)
        buf.close()
        plt.close(fig)

    def save_snapshot(self, output_path: Path, title: Optional[str] = None) -> None:
        """Save single PNG image of current state."""
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        fig = self._create_figure(title)
        fig.savefig(output_path, dpi=150, bbox_inches='tight')
        plt.close(fig)

    def generate_gif(self, output_path: Path, fps: int = 10) -> None:
        """Compile buffered frames into animated GIF."""
        if not self.frames:
            return

        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        duration = int(1000 / fps)  # milliseconds per frame

        self.frames[0].save(
            output_path,
            save_all=True,
            append_images=self.frames[1:],
            duration=duration,
            loop=0
        )
