"""Summary report generation for the mower simulation."""

from typing import Dict, Any, Optional, TYPE_CHECKING
from pathlib import Path

if TYPE_CHECKING:
    from ..model.state import TrialReport


class Reporter:
    """Generates formatted text reports for runs and trials."""

    def __init__(self, config_path: Optional[str], seed: Optional[int]):
        self.config_path = config_path
        self.seed = seed

    def _header(self, title: str) -> list:
        return [
            "",
            "=" * 80,
            f"{title:^80}",
            "=" * 80,
            f"Configuration: {self.config_path or '(defaults)'}",
            f"Random Seed: {self.seed if self.seed is not None else 'None (random)'}",
            "",
        ]

    def generate_summary(self, summary: Dict[str, Any],
                         output_dir: Path,
                         csv_enabled: bool,
                         snapshot_enabled: bool,
                         gif_enabled: bool) -> str:
        """Returns formatted text report of the last run."""
        lines = self._header("MOWER SIMULATION REPORT")
        lines += [
            "GARDEN",
            "-" * 40,
            f"Size:                  {summary['rows']} x {summary['cols']}",
            f"Obstacles:             {summary['obstacles']}",
            f"Home:                  {summary['home']}",
            f"Point A / Point B:     {summary['waypoint_start']} / {summary['waypoint_end']}",
            "",
            "RUN METRICS",
            "-" * 40,
        ]
        if 'mow_moves' in summary:
            lines.append(f"Cells Mowed:           {summary['cells_mowed']}")
            lines.append(f"Mowing Moves:          {summary['mow_moves']}")
        if 'path_moves' in summary:
            lines.append(f"Path Result:           {summary['path_status']}")
            lines.append(f"Path Moves:            {summary['path_moves']}")
        lines.append(f"Total Moves:           {summary['total_moves']}")

        lines += [
            "",
            "OUTPUT FILES",
            "-" * 40,
        ]

        # Output file paths
        if csv_enabled:
            lines.append(f"CSV Log:    {output_dir / 'events.csv'}")
        else:
            lines.append("CSV Log:    (disabled)")

        if snapshot_enabled:
            lines.append(f"Snapshot:   {output_dir / 'final_state.png'}")
        else:
            lines.append("Snapshot:   (disabled)")

        if gif_enabled:
            lines.append(f"Animation:  {output_dir / 'simulation.gif'}")
        else:
            lines.append("Animation:  (disabled)")

        lines.append("=" * 80)

        return "\n".join(lines)

    def generate_trial_report(self, trial: "TrialReport") -> str:
        """Returns formatted text report of a timed trial."""
        lines = self._header("MOWER TRIAL RESULTS")
        lines += [
            f"Grass Cut:             {trial.cut_percent:.1f}%",
            "",
            "MOVES",
            "-" * 40,
            f"Mow Whole Garden:      {trial.mow_moves}",
        ]
        if trial.path_moves is not None:
            lines.append(f"Path A to B:           {trial.path_moves} "
                         f"({trial.path_status.value})")
        else:
            lines.append("Path A to B:           (no waypoints)")

        lines += [
            "",
            "ELAPSED TIME",
            "-" * 40,
            f"Mow Whole Garden:      {trial.mow_time_ms:.1f} ms",
        ]
        if trial.path_time_ms is not None:
            lines.append(f"Path A to B:           {trial.path_time_ms:.1f} ms")
        lines.append("=" * 80)

        return "\n".join(lines)

    def write_trial_report(self, trial: "TrialReport", output_path: Path) -> None:
        """Export the trial report to a text file."""
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(self.generate_trial_report(trial) + "\n")
