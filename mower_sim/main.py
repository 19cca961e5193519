#!/usr/bin/env python3
"""
Grid Lawn Mower Simulation

Mows every reachable cell of a garden, or drives the mower from point A to
point B with a greedy search that backtracks out of dead ends.

Usage:
    python -m mower_sim.main --config configs/garden.yaml [options]

Examples:
    python -m mower_sim.main --config configs/garden.yaml
    python -m mower_sim.main --config configs/garden.yaml --mode path --gif
    python -m mower_sim.main --load gardens/maze.garden --mode trial --quiet
    python -m mower_sim.main --config configs/random.yaml --seed 42 --save out.garden
"""

import argparse
import logging
import sys
from pathlib import Path

from mower_sim.config import MODES, default_config, load_config
from mower_sim.export.csv_writer import CSVWriter
from mower_sim.export.garden_file import GardenSnapshot, load_garden, save_garden
from mower_sim.export.reporter import Reporter
from mower_sim.export.visualizer import Visualizer
from mower_sim.logging_config import configure_logging
from mower_sim.model.engine import MowerSimulation
from mower_sim.model.errors import MowerSimError, RunCancelled
from mower_sim.model.pacing import NullPacer, SleepPacer

logger = logging.getLogger(__name__)


def parse_args(argv=None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description='Grid Lawn Mower Simulation',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    python -m mower_sim.main --config configs/garden.yaml
    python -m mower_sim.main --config configs/garden.yaml --mode path --gif
    python -m mower_sim.main --load gardens/maze.garden --mode trial --quiet
    python -m mower_sim.main --config configs/random.yaml --seed 42 --save out.garden
        """
    )

    # Garden sources
    parser.add_argument('--config', type=Path, default=None,
                        help='Path to YAML configuration file (default: empty 50x50 garden)')
    parser.add_argument('--load', type=Path, default=None,
                        help='Load the garden layout from a .garden file')
    parser.add_argument('--save', type=Path, default=None,
                        help='Save the garden layout to a .garden file after the run')

    # Optional overrides
    parser.add_argument('--mode', choices=MODES, default=None,
                        help='mow the whole garden, find a path A->B, or run a timed trial')
    parser.add_argument('--pace', type=float, default=None,
                        help='Seconds to wait after each move')
    parser.add_argument('--out-dir', type=Path, default=Path('./output'),
                        help='Output directory for exports (default: ./output)')

    # Export toggles
    parser.add_argument('--csv', dest='csv', action='store_true', default=None,
                        help='Enable CSV event log')
    parser.add_argument('--no-csv', dest='csv', action='store_false',
                        help='Disable CSV event log (default)')

    parser.add_argument('--snapshot', dest='snapshot', action='store_true', default=None,
                        help='Enable final snapshot (default)')
    parser.add_argument('--no-snapshot', dest='snapshot', action='store_false',
                        help='Disable final snapshot')

    parser.add_argument('--gif', action='store_true', default=False,
                        help='Enable GIF animation export')

    parser.add_argument('--quiet', action='store_true', default=False,
                        help='Suppress stdout output')
    parser.add_argument('--verbose', action='store_true', default=False,
                        help='Log algorithm diagnostics to stderr')

    parser.add_argument('--seed', type=int, default=None,
                        help='Random seed for reproducible random layouts')

    return parser.parse_args(argv)


def main(argv=None) -> int:
    """Main entry point."""
    args = parse_args(argv)
    configure_logging(logging.DEBUG if args.verbose else logging.WARNING)

    # Load configuration
    try:
        config = load_config(args.config) if args.config else default_config()
    except FileNotFoundError:
        print(f"Error: Configuration file not found: {args.config}", file=sys.stderr)
        return 1
    except Exception as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        return 1

    # Apply CLI overrides
    if args.mode is not None:
        config.mode = args.mode
    if args.pace is not None:
        config.mower.pace = max(0.0, args.pace)
    if args.csv is not None:
        config.csv_enabled = args.csv
    if args.snapshot is not None:
        config.snapshot_enabled = args.snapshot
    if args.gif:
        config.gif_enabled = True
    config.quiet = args.quiet
    config.verbose = args.verbose
    if args.seed is not None:
        config.seed = args.seed
    config.out_dir = args.out_dir

    pacer = SleepPacer() if config.mower.pace > 0 else NullPacer()

    # Initialize simulation
    try:
        if args.load:
            snapshot = load_garden(args.load)
            config.waypoints.start = snapshot.waypoint_start
            config.waypoints.end = snapshot.waypoint_end
            sim = MowerSimulation(config, grid=snapshot.grid, pacer=pacer)
        else:
            sim = MowerSimulation(config, pacer=pacer)
    except MowerSimError as e:
        print(f"Error setting up garden: {e}", file=sys.stderr)
        return 1

    if not config.quiet:
        print(f"Initializing simulation...")
        print(f"  Garden: {sim.grid.rows}x{sim.grid.cols}")
        print(f"  Mode: {config.mode}")
        print(f"  Pace: {config.mower.pace}s per move")

    # Initialize exporters
    csv_writer = None
    if config.csv_enabled:
        csv_writer = CSVWriter(config.out_dir / 'events.csv')
        csv_writer.open()
        sim.grid.add_listener(csv_writer)

    visualizer = Visualizer(sim.grid, frame_every=config.frame_every)
    visualizer.buffering = config.gif_enabled and config.mode != 'trial'
    sim.grid.add_listener(visualizer)

    reporter = Reporter(str(args.config) if args.config else None, config.seed)

    if not config.quiet:
        print(f"\nRunning simulation...")

    exit_code = 0
    trial = None
    try:
        if config.mode == 'mow':
            result = sim.mow()
            if not config.quiet:
                print(f"  Mowed {result.cells_visited} cells in {result.moves} moves")
        elif config.mode == 'path':
            result = sim.find_path()
            if not config.quiet:
                if result.reached:
                    print(f"  Reached {result.target} in {result.moves} moves")
                else:
                    print(f"  Could not reach {result.target}; "
                          f"stopped at {result.position} after {result.moves} moves")
        else:
            trial = sim.run_trial()
    except (KeyboardInterrupt, RunCancelled):
        sim.mower.cancel()
        if not config.quiet:
            print("\nSimulation interrupted by user.")
    except MowerSimError as e:
        print(f"Error: {e}", file=sys.stderr)
        exit_code = 1

    # Cleanup and final exports
    if csv_writer:
        sim.grid.remove_listener(csv_writer)
        csv_writer.close()
        if not config.quiet:
            print(f"\nCSV saved: {config.out_dir / 'events.csv'}")

    if config.snapshot_enabled:
        snapshot_path = config.out_dir / 'final_state.png'
        visualizer.save_snapshot(snapshot_path)
        if not config.quiet:
            print(f"Snapshot saved: {snapshot_path}")

    if visualizer.buffering:
        visualizer.buffer_frame()
        gif_path = config.out_dir / 'simulation.gif'
        if not config.quiet:
            print(f"Generating GIF ({len(visualizer.frames)} frames)...")
        visualizer.generate_gif(gif_path, fps=10)
        if not config.quiet:
            print(f"Animation saved: {gif_path}")

    if args.save:
        sim.reset()
        try:
            saved = save_garden(args.save, GardenSnapshot(
                grid=sim.grid,
                waypoint_start=sim.waypoint_start,
                waypoint_end=sim.waypoint_end,
            ))
        except MowerSimError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1
        if not config.quiet:
            print(f"Garden saved: {saved}")

    # Print summary report
    if trial is not None:
        reporter.write_trial_report(trial, config.out_dir / 'trial_results.txt')
        if not config.quiet:
            print(reporter.generate_trial_report(trial))
    elif not config.quiet and exit_code == 0:
        report = reporter.generate_summary(
            sim.get_summary(),
            config.out_dir,
            config.csv_enabled,
            config.snapshot_enabled,
            visualizer.buffering
        )
        print(report)

    logger.debug("Final summary: %s", sim.get_summary())
    return exit_code


if __name__ == '__main__':
    sys.exit(main())
