"""Configuration dataclasses and YAML loader for the mower simulation."""

from dataclasses import dataclass, field
from typing import List, Tuple, Dict, Any, Optional
from pathlib import Path
import yaml

from .model.errors import ConfigError

MODES = ("mow", "path", "trial")

# Garden editor defaults
DEFAULT_ROWS = 50
DEFAULT_COLS = 50
DEFAULT_OBSTACLE_PERCENT = 20


@dataclass
class GardenConfig:
    rows: int = DEFAULT_ROWS
    cols: int = DEFAULT_COLS
    home: Optional[Tuple[int, int]] = (0, 0)


@dataclass
class ObstacleSpec:
    obstacle_type: str  # "rectangle" or "points"
    data: Dict[str, Any]


@dataclass
class RandomLayoutSpec:
    obstacle_percent: float = DEFAULT_OBSTACLE_PERCENT
    waypoints: bool = True


@dataclass
class LayoutConfig:
    obstacles: List[ObstacleSpec] = field(default_factory=list)
    random: Optional[RandomLayoutSpec] = None


@dataclass
class WaypointConfig:
    start: Optional[Tuple[int, int]] = None
    end: Optional[Tuple[int, int]] = None


@dataclass
class MowerConfig:
    pace: float = 0.0  # seconds per move


@dataclass
class SimulationConfig:
    garden: GardenConfig = field(default_factory=GardenConfig)
    layout: LayoutConfig = field(default_factory=LayoutConfig)
    waypoints: WaypointConfig = field(default_factory=WaypointConfig)
    mower: MowerConfig = field(default_factory=MowerConfig)
    mode: str = "mow"

    # Export flags (can be overridden by CLI)
    csv_enabled: bool = False
    snapshot_enabled: bool = True
    gif_enabled: bool = False
    frame_every: int = 5
    quiet: bool = False
    verbose: bool = False
    seed: Optional[int] = None
    out_dir: Path = field(default_factory=lambda: Path("./output"))


def _coord(raw: Any, name: str) -> Tuple[int, int]:
    """Parse a [row, col] pair."""
    try:
        row, col = raw
        return int(row), int(col)
    except (TypeError, ValueError):
        raise ConfigError(f"{name} must be a [row, col] pair, got {raw!r}")


def _optional_coord(raw: Any, name: str) -> Optional[Tuple[int, int]]:
    if raw is None:
        return None
    return _coord(raw, name)


def _parse_obstacles(obstacles_raw: List[Dict]) -> List[ObstacleSpec]:
    """Parse obstacle specifications from raw YAML data."""
    obstacles = []
    for o in obstacles_raw:
        obstacle_type = o.get('type', 'rectangle')
        try:
            if obstacle_type == 'rectangle':
                data = {
                    'row': o['row'],
                    'col': o['col'],
                    'height': o['height'],
                    'width': o['width']
                }
            elif obstacle_type == 'points':
                data = {'coords': [_coord(c, 'obstacle point') for c in o['coords']]}
            else:
                raise ConfigError(f"Unknown obstacle type: {obstacle_type}")
        except KeyError as e:
            raise ConfigError(f"Obstacle of type {obstacle_type} is missing {e}")
        obstacles.append(ObstacleSpec(obstacle_type=obstacle_type, data=data))
    return obstacles


def _parse_random(random_raw: Optional[Dict]) -> Optional[RandomLayoutSpec]:
    """Parse the optional random layout section."""
    if random_raw is None:
        return None
    percent = random_raw.get('obstacle_percent', DEFAULT_OBSTACLE_PERCENT)
    if not 0 <= percent <= 100:
        raise ConfigError(f"obstacle_percent must be within 0-100, got {percent}")
    return RandomLayoutSpec(
        obstacle_percent=percent,
        waypoints=random_raw.get('waypoints', True)
    )


def default_config() -> SimulationConfig:
    """Empty 50x50 garden with home in the top-left corner."""
    return SimulationConfig()


def parse_config(raw: Dict[str, Any]) -> SimulationConfig:
    """Build a SimulationConfig from already-parsed YAML data."""
    if not isinstance(raw, dict):
        raise ConfigError("Configuration root must be a mapping")

    # Parse garden config
    garden_raw = raw.get('garden', {})
    garden = GardenConfig(
        rows=garden_raw.get('rows', DEFAULT_ROWS),
        cols=garden_raw.get('cols', DEFAULT_COLS),
        home=_optional_coord(garden_raw.get('home', [0, 0]), 'garden.home')
    )
    if garden.rows < 1 or garden.cols < 1:
        raise ConfigError(
            f"Garden must be at least 1x1, got {garden.rows}x{garden.cols}"
        )

    # Parse layout
    layout_raw = raw.get('layout', {})
    layout = LayoutConfig(
        obstacles=_parse_obstacles(layout_raw.get('obstacles', [])),
        random=_parse_random(layout_raw.get('random'))
    )

    # Parse waypoints
    waypoints_raw = raw.get('waypoints', {})
    waypoints = WaypointConfig(
        start=_optional_coord(waypoints_raw.get('start'), 'waypoints.start'),
        end=_optional_coord(waypoints_raw.get('end'), 'waypoints.end')
    )

    # Parse mower config
    mower_raw = raw.get('mower', {})
    mower = MowerConfig(pace=float(mower_raw.get('pace', 0.0)))
    if mower.pace < 0:
        raise ConfigError(f"mower.pace must be non-negative, got {mower.pace}")

    # Parse simulation config
    sim_raw = raw.get('simulation', {})
    mode = sim_raw.get('mode', 'mow')
    if mode not in MODES:
        raise ConfigError(f"Unknown simulation mode: {mode}")

    # Parse export config (optional)
    export_raw = raw.get('export', {})

    return SimulationConfig(
        garden=garden,
        layout=layout,
        waypoints=waypoints,
        mower=mower,
        mode=mode,
        csv_enabled=export_raw.get('csv', False),
        snapshot_enabled=export_raw.get('snapshot', True),
        gif_enabled=export_raw.get('gif', False),
        frame_every=max(1, int(export_raw.get('frame_every', 5))),
        seed=sim_raw.get('seed')
    )


def load_config(config_path: Path) -> SimulationConfig:
    """Load and validate YAML configuration file."""
    with open(config_path) as f:
        raw = yaml.safe_load(f)
    return parse_config(raw or {})
