# tests/test_config.py
"""Tests for the YAML configuration loader."""

from pathlib import Path

import pytest

from mower_sim.config import default_config, load_config, parse_config
from mower_sim.model.errors import ConfigError

GARDEN_YAML = """
garden:
  rows: 8
  cols: 12
  home: [1, 2]

layout:
  obstacles:
    - type: rectangle
      row: 3
      col: 0
      height: 1
      width: 6
    - type: points
      coords: [[6, 6], [7, 7]]
  random:
    obstacle_percent: 15

waypoints:
  start: [0, 5]
  end: [7, 11]

mower:
  pace: 0.1

simulation:
  mode: path
  seed: 3

export:
  csv: true
  gif: true
  frame_every: 2
"""


def write(tmp_path: Path, text: str) -> Path:
    path = tmp_path / "garden.yaml"
    path.write_text(text)
    return path


def test_load_full_config(tmp_path: Path) -> None:
    config = load_config(write(tmp_path, GARDEN_YAML))

    assert (config.garden.rows, config.garden.cols) == (8, 12)
    assert config.garden.home == (1, 2)
    assert [o.obstacle_type for o in config.layout.obstacles] == ['rectangle', 'points']
    assert config.layout.obstacles[1].data['coords'] == [(6, 6), (7, 7)]
    assert config.layout.random.obstacle_percent == 15
    assert config.waypoints.start == (0, 5)
    assert config.waypoints.end == (7, 11)
    assert config.mower.pace == pytest.approx(0.1)
    assert config.mode == 'path'
    assert config.seed == 3
    assert config.csv_enabled and config.gif_enabled
    assert config.frame_every == 2


def test_empty_file_gives_defaults(tmp_path: Path) -> None:
    config = load_config(write(tmp_path, ""))
    default = default_config()

    assert (config.garden.rows, config.garden.cols) == (50, 50)
    assert config.garden.home == (0, 0)
    assert config.mode == default.mode == 'mow'
    assert config.layout.random is None
    assert config.waypoints.start is None


def test_home_can_be_disabled() -> None:
    config = parse_config({'garden': {'rows': 3, 'cols': 3, 'home': None}})

    assert config.garden.home is None


@pytest.mark.parametrize("raw", [
    {'layout': {'obstacles': [{'type': 'circle', 'row': 0}]}},
    {'layout': {'obstacles': [{'type': 'rectangle', 'row': 0, 'col': 0}]}},
    {'layout': {'random': {'obstacle_percent': 150}}},
    {'simulation': {'mode': 'dance'}},
    {'garden': {'rows': 0, 'cols': 5}},
    {'waypoints': {'start': [1]}},
    {'mower': {'pace': -1}},
])
def test_invalid_configs_are_rejected(raw) -> None:
    with pytest.raises(ConfigError):
        parse_config(raw)


def test_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "absent.yaml")
