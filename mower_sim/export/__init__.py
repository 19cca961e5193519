"""I/O package for the mower simulation."""

from .csv_writer import CSVWriter
from .garden_file import GardenSnapshot, save_garden, load_garden
from .visualizer import Visualizer
from .reporter import Reporter

__all__ = [
    'CSVWriter',
    'GardenSnapshot',
    'save_garden',
    'load_garden',
    'Visualizer',
    'Reporter',
]
