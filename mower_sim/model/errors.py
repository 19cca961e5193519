"""Exception hierarchy for the mower simulation."""


class MowerSimError(Exception):
    """Base class for all mower simulation errors."""


class OutOfBoundsError(MowerSimError, IndexError):
    """A cell coordinate lies outside the garden."""

    def __init__(self, row: int, col: int, rows: int, cols: int):
        super().__init__(
            f"Cell ({row}, {col}) is outside the {rows}x{cols} garden"
        )
        self.row = row
        self.col = col


class MalformedGridError(MowerSimError, ValueError):
    """Garden dimensions are invalid or rows have different lengths."""


class RunCancelled(MowerSimError):
    """A running traversal was cancelled from outside."""


class GardenFileError(MowerSimError):
    """A garden snapshot file could not be read or written."""


class ConfigError(MowerSimError, ValueError):
    """The YAML configuration is invalid."""
