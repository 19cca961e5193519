"""Central logging configuration for the mower simulation CLI."""

import logging
import sys


def configure_logging(level: int = logging.WARNING) -> None:
    """
    Configure root logging if no handlers are attached yet.

    Diagnostics go to stderr so they never mix with the report on stdout.
    """
    root = logging.getLogger()

    # Don't duplicate handlers if someone already configured logging.
    if root.handlers:
        return

    handler = logging.StreamHandler(stream=sys.stderr)
    formatter = logging.Formatter(
        fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s"
    )
    handler.setFormatter(formatter)
    root.addHandler(handler)
    root.setLevel(level)
