"""Grid lawn mower simulation: exhaustive coverage and greedy path seeking."""

__version__ = "0.1.0"
