"""Interactive Tower of Hanoi console."""

__version__ = "0.1.0"
