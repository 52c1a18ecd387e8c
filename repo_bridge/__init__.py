"""Generic file provider and run-in-background scheduling bridge."""

__version__ = "0.1.0"
