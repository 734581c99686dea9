"""Page-level permission engine."""

__version__ = "0.1.0"
