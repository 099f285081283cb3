"""Server-rendered event log browser."""

__version__ = "0.1.0"
