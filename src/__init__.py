"""tiles2db: load a z/x/y tile directory into a SQLite database."""

__version__ = "0.1.0"
