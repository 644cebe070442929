"""Department and job records with JSON conversion, validation and SQLite storage."""

__version__ = "0.1.0"
__all__ = ["__version__"]