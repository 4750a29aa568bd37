"""Browse, edit and export GitHub issues used as requirements."""

__version__ = "0.1.0"
