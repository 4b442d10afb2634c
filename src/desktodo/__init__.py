"""Local persistence backend for the desktop to-do app."""

__version__ = "0.1.0"
