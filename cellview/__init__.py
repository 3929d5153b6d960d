"""Widgets, events and an event loop for user interfaces on a cell-based screen."""

__version__ = "0.1.0"
__all__ = ["__version__"]