"""Pocket Quest: a small tile-based monster exploration and battle game."""

__version__ = "0.1.0"
