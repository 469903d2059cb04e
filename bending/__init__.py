"""Bending Arena: turn-based elemental duel engine."""
__version__ = "0.3.0"
