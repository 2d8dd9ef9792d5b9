"""Overtimer: a countdown timer that keeps counting into overtime."""

__version__ = "0.1.0"
