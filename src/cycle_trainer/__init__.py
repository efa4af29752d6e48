"""Cyclic workout schedule and activity analytics engine."""

__version__ = "0.1.0"
