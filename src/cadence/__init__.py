"""Cadence - recurring task and template scheduling engine."""

__version__ = "0.1.0"
