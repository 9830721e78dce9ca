"""Catering replanning and operations tooling for airline flights."""

__version__ = "0.1.0"
