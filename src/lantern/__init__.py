"""Lantern: anonymous confession board with a moderated publishing queue."""

__version__ = "0.1.0"
