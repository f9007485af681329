"""Workout selection analysis and confidence scoring."""

__version__ = "1.0.0"
