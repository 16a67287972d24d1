"""Availability and calendar engine for short-term rental listings."""

__version__ = "0.1.0"
