"""Rental marketplace frontend - favorites state and views."""

__version__ = "0.1.0"
