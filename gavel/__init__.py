"""Gavel - franchise auction simulator."""

__version__ = "0.1.0"
