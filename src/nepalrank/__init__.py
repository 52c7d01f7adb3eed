"""Harvest GitHub account statistics and publish ranking artifacts."""

__version__ = "0.1.0"
