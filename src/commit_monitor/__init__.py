"""Commit monitor — review commit ranges and report back to pull requests."""

__version__ = "0.1.0"
