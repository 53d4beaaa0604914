"""Dependency-aware todo agenda."""

__version__ = "0.1.0"
