# src/version.py — v1
"""Package version."""

__version__ = "2.0.0"
