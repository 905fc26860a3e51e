"""Command line interface for liteschema."""

from .main import main

__all__ = ["main"]
