"""Command-line interface for prsum.

This module provides the CLI functionality for pull request summarization.
"""

from .main import main, run

__all__ = ["main", "run"]
