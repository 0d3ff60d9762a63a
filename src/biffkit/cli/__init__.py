"""
biffkit Command-Line Interface
==============================

- **biffdump**: list, render, classify and round-trip check BIFF record
  streams

The tool is a Click-based CLI application.
"""

__all__ = ["biffdump"]
