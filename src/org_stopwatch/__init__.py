"""Org Stopwatch - terminal time tracking with nested subgoals."""

__version__ = "0.1.0"
