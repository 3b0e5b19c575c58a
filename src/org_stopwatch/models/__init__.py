"""Data models for Org Stopwatch."""

from .entry import OrgEntry
from .session import Session
from .split import ClosedSpan, OpenSpan, SplitNode

__all__ = ["Session", "SplitNode", "OpenSpan", "ClosedSpan", "OrgEntry"]
