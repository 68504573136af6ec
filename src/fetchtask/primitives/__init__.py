"""Leaf value types shared by the rest of fetchtask."""

from .payload import PayloadKind
from .timeline import ClockTimeline, IncompleteTimeline, LatencyBreakdown

__all__ = [
    "ClockTimeline",
    "IncompleteTimeline",
    "LatencyBreakdown",
    "PayloadKind",
]
