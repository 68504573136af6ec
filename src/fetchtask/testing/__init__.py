"""Helpers for testing code built on fetchtask."""

from .helpers import RecordingObserver, ScriptedTransport, wait_for, with_timeout

__all__ = [
    "RecordingObserver",
    "ScriptedTransport",
    "wait_for",
    "with_timeout",
]
