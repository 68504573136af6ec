"""Asynchronous request execution."""

from .executor import ExecutorState, RequestExecutor
from .observer import ExecutorObserver

__all__ = [
    "ExecutorObserver",
    "ExecutorState",
    "RequestExecutor",
]
