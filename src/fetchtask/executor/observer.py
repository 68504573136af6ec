"""Observers notified of an executor's terminal outcome."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..result.errors import RequestError
from ..type_utils import MaybeAwaitable

if TYPE_CHECKING:
    from .executor import RequestExecutor


class ExecutorObserver:
    """
    Base observer. Override the hooks you care about; each may be a plain
    method or a coroutine.

    Hooks run on the executor's dispatch loop, after `on_success` /
    `on_failure` for the same outcome.
    """

    def on_finished(self, executor: "RequestExecutor") -> MaybeAwaitable:
        return None

    def on_failed(self, executor: "RequestExecutor", error: RequestError) -> MaybeAwaitable:
        return None

    def on_cancelled(self, executor: "RequestExecutor") -> MaybeAwaitable:
        return None
