"""Typing helpers for callbacks that may or may not be coroutines."""

import inspect
from typing import Any, Awaitable, TypeAlias


MaybeAwaitable: TypeAlias = Awaitable[Any] | Any


async def maybe_await(value: MaybeAwaitable) -> Any:
    if inspect.isawaitable(value):
        return await value
    return value
