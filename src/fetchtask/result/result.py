"""
Result algebra: `Success(value, kind) | Failure(error)`.

Both sides expose the same pure projections (`is_success`, `value`, `error`,
`kind`) so callers can branch either with `match` or with attribute checks.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, NoReturn, Union
from typing_extensions import TypeVar

from ..primitives.payload import PayloadKind
from .errors import RequestError


T = TypeVar("T", default=Any)


@dataclass(frozen=True, slots=True)
class Success(Generic[T]):
    value: T
    kind: PayloadKind

    @property
    def is_success(self) -> bool:
        return True

    @property
    def error(self) -> None:
        return None

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True, slots=True)
class Failure:
    error: RequestError

    @property
    def is_success(self) -> bool:
        return False

    @property
    def value(self) -> None:
        return None

    @property
    def kind(self) -> PayloadKind:
        return PayloadKind.ERROR

    def unwrap(self) -> NoReturn:
        """Raise the carried error in the caller's own context."""
        raise self.error


Result = Union[Success[T], Failure]
