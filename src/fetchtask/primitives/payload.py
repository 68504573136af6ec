"""Closed set of payload kinds a result can carry."""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..result.errors import RequestError


class PayloadKind(Enum):
    """Every value shape a [`Result`](src/fetchtask/result/result.py:1) may hold."""
    OBJECT_MAP = "object"      # dict[str, Any]
    ARRAY_OF_MAPS = "array"    # list[dict[str, Any]]
    STRING = "string"          # str
    ERROR = "error"            # RequestError
    EMPTY = "empty"            # None

    @property
    def shape_tag(self) -> str:
        return self.value

    def internal_error(self) -> "RequestError | None":
        """Hook for kinds that can fail on their own; none of the built-in ones do."""
        return None
