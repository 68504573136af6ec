"""Request value type consumed by the executor and the transport."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping

from ..config import TransportConfig


class HttpMethod(Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"


class ParameterEncoding(Enum):
    URL = "url"    # query string for GET/DELETE, form body otherwise
    JSON = "json"  # JSON body


# Methods whose URL-encoded parameters go in the query string.
_QUERY_METHODS = frozenset({HttpMethod.GET, HttpMethod.DELETE})


@dataclass(frozen=True)
class Request:
    """
    One HTTP call description.

    Attributes:
        url: absolute URL
        method: HTTP method
        parameters: request parameters, encoded according to `encoding`
        encoding: how `parameters` are put on the wire
        headers: per-request headers, merged over `config.headers`
        rejected_status_codes: statuses reported as failures regardless of body
        config: transport options for this request only
    """
    url: str
    method: HttpMethod = HttpMethod.GET
    parameters: Mapping[str, Any] | None = None
    encoding: ParameterEncoding = ParameterEncoding.URL
    headers: Mapping[str, str] = field(default_factory=dict)
    rejected_status_codes: frozenset[int] = frozenset()
    config: TransportConfig = field(default_factory=TransportConfig)

    def __post_init__(self):
        if not self.url:
            raise ValueError("Request url cannot be empty")
        # Accept any iterable of ints from callers, store it frozen.
        object.__setattr__(self, "rejected_status_codes", frozenset(self.rejected_status_codes))

    def is_rejected(self, status_code: int) -> bool:
        return status_code in self.rejected_status_codes

    def httpx_arguments(self) -> dict[str, Any]:
        """Keyword arguments for `httpx.AsyncClient.stream()`."""
        kwargs: dict[str, Any] = {
            "method": self.method.value,
            "url": self.url,
            "headers": dict(self.headers),
        }
        if not self.parameters:
            return kwargs

        match self.encoding:
            case ParameterEncoding.JSON:
                kwargs["json"] = dict(self.parameters)
            case ParameterEncoding.URL if self.method in _QUERY_METHODS:
                kwargs["params"] = dict(self.parameters)
            case ParameterEncoding.URL:
                kwargs["data"] = dict(self.parameters)
        return kwargs
