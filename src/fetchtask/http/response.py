"""Raw response accumulated by the executor."""

from __future__ import annotations

from typing import Any, Mapping

from ..primitives.timeline import ClockTimeline
from ..result.result import Result
from .parser import ResponseShape, parse


HeaderMap = dict[str, str]


def _normalize_headers(headers: Mapping[str, str] | None) -> HeaderMap:
    if not headers:
        return {}
    return {k.lower(): v for k, v in headers.items()}


class RawResponse:
    """
    Status, headers and bytes of one response.

    Created by the executor when headers arrive. The body is attached once, when
    the transport signals completion; after that the response is frozen and
    belongs to the caller.
    """

    def __init__(
        self,
        status_code: int,
        headers: Mapping[str, str] | None = None,
        *,
        url: str | None = None,
        rejected_status_codes: frozenset[int] = frozenset(),
    ):
        self.status_code = status_code
        self.headers: HeaderMap = _normalize_headers(headers)
        self.url = url
        self.rejected_status_codes = frozenset(rejected_status_codes)
        self.timeline = ClockTimeline()
        self._data: bytes | None = None
        self._frozen = False

    @property
    def data(self) -> bytes | None:
        return self._data

    @property
    def frozen(self) -> bool:
        return self._frozen

    @property
    def is_rejected(self) -> bool:
        return self.status_code in self.rejected_status_codes

    @property
    def charset(self) -> str | None:
        """Charset named in the Content-Type header, if any."""
        content_type = self.headers.get("content-type", "")
        for part in content_type.split(";")[1:]:
            key, _, value = part.strip().partition("=")
            if key.lower() == "charset" and value:
                return value.strip().strip('"\'')
        return None

    def freeze(self, data: bytes | None = None, timeline: ClockTimeline | None = None) -> None:
        """Attach the final body and timeline. Can only happen once."""
        if self._frozen:
            raise RuntimeError("RawResponse is already frozen")
        if timeline is not None:
            self.timeline = timeline
        self._data = bytes(data) if data is not None else None
        self._frozen = True

    # --- Parsing shortcuts ---

    def json(self, shape: ResponseShape = ResponseShape.OBJECT) -> Result[Any]:
        return parse(self, shape)

    def text(self, encoding: str | None = None) -> Result[str]:
        return parse(self, ResponseShape.STRING, encoding=encoding or self.charset)

    def __repr__(self) -> str:
        desc: list[str] = [str(self.headers), str(self.status_code)]
        if self.url:
            desc.append(self.url)
        return f"RawResponse({' : '.join(desc)})"
