"""
Classified request errors.

Errors are values: the executor and the parser hand them to callers through
`on_failure` or a [`Failure`](src/fetchtask/result/result.py:1) and never raise
them across the asynchronous boundary. They subclass `Exception` so callers can
still `raise` them (see `Result.unwrap()`).
"""

from __future__ import annotations

import weakref
from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from ..http.request import Request
    from ..http.response import RawResponse


class ErrorKind(Enum):
    STATUS_CODE_REJECTED = "status_code_rejected"
    TRANSPORT_FAILURE = "transport_failure"
    PARSE_FAILURE = "parse_failure"


class ParseFailureReason(Enum):
    NO_DATA = "no-data"
    INVALID_TYPE = "invalid-type"
    INVALID_DATA = "invalid-data"
    UNKNOWN = "unknown"


def _weak(obj: Any) -> "weakref.ReferenceType[Any] | None":
    return weakref.ref(obj) if obj is not None else None


class RequestError(Exception):
    """
    Base class for every classified failure.

    The response and request are held weakly: they are there for diagnostics
    and resolve to None once the caller lets go of them.
    """

    kind: ErrorKind

    def __init__(
        self,
        message: str,
        *,
        cause: BaseException | None = None,
        response: "RawResponse | None" = None,
        request: "Request | None" = None,
    ):
        super().__init__(message)
        self.cause = cause
        self.__cause__ = cause
        self._response_ref = _weak(response)
        self._request_ref = _weak(request)

    @property
    def response(self) -> "RawResponse | None":
        return self._response_ref() if self._response_ref is not None else None

    @property
    def request(self) -> "Request | None":
        return self._request_ref() if self._request_ref is not None else None

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({str(self)!r})"


class StatusCodeRejected(RequestError):
    """The response status is one the caller marked as a rejection."""

    kind = ErrorKind.STATUS_CODE_REJECTED

    def __init__(self, message: str, *, status_code: int, **kwargs: Any):
        super().__init__(message, **kwargs)
        self.status_code = status_code


class TransportFailure(RequestError):
    """The transport reported an error (connect, timeout, protocol, ...)."""

    kind = ErrorKind.TRANSPORT_FAILURE


class ParseFailure(RequestError):
    """The response body could not be turned into the requested payload."""

    kind = ErrorKind.PARSE_FAILURE

    def __init__(self, message: str, *, reason: ParseFailureReason, **kwargs: Any):
        super().__init__(message, **kwargs)
        self.reason = reason


# --- Classifier ---

def classify_status(response: "RawResponse", request: "Request | None" = None) -> StatusCodeRejected:
    """Build the error for a response whose status is in the rejection set."""
    return StatusCodeRejected(
        f"HTTP {response.status_code} is a rejected status code",
        status_code=response.status_code,
        response=response,
        request=request,
    )


def classify_transport(
    cause: BaseException,
    response: "RawResponse | None" = None,
    request: "Request | None" = None,
) -> TransportFailure:
    """Wrap an error raised or reported by the transport."""
    return TransportFailure(
        f"Transport failed: {cause!r}",
        cause=cause,
        response=response,
        request=request,
    )


_PARSE_MESSAGES: dict[ParseFailureReason, str] = {
    ParseFailureReason.NO_DATA: "response has no data",
    ParseFailureReason.INVALID_TYPE: "payload does not match the requested type",
    ParseFailureReason.INVALID_DATA: "payload bytes are not valid for the encoding",
    ParseFailureReason.UNKNOWN: "payload could not be decoded",
}


def classify_parse(
    reason: ParseFailureReason,
    *,
    cause: BaseException | None = None,
    response: "RawResponse | None" = None,
    detail: str | None = None,
) -> ParseFailure:
    message = _PARSE_MESSAGES[reason]
    if detail:
        message = f"{message}: {detail}"
    return ParseFailure(message, reason=reason, cause=cause, response=response)
