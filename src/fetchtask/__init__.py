"""Asynchronous HTTP request tasks with typed results."""

from .config import TransportConfig
from .primitives.payload import PayloadKind
from .primitives.timeline import ClockTimeline, IncompleteTimeline, LatencyBreakdown
from .result.errors import (
    ErrorKind,
    ParseFailure,
    ParseFailureReason,
    RequestError,
    StatusCodeRejected,
    TransportFailure,
)
from .result.result import Failure, Result, Success
from .http.request import HttpMethod, ParameterEncoding, Request
from .http.response import RawResponse
from .http.parser import NO_BODY_STATUS_CODES, ResponseShape, parse
from .http.transport import Disposition, HttpxTransport, Transport, TransportDelegate
from .executor.executor import ExecutorState, RequestExecutor
from .executor.observer import ExecutorObserver

__all__ = [
    # Configuration
    "TransportConfig",
    # Timing
    "ClockTimeline",
    "IncompleteTimeline",
    "LatencyBreakdown",
    # Results
    "PayloadKind",
    "Result",
    "Success",
    "Failure",
    # Errors
    "ErrorKind",
    "ParseFailureReason",
    "RequestError",
    "StatusCodeRejected",
    "TransportFailure",
    "ParseFailure",
    # HTTP
    "HttpMethod",
    "ParameterEncoding",
    "Request",
    "RawResponse",
    "ResponseShape",
    "NO_BODY_STATUS_CODES",
    "parse",
    "Disposition",
    "Transport",
    "TransportDelegate",
    "HttpxTransport",
    # Execution
    "ExecutorState",
    "RequestExecutor",
    "ExecutorObserver",
]
