"""Result algebra and error taxonomy."""

from .errors import (
    ErrorKind,
    ParseFailure,
    ParseFailureReason,
    RequestError,
    StatusCodeRejected,
    TransportFailure,
    classify_parse,
    classify_status,
    classify_transport,
)
from .result import Failure, Result, Success

__all__ = [
    "ErrorKind",
    "Failure",
    "ParseFailure",
    "ParseFailureReason",
    "RequestError",
    "Result",
    "StatusCodeRejected",
    "Success",
    "TransportFailure",
    "classify_parse",
    "classify_status",
    "classify_transport",
]
