"""HTTP request, response, parsing and transport."""

from .parser import NO_BODY_STATUS_CODES, ResponseShape, parse
from .request import HttpMethod, ParameterEncoding, Request
from .response import RawResponse
from .transport import Disposition, HttpxTransport, Transport, TransportDelegate, TransportFactory

__all__ = [
    "NO_BODY_STATUS_CODES",
    "Disposition",
    "HttpMethod",
    "HttpxTransport",
    "ParameterEncoding",
    "RawResponse",
    "Request",
    "ResponseShape",
    "Transport",
    "TransportDelegate",
    "TransportFactory",
    "parse",
]
