"""
Response parsing: `RawResponse` → `Result`.

Checks run in a fixed order: rejected status, missing body, no-body status,
then decoding for the requested shape. Nothing here raises; every failure is
returned as a [`Failure`](src/fetchtask/result/result.py:1).
"""

from __future__ import annotations

import codecs
import json
from enum import Enum
from typing import TYPE_CHECKING, Any

from ..primitives.payload import PayloadKind
from ..result.errors import ParseFailureReason, classify_parse, classify_status
from ..result.result import Failure, Result, Success

if TYPE_CHECKING:
    from .response import RawResponse


# Statuses that never carry a body.
NO_BODY_STATUS_CODES: frozenset[int] = frozenset({204, 205})


class ResponseShape(Enum):
    OBJECT = "object"
    ARRAY = "array"
    STRING = "string"

    @property
    def payload_kind(self) -> PayloadKind:
        match self:
            case ResponseShape.OBJECT:
                return PayloadKind.OBJECT_MAP
            case ResponseShape.ARRAY:
                return PayloadKind.ARRAY_OF_MAPS
            case ResponseShape.STRING:
                return PayloadKind.STRING

    def empty_success(self) -> Any:
        """Canonical value for a no-body status. A new object on every call."""
        match self:
            case ResponseShape.OBJECT:
                return {"success": True}
            case ResponseShape.ARRAY:
                return [{"success": True}]
            case ResponseShape.STRING:
                return "success"


def parse(
    response: "RawResponse",
    shape: ResponseShape,
    encoding: str | None = None,
) -> Result[Any]:
    """
    Parse a response into the payload described by `shape`.

    `encoding` is only used for `ResponseShape.STRING`.
    """
    if response.status_code in response.rejected_status_codes:
        return Failure(classify_status(response))

    no_body = response.status_code in NO_BODY_STATUS_CODES
    if response.data is None and not no_body:
        return Failure(classify_parse(ParseFailureReason.NO_DATA, response=response))

    if no_body:
        return Success(shape.empty_success(), shape.payload_kind)

    assert response.data is not None
    match shape:
        case ResponseShape.OBJECT | ResponseShape.ARRAY:
            return _parse_json(response, response.data, shape)
        case ResponseShape.STRING:
            return _parse_string(response, response.data, encoding)


def _parse_json(response: "RawResponse", data: bytes, shape: ResponseShape) -> Result[Any]:
    try:
        decoded = json.loads(data)
    except (ValueError, RecursionError) as e:
        # JSONDecodeError, UnicodeDecodeError and overly nested documents land here
        return Failure(classify_parse(ParseFailureReason.UNKNOWN, cause=e, response=response))

    match (shape, decoded):
        case (ResponseShape.OBJECT, dict()):
            return Success(decoded, PayloadKind.OBJECT_MAP)
        case (ResponseShape.ARRAY, list()) if all(isinstance(item, dict) for item in decoded):
            return Success(decoded, PayloadKind.ARRAY_OF_MAPS)
        case _:
            return Failure(classify_parse(
                ParseFailureReason.INVALID_TYPE,
                response=response,
                detail=f"expected {shape.value}, got {type(decoded).__name__}",
            ))


def _parse_string(response: "RawResponse", data: bytes, encoding: str | None) -> Result[str]:
    if not encoding:
        return Failure(classify_parse(
            ParseFailureReason.INVALID_TYPE, response=response, detail="no text encoding given"
        ))
    try:
        codecs.lookup(encoding)
    except LookupError as e:
        return Failure(classify_parse(
            ParseFailureReason.INVALID_TYPE, cause=e, response=response,
            detail=f"unknown encoding {encoding!r}",
        ))

    try:
        text = data.decode(encoding)
    except LookupError as e:
        # Binary codecs (base64, zlib, rot13...) pass lookup but are not text encodings
        return Failure(classify_parse(
            ParseFailureReason.INVALID_TYPE, cause=e, response=response,
            detail=f"{encoding!r} is not a text encoding",
        ))
    except UnicodeError as e:
        return Failure(classify_parse(ParseFailureReason.INVALID_DATA, cause=e, response=response))
    return Success(text, PayloadKind.STRING)
