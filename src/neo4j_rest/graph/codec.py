"""
Typed JSON codec for request and response bodies.

encode() turns any caller-supplied property value (dict, pydantic model,
dataclass, primitive) into a JSON body; None becomes an empty body because
the REST API rejects a literal null for node/relationship creation.

decode() validates a JSON body against a caller-chosen shape, e.g.
``list[Row]`` for Cypher rows or a pydantic model for node properties.
Shape mismatches surface as DataError.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Any, TypeVar

from pydantic import TypeAdapter, ValidationError
from pydantic_core import PydanticSerializationError, to_json

from neo4j_rest.graph.exceptions import DataError

R = TypeVar("R")

# Property type used when callers do not choose one.
DEFAULT_PROPERTIES = dict[str, Any]


@lru_cache(maxsize=256)
def _adapter(shape: Any) -> TypeAdapter[Any]:
    return TypeAdapter(shape)


def encode(value: Any) -> bytes:
    """Serialize a value to a JSON body.

    Args:
        value: Value to serialize, or None for "no body"

    Returns:
        UTF-8 JSON bytes, or b"" when value is None

    Raises:
        DataError: If the value is not JSON serializable
    """
    if value is None:
        return b""
    try:
        return to_json(value, by_alias=True)
    except (PydanticSerializationError, ValueError) as e:
        raise DataError(f"Cannot encode {type(value).__name__} as JSON: {e}", cause=e) from e


def decode(body: bytes | str, shape: type[R] | Any) -> R:
    """Deserialize a JSON body into the requested shape.

    Args:
        body: Raw response body
        shape: Target type (any type pydantic can validate)

    Returns:
        The validated value

    Raises:
        DataError: If the body is not valid JSON or does not match shape
    """
    try:
        return _adapter(shape).validate_json(body)
    except ValidationError as e:
        raise DataError(f"Response does not match {shape!r}: {e}", cause=e) from e
