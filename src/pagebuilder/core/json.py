"""JSON encoding/decoding for stored forests.

orjson encodes, msgspec decodes.
"""

from typing import Any
import json

import msgspec
import orjson


class JSONParseError(Exception):
    """JSON parsing failed."""

    def __init__(self, message: str, original: Exception | None = None) -> None:
        super().__init__(message)
        self.original = original


_decoder = msgspec.json.Decoder()


def loads(data: str | bytes) -> Any:
    """
    Decode JSON text.

    Raises:
        JSONParseError: If the text is not valid JSON
    """
    if isinstance(data, str):
        data = data.encode("utf-8")
    try:
        return _decoder.decode(data)
    except msgspec.DecodeError as e:
        raise JSONParseError(f"Invalid JSON: {e}", e) from e


def dumps(obj: Any, indent: int = 0) -> str:
    """
    Encode an object to JSON text.

    Compact output goes through orjson; indented output through orjson's
    two-space mode, or the stdlib for other widths.
    """
    if indent == 0:
        return orjson.dumps(obj).decode("utf-8")
    if indent == 2:
        return orjson.dumps(obj, option=orjson.OPT_INDENT_2).decode("utf-8")
    return json.dumps(obj, indent=indent, ensure_ascii=False)


def validate_json_depth(obj: Any, max_depth: int, current_depth: int = 0) -> None:
    """
    Reject values nested more than ``max_depth`` containers deep.

    Iterative, so deep input never reaches the interpreter recursion limit.

    Raises:
        JSONParseError: If depth exceeds limit
    """
    stack = [(obj, current_depth)]
    while stack:
        value, depth = stack.pop()
        if depth > max_depth:
            raise JSONParseError(f"JSON nesting depth {depth} exceeds maximum {max_depth}")
        if isinstance(value, dict):
            stack.extend((child, depth + 1) for child in value.values())
        elif isinstance(value, list):
            stack.extend((child, depth + 1) for child in value)
