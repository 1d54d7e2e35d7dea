"""
Edit outcome values.

Store mutators never raise for a bad id or type; they return a Result so that
callers who care can inspect why nothing happened, and callers who don't can
ignore the return value.
"""

from dataclasses import dataclass
from enum import Enum
from typing import TypeVar

from returns.result import Failure, Result


T = TypeVar("T")


class EditErrorCode(str, Enum):
    """Why an edit did nothing"""
    NOT_FOUND = "not_found"
    UNKNOWN_TYPE = "unknown_type"
    INVALID_VALUE = "invalid_value"


@dataclass(frozen=True)
class EditError:
    """Details of a rejected edit (for Result pattern)."""

    code: EditErrorCode
    message: str
    target: str | None = None


EditResult = Result[T, EditError]


def not_found(node_id: str, what: str = "Node") -> Failure[EditError]:
    return Failure(EditError(EditErrorCode.NOT_FOUND, f"{what} '{node_id}' not found", node_id))


def unknown_type(type_: object) -> Failure[EditError]:
    tag = getattr(type_, "value", type_)
    return Failure(EditError(EditErrorCode.UNKNOWN_TYPE, f"Unknown component type '{tag}'", str(tag)))


def invalid_value(node_id: str, message: str) -> Failure[EditError]:
    return Failure(EditError(EditErrorCode.INVALID_VALUE, message, node_id))
