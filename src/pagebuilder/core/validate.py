"""Input validation at the save/load boundary."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .json import JSONParseError, loads, validate_json_depth


MAX_NAME_LENGTH = 200
MAX_DESCRIPTION_LENGTH = 2_000


class ValidationError(Exception):
    """Validation failed."""

    pass


class RequestValidator(BaseModel):
    """Base validator with strict configuration."""

    model_config = ConfigDict(strict=True, validate_assignment=True, extra="forbid", frozen=True)


class SaveRequest(RequestValidator):
    """Validated project save request."""

    name: str = Field(min_length=1, max_length=MAX_NAME_LENGTH)
    description: str | None = Field(default=None, max_length=MAX_DESCRIPTION_LENGTH)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Ensure name is non-empty after stripping."""
        stripped = v.strip()
        if not stripped:
            raise ValueError("Name cannot be empty")
        return stripped


class TemplateRequest(SaveRequest):
    """Validated template creation request."""

    thumbnail: str | None = Field(default=None)


def validate_json_size(data: str, max_size: int, name: str = "JSON") -> None:
    """
    Validate encoded size of a JSON document.

    Raises:
        ValidationError: If size exceeds limit
    """
    size = len(data.encode("utf-8"))
    if size > max_size:
        raise ValidationError(f"{name} size {size} bytes exceeds maximum {max_size} bytes")


def forest_json_depth(max_tree_depth: int, max_prop_depth: int) -> int:
    """
    JSON nesting allowed for a forest within the node and props limits.

    A node at level ``k`` is an object at JSON depth ``2k - 1``; its props
    object sits one deeper.
    """
    return 2 * max_tree_depth + max_prop_depth


def validate_tree_depth(data: list[Any], max_depth: int) -> None:
    """
    Reject decoded forests with components nested past ``max_depth`` levels.

    Raises:
        ValidationError: If a node sits deeper than the limit
    """
    stack = [(item, 1) for item in data]
    while stack:
        item, depth = stack.pop()
        if depth > max_depth:
            raise ValidationError(f"Component nesting depth {depth} exceeds maximum {max_depth}")
        children = item.get("children") if isinstance(item, dict) else None
        if isinstance(children, list):
            stack.extend((child, depth + 1) for child in children)


def parse_forest_json(text: str, max_size: int, max_tree_depth: int, max_prop_depth: int) -> list[Any]:
    """
    Decode a stored forest into plain JSON values.

    Raises:
        ValidationError: On oversize, malformed, too deeply nested or non-array input
    """
    validate_json_size(text, max_size, "Forest")
    try:
        data = loads(text)
        validate_json_depth(data, forest_json_depth(max_tree_depth, max_prop_depth))
    except JSONParseError as e:
        raise ValidationError(str(e)) from e

    if not isinstance(data, list):
        raise ValidationError(f"Forest must be a JSON array, got {type(data).__name__}")
    validate_tree_depth(data, max_tree_depth)
    return data
