"""Core utilities and infrastructure."""

from .config import Settings, get_settings
from .validate import (
    ValidationError,
    SaveRequest,
    TemplateRequest,
    validate_json_size,
    parse_forest_json,
    validate_tree_depth,
)
from .logging_config import configure_logging, configure_from_settings, get_logger, LogContext
from .json import dumps, loads, JSONParseError, validate_json_depth
from .hash import Algorithm, hash_string, hash_bytes


def create_container(settings: Settings | None = None):
    """Create dependency injection container (lazy import to avoid circular deps)."""
    from .container import create_container as _create_container

    return _create_container(settings)


__all__ = [
    # Config
    "Settings",
    "get_settings",
    # Validation
    "ValidationError",
    "SaveRequest",
    "TemplateRequest",
    "validate_json_size",
    "parse_forest_json",
    "validate_tree_depth",
    # Logging
    "configure_logging",
    "configure_from_settings",
    "get_logger",
    "LogContext",
    # JSON
    "dumps",
    "loads",
    "JSONParseError",
    "validate_json_depth",
    # DI
    "create_container",
    # Hashing
    "Algorithm",
    "hash_string",
    "hash_bytes",
]
