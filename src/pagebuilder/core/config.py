"""Editor configuration from environment and ``.env``."""

from functools import lru_cache
from typing import Literal

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

load_dotenv()

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseSettings):
    """Every knob is read from a ``PAGEBUILDER_``-prefixed variable."""

    model_config = SettingsConfigDict(
        env_prefix="PAGEBUILDER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Where saved projects and templates live
    persistence_backend: Literal["memory", "http"] = "memory"
    backend_url: str = Field(default="http://localhost:3001", description="REST persistence API root")
    backend_timeout: float = Field(default=5.0, gt=0, description="Per-request timeout (seconds)")
    breaker_fail_max: int = Field(default=5, gt=0, description="Consecutive failures that open the breaker")
    breaker_reset_timeout: int = Field(default=30, gt=0, description="Seconds before the breaker half-opens")

    log_level: str = "INFO"
    json_logs: bool = False

    # Limits on stored forests
    max_forest_size: int = Field(default=2 * 1024 * 1024, gt=0, description="Serialized forest bytes")
    max_tree_depth: int = Field(default=32, gt=0, description="Nested component levels, roots at 1")
    max_prop_depth: int = Field(default=16, gt=0, description="Nesting inside a node's props")

    # Ingested assets
    max_asset_bytes: int = Field(default=10 * 1024 * 1024, gt=0)
    image_assets_only: bool = Field(default=True, description="Reject payloads whose MIME type is not image/*")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}")
        return level

    @field_validator("backend_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")


@lru_cache
def get_settings() -> Settings:
    """Process-wide settings, read once."""
    return Settings()
