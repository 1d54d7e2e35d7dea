"""Stored record models."""

from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..core import dumps


def _now() -> datetime:
    return datetime.now(timezone.utc)


class StoredRecord(BaseModel):
    """Fields shared by projects and templates."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    description: str | None = None
    components: str = Field(..., description="Serialized forest (JSON array)")
    created_at: datetime = Field(default_factory=_now)

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v: Any) -> Any:
        """Row ids from SQL backends arrive as integers."""
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v

    @field_validator("components", mode="before")
    @classmethod
    def coerce_components(cls, v: Any) -> Any:
        """Accept an already-decoded forest as well as its JSON text."""
        if isinstance(v, list):
            return dumps(v)
        return v


class ProjectRecord(StoredRecord):
    """A saved page."""

    updated_at: datetime = Field(default_factory=_now)


class TemplateRecord(StoredRecord):
    """A reusable starting forest."""

    thumbnail: str | None = None
