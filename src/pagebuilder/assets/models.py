"""Asset Data Models."""

import base64
from datetime import datetime, timezone

from pydantic import BaseModel, Field


class IngestionError(Exception):
    """Reading or accepting an asset payload failed."""

    def __init__(self, message: str, filename: str | None = None) -> None:
        super().__init__(message)
        self.filename = filename


class LocalAsset(BaseModel):
    """A user-supplied binary held by the editing session."""

    id: str = Field(..., description="Value image nodes put in props.src")
    filename: str
    mime_type: str
    payload: bytes = Field(repr=False)
    checksum: str = Field(..., description="xxhash64 of the payload")
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def size(self) -> int:
        return len(self.payload)

    @property
    def data_url(self) -> str:
        """The payload as an inline ``data:`` URL."""
        encoded = base64.b64encode(self.payload).decode("ascii")
        return f"data:{self.mime_type};base64,{encoded}"
