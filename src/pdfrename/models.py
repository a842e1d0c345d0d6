from __future__ import annotations

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field


def utc_timestamp() -> str:
    """Current UTC time as ISO 8601 with milliseconds, e.g. 2023-01-02T00:00:00.000Z."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


class RenameRecord(BaseModel):
    """Outcome of renaming one PDF, stored in the mapping document under old_name."""

    model_config = ConfigDict(populate_by_name=True)

    old_name: str = Field(alias="oldName")
    new_name: str = Field(alias="newName")
    success: bool
    timestamp: str | None = None  # left as None when the stored record has none
    content: str | None = None  # excerpt of the PDF text, used for duplicate detection
    needs_rename: bool | None = Field(default=None, alias="needsRename")

    def to_json(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class RenameRequest(BaseModel):
    """Request body for POST /rename."""

    model_config = ConfigDict(populate_by_name=True)

    old_name: str = Field(alias="oldName")
    new_name: str = Field(alias="newName")
    needs_rename: bool = Field(default=False, alias="needsRename")
