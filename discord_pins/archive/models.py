"""Pydantic models for the pin payloads returned by Discord.

Only the fields the pipeline reads are declared; everything else the API
sends is kept on the model (extra="allow") so nothing is lost when a model is
dumped back out. Snapshots are still written from the raw payload.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator


class Attachment(BaseModel):
    """A file attached to a pinned message."""

    model_config = ConfigDict(extra="allow")

    proxy_url: str
    id: str | None = None
    filename: str | None = None
    url: str | None = None
    size: int | None = None
    content_type: str | None = None


class Pin(BaseModel):
    """A pinned message."""

    model_config = ConfigDict(extra="allow")

    id: str
    channel_id: str
    attachments: list[Attachment] = []

    @field_validator("id", "channel_id", mode="before")
    @classmethod
    def snowflake_as_str(cls, v: Any) -> Any:
        """Accept integer snowflakes but keep them as strings."""
        if isinstance(v, int):
            return str(v)
        return v

    @field_validator("attachments", mode="before")
    @classmethod
    def null_attachments(cls, v: Any) -> Any:
        return [] if v is None else v


def parse_pins(data: list[dict[str, Any]]) -> list[Pin]:
    """Validate a raw pin list, preserving order."""
    return [Pin.model_validate(item) for item in data]
