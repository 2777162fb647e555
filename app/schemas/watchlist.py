"""Schemas for watch-list entries."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field, field_validator

WatchItemKind = Literal["movie", "tv"]


class WatchItemRequest(BaseModel):
    """Body for adding a movie or TV show to a watch list."""

    external_id: str = Field(..., min_length=1, max_length=255, description="Catalogue id of the movie or show")
    title: str | None = Field(default=None, max_length=1024, description="Display title")

    @field_validator("external_id", mode="before")
    @classmethod
    def coerce_external_id(cls, v: object) -> object:
        # Catalogue ids often arrive as numbers.
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        if isinstance(v, str):
            return v.strip()
        return v


class WatchItemCreate(BaseModel):
    """Entry to append to a user's watch list."""

    kind: WatchItemKind
    external_id: str
    title: str | None = None


class WatchListItemResponse(BaseModel):
    """Watch-list entry as returned to clients."""

    id: str
    kind: WatchItemKind
    external_id: str
    title: str | None = None
    created_at: datetime | None = None

    @classmethod
    def from_item(cls, item) -> "WatchListItemResponse":
        return cls(
            id=str(item.id),
            kind=item.kind,
            external_id=item.external_id,
            title=item.title,
            created_at=item.created_at,
        )


class WatchItemCreatedResponse(BaseModel):
    """Identifier of the entry just appended."""

    id: str


class WatchListResponse(BaseModel):
    """Response for GET /users/{id}/watchlist."""

    items: list[WatchListItemResponse]
