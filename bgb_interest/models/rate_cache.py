"""Pydantic models for the on-disk base rate cache document."""

from datetime import datetime

from pydantic import BaseModel, field_serializer


class RateCacheMetadata(BaseModel):
    source_url: str = ""
    last_updated: datetime | None = None

    @field_serializer("last_updated")
    def _format_timestamp(self, value: datetime | None) -> str | None:
        return value.strftime("%Y-%m-%d %H:%M:%S") if value else None


class RateCacheDocument(BaseModel):
    metadata: RateCacheMetadata = RateCacheMetadata()
    data: dict[str, float]  # {"2023-01": 1.62}, percent
