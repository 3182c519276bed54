"""Base event model."""

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field


class BaseEvent(BaseModel):
    """Immutable base for every event emitted by ferry."""

    model_config = ConfigDict(frozen=True)

    event_type: str = Field(default="base", description="Event type identifier")
    occurred_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="When the event happened (UTC)",
    )
