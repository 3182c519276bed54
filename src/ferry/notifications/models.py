"""User-facing notification model."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class NotificationLevel(Enum):
    """Severity of a notification, mirroring toast styles."""

    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


class Notification(BaseModel):
    """A short message meant for the person watching the operation."""

    model_config = ConfigDict(frozen=True)

    level: NotificationLevel
    message: str
    duration_seconds: float | None = Field(
        default=None,
        ge=0,
        description="How long the message should stay visible (None = default)",
    )
