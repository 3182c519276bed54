"""Events emitted by the retry executor."""

from pydantic import Field

from .base import BaseEvent
from .error_info import ErrorInfo


class RetryEvent(BaseEvent):
    """Base class for retry lifecycle events."""

    event_type: str = Field(default="retry.base")
    operation: str = Field(description="Operation name from the ErrorContext")
    file_id: str | None = Field(default=None, description="File being processed")


class RetryingEvent(RetryEvent):
    """Emitted when a failed attempt is about to be retried."""

    event_type: str = Field(default="retry.retrying")
    attempt: int = Field(ge=1, description="Attempt that failed (1-indexed)")
    max_retries: int = Field(ge=1, description="Retry budget")
    delay_seconds: float = Field(ge=0, description="Wait before the next attempt")
    error: ErrorInfo = Field(description="Error raised by the failed attempt")


class RetryExhaustedEvent(RetryEvent):
    """Emitted when every attempt of a retry sequence has failed."""

    event_type: str = Field(default="retry.exhausted")
    attempts: int = Field(ge=1, description="Total attempts made")
    error: ErrorInfo | None = Field(default=None, description="Last error")
