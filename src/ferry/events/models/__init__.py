"""Event data models."""

from .base import BaseEvent
from .error_info import ErrorInfo
from .retry import RetryEvent, RetryExhaustedEvent, RetryingEvent
from .upload import (
    UploadCompletedEvent,
    UploadEvent,
    UploadFailedEvent,
    UploadPausedEvent,
    UploadProgressEvent,
    UploadResumedEvent,
    UploadStartedEvent,
)

__all__ = [
    "BaseEvent",
    "ErrorInfo",
    "RetryEvent",
    "RetryingEvent",
    "RetryExhaustedEvent",
    "UploadEvent",
    "UploadStartedEvent",
    "UploadProgressEvent",
    "UploadPausedEvent",
    "UploadResumedEvent",
    "UploadCompletedEvent",
    "UploadFailedEvent",
]
