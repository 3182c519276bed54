"""Event infrastructure - event emitter and event types."""

from .base import BaseEmitter, EventHandler
from .emitter import EventEmitter
from .models import (
    BaseEvent,
    ErrorInfo,
    RetryEvent,
    RetryExhaustedEvent,
    RetryingEvent,
    UploadCompletedEvent,
    UploadEvent,
    UploadFailedEvent,
    UploadPausedEvent,
    UploadProgressEvent,
    UploadResumedEvent,
    UploadStartedEvent,
)
from .null import NullEmitter
from .subscription import Subscription

__all__ = [
    # Base and implementations
    "BaseEmitter",
    "EventEmitter",
    "EventHandler",
    "NullEmitter",
    "Subscription",
    # Models
    "BaseEvent",
    "ErrorInfo",
    # Retry events
    "RetryEvent",
    "RetryingEvent",
    "RetryExhaustedEvent",
    # Upload events
    "UploadEvent",
    "UploadStartedEvent",
    "UploadProgressEvent",
    "UploadPausedEvent",
    "UploadResumedEvent",
    "UploadCompletedEvent",
    "UploadFailedEvent",
]
