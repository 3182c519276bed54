"""User-facing notification sinks."""

from .base import BaseNotifier
from .console import ConsoleNotifier
from .log_notifier import LoggingNotifier
from .models import Notification, NotificationLevel
from .null import NullNotifier

__all__ = [
    "BaseNotifier",
    "ConsoleNotifier",
    "LoggingNotifier",
    "Notification",
    "NotificationLevel",
    "NullNotifier",
]
