"""Abstract base class for notification sinks."""

from abc import ABC, abstractmethod

from .models import Notification, NotificationLevel


class BaseNotifier(ABC):
    """Receives user-facing feedback from retries and uploads.

    Sinks are swappable and never affect the outcome of an operation.
    """

    @abstractmethod
    def notify(self, notification: Notification) -> None:
        """Deliver a notification."""
        pass

    def info(self, message: str, duration_seconds: float | None = None) -> None:
        self.notify(
            Notification(
                level=NotificationLevel.INFO,
                message=message,
                duration_seconds=duration_seconds,
            )
        )

    def success(self, message: str) -> None:
        self.notify(Notification(level=NotificationLevel.SUCCESS, message=message))

    def error(self, message: str) -> None:
        self.notify(Notification(level=NotificationLevel.ERROR, message=message))
