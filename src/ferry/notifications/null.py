"""Null object implementation of notifier."""

from .base import BaseNotifier
from .models import Notification


class NullNotifier(BaseNotifier):
    """Null object implementation of notifier that drops everything."""

    def notify(self, notification: Notification) -> None:
        pass
