"""Notifier that forwards notifications to the log."""

import typing as t

from ..infrastructure.logging import get_logger
from .base import BaseNotifier
from .models import Notification, NotificationLevel

if t.TYPE_CHECKING:
    import loguru

_LOG_LEVELS = {
    NotificationLevel.INFO: "INFO",
    NotificationLevel.SUCCESS: "SUCCESS",
    NotificationLevel.WARNING: "WARNING",
    NotificationLevel.ERROR: "ERROR",
}


class LoggingNotifier(BaseNotifier):
    """Writes notifications to loguru at the matching level.

    Useful for headless runs where nobody watches a terminal.
    """

    def __init__(self, logger: "loguru.Logger" = get_logger(__name__)) -> None:
        self._logger = logger

    def notify(self, notification: Notification) -> None:
        self._logger.log(_LOG_LEVELS[notification.level], notification.message)
