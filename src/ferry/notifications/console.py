"""Notifier printing coloured messages to the terminal."""

import typer

from .base import BaseNotifier
from .models import Notification, NotificationLevel

_STYLES = {
    NotificationLevel.INFO: ("ℹ", typer.colors.BLUE),
    NotificationLevel.SUCCESS: ("✓", typer.colors.GREEN),
    NotificationLevel.WARNING: ("!", typer.colors.YELLOW),
    NotificationLevel.ERROR: ("✗", typer.colors.RED),
}


class ConsoleNotifier(BaseNotifier):
    """Terminal stand-in for toast messages.

    Errors go to stderr, everything else to stdout. The display duration has
    no meaning on a terminal and is ignored.
    """

    def notify(self, notification: Notification) -> None:
        symbol, colour = _STYLES[notification.level]
        typer.secho(
            f"{symbol} {notification.message}",
            fg=colour,
            err=notification.level == NotificationLevel.ERROR,
        )
