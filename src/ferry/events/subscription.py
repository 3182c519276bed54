"""Handle returned when subscribing to an emitter."""

from .base import BaseEmitter, EventHandler


class Subscription:
    """Keeps track of one handler registration so it can be undone."""

    def __init__(
        self, emitter: BaseEmitter, event_type: str, handler: EventHandler
    ) -> None:
        self._emitter = emitter
        self._event_type = event_type
        self._handler = handler
        self._active = True

    @property
    def is_active(self) -> bool:
        return self._active

    def unsubscribe(self) -> None:
        """Remove the handler. Calling this more than once is harmless."""
        if not self._active:
            return
        self._emitter.off(self._event_type, self._handler)
        self._active = False
