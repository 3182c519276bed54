"""In-process event emitter supporting sync and async handlers."""

import inspect
import typing as t
from collections import defaultdict

from ..infrastructure.logging import get_logger
from .base import BaseEmitter, EventHandler
from .subscription import Subscription

if t.TYPE_CHECKING:
    import loguru


class EventEmitter(BaseEmitter):
    """Dispatches events to handlers registered per event type.

    Handlers run in registration order. Coroutine handlers are awaited before
    the next handler runs. A handler that raises is logged and skipped so one
    faulty observer cannot break the operation emitting the event.

    Usage:
        emitter = EventEmitter()
        subscription = emitter.on("upload.progress", lambda e: print(e.progress))
        await emitter.emit("upload.progress", event)
        subscription.unsubscribe()
    """

    def __init__(self, logger: "loguru.Logger" = get_logger(__name__)) -> None:
        self._handlers: dict[str, list[EventHandler]] = defaultdict(list)
        self._logger = logger

    def on(self, event_type: str, handler: EventHandler) -> Subscription:
        """Register ``handler`` for ``event_type``.

        Returns:
            Subscription that removes the handler when unsubscribed
        """
        self._handlers[event_type].append(handler)
        return Subscription(self, event_type, handler)

    def off(self, event_type: str, handler: EventHandler) -> None:
        """Remove a handler. Unknown handlers are ignored."""
        handlers = self._handlers.get(event_type)
        if handlers and handler in handlers:
            handlers.remove(handler)

    def has_listeners(self, event_type: str) -> bool:
        return bool(self._handlers.get(event_type))

    async def emit(self, event_type: str, event_data: t.Any) -> None:
        """Call every handler registered for ``event_type`` with ``event_data``."""
        # Copy so handlers may unsubscribe while being dispatched
        for handler in list(self._handlers.get(event_type, ())):
            try:
                result = handler(event_data)
                if inspect.isawaitable(result):
                    await result
            except Exception as e:
                self._logger.error(
                    f"Event handler for '{event_type}' raised "
                    f"{type(e).__name__}: {e}"
                )
