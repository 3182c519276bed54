"""Central place to record and report operation errors."""

import typing as t
from dataclasses import dataclass

from ..domain.retry import ErrorContext
from ..infrastructure.logging import get_logger
from .executor import describe_context

if t.TYPE_CHECKING:
    import loguru

ErrorCallback = t.Callable[[BaseException, ErrorContext], t.Any]


@dataclass(frozen=True)
class ErrorState:
    """The error currently shown to the user, if any."""

    error: BaseException | None = None
    context: ErrorContext | None = None

    @property
    def has_error(self) -> bool:
        return self.error is not None


class ErrorHandler:
    """Records the latest error and forwards it to an optional observer.

    One handler is typically shared by everything on a page so errors are
    logged and surfaced the same way whichever component hit them.
    """

    def __init__(
        self,
        logger: "loguru.Logger" = get_logger(__name__),
        on_error: ErrorCallback | None = None,
    ) -> None:
        """
        Args:
            logger: Logger receiving every handled error
            on_error: Called synchronously with (error, context) after logging
        """
        self._logger = logger
        self._on_error = on_error
        self._state = ErrorState()

    @property
    def state(self) -> ErrorState:
        return self._state

    def handle_error(self, error: BaseException, context: ErrorContext) -> None:
        """Log ``error``, make it the current error and notify the observer."""
        self._logger.error(
            f"{describe_context(context)} failed: {type(error).__name__}: {error} "
            f"(user={context.user_id}, timestamp={context.timestamp})"
        )
        self._state = ErrorState(error=error, context=context)

        if self._on_error is not None:
            try:
                self._on_error(error, context)
            except Exception as e:
                self._logger.error(f"on_error callback raised {type(e).__name__}: {e}")

    def clear_error(self) -> None:
        """Forget the current error."""
        self._state = ErrorState()
