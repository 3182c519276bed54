"""Base interface for retry executors."""

import typing as t
from abc import ABC, abstractmethod

from ..domain.retry import ErrorContext, RetryResult, RetryState

T = t.TypeVar("T")

Operation = t.Callable[[], t.Awaitable[T]]
SuccessCallback = t.Callable[[T], t.Any]
FailureCallback = t.Callable[[BaseException], t.Any]


class BaseRetryExecutor(ABC):
    """Abstract base class for retry executors.

    Executors run a zero-argument async operation and always resolve to a
    RetryResult; operation failures never propagate to the caller. Different
    strategies (backoff, no retry) can be swapped via dependency injection.
    """

    @property
    @abstractmethod
    def state(self) -> RetryState:
        """Snapshot of the executor's current retry state."""
        pass

    @abstractmethod
    async def retry(
        self,
        operation: Operation[T],
        context: ErrorContext,
        on_success: SuccessCallback[T] | None = None,
        on_failure: FailureCallback | None = None,
    ) -> RetryResult[T]:
        """Run ``operation``, retrying failures according to the executor's policy.

        Args:
            operation: The async callable to execute.
            context: Describes the invocation, for logging and events only.
            on_success: Called with the operation's result on success.
            on_failure: Called with the last error once every attempt failed.

        Returns:
            A successful result holding the value, or a failed result.
        """
        pass

    @abstractmethod
    async def manual_retry(
        self, operation: Operation[T], context: ErrorContext
    ) -> RetryResult[T]:
        """Run ``operation`` exactly once, without waiting or retrying."""
        pass
