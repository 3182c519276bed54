"""Null object implementation of retry executor."""

import typing as t

from ..domain.retry import ErrorContext, RetryResult, RetryState
from ..infrastructure.logging import get_logger
from ..utils.callbacks import invoke_callback
from .base import BaseRetryExecutor, FailureCallback, Operation, SuccessCallback

if t.TYPE_CHECKING:
    import loguru

T = t.TypeVar("T")


class NullRetryExecutor(BaseRetryExecutor):
    """Runs each operation once, without retries, waits or notifications.

    Keeps the same contract as RetryExecutor: failures come back as failed
    results instead of exceptions.
    """

    def __init__(self, logger: "loguru.Logger" = get_logger(__name__)) -> None:
        self._logger = logger

    @property
    def state(self) -> RetryState:
        return RetryState.idle()

    async def retry(
        self,
        operation: Operation[T],
        context: ErrorContext,
        on_success: SuccessCallback[T] | None = None,
        on_failure: FailureCallback | None = None,
    ) -> RetryResult[T]:
        try:
            result = await operation()
        except Exception as e:
            await invoke_callback(on_failure, e, logger=self._logger)
            return RetryResult.failure(e, attempts=1)

        await invoke_callback(on_success, result, logger=self._logger)
        return RetryResult.success(result, attempts=1)

    async def manual_retry(
        self, operation: Operation[T], context: ErrorContext
    ) -> RetryResult[T]:
        return await self.retry(operation, context)
