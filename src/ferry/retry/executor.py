"""Retry executor with a table-driven backoff."""

import asyncio
import typing as t
from dataclasses import replace

from ..domain.exceptions import RetryError
from ..domain.retry import ErrorContext, RetryConfig, RetryResult, RetryState
from ..events import (
    BaseEmitter,
    ErrorInfo,
    EventEmitter,
    RetryExhaustedEvent,
    RetryingEvent,
)
from ..infrastructure.logging import get_logger
from ..notifications import BaseNotifier, NullNotifier
from ..utils.callbacks import invoke_callback
from .base import BaseRetryExecutor, FailureCallback, Operation, SuccessCallback

if t.TYPE_CHECKING:
    import loguru

T = t.TypeVar("T")

SleepFunc = t.Callable[[float], t.Awaitable[t.Any]]


def describe_context(context: ErrorContext) -> str:
    """Short human-readable label for log lines."""
    if context.file_id:
        return f"{context.operation} [{context.file_id}]"
    return context.operation


class RetryExecutor(BaseRetryExecutor):
    """Runs async operations with automatic retries and backoff.

    Attempts are strictly sequential: attempt N+1 never starts before the
    wait after attempt N has elapsed. A lock serialises calls so only one
    retry sequence per executor is ever in flight, which keeps ``state``
    consistent.

    Usage:
        executor = RetryExecutor(RetryConfig(max_retries=3))
        result = await executor.retry(fetch, ErrorContext.create("fetch"))
        if result.succeeded:
            use(result.value)
    """

    def __init__(
        self,
        config: RetryConfig | None = None,
        logger: "loguru.Logger" = get_logger(__name__),
        emitter: BaseEmitter | None = None,
        notifier: BaseNotifier | None = None,
        sleep: SleepFunc = asyncio.sleep,
    ) -> None:
        """
        Initialise retry executor.

        Args:
            config: Retry policy. Defaults to 3 retries waiting 1s, 2s, 4s.
            logger: Logger for recording failed attempts
            emitter: Event emitter for broadcasting retry events.
                    If None, a new EventEmitter will be created.
            notifier: Sink for user-facing feedback. If None, notifications
                     are dropped.
            sleep: Coroutine used to wait between attempts
        """
        self.config = config or RetryConfig()
        self.logger = logger
        self.emitter = emitter if emitter is not None else EventEmitter(logger)
        self.notifier = notifier if notifier is not None else NullNotifier()
        self._sleep = sleep
        self._state = RetryState.idle()
        self._lock = asyncio.Lock()

    @property
    def state(self) -> RetryState:
        return self._state

    async def retry(
        self,
        operation: Operation[T],
        context: ErrorContext,
        on_success: SuccessCallback[T] | None = None,
        on_failure: FailureCallback | None = None,
    ) -> RetryResult[T]:
        """
        Execute ``operation`` up to ``max_retries + 1`` times.

        Returns on the first success without further attempts. Between failed
        attempts waits the configured backoff delay, notifying the user for
        as long as the wait lasts. Once every attempt has failed the state is
        left exhausted, ``on_failure`` receives the last error and a failed
        result is returned.

        Args:
            operation: Async callable to execute
            context: Invocation description (logging and events only)
            on_success: Called with the result after a successful attempt
            on_failure: Called with the last error after exhaustion

        Returns:
            RetryResult describing the outcome
        """
        async with self._lock:
            return await self._run_attempts(operation, context, on_success, on_failure)

    async def _run_attempts(
        self,
        operation: Operation[T],
        context: ErrorContext,
        on_success: SuccessCallback[T] | None,
        on_failure: FailureCallback | None,
    ) -> RetryResult[T]:
        max_retries = self.config.max_retries
        total_attempts = self.config.total_attempts
        label = describe_context(context)
        last_error: Exception | None = None

        for attempt in range(total_attempts):
            self._state = RetryState.attempting(attempt)

            try:
                result = await operation()
            except Exception as e:
                last_error = e
                self._state = replace(self._state, last_error=e)
                self.logger.warning(
                    f"Attempt {attempt + 1}/{total_attempts} failed for {label}: "
                    f"{type(e).__name__}: {e}"
                )

                if attempt < max_retries and self.config.auto_retry:
                    await self._wait_before_retry(attempt, e, context)
                continue

            self._state = RetryState.idle()
            if attempt > 0:
                self.logger.info(
                    f"{label} succeeded on attempt {attempt + 1}/{total_attempts}"
                )
            await invoke_callback(on_success, result, logger=self.logger)
            return RetryResult.success(result, attempts=attempt + 1)

        if last_error is None:
            # Type checker satisfaction: range(total_attempts) is never empty
            raise RetryError("Retry loop completed without an attempt")

        self._state = RetryState.exhausted(max_retries, last_error)
        self.logger.error(
            f"{label} failed after {total_attempts} attempt(s): {last_error}"
        )
        await invoke_callback(on_failure, last_error, logger=self.logger)
        self.notifier.error(
            f"Operation failed after {total_attempts} attempt(s): {last_error}"
        )
        await self.emitter.emit(
            "retry.exhausted",
            RetryExhaustedEvent(
                operation=context.operation,
                file_id=context.file_id,
                attempts=total_attempts,
                error=ErrorInfo.from_exception(last_error),
            ),
        )
        return RetryResult.failure(last_error, attempts=total_attempts)

    async def _wait_before_retry(
        self, attempt: int, error: Exception, context: ErrorContext
    ) -> None:
        """Announce the upcoming retry and sleep for its backoff delay."""
        delay = self.config.delay_seconds(attempt)
        max_retries = self.config.max_retries

        await self.emitter.emit(
            "retry.retrying",
            RetryingEvent(
                operation=context.operation,
                file_id=context.file_id,
                attempt=attempt + 1,
                max_retries=max_retries,
                delay_seconds=delay,
                error=ErrorInfo.from_exception(error),
            ),
        )
        self.notifier.info(
            f"Retrying in {delay:g}s... (Attempt {attempt + 1}/{max_retries})",
            duration_seconds=delay,
        )

        await self._sleep(delay)

    async def manual_retry(
        self, operation: Operation[T], context: ErrorContext
    ) -> RetryResult[T]:
        """
        Execute ``operation`` once, on demand, with no backoff.

        Used behind a "try again" button: the state reports ``is_retrying``
        while the call runs and the user is told how it went.
        """
        label = describe_context(context)

        async with self._lock:
            self._state = RetryState.manual_in_flight()

            try:
                result = await operation()
            except Exception as e:
                self._state = RetryState.manual_failed(e)
                self.logger.error(f"Manual retry of {label} failed: {e}")
                self.notifier.error(f"Operation failed: {e}")
                return RetryResult.failure(e, attempts=1)

            self._state = RetryState.idle()
            self.logger.info(f"Manual retry of {label} succeeded")
            self.notifier.success("Operation succeeded!")
            return RetryResult.success(result, attempts=1)
