"""Fixtures for retry executor tests."""

import typing as t

import pytest

from ferry.domain.retry import ErrorContext, RetryConfig
from ferry.retry import RetryExecutor


@pytest.fixture
def retry_config() -> RetryConfig:
    """Provide the default 3-retry policy waiting 1s, 2s and 4s."""
    return RetryConfig(max_retries=3, backoff_delays_ms=(1000, 2000, 4000))


@pytest.fixture
def context() -> ErrorContext:
    """Provide a context for a chunk upload."""
    return ErrorContext.create("chunk-upload", file_id="report.pdf-1700000000000")


@pytest.fixture
def executor(
    retry_config, mock_logger, mock_emitter, mock_notifier, fake_sleep
) -> RetryExecutor:
    """Provide a RetryExecutor whose waits return immediately."""
    return RetryExecutor(
        config=retry_config,
        logger=mock_logger,
        emitter=mock_emitter,
        notifier=mock_notifier,
        sleep=fake_sleep,
    )


@pytest.fixture
def make_flaky_operation() -> t.Callable[..., t.Any]:
    """Factory for operations that fail a fixed number of times, then succeed.

    The returned operation exposes ``calls`` with the number of invocations.
    """

    def _make(failures: int, result: t.Any = "ok", error: Exception | None = None):
        async def operation():
            operation.calls += 1
            if operation.calls <= failures:
                raise error or ConnectionError(f"attempt {operation.calls} failed")
            return result

        operation.calls = 0
        return operation

    return _make
