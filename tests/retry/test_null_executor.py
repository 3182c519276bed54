"""Tests for NullRetryExecutor."""

from unittest.mock import Mock

import pytest

from ferry.domain.retry import RetryState
from ferry.retry import NullRetryExecutor


@pytest.fixture
def null_executor(mock_logger):
    return NullRetryExecutor(mock_logger)


@pytest.mark.asyncio
async def test_runs_operation_once_on_success(
    null_executor, context, make_flaky_operation
):
    operation = make_flaky_operation(failures=0, result="ok")
    on_success = Mock()

    result = await null_executor.retry(operation, context, on_success=on_success)

    assert result.succeeded
    assert result.value == "ok"
    assert operation.calls == 1
    on_success.assert_called_once_with("ok")


@pytest.mark.asyncio
async def test_failure_is_not_retried(null_executor, context, make_flaky_operation):
    operation = make_flaky_operation(failures=1)
    on_failure = Mock()

    result = await null_executor.retry(operation, context, on_failure=on_failure)

    assert result.failed
    assert result.attempts == 1
    assert operation.calls == 1
    on_failure.assert_called_once()


@pytest.mark.asyncio
async def test_manual_retry_runs_once(null_executor, context, make_flaky_operation):
    operation = make_flaky_operation(failures=1)

    result = await null_executor.manual_retry(operation, context)

    assert result.failed
    assert operation.calls == 1


def test_state_is_always_idle(null_executor):
    assert null_executor.state == RetryState.idle()
