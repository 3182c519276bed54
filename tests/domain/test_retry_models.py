"""Tests for retry domain models."""

import pytest

from ferry.domain.exceptions import RetryExhaustedError, ValidationError
from ferry.domain.retry import ErrorContext, RetryConfig, RetryResult, RetryState


class TestErrorContext:
    def test_create_stamps_current_time(self, mocker):
        mocker.patch("ferry.domain.retry.time.time", return_value=1700000000.5)

        context = ErrorContext.create("chunk-upload", file_id="a.bin-1")

        assert context.timestamp == 1700000000500
        assert context.operation == "chunk-upload"
        assert context.user_id is None


class TestRetryConfig:
    def test_defaults(self):
        config = RetryConfig()

        assert config.max_retries == 3
        assert config.backoff_delays_ms == (1000, 2000, 4000)
        assert config.auto_retry is True
        assert config.total_attempts == 4

    def test_delays_normalised_to_tuple(self):
        config = RetryConfig(backoff_delays_ms=[100, 200])

        assert config.backoff_delays_ms == (100, 200)

    @pytest.mark.parametrize(
        "attempt, expected_ms",
        [(0, 1000), (1, 2000), (2, 4000), (3, 4000), (10, 4000)],
    )
    def test_delay_for_attempt(self, attempt, expected_ms):
        config = RetryConfig()

        assert config.delay_ms(attempt) == expected_ms
        assert config.delay_seconds(attempt) == expected_ms / 1000

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"max_retries": -1},
            {"backoff_delays_ms": ()},
            {"backoff_delays_ms": (1000, -5)},
        ],
    )
    def test_invalid_config_rejected(self, kwargs):
        with pytest.raises(ValidationError):
            RetryConfig(**kwargs)


class TestRetryState:
    def test_first_attempt_is_not_a_retry(self):
        state = RetryState.attempting(0)

        assert state.is_retrying is False
        assert state.retry_count == 0

    def test_later_attempts_are_retries(self):
        state = RetryState.attempting(2)

        assert state.is_retrying is True
        assert state.retry_count == 2

    def test_exhausted_keeps_error(self):
        error = TimeoutError("slow")

        state = RetryState.exhausted(3, error)

        assert state == RetryState(is_retrying=False, retry_count=3, last_error=error)


class TestRetryResult:
    def test_success_unwraps_to_value(self):
        result = RetryResult.success(0, attempts=2)

        assert result.succeeded
        assert not result.failed
        assert result.unwrap() == 0

    def test_failure_unwrap_chains_error(self):
        error = ConnectionError("refused")
        result = RetryResult.failure(error, attempts=4)

        with pytest.raises(RetryExhaustedError) as exc_info:
            result.unwrap()

        assert exc_info.value.attempts == 4
        assert exc_info.value.last_error is error
        assert exc_info.value.__cause__ is error
