"""Domain models for retry configuration, state and results."""

import time
import typing as t
from dataclasses import dataclass, field

from .exceptions import RetryExhaustedError, ValidationError

T = t.TypeVar("T")


def now_ms() -> int:
    """Current wall-clock time in epoch milliseconds."""
    return int(time.time() * 1000)


@dataclass(frozen=True)
class ErrorContext:
    """Describes one invocation of a retried operation.

    Only used for logging and event payloads. The executor never inspects it
    to make decisions.
    """

    operation: str
    file_id: str | None = None
    user_id: str | None = None
    timestamp: int = field(default_factory=now_ms)

    @classmethod
    def create(
        cls,
        operation: str,
        file_id: str | None = None,
        user_id: str | None = None,
    ) -> "ErrorContext":
        """Build a context stamped with the current time."""
        return cls(operation=operation, file_id=file_id, user_id=user_id)


@dataclass
class RetryConfig:
    """Retry policy with an explicit table of backoff delays.

    ``max_retries`` is the retry budget, so an operation runs at most
    ``max_retries + 1`` times. The wait before retry ``n`` (0-indexed) is
    ``backoff_delays_ms[n]``; when the table is shorter than the budget the
    last entry is reused.
    """

    max_retries: int = 3
    backoff_delays_ms: tuple[int, ...] = (1000, 2000, 4000)
    # When False, attempts still run max_retries + 1 times but back to back
    auto_retry: bool = True

    def __post_init__(self) -> None:
        self.backoff_delays_ms = tuple(self.backoff_delays_ms)
        if self.max_retries < 0:
            raise ValidationError(
                f"max_retries must be non-negative, got {self.max_retries}"
            )
        if not self.backoff_delays_ms:
            raise ValidationError("backoff_delays_ms needs at least one delay")
        if any(delay < 0 for delay in self.backoff_delays_ms):
            raise ValidationError(
                f"backoff delays must be non-negative, got {self.backoff_delays_ms}"
            )

    @property
    def total_attempts(self) -> int:
        """Number of times an operation may run, first attempt included."""
        return self.max_retries + 1

    def delay_ms(self, attempt: int) -> int:
        """
        Return the wait after failed ``attempt`` (0-indexed), in milliseconds.

        Examples:
            >>> config = RetryConfig(backoff_delays_ms=(1000, 2000, 4000))
            >>> config.delay_ms(0)
            1000
            >>> config.delay_ms(2)
            4000
            >>> config.delay_ms(7)
            4000
        """
        if attempt < len(self.backoff_delays_ms):
            return self.backoff_delays_ms[attempt]
        return self.backoff_delays_ms[-1]

    def delay_seconds(self, attempt: int) -> float:
        """Same as ``delay_ms`` in seconds, ready for ``asyncio.sleep``."""
        return self.delay_ms(attempt) / 1000


@dataclass(frozen=True)
class RetryState:
    """Snapshot of a retry executor's progress.

    Transitions are expressed as constructors returning a new snapshot; the
    executor swaps its current snapshot for the next one.
    """

    is_retrying: bool = False
    retry_count: int = 0
    last_error: BaseException | None = None

    @classmethod
    def idle(cls) -> "RetryState":
        return cls()

    @classmethod
    def attempting(cls, attempt: int) -> "RetryState":
        return cls(is_retrying=attempt > 0, retry_count=attempt)

    @classmethod
    def exhausted(cls, max_retries: int, error: BaseException | None) -> "RetryState":
        return cls(is_retrying=False, retry_count=max_retries, last_error=error)

    @classmethod
    def manual_in_flight(cls) -> "RetryState":
        return cls(is_retrying=True)

    @classmethod
    def manual_failed(cls, error: BaseException) -> "RetryState":
        return cls(is_retrying=False, last_error=error)


@dataclass(frozen=True)
class RetryResult(t.Generic[T]):
    """Outcome of a retried operation.

    A failed result is the "no successful result" marker. It is told apart by
    ``succeeded`` rather than by the value, so operations may legitimately
    return ``None`` or other falsy values.
    """

    succeeded: bool
    value: T | None = None
    error: BaseException | None = None
    attempts: int = 0

    @classmethod
    def success(cls, value: T, attempts: int = 1) -> "RetryResult[T]":
        return cls(succeeded=True, value=value, attempts=attempts)

    @classmethod
    def failure(cls, error: BaseException | None, attempts: int) -> "RetryResult[T]":
        return cls(succeeded=False, error=error, attempts=attempts)

    @property
    def failed(self) -> bool:
        return not self.succeeded

    def unwrap(self) -> T:
        """Return the value, raising RetryExhaustedError if the operation failed."""
        if not self.succeeded:
            raise RetryExhaustedError(self.attempts, self.error) from self.error
        return t.cast(T, self.value)
