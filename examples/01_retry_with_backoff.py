#!/usr/bin/env python3
"""
01_retry_with_backoff.py - Automatic retries, manual retry and notifications

Demonstrates:
- RetryExecutor with a custom backoff table
- Subscribing to retry.retrying events for observability
- ConsoleNotifier printing the "Retrying in ..." messages
- Retry exhaustion returning a failed result instead of raising
- manual_retry for a user-triggered second chance

Runs offline: the "flaky service" is a local coroutine.
"""

import asyncio
from datetime import datetime

from ferry import ErrorContext, RetryConfig, RetryExecutor
from ferry.events import EventEmitter, RetryingEvent
from ferry.notifications import ConsoleNotifier


def on_retrying(event: RetryingEvent) -> None:
    """Log retry attempts with timing info."""
    ts = datetime.now().strftime("%H:%M:%S.%f")[:-3]
    print(
        f"  [{ts}] attempt {event.attempt}/{event.max_retries} of "
        f"{event.operation} failed ({event.error.exc_type}), "
        f"waiting {event.delay_seconds:.2f}s"
    )


def make_flaky_service(failures: int):
    """Return a coroutine function that fails ``failures`` times, then succeeds."""
    calls = 0

    async def fetch_quota() -> dict[str, int]:
        nonlocal calls
        calls += 1
        if calls <= failures:
            raise ConnectionError(f"service unavailable (call {calls})")
        return {"used": 42, "limit": 100}

    return fetch_quota


async def example_recovers() -> None:
    print("=" * 70)
    print("Example 1: Operation recovers after two failures")
    print("=" * 70)

    emitter = EventEmitter()
    emitter.on("retry.retrying", on_retrying)
    executor = RetryExecutor(
        RetryConfig(max_retries=3, backoff_delays_ms=(200, 400, 800)),
        emitter=emitter,
        notifier=ConsoleNotifier(),
    )

    result = await executor.retry(
        make_flaky_service(failures=2), ErrorContext.create("fetch-quota")
    )
    print(
        f"\nSucceeded: {result.succeeded}, value: {result.value}, "
        f"attempts: {result.attempts}\n"
    )


async def example_exhausted_then_manual() -> None:
    print("=" * 70)
    print("Example 2: Retries exhausted, then a manual retry")
    print("=" * 70)

    executor = RetryExecutor(
        RetryConfig(max_retries=1, backoff_delays_ms=(300,)),
        notifier=ConsoleNotifier(),
    )
    service = make_flaky_service(failures=2)
    context = ErrorContext.create("fetch-quota", user_id="demo")

    result = await executor.retry(service, context)
    print(
        f"\nAutomatic retries succeeded: {result.succeeded} "
        f"(retry_count={executor.state.retry_count})"
    )

    result = await executor.manual_retry(service, context)
    print(f"Manual retry succeeded: {result.succeeded}, value: {result.value}\n")


async def main() -> None:
    await example_recovers()
    await example_exhausted_then_manual()


if __name__ == "__main__":
    asyncio.run(main())
