"""Helpers for calling user-supplied callbacks."""

import inspect
import typing as t

if t.TYPE_CHECKING:
    import loguru

# Callbacks may be plain functions or coroutine functions
Callback = t.Callable[..., t.Any]


async def invoke_callback(
    callback: Callback | None, *args: t.Any, logger: "loguru.Logger"
) -> None:
    """Call ``callback`` with ``args``, awaiting it if it returns an awaitable.

    Errors raised by the callback are logged and swallowed; a broken progress
    or completion hook must not change the outcome of the operation it
    observes.
    """
    if callback is None:
        return
    try:
        result = callback(*args)
        if inspect.isawaitable(result):
            await result
    except Exception as e:
        name = getattr(callback, "__qualname__", repr(callback))
        logger.error(f"Callback {name} raised {type(e).__name__}: {e}")
