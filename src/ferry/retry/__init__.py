"""Retry executors and error reporting."""

from .base import BaseRetryExecutor
from .error_handler import ErrorHandler, ErrorState
from .executor import RetryExecutor
from .null import NullRetryExecutor

__all__ = [
    "BaseRetryExecutor",
    "ErrorHandler",
    "ErrorState",
    "NullRetryExecutor",
    "RetryExecutor",
]
