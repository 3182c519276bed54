"""Domain layer - core models and exceptions."""

from .exceptions import (
    ChunkUploadError,
    FerryError,
    RetryError,
    RetryExhaustedError,
    TransportNotInitializedError,
    UploadError,
    ValidationError,
)
from .retry import ErrorContext, RetryConfig, RetryResult, RetryState
from .uploads import (
    ByteRange,
    ResumableUploadState,
    UploadChunk,
    UploadStatus,
    calculate_progress,
    create_chunks,
)

__all__ = [
    # Retry Models
    "ErrorContext",
    "RetryConfig",
    "RetryResult",
    "RetryState",
    # Upload Models
    "ByteRange",
    "ResumableUploadState",
    "UploadChunk",
    "UploadStatus",
    "calculate_progress",
    "create_chunks",
    # Exceptions
    "ChunkUploadError",
    "FerryError",
    "RetryError",
    "RetryExhaustedError",
    "TransportNotInitializedError",
    "UploadError",
    "ValidationError",
]
