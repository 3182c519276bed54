"""ferry - resilient retries and resumable chunked uploads for asyncio."""

from .app import App, create_app
from .domain import (
    ErrorContext,
    ResumableUploadState,
    RetryConfig,
    RetryResult,
    RetryState,
    UploadChunk,
    UploadStatus,
)
from .retry import ErrorHandler, NullRetryExecutor, RetryExecutor
from .uploads import (
    BytesSource,
    ChunkedUploadManager,
    FileSource,
    HttpChunkTransport,
)

__all__ = [
    "App",
    "create_app",
    # Retry
    "ErrorContext",
    "ErrorHandler",
    "NullRetryExecutor",
    "RetryConfig",
    "RetryExecutor",
    "RetryResult",
    "RetryState",
    # Uploads
    "BytesSource",
    "ChunkedUploadManager",
    "FileSource",
    "HttpChunkTransport",
    "ResumableUploadState",
    "UploadChunk",
    "UploadStatus",
]
