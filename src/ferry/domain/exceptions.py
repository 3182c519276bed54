"""Custom exceptions for ferry."""


class FerryError(Exception):
    """Base exception for ferry errors."""

    pass


class ValidationError(FerryError):
    """Raised when configuration or input validation fails.

    Raised eagerly when building RetryConfig, chunking a file with a
    non-positive chunk size and similar misconfiguration.
    """

    pass


class RetryError(FerryError):
    """Raised when retry logic encounters an unexpected state.

    This exception indicates a programming error in the retry executor,
    such as completing the retry loop without returning a result.
    """

    pass


class RetryExhaustedError(RetryError):
    """Raised when unwrapping a failed retry result.

    The executor itself never raises this; it returns a failed RetryResult.
    Callers that prefer exceptions opt in with ``RetryResult.unwrap()``.
    """

    def __init__(self, attempts: int, last_error: BaseException | None) -> None:
        self.attempts = attempts
        self.last_error = last_error
        message = f"Operation failed after {attempts} attempt(s)"
        if last_error is not None:
            message = f"{message}: {last_error}"
        super().__init__(message)


class UploadError(FerryError):
    """Base exception for upload operation errors."""

    pass


class ChunkUploadError(UploadError):
    """Raised by a transport when the server rejects a chunk."""

    def __init__(self, chunk_index: int, status: int | None = None) -> None:
        self.chunk_index = chunk_index
        self.status = status
        message = f"Failed to upload chunk {chunk_index}"
        if status is not None:
            message = f"{message} (HTTP {status})"
        super().__init__(message)


class TransportNotInitializedError(UploadError):
    """Raised when a transport is used before its HTTP session exists.

    Occurs when HttpChunkTransport is created without a client and used
    outside ``async with``.
    """

    pass
