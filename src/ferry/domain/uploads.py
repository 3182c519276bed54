"""Domain models for chunked, resumable uploads."""

import math
from dataclasses import dataclass, replace
from enum import Enum

from .exceptions import ValidationError


class UploadStatus(Enum):
    """Upload lifecycle states.

    Flow: IDLE -> UPLOADING -> (COMPLETED | ERROR | PAUSED), PAUSED -> UPLOADING
    """

    IDLE = "idle"
    UPLOADING = "uploading"
    PAUSED = "paused"
    COMPLETED = "completed"  # Every chunk accepted
    ERROR = "error"  # A chunk exhausted its retries


@dataclass(frozen=True)
class ByteRange:
    """Contiguous range of bytes within a file."""

    offset: int
    length: int

    @property
    def end(self) -> int:
        """Exclusive end offset."""
        return self.offset + self.length


@dataclass(frozen=True)
class UploadChunk:
    """One fixed slice of a file, uploaded independently.

    Boundaries are fixed when the file is chunked. ``uploaded`` only ever goes
    from False to True, through ``mark_uploaded``.
    """

    chunk_index: int
    total_chunks: int
    payload: ByteRange
    uploaded: bool = False

    def mark_uploaded(self) -> "UploadChunk":
        return replace(self, uploaded=True)


def create_chunks(size: int, chunk_size: int) -> tuple[UploadChunk, ...]:
    """
    Partition ``size`` bytes into ``ceil(size / chunk_size)`` ordered chunks.

    Every chunk except the last is exactly ``chunk_size`` bytes long.

    Raises:
        ValidationError: If chunk_size is not positive or size is negative

    Examples:
        >>> [c.payload.length for c in create_chunks(2500, 1000)]
        [1000, 1000, 500]
    """
    if chunk_size <= 0:
        raise ValidationError(f"chunk_size must be positive, got {chunk_size}")
    if size < 0:
        raise ValidationError(f"size must be non-negative, got {size}")

    total_chunks = math.ceil(size / chunk_size)
    return tuple(
        UploadChunk(
            chunk_index=index,
            total_chunks=total_chunks,
            payload=ByteRange(
                offset=index * chunk_size,
                length=min(chunk_size, size - index * chunk_size),
            ),
        )
        for index in range(total_chunks)
    )


def calculate_progress(uploaded_chunks: int, total_chunks: int) -> int:
    """Percentage of chunks uploaded, rounded half up to an integer.

    Uses integer arithmetic so 12.5% becomes 13, not banker's-rounded 12.
    """
    if total_chunks <= 0:
        return 0
    return (uploaded_chunks * 200 + total_chunks) // (2 * total_chunks)


@dataclass(frozen=True)
class ResumableUploadState:
    """Progress of one chunked upload.

    Values are immutable; each ``with_*`` method returns the next state.
    ``uploaded_chunks`` always equals the number of chunks marked uploaded
    and ``progress`` is derived from it.
    """

    file_id: str
    file_name: str
    chunks: tuple[UploadChunk, ...]
    uploaded_chunks: int
    total_chunks: int
    progress: int
    status: UploadStatus
    error: BaseException | None = None
    failed_chunk_index: int | None = None

    @classmethod
    def initial(
        cls, file_id: str, file_name: str, chunks: tuple[UploadChunk, ...]
    ) -> "ResumableUploadState":
        """State for an upload that is starting now."""
        uploaded = sum(1 for chunk in chunks if chunk.uploaded)
        return cls(
            file_id=file_id,
            file_name=file_name,
            chunks=chunks,
            uploaded_chunks=uploaded,
            total_chunks=len(chunks),
            progress=calculate_progress(uploaded, len(chunks)),
            status=UploadStatus.UPLOADING,
        )

    @property
    def pending_chunks(self) -> tuple[UploadChunk, ...]:
        """Chunks not yet uploaded, in index order."""
        return tuple(chunk for chunk in self.chunks if not chunk.uploaded)

    def is_terminal(self) -> bool:
        return self.status in (UploadStatus.COMPLETED, UploadStatus.ERROR)

    def with_chunk_uploaded(self, chunk_index: int) -> "ResumableUploadState":
        chunks = tuple(
            chunk.mark_uploaded() if chunk.chunk_index == chunk_index else chunk
            for chunk in self.chunks
        )
        uploaded = sum(1 for chunk in chunks if chunk.uploaded)
        return replace(
            self,
            chunks=chunks,
            uploaded_chunks=uploaded,
            progress=calculate_progress(uploaded, self.total_chunks),
        )

    def with_status(self, status: UploadStatus) -> "ResumableUploadState":
        return replace(self, status=status)

    def with_error(
        self, chunk_index: int, error: BaseException
    ) -> "ResumableUploadState":
        return replace(
            self,
            status=UploadStatus.ERROR,
            error=error,
            failed_chunk_index=chunk_index,
        )

    def restarted(self) -> "ResumableUploadState":
        """Same chunks and file id, uploading again with the error cleared."""
        return replace(
            self, status=UploadStatus.UPLOADING, error=None, failed_chunk_index=None
        )

    def completed(self) -> "ResumableUploadState":
        return replace(self, status=UploadStatus.COMPLETED, progress=100)
