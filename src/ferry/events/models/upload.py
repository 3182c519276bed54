"""Events emitted by the chunked upload manager."""

from pydantic import Field

from .base import BaseEvent
from .error_info import ErrorInfo


class UploadEvent(BaseEvent):
    """Base class for upload lifecycle events."""

    event_type: str = Field(default="upload.base")
    file_id: str = Field(description="Identifier shared by every chunk request")
    file_name: str = Field(description="Name of the file being uploaded")


class UploadStartedEvent(UploadEvent):
    """Emitted when a chunk loop starts for a fresh or restarted upload."""

    event_type: str = Field(default="upload.started")
    total_chunks: int = Field(ge=0)
    total_bytes: int = Field(ge=0)


class UploadProgressEvent(UploadEvent):
    """Emitted after each chunk is accepted by the server."""

    event_type: str = Field(default="upload.progress")
    chunk_index: int = Field(ge=0)
    uploaded_chunks: int = Field(ge=0)
    total_chunks: int = Field(ge=0)
    progress: int = Field(ge=0, le=100, description="Percentage of chunks uploaded")


class UploadPausedEvent(UploadEvent):
    """Emitted when an upload is paused."""

    event_type: str = Field(default="upload.paused")
    uploaded_chunks: int = Field(ge=0)


class UploadResumedEvent(UploadEvent):
    """Emitted when a paused upload continues."""

    event_type: str = Field(default="upload.resumed")
    uploaded_chunks: int = Field(ge=0)


class UploadCompletedEvent(UploadEvent):
    """Emitted once every chunk has been uploaded."""

    event_type: str = Field(default="upload.completed")
    total_chunks: int = Field(ge=0)


class UploadFailedEvent(UploadEvent):
    """Emitted when a chunk exhausts its retries and the upload stops."""

    event_type: str = Field(default="upload.failed")
    chunk_index: int = Field(ge=0, description="Chunk that could not be uploaded")
    error: ErrorInfo | None = Field(default=None)
