"""Chunked, resumable uploads - manager, sources and transports."""

from .manager import DEFAULT_CHUNK_SIZE, ChunkedUploadManager, ProgressCallback
from .sources import BaseUploadSource, BytesSource, FileSource
from .transport import BaseChunkTransport, HttpChunkTransport

__all__ = [
    "DEFAULT_CHUNK_SIZE",
    "ChunkedUploadManager",
    "ProgressCallback",
    # Sources
    "BaseUploadSource",
    "BytesSource",
    "FileSource",
    # Transports
    "BaseChunkTransport",
    "HttpChunkTransport",
]
