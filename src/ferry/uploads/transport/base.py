"""Base interface for chunk transports."""

from abc import ABC, abstractmethod

from ...domain.uploads import UploadChunk


class BaseChunkTransport(ABC):
    """Sends one chunk to an upload endpoint.

    Implementations raise on any failure, including non-2xx responses. The
    upload manager wraps each call in the retry executor.
    """

    @abstractmethod
    async def send(
        self, chunk: UploadChunk, payload: bytes, endpoint: str, file_id: str
    ) -> None:
        """Upload ``payload`` as chunk ``chunk.chunk_index`` of ``file_id``.

        Raises:
            ChunkUploadError: If the server does not accept the chunk
        """
        pass
