"""HTTP transport posting chunks as multipart form data."""

import typing as t

import aiohttp

from ...domain.exceptions import ChunkUploadError, TransportNotInitializedError
from ...domain.uploads import UploadChunk
from ...infrastructure.http import create_client_session
from ...infrastructure.logging import get_logger
from .base import BaseChunkTransport

if t.TYPE_CHECKING:
    import loguru


class HttpChunkTransport(BaseChunkTransport):
    """POSTs each chunk to the endpoint as ``multipart/form-data``.

    Form fields: ``chunk`` (the bytes), ``chunkIndex``, ``totalChunks`` and
    ``fileId``. Any response outside 2xx is a failed chunk.

    Usage:
        async with HttpChunkTransport(timeout=30) as transport:
            manager = ChunkedUploadManager(transport)
            await manager.start_upload(source, "https://example.com/upload")

    Or with an existing session, which the transport will not close:
        transport = HttpChunkTransport(client=session)
    """

    def __init__(
        self,
        client: aiohttp.ClientSession | None = None,
        timeout: float | None = None,
        logger: "loguru.Logger" = get_logger(__name__),
    ) -> None:
        """
        Args:
            client: HTTP session to use. If None, one is created on ``__aenter__``.
            timeout: Total timeout per chunk request in seconds (None = no timeout)
            logger: Logger for request diagnostics
        """
        self._client = client
        self._owns_client = False
        self._timeout = timeout
        self._logger = logger

    @property
    def client(self) -> aiohttp.ClientSession:
        if self._client is None:
            raise TransportNotInitializedError(
                "HttpChunkTransport has no session; pass a client or use "
                "'async with HttpChunkTransport()'"
            )
        return self._client

    async def __aenter__(self) -> "HttpChunkTransport":
        if self._client is None:
            self._client = create_client_session()
            self._owns_client = True
        return self

    async def __aexit__(self, *exc_info: t.Any) -> None:
        if self._owns_client and self._client is not None:
            await self._client.close()
            self._client = None
            self._owns_client = False

    def _build_form(
        self, chunk: UploadChunk, payload: bytes, file_id: str
    ) -> aiohttp.FormData:
        form = aiohttp.FormData()
        form.add_field(
            "chunk",
            payload,
            filename=f"chunk-{chunk.chunk_index}",
            content_type="application/octet-stream",
        )
        form.add_field("chunkIndex", str(chunk.chunk_index))
        form.add_field("totalChunks", str(chunk.total_chunks))
        form.add_field("fileId", file_id)
        return form

    async def send(
        self, chunk: UploadChunk, payload: bytes, endpoint: str, file_id: str
    ) -> None:
        """POST one chunk.

        Raises:
            ChunkUploadError: On a non-2xx response
            aiohttp.ClientError: On connection-level failures
            asyncio.TimeoutError: If the request exceeds the timeout
        """
        form = self._build_form(chunk, payload, file_id)
        timeout = aiohttp.ClientTimeout(total=self._timeout)

        self._logger.debug(
            f"Sending chunk {chunk.chunk_index + 1}/{chunk.total_chunks} "
            f"({len(payload)} bytes) of {file_id} to {endpoint}"
        )

        async with self.client.post(endpoint, data=form, timeout=timeout) as response:
            if not 200 <= response.status < 300:
                raise ChunkUploadError(chunk.chunk_index, response.status)
