"""Chunked upload manager with pause and resume.

Splits a file into fixed-size chunks and pushes them one at a time through a
retry executor, tracking which chunks the server has accepted so a paused or
failed upload can continue without re-sending them.
"""

import asyncio
import typing as t

from ..domain.exceptions import UploadError, ValidationError
from ..domain.retry import ErrorContext, now_ms
from ..domain.uploads import (
    ResumableUploadState,
    UploadChunk,
    UploadStatus,
    create_chunks,
)
from ..events import (
    BaseEmitter,
    ErrorInfo,
    EventEmitter,
    EventHandler,
    Subscription,
    UploadCompletedEvent,
    UploadFailedEvent,
    UploadPausedEvent,
    UploadProgressEvent,
    UploadResumedEvent,
    UploadStartedEvent,
)
from ..infrastructure.logging import get_logger
from ..retry.base import BaseRetryExecutor
from ..retry.error_handler import ErrorHandler
from ..retry.executor import RetryExecutor
from ..utils.callbacks import invoke_callback
from .sources import BaseUploadSource
from .transport.base import BaseChunkTransport

if t.TYPE_CHECKING:
    import loguru

DEFAULT_CHUNK_SIZE = 1024 * 1024  # 1 MiB

# Receives the overall progress percentage (0-100); may be sync or async
ProgressCallback = t.Callable[[int], t.Any]


class ChunkedUploadManager:
    """Uploads a file chunk by chunk, with retries, pause and resume.

    Chunks are sent strictly in index order and never in parallel: a chunk's
    whole retry sequence settles before the next chunk starts. That bounds
    memory and connections to one chunk and keeps progress monotonic.

    Pausing only stops the loop from starting the next chunk. A chunk request
    already on the wire completes (or fails) normally and is accounted for.

    State lives in ``state`` as an immutable ResumableUploadState that is
    replaced on every transition. It is owned by the manager; do not drive
    two uploads through one manager at the same time.

    Usage:
        async with HttpChunkTransport() as transport:
            manager = ChunkedUploadManager(transport, chunk_size=1024 * 1024)
            source = await FileSource.from_path("report.pdf")
            ok = await manager.start_upload(source, url, on_progress=print)
            if not ok and manager.state.status == UploadStatus.PAUSED:
                ok = await manager.resume_upload(url)
    """

    def __init__(
        self,
        transport: BaseChunkTransport,
        retry_executor: BaseRetryExecutor | None = None,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        logger: "loguru.Logger" = get_logger(__name__),
        emitter: BaseEmitter | None = None,
        error_handler: ErrorHandler | None = None,
    ) -> None:
        """Initialise the upload manager.

        Args:
            transport: Sends individual chunks to the endpoint
            retry_executor: Wraps each chunk upload. If None, a RetryExecutor
                           with the default policy sharing this manager's
                           emitter is created.
            chunk_size: Size of each chunk in bytes
            logger: Logger instance for recording upload progress
            emitter: Event emitter for upload events. If None, a new
                    EventEmitter will be created.
            error_handler: Receives the error when an upload stops on a
                          failed chunk. Optional.

        Raises:
            ValidationError: If chunk_size is not positive
        """
        if chunk_size <= 0:
            raise ValidationError(f"chunk_size must be positive, got {chunk_size}")

        self._transport = transport
        self._logger = logger
        self._emitter = emitter if emitter is not None else EventEmitter(logger)
        self._retry = (
            retry_executor
            if retry_executor is not None
            else RetryExecutor(logger=logger, emitter=self._emitter)
        )
        self._error_handler = error_handler
        self.chunk_size = chunk_size

        self._state: ResumableUploadState | None = None
        self._source: BaseUploadSource | None = None
        # Bumped whenever a new loop takes over; older loops stop at the next chunk
        self._run_token = 0
        self._loop_lock = asyncio.Lock()

    @property
    def state(self) -> ResumableUploadState | None:
        """Current upload state, or None before the first upload."""
        return self._state

    @property
    def emitter(self) -> BaseEmitter:
        return self._emitter

    @property
    def retry_executor(self) -> BaseRetryExecutor:
        return self._retry

    @property
    def is_running(self) -> bool:
        """Whether a chunk loop is currently active."""
        return self._loop_lock.locked()

    def on(self, event_type: str, handler: EventHandler) -> Subscription:
        """Subscribe to upload events (``upload.progress``, ``upload.failed``...)."""
        return self._emitter.on(event_type, handler)

    def create_chunks(self, source: BaseUploadSource) -> tuple[UploadChunk, ...]:
        """Partition ``source`` using this manager's chunk size."""
        return create_chunks(source.size, self.chunk_size)

    async def upload_chunk(
        self, chunk: UploadChunk, endpoint: str, file_id: str
    ) -> None:
        """Read one chunk's bytes from the active source and send them.

        This is the unit of work each retry attempt runs.

        Raises:
            UploadError: If no upload source is active
            ChunkUploadError: If the endpoint rejects the chunk
        """
        if self._source is None:
            raise UploadError("No upload source is active")

        payload = await self._source.read(chunk.payload)
        await self._transport.send(chunk, payload, endpoint, file_id)

    async def start_upload(
        self,
        source: BaseUploadSource,
        endpoint: str,
        on_progress: ProgressCallback | None = None,
    ) -> bool:
        """
        Upload ``source`` to ``endpoint`` chunk by chunk.

        Starting again with the same source after a failed upload keeps the
        existing chunks and file id and only sends the chunks still missing.
        Any other call starts a fresh upload.

        Args:
            source: File to upload
            endpoint: URL receiving the chunks
            on_progress: Called with the new percentage after each chunk

        Returns:
            True once every chunk is uploaded. False if a chunk exhausted its
            retries, the upload was paused, or another loop is running.
        """
        if self.is_running:
            self._logger.warning(
                f"Ignoring start_upload for {source.name}: an upload is in progress"
            )
            return False

        if self._can_restart(source):
            state = self._require_state().restarted()
            self._logger.info(
                f"Restarting upload of {source.name} ({state.file_id}), "
                f"{state.uploaded_chunks}/{state.total_chunks} chunks already sent"
            )
        else:
            file_id = f"{source.name}-{now_ms()}"
            state = ResumableUploadState.initial(
                file_id, source.name, self.create_chunks(source)
            )
            self._logger.info(
                f"Starting upload of {source.name} ({source.size} bytes) as "
                f"{state.total_chunks} chunk(s) of up to {self.chunk_size} bytes"
            )

        self._source = source
        self._state = state
        self._run_token += 1

        async with self._loop_lock:
            await self._emitter.emit(
                "upload.started",
                UploadStartedEvent(
                    file_id=state.file_id,
                    file_name=state.file_name,
                    total_chunks=state.total_chunks,
                    total_bytes=source.size,
                ),
            )
            return await self._upload_pending_chunks(
                endpoint, on_progress, operation="chunk-upload"
            )

    def pause_upload(self) -> bool:
        """Stop the upload before its next chunk.

        Only an uploading upload can be paused. A chunk already being sent is
        not interrupted.

        Returns:
            True if the upload moved to paused
        """
        if self._state is None or self._state.status != UploadStatus.UPLOADING:
            return False

        self._state = self._state.with_status(UploadStatus.PAUSED)
        self._logger.info(
            f"Pausing upload {self._state.file_id} at "
            f"{self._state.uploaded_chunks}/{self._state.total_chunks} chunks"
        )
        return True

    async def resume_upload(
        self, endpoint: str, on_progress: ProgressCallback | None = None
    ) -> bool:
        """
        Continue a paused upload from its first chunk not yet uploaded.

        If a chunk from before the pause is still in flight, waits for it to
        settle first. Uploaded chunks are never sent again.

        Args:
            endpoint: URL receiving the chunks
            on_progress: Called with the new percentage after each chunk

        Returns:
            False without touching the state unless the upload is paused;
            otherwise the same outcome as ``start_upload``. True as well when
            the chunk in flight before the pause finished the upload.
        """
        if self._state is None or self._state.status != UploadStatus.PAUSED:
            return False

        self._state = self._state.with_status(UploadStatus.UPLOADING)
        self._run_token += 1
        self._logger.info(f"Resuming upload {self._state.file_id}")

        async with self._loop_lock:
            state = self._require_state()
            if state.status == UploadStatus.COMPLETED:
                # The chunk in flight before the pause was the last one
                return True
            if state.status != UploadStatus.UPLOADING:
                # The chunk in flight before the pause exhausted its retries
                return False
            await self._emitter.emit(
                "upload.resumed",
                UploadResumedEvent(
                    file_id=state.file_id,
                    file_name=state.file_name,
                    uploaded_chunks=state.uploaded_chunks,
                ),
            )
            return await self._upload_pending_chunks(
                endpoint, on_progress, operation="chunk-upload-resume"
            )

    def reset(self) -> bool:
        """Forget the current upload. Refused while a chunk loop is running."""
        if self.is_running:
            return False
        self._state = None
        self._source = None
        return True

    def _require_state(self) -> ResumableUploadState:
        if self._state is None:
            raise UploadError("No upload has been started")
        return self._state

    def _can_restart(self, source: BaseUploadSource) -> bool:
        """Whether ``source`` continues the failed upload held in ``state``."""
        state = self._state
        if state is None or state.status != UploadStatus.ERROR:
            return False
        if state.file_name != source.name:
            return False
        expected = create_chunks(source.size, self.chunk_size)
        return [c.payload for c in expected] == [c.payload for c in state.chunks]

    async def _upload_pending_chunks(
        self,
        endpoint: str,
        on_progress: ProgressCallback | None,
        operation: str,
    ) -> bool:
        """Drive the not-yet-uploaded chunks through the retry executor in order."""
        token = self._run_token
        total_chunks = self._require_state().total_chunks

        for index in range(total_chunks):
            state = self._require_state()
            chunk = state.chunks[index]
            if chunk.uploaded:
                continue

            if token != self._run_token:
                self._logger.debug(
                    f"Upload loop for {state.file_id} superseded before chunk {index}"
                )
                return False
            if state.status == UploadStatus.PAUSED:
                await self._emitter.emit(
                    "upload.paused",
                    UploadPausedEvent(
                        file_id=state.file_id,
                        file_name=state.file_name,
                        uploaded_chunks=state.uploaded_chunks,
                    ),
                )
                self._logger.info(f"Upload {state.file_id} paused before chunk {index}")
                return False
            if state.status != UploadStatus.UPLOADING:
                return False

            file_id = state.file_id
            context = ErrorContext.create(operation, file_id=file_id)
            result = await self._retry.retry(
                lambda c=chunk: self.upload_chunk(c, endpoint, file_id), context
            )

            if result.failed:
                await self._fail(index, result.error, context)
                return False

            state = self._require_state().with_chunk_uploaded(index)
            self._state = state
            self._logger.debug(
                f"Chunk {index + 1}/{state.total_chunks} of {file_id} uploaded "
                f"({state.progress}%)"
            )
            await self._emitter.emit(
                "upload.progress",
                UploadProgressEvent(
                    file_id=file_id,
                    file_name=state.file_name,
                    chunk_index=index,
                    uploaded_chunks=state.uploaded_chunks,
                    total_chunks=state.total_chunks,
                    progress=state.progress,
                ),
            )
            await invoke_callback(on_progress, state.progress, logger=self._logger)

        state = self._require_state().completed()
        self._state = state
        self._logger.info(f"Upload {state.file_id} completed")
        await self._emitter.emit(
            "upload.completed",
            UploadCompletedEvent(
                file_id=state.file_id,
                file_name=state.file_name,
                total_chunks=state.total_chunks,
            ),
        )
        return True

    async def _fail(
        self, chunk_index: int, cause: BaseException | None, context: ErrorContext
    ) -> None:
        """Move the upload to error after ``chunk_index`` exhausted its retries."""
        error = UploadError(f"Failed to upload chunk {chunk_index}")
        error.__cause__ = cause

        state = self._require_state().with_error(chunk_index, error)
        self._state = state
        self._logger.error(
            f"Upload {state.file_id} stopped at chunk {chunk_index}: {cause}"
        )

        if self._error_handler is not None:
            self._error_handler.handle_error(error, context)

        await self._emitter.emit(
            "upload.failed",
            UploadFailedEvent(
                file_id=state.file_id,
                file_name=state.file_name,
                chunk_index=chunk_index,
                error=ErrorInfo.from_exception(cause) if cause is not None else None,
            ),
        )
