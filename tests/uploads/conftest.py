"""Fixtures for upload manager tests."""

import asyncio
import typing as t
from dataclasses import dataclass, field

import pytest

from ferry.domain.exceptions import ChunkUploadError
from ferry.domain.retry import RetryConfig
from ferry.domain.uploads import UploadChunk
from ferry.retry import RetryExecutor
from ferry.uploads import BaseChunkTransport, BytesSource, ChunkedUploadManager

CHUNK_SIZE = 10


@dataclass
class SentChunk:
    chunk_index: int
    payload: bytes
    endpoint: str
    file_id: str


@dataclass
class FakeTransport(BaseChunkTransport):
    """Transport that records chunks instead of sending them.

    ``failures`` maps a chunk index to how many more sends of that chunk
    should fail. ``gates`` maps a chunk index to an event the send waits on,
    so a test can act while that chunk is in flight.
    """

    failures: dict[int, int] = field(default_factory=dict)
    gates: dict[int, asyncio.Event] = field(default_factory=dict)
    sent: list[SentChunk] = field(default_factory=list)
    attempts: list[int] = field(default_factory=list)
    in_flight: asyncio.Event = field(default_factory=asyncio.Event)

    async def send(
        self, chunk: UploadChunk, payload: bytes, endpoint: str, file_id: str
    ) -> None:
        self.attempts.append(chunk.chunk_index)

        gate = self.gates.get(chunk.chunk_index)
        if gate is not None:
            self.in_flight.set()
            await gate.wait()

        remaining = self.failures.get(chunk.chunk_index, 0)
        if remaining:
            self.failures[chunk.chunk_index] = remaining - 1
            raise ChunkUploadError(chunk.chunk_index, 503)

        self.sent.append(SentChunk(chunk.chunk_index, payload, endpoint, file_id))

    @property
    def sent_indices(self) -> list[int]:
        return [s.chunk_index for s in self.sent]


@pytest.fixture
def transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def source() -> BytesSource:
    """35 bytes: chunks of 10, 10, 10 and 5."""
    return BytesSource("notes.txt", bytes(range(35)))


@pytest.fixture
def retry_executor(mock_logger, fake_sleep, real_emitter) -> RetryExecutor:
    return RetryExecutor(
        RetryConfig(max_retries=3, backoff_delays_ms=(1000, 2000, 4000)),
        logger=mock_logger,
        emitter=real_emitter,
        sleep=fake_sleep,
    )


@pytest.fixture
def manager(transport, retry_executor, mock_logger, real_emitter):
    return ChunkedUploadManager(
        transport,
        retry_executor=retry_executor,
        chunk_size=CHUNK_SIZE,
        logger=mock_logger,
        emitter=real_emitter,
    )


@pytest.fixture
def recorded_events(real_emitter) -> t.Callable[[str], list[t.Any]]:
    """Subscribe to an event type and return the list it is recorded into."""

    def _record(event_type: str) -> list[t.Any]:
        events: list[t.Any] = []
        real_emitter.on(event_type, events.append)
        return events

    return _record
