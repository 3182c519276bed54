#!/usr/bin/env python3
"""
02_pause_resume_upload.py - Chunked upload with pause, resume and retries

Demonstrates:
- HttpChunkTransport posting multipart chunks to a server
- Progress callback and upload.* events
- Pausing from the progress callback and resuming later
- A transient 503 on one chunk absorbed by the retry executor

Runs offline: a small aiohttp server on localhost receives the chunks.
"""

import asyncio
import tempfile
from pathlib import Path

from aiohttp import web

from ferry import ChunkedUploadManager, RetryConfig, RetryExecutor
from ferry.events import UploadCompletedEvent
from ferry.notifications import ConsoleNotifier
from ferry.uploads import FileSource, HttpChunkTransport

CHUNK_SIZE = 64 * 1024


def create_server(received: dict[str, dict[int, bytes]]) -> web.Application:
    """Chunk receiver that answers 503 the first time it sees chunk 3."""
    rejected: set[str] = set()

    async def upload(request: web.Request) -> web.Response:
        form = await request.post()
        file_id = str(form["fileId"])
        index = int(str(form["chunkIndex"]))

        if index == 3 and file_id not in rejected:
            rejected.add(file_id)
            return web.Response(status=503)

        received.setdefault(file_id, {})[index] = form["chunk"].file.read()
        return web.Response(status=200)

    app = web.Application(client_max_size=2 * CHUNK_SIZE)
    app.router.add_post("/upload", upload)
    return app


async def main() -> None:
    received: dict[str, dict[int, bytes]] = {}
    runner = web.AppRunner(create_server(received))
    await runner.setup()
    site = web.TCPSite(runner, "127.0.0.1", 0)
    await site.start()
    port = site._server.sockets[0].getsockname()[1]
    endpoint = f"http://127.0.0.1:{port}/upload"

    with tempfile.TemporaryDirectory() as tmp:
        path = Path(tmp) / "example.bin"
        content = bytes(range(256)) * 1500  # ~375 KiB, 6 chunks
        await asyncio.to_thread(path.write_bytes, content)
        source = await FileSource.from_path(path)

        async with HttpChunkTransport(timeout=10) as transport:
            executor = RetryExecutor(
                RetryConfig(max_retries=3, backoff_delays_ms=(250, 500, 1000)),
                notifier=ConsoleNotifier(),
            )
            manager = ChunkedUploadManager(
                transport,
                retry_executor=executor,
                chunk_size=CHUNK_SIZE,
                emitter=executor.emitter,
            )

            def on_completed(event: UploadCompletedEvent) -> None:
                print(f"completed {event.file_id} ({event.total_chunks} chunks)")

            manager.on("upload.completed", on_completed)

            def pause_at_half(progress: int) -> None:
                print(f"progress: {progress}%")
                if progress >= 50 and manager.pause_upload():
                    print("paused")

            finished = await manager.start_upload(source, endpoint, pause_at_half)
            state = manager.state
            print(
                f"start_upload returned {finished}, status={state.status.value}, "
                f"{state.uploaded_chunks}/{state.total_chunks} chunks\n"
            )

            await asyncio.sleep(0.5)
            print("resuming")
            finished = await manager.resume_upload(
                endpoint, lambda p: print(f"progress: {p}%")
            )
            print(f"resume_upload returned {finished}")

        chunks = received[manager.state.file_id]
        reassembled = b"".join(chunks[i] for i in sorted(chunks))
        print(
            f"Server reassembled {len(reassembled)} bytes, "
            f"match: {reassembled == content}"
        )

    await runner.cleanup()


if __name__ == "__main__":
    asyncio.run(main())
