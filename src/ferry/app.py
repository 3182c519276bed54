"""Application wiring."""

from dataclasses import dataclass

import aiohttp

from .config.settings import Settings
from .infrastructure.logging import setup_logging
from .notifications import BaseNotifier, NullNotifier
from .retry import ErrorHandler, RetryExecutor
from .uploads import ChunkedUploadManager, HttpChunkTransport
from .uploads.transport import BaseChunkTransport


@dataclass(frozen=True)
class App:
    """Application wiring container.

    Holds the cross-cutting concerns (settings and the notification sink) and
    builds components configured from them. Tests pass explicit Settings.
    """

    settings: Settings
    notifier: BaseNotifier

    def create_retry_executor(self) -> RetryExecutor:
        """Retry executor using the configured policy."""
        return RetryExecutor(self.settings.retry_config(), notifier=self.notifier)

    def create_transport(
        self, client: aiohttp.ClientSession | None = None
    ) -> HttpChunkTransport:
        """HTTP transport using the configured per-request timeout."""
        return HttpChunkTransport(client=client, timeout=self.settings.request_timeout)

    def create_upload_manager(
        self,
        transport: BaseChunkTransport,
        error_handler: ErrorHandler | None = None,
    ) -> ChunkedUploadManager:
        """Upload manager using the configured chunk size and retry policy."""
        executor = self.create_retry_executor()
        return ChunkedUploadManager(
            transport,
            retry_executor=executor,
            chunk_size=self.settings.chunk_size,
            emitter=executor.emitter,
            error_handler=error_handler,
        )


def create_app(
    settings: Settings | None = None, notifier: BaseNotifier | None = None
) -> App:
    """Create an `App` with provided settings or defaults and configure logging."""
    settings = settings or Settings()
    setup_logging(settings)
    return App(settings=settings, notifier=notifier or NullNotifier())
