"""Pytest configuration and fixtures for ferry tests."""

import typing as t

import loguru
import pytest
from blockbuster import BlockBuster, blockbuster_ctx

from ferry.app import create_app
from ferry.config.settings import Environment, LogLevel, Settings
from ferry.events import BaseEmitter, EventEmitter
from ferry.infrastructure.logging import reset_logging
from ferry.notifications import BaseNotifier


@pytest.fixture(autouse=True)
def blockbuster() -> t.Iterator[BlockBuster]:
    """Detect blocking calls in async event loop during tests.

    Raises a BlockingError if any blocking I/O operation (like a synchronous
    file read) is called from ferry code running inside the event loop.
    """
    with blockbuster_ctx(
        scanned_modules=["ferry"],
    ) as bb:
        # Third party modules use these functions, so we deactivate them
        # for now
        bb.functions["os.path.abspath"].deactivate()

        yield bb


@pytest.fixture(autouse=True)
def clean_logging_state():
    """Automatically reset logging before each test for isolation."""
    reset_logging()
    yield
    reset_logging()


@pytest.fixture
def test_settings():
    """Provide test-specific settings."""
    return Settings(
        environment=Environment.TESTING,
        log_level=LogLevel.CRITICAL,  # Minimal logging during tests
    )


@pytest.fixture
def test_app(test_settings):
    """Provide a test app with clean logging state."""
    reset_logging()
    app = create_app(settings=test_settings)
    yield app
    reset_logging()


@pytest.fixture
def mock_logger(mocker):
    """Provide a mock logger for testing that captures log calls."""
    logger = mocker.Mock(spec=loguru.logger)
    return logger


@pytest.fixture
def mock_emitter(mocker):
    """Provide a mock event emitter for testing event emission."""
    emitter = mocker.Mock(spec=BaseEmitter)
    emitter.emit = mocker.AsyncMock()
    return emitter


@pytest.fixture
def real_emitter(mock_logger):
    """Provide a real EventEmitter for testing actual event emission.

    Use this when a test subscribes handlers and inspects what they receive.
    For tests that only verify emit() was called, use mock_emitter instead.
    """
    return EventEmitter(mock_logger)


@pytest.fixture
def mock_notifier(mocker):
    """Provide a mock notification sink."""
    return mocker.Mock(spec=BaseNotifier)


@pytest.fixture
def fake_sleep(mocker):
    """Async stand-in for asyncio.sleep that returns immediately.

    Inject as ``sleep=`` and inspect ``await_args_list`` for the delays.
    """
    return mocker.AsyncMock(return_value=None)
