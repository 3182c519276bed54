"""Tests for logging infrastructure."""

import json

from loguru import logger as loguru_logger

from ferry.config.settings import Environment, LogLevel, Settings
from ferry.infrastructure.logging import (
    configure_logger,
    get_logger,
    reset_logging,
    setup_logging,
)


def test_get_logger_auto_configures():
    """Test that get_logger auto-configures with defaults."""
    reset_logging()

    logger = get_logger(__name__)

    assert logger is not None
    logger.info("Test message")


def test_get_logger_with_explicit_setup(capsys):
    """Levels below the configured one are dropped."""
    settings = Settings(environment=Environment.TESTING, log_level=LogLevel.WARNING)
    setup_logging(settings)

    logger = get_logger(__name__)
    logger.info("hidden message")
    logger.warning("visible message")

    err = capsys.readouterr().err
    assert "hidden message" not in err
    assert "visible message" in err


def test_development_format_includes_name(capsys):
    configure_logger(level=LogLevel.DEBUG, environment=Environment.TESTING)

    get_logger("ferry.uploads.manager").debug("Chunk 1/3 uploaded")

    err = capsys.readouterr().err
    assert "ferry.uploads.manager" in err
    assert "Chunk 1/3 uploaded" in err


def test_production_logs_are_json(capsys):
    configure_logger(level=LogLevel.INFO, environment=Environment.PRODUCTION)

    get_logger("ferry.retry.executor").warning("Attempt 1/4 failed")

    line = capsys.readouterr().err.strip().splitlines()[-1]
    record = json.loads(line)
    assert record["record"]["message"] == "Attempt 1/4 failed"
    assert record["record"]["extra"]["name"] == "ferry.retry.executor"


def test_reset_logging():
    """Test that reset_logging cleans up configuration."""
    configure_logger()
    _ = get_logger(__name__)

    reset_logging()

    # No sinks remain until the next get_logger call reconfigures
    assert loguru_logger._core.handlers == {}
    assert get_logger("other_module") is not None
    assert loguru_logger._core.handlers != {}
