"""Logging setup built on loguru.

Components receive a bound logger through their constructors and default to
``get_logger(__name__)``. The first call to ``get_logger`` configures loguru
with development defaults unless ``setup_logging`` already ran.
"""

import sys
import typing as t

from loguru import logger

from ..config.settings import Environment, LogLevel, Settings

if t.TYPE_CHECKING:
    import loguru

_DEVELOPMENT_FORMAT = (
    "<green>{time:HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{extra[name]}</cyan> - <level>{message}</level>"
)

_configured = False


def configure_logger(
    level: LogLevel = LogLevel.INFO,
    environment: Environment = Environment.DEVELOPMENT,
) -> None:
    """Replace loguru's sinks with a single stderr sink.

    Production logs are serialised to JSON lines; development and testing
    get the coloured human-readable format.

    Args:
        level: Minimum level to emit
        environment: Runtime environment controlling the output format
    """
    global _configured

    logger.remove()
    logger.configure(extra={"name": "ferry"})

    if environment == Environment.PRODUCTION:
        logger.add(sys.stderr, level=level.value, serialize=True, backtrace=False)
    else:
        logger.add(
            sys.stderr,
            level=level.value,
            format=_DEVELOPMENT_FORMAT,
            colorize=environment == Environment.DEVELOPMENT,
        )

    _configured = True


def setup_logging(settings: Settings) -> None:
    """Configure logging from application settings."""
    configure_logger(level=settings.log_level, environment=settings.environment)


def get_logger(name: str) -> "loguru.Logger":
    """Return a logger bound to ``name``, configuring defaults on first use."""
    if not _configured:
        configure_logger()
    return logger.bind(name=name)


def is_configured() -> bool:
    return _configured


def reset_logging() -> None:
    """Drop all sinks so the next ``get_logger`` call reconfigures from scratch."""
    global _configured

    logger.remove()
    _configured = False
