"""Logging setup for the CLI and a scoped filter for noisy third-party loggers."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from contextlib import contextmanager

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"

# Loggers that report every HTTP round-trip at INFO level.
NOISY_LOGGERS: tuple[str, ...] = ("httpx", "pinecone", "openai", "anthropic")


def configure_logging(level: str | int = "INFO") -> None:
    """Configure the root logger once for command-line use."""
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    logging.basicConfig(level=level, format=LOG_FORMAT)


class QuietLoggerFilter(logging.Filter):
    """Drop records below ``min_level`` from the named loggers and their children.

    ``openai`` matches ``openai._base_client`` but not ``openai_tools``.
    """

    def __init__(self, names: Iterable[str] = NOISY_LOGGERS, min_level: int = logging.WARNING) -> None:
        super().__init__()
        self.names = tuple(names)
        self.min_level = min_level

    def _matches(self, logger_name: str) -> bool:
        return any(logger_name == name or logger_name.startswith(f"{name}.") for name in self.names)

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno >= self.min_level or not self._matches(record.name)


@contextmanager
def quiet_loggers(
    names: Iterable[str] = NOISY_LOGGERS,
    min_level: int = logging.WARNING,
) -> Iterator[QuietLoggerFilter]:
    """Attach a :class:`QuietLoggerFilter` to the root handlers for the duration of the block.

    Logger filters only see records created on that exact logger, so the filter
    sits on the handlers, where propagated records from child loggers arrive.
    Call :func:`configure_logging` first; handlers added inside the block are
    not filtered. The filter is removed again on exit.
    """
    quiet = QuietLoggerFilter(names, min_level)
    handlers = list(logging.getLogger().handlers)
    for handler in handlers:
        handler.addFilter(quiet)
    try:
        yield quiet
    finally:
        for handler in handlers:
            handler.removeFilter(quiet)
