"""This module provides the ledger server's logger.

Every connection is served on its own thread, and that thread is tagged
with the peer address for as long as the connection lives. The
`ContextualFilter` copies the tag into each record as `correlation_id`, so
the lines written on behalf of one client can be picked out of the shared
stream.
"""

from __future__ import annotations

import sys
import threading
from collections.abc import Generator
from contextlib import contextmanager
from logging import Filter, Formatter, Logger, LogRecord, StreamHandler, _nameToLevel, getLogger

from pocket_ledger.providers.config import ConfigProvider

__all__ = ["ContextualFilter", "Logger", "LoggingProvider"]

LOGGER_NAME = "pocket_ledger"
LOG_FORMAT = "%(asctime)s - %(name)s - [%(levelname)s] [%(correlation_id)s] - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
NO_CORRELATION_ID = "-"

_log_context = threading.local()


def _level_number(level_name: str, default: int) -> int:
    """Translates a level name such as ``"debug"`` into its numeric value.

    Args:
        level_name: The case-insensitive level name.
        default: The value used for unknown names.

    Returns:
        The numeric logging level.
    """
    return _nameToLevel.get(level_name.upper(), default)


class ContextualFilter(Filter):
    """Stamps each record with the correlation id of the emitting thread."""

    def filter(self, record: LogRecord) -> bool:
        """Sets `record.correlation_id`, or a dash outside any connection.

        Args:
            record: The record about to be formatted.

        Returns:
            True, so that no record is dropped.
        """
        record.correlation_id = getattr(_log_context, "correlation_id", None) or NO_CORRELATION_ID
        return True


class LoggingProvider:
    """Hands out the single `pocket_ledger` logger.

    The logger is set up lazily on the first `get_logger` call, at the level
    named by `LOG_LEVEL` unless the caller overrides it.
    """

    _instance: LoggingProvider | None = None
    _logger: Logger | None = None

    def __new__(cls) -> LoggingProvider:
        """Returns the shared provider, creating it on first use.

        Returns:
            The singleton instance of the LoggingProvider.
        """
        if not cls._instance:  # pragma: no cover
            cls._instance = super().__new__(cls)
        return cls._instance

    @staticmethod
    def _build_logger(level_name: str) -> Logger:
        """Attaches the stderr handler and sets the initial level.

        Args:
            level_name: The level to start at.

        Returns:
            The ready-to-use logger.
        """
        logger = getLogger(LOGGER_NAME)
        logger.setLevel(_level_number(level_name, _nameToLevel["INFO"]))

        if not logger.handlers:
            handler = StreamHandler(sys.stderr)
            handler.setFormatter(Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
            handler.addFilter(ContextualFilter())
            logger.addHandler(handler)

        logger.info(f"Logger configured with level: {level_name}")
        return logger

    def get_logger(self, level_override: str | None = None) -> Logger:
        """Returns the application logger.

        Args:
            level_override: An optional level name, e.g. from ``--log-level``.
                On a logger that already exists only its level changes.

        Returns:
            The configured logger instance.
        """
        if not self._logger:
            self._logger = self._build_logger(level_override or ConfigProvider.get_config().LOG_LEVEL)
        elif level_override:
            self._logger.setLevel(_level_number(level_override, self._logger.level))
        return self._logger

    @contextmanager
    def set_correlation_id(self, correlation_id: str) -> Generator[None, None, None]:
        """Tags the current thread for the duration of the block.

        The previous tag, if any, is restored on exit.

        Args:
            correlation_id: The tag, usually the peer address.

        Yields:
            None.
        """
        previous = getattr(_log_context, "correlation_id", None)
        _log_context.correlation_id = correlation_id
        try:
            yield
        finally:
            _log_context.correlation_id = previous
