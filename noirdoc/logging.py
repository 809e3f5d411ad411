"""Logging utilities for noirdoc commands."""

from __future__ import annotations

import logging
from pathlib import Path

_LOGGER_NAME = "noirdoc"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a module-scoped logger under the noirdoc hierarchy."""
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


class SourceLoggerAdapter(logging.LoggerAdapter):
    """Prefixes each message with the source unit it concerns."""

    def process(self, msg, kwargs):
        return f"{self.extra['source']}: {msg}", kwargs


def source_logger(name: str, source: str) -> SourceLoggerAdapter:
    """Return a logger whose messages name ``source``, e.g. ``account: 3 structs``."""
    return SourceLoggerAdapter(get_logger(name), {"source": source})


def configure_logging(
    *, verbose: bool = False, log_file: Path | None = None
) -> logging.Logger:
    """Configure the noirdoc logger with console output and an optional file sink."""
    level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    # Repeated CLI invocations in one process must not stack handlers.
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    stream_handler = logging.StreamHandler()
    stream_handler.setLevel(level)
    stream_handler.setFormatter(logging.Formatter("[noirdoc] %(levelname)s %(message)s"))
    logger.addHandler(stream_handler)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
        logger.addHandler(file_handler)

    return logger


__all__ = ["SourceLoggerAdapter", "configure_logging", "get_logger", "source_logger"]
