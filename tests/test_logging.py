"""Tests for noirdoc.logging."""

from __future__ import annotations

import logging
from pathlib import Path

from noirdoc.logging import configure_logging, get_logger, source_logger


def test_source_logger_prefixes_messages_with_source_name() -> None:
    logger = source_logger("parser", "account")

    message, kwargs = logger.process("3 structs", {"exc_info": False})

    assert logger.logger is get_logger("parser")
    assert logger.logger.name == "noirdoc.parser"
    assert message == "account: 3 structs"
    assert kwargs == {"exc_info": False}


def test_configure_logging_replaces_handlers_and_writes_log_file(tmp_path: Path) -> None:
    log_file = tmp_path / "logs" / "noirdoc.log"
    root = logging.getLogger("noirdoc")
    try:
        configure_logging()
        logger = configure_logging(verbose=True, log_file=log_file)

        assert logger is root
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 2

        source_logger("parser", "account").debug("parsed")
        for handler in logger.handlers:
            handler.flush()
        assert "noirdoc.parser: account: parsed" in log_file.read_text(encoding="utf-8")
    finally:
        for handler in list(root.handlers):
            root.removeHandler(handler)
            handler.close()
        root.setLevel(logging.NOTSET)
        root.propagate = True
