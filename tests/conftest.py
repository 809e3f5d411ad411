from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Iterator, List

import pytest

from tests._fixtures.source_tree import SourceTreeBuilder


@pytest.fixture
def source_tree(tmp_path: Path) -> SourceTreeBuilder:
    """Provide a reusable source tree builder rooted at the pytest tmp_path."""
    return SourceTreeBuilder(tmp_path)


class _ListHandler(logging.Handler):
    def __init__(self) -> None:
        super().__init__(logging.DEBUG)
        self.messages: List[str] = []

    def emit(self, record: logging.LogRecord) -> None:
        self.messages.append(record.getMessage())


@pytest.fixture
def log_messages() -> Iterator[Callable[[str], List[str]]]:
    """Collect messages emitted on ``noirdoc.<name>`` loggers.

    Handlers attach to the named logger directly because the CLI turns off
    propagation on the ``noirdoc`` logger.
    """
    attached = []

    def _capture(name: str) -> List[str]:
        logger = logging.getLogger(f"noirdoc.{name}")
        handler = _ListHandler()
        attached.append((logger, handler, logger.level))
        logger.addHandler(handler)
        logger.setLevel(logging.DEBUG)
        return handler.messages

    yield _capture

    for logger, handler, level in attached:
        logger.removeHandler(handler)
        logger.setLevel(level)
