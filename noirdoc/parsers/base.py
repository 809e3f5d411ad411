"""Base classes for structural parser adapters."""

from abc import ABC, abstractmethod
from typing import Optional

from ..models import SourceUnit


class ParseFailure(RuntimeError):
    """Raised when a source file cannot be parsed by the host grammar."""

    def __init__(
        self,
        name: str,
        message: str,
        *,
        line: Optional[int] = None,
        column: Optional[int] = None,
    ) -> None:
        location = f":{line}:{column}" if line is not None and column is not None else ""
        super().__init__(f"{name}{location}: {message}")
        self.name = name
        self.line = line
        self.column = column


class SourceParser(ABC):
    """Contract for adapters that map a grammar's syntax tree onto ``SourceUnit``."""

    @abstractmethod
    def parse(self, text: str, name: str) -> SourceUnit:
        """Return the documentation model for ``text`` or raise ``ParseFailure``."""
