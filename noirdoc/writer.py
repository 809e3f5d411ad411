"""Output persistence for rendered documents and the sidebar module."""

from __future__ import annotations

from pathlib import Path
from typing import List, Sequence

from .config import OutputConfig
from .logging import get_logger
from .models import RenderedDocument


class WriteFailure(RuntimeError):
    """Raised when an output directory or file cannot be written."""

    def __init__(self, path: Path, message: str) -> None:
        super().__init__(f"{path}: {message}")
        self.path = path


class OutputWriter:
    """Writes ``<root>/<docs_dir>/<logical-path>`` files and the sidebar module."""

    def __init__(self, settings: OutputConfig | None = None) -> None:
        self.settings = settings or OutputConfig()
        self.logger = get_logger("writer")

    def write(
        self,
        documents: Sequence[RenderedDocument],
        sidebar_source: str,
        output_root: Path,
    ) -> List[Path]:
        """Persist every document and the sidebar; return the written paths."""
        output_root = output_root.expanduser()
        docs_dir = output_root / self.settings.docs_dir
        written: List[Path] = []

        self._mkdir(docs_dir)
        for document in documents:
            target = docs_dir.joinpath(*document.logical_path.split("/"))
            self._mkdir(target.parent)
            self._write_text(target, document.content)
            written.append(target)

        sidebar_path = output_root / self.settings.sidebar_file
        self._mkdir(sidebar_path.parent)
        self._write_text(sidebar_path, sidebar_source)
        written.append(sidebar_path)

        self.logger.info("Wrote %d documents and %s", len(documents), sidebar_path)
        return written

    @staticmethod
    def _mkdir(path: Path) -> None:
        try:
            path.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise WriteFailure(path, f"cannot create directory: {exc}") from exc

    def _write_text(self, path: Path, content: str) -> None:
        try:
            with path.open("w", encoding="utf-8", newline="\n") as handle:
                handle.write(content)
        except OSError as exc:
            raise WriteFailure(path, f"cannot write file: {exc}") from exc
        self.logger.debug("Wrote %s", path)


__all__ = ["OutputWriter", "WriteFailure"]
