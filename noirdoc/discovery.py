"""Input discovery: find source files that opt into documentation."""

from __future__ import annotations

import os
from dataclasses import dataclass
from fnmatch import fnmatchcase
from pathlib import Path
from typing import Iterator, List, Sequence

from .config import DEFAULT_EXTENSION, DEFAULT_MARKER
from .logging import get_logger
from .models import SourceFile

_EXCLUDED_DIRS = {
    ".git",
    ".hg",
    ".svn",
    ".venv",
    "node_modules",
    "__pycache__",
    "target",
    ".noirdoc",
}


class DiscoveryFailure(RuntimeError):
    """Raised when the input tree or a candidate file cannot be read."""

    def __init__(self, path: Path, message: str) -> None:
        super().__init__(f"{path}: {message}")
        self.path = path


@dataclass
class IgnoreRule:
    """A gitignore-style exclusion pattern from .noirdoc.yml."""

    pattern: str
    directory_only: bool
    anchored: bool
    has_slash: bool

    def matches(self, rel_path: str, is_dir: bool) -> bool:
        if not self.pattern:
            return False
        if self.directory_only and not is_dir:
            return False

        if self.anchored or self.has_slash:
            if fnmatchcase(rel_path, self.pattern):
                return True
            return self.directory_only and rel_path.startswith(f"{self.pattern}/")

        return any(fnmatchcase(part, self.pattern) for part in rel_path.split("/"))


def _build_ignore_rule(pattern: str) -> IgnoreRule | None:
    pattern = pattern.strip()
    if not pattern:
        return None

    directory_only = pattern.endswith("/")
    if directory_only:
        pattern = pattern[:-1]

    anchored = pattern.startswith("/")
    if anchored:
        pattern = pattern[1:]

    return IgnoreRule(
        pattern=pattern,
        directory_only=directory_only,
        anchored=anchored,
        has_slash="/" in pattern,
    )


def _should_ignore(rel_path: str, is_dir: bool, rules: Sequence[IgnoreRule]) -> bool:
    return any(rule.matches(rel_path, is_dir) for rule in rules)


class SourceDiscovery:
    """Enumerates candidate files and reads the ones carrying the opt-in marker."""

    def __init__(
        self,
        *,
        extension: str = DEFAULT_EXTENSION,
        marker: str = DEFAULT_MARKER,
        recursive: bool = False,
        exclude_paths: Sequence[str] = (),
    ) -> None:
        self.extension = extension.lower()
        self.marker = marker
        self.recursive = recursive
        self._rules: List[IgnoreRule] = [
            rule for rule in (_build_ignore_rule(p) for p in exclude_paths) if rule is not None
        ]
        self.logger = get_logger("discovery")

    def candidates(self, root: Path) -> List[Path]:
        """Return files with the eligible extension, sorted by relative path."""
        root = root.expanduser().resolve()
        if not root.exists():
            raise DiscoveryFailure(root, "input directory not found")
        if not root.is_dir():
            raise DiscoveryFailure(root, "input path is not a directory")

        try:
            paths = list(self._iter_files(root))
        except OSError as exc:
            raise DiscoveryFailure(root, f"cannot list directory: {exc}") from exc
        return sorted(paths, key=lambda path: path.relative_to(root).as_posix())

    def read(self, path: Path) -> SourceFile | None:
        """Read ``path`` and return it when eligible, ``None`` when it lacks the marker."""
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise DiscoveryFailure(path, f"cannot read file: {exc}") from exc
        if self.marker not in text:
            self.logger.debug("Skipping %s (no marker)", path)
            return None
        return SourceFile(path=path, name=path.stem, text=text)

    def _iter_files(self, root: Path) -> Iterator[Path]:
        if not self.recursive:
            for entry in os.scandir(root):
                if entry.is_file() and self._eligible_name(entry.name, entry.name):
                    yield Path(entry.path)
            return

        def _raise(exc: OSError) -> None:
            raise exc

        for dirpath, dirnames, filenames in os.walk(root, onerror=_raise):
            current_dir = Path(dirpath)
            rel_dir = current_dir.relative_to(root).as_posix() if current_dir != root else ""

            kept_dirs = []
            for name in dirnames:
                if name in _EXCLUDED_DIRS:
                    continue
                rel_path = f"{rel_dir}/{name}" if rel_dir else name
                if _should_ignore(rel_path, True, self._rules):
                    continue
                kept_dirs.append(name)
            dirnames[:] = kept_dirs

            for filename in filenames:
                rel_path = f"{rel_dir}/{filename}" if rel_dir else filename
                if self._eligible_name(filename, rel_path):
                    yield current_dir / filename

    def _eligible_name(self, filename: str, rel_path: str) -> bool:
        if not filename.lower().endswith(self.extension):
            return False
        return not _should_ignore(rel_path, False, self._rules)


__all__ = ["DiscoveryFailure", "SourceDiscovery"]
