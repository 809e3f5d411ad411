"""Pipeline orchestration: discover, parse, render, build sidebar, write."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from functools import partial
from pathlib import Path
from typing import Callable, List, Sequence, Set, Tuple

from .config import CONFIG_FILENAME, NoirDocConfig, load_config
from .discovery import DiscoveryFailure, SourceDiscovery
from .logging import get_logger, source_logger
from .models import RenderedDocument, SidebarNode, SourceFile, SourceUnit
from .parsers import ParseFailure, RustGrammarParser, SourceParser
from .render import DocumentRenderer, OverviewRenderer, SidebarBuilder
from .render.sidebar import count_entries
from .writer import OutputWriter


@dataclass
class SkippedFile:
    """An input file left out of the run and the reason why."""

    path: Path
    reason: str


@dataclass
class BuildResult:
    """Everything produced for one documentation run."""

    documents: List[RenderedDocument]
    sidebar: List[SidebarNode]
    sidebar_source: str
    units: List[SourceUnit] = field(default_factory=list)
    skipped: List[SkippedFile] = field(default_factory=list)


class Orchestrator:
    """Coordinates the documentation pipeline for one input directory.

    Collaborators passed to the constructor take precedence over the ones
    derived from ``.noirdoc.yml``.
    """

    def __init__(
        self,
        discovery: SourceDiscovery | None = None,
        parser: SourceParser | None = None,
        renderer: DocumentRenderer | None = None,
        sidebar_builder: SidebarBuilder | None = None,
        writer: OutputWriter | None = None,
    ) -> None:
        self.discovery = discovery
        self.parser = parser
        self.renderer = renderer
        self.sidebar_builder = sidebar_builder or SidebarBuilder()
        self.writer = writer
        self.logger = get_logger("orchestrator")

    @staticmethod
    def load_config(input_dir: str | Path) -> NoirDocConfig:
        return load_config(Path(input_dir).expanduser() / CONFIG_FILENAME)

    def run(
        self,
        input_dir: str | Path,
        output_dir: str | Path,
        config: NoirDocConfig | None = None,
    ) -> BuildResult:
        """Build the documentation site for ``input_dir`` and write it to ``output_dir``."""
        config = config or self.load_config(input_dir)
        result = self.build(input_dir, config)
        writer = self.writer or OutputWriter(config.output)
        writer.write(result.documents, result.sidebar_source, Path(output_dir))
        return result

    def build(self, input_dir: str | Path, config: NoirDocConfig | None = None) -> BuildResult:
        """Run discovery, parsing and rendering without touching the output tree."""
        root = Path(input_dir).expanduser().resolve()
        config = config or self.load_config(root)
        self.logger.info("Generating documentation for %s", root)

        skipped: List[SkippedFile] = []
        sources = self._discover(root, config, skipped)
        self.logger.debug("Discovered %d eligible files", len(sources))
        units = self._parse_all(sources, config, skipped)

        renderer = self.renderer or DocumentRenderer(OverviewRenderer(config.overview.template))
        namespace = config.layout.namespace
        if namespace:
            documents = renderer.render_namespace(namespace, units)
            sidebar = self.sidebar_builder.build_grouped(namespace, documents)
        else:
            documents = renderer.render_flat(units, config.overview)
            sidebar = self.sidebar_builder.build(documents)
        sidebar_source = self.sidebar_builder.serialize(
            sidebar, sidebar_name=config.output.sidebar_name
        )

        self.logger.info(
            "Rendered %d documents (%d sidebar entries, %d files skipped)",
            len(documents),
            count_entries(sidebar),
            len(skipped),
        )
        return BuildResult(
            documents=documents,
            sidebar=sidebar,
            sidebar_source=sidebar_source,
            units=units,
            skipped=skipped,
        )

    def _discover(self, root: Path, config: NoirDocConfig, skipped: List[SkippedFile]) -> List[SourceFile]:
        discovery = self.discovery or SourceDiscovery(
            extension=config.extension,
            marker=config.marker,
            recursive=config.recursive,
            exclude_paths=config.exclude_paths,
        )
        sources: List[SourceFile] = []
        seen: Set[str] = set()
        for path in discovery.candidates(root):
            try:
                source = discovery.read(path)
            except DiscoveryFailure as exc:
                if config.fail_fast:
                    raise
                self.logger.warning("Skipping unreadable file: %s", exc)
                skipped.append(SkippedFile(path=path, reason=str(exc)))
                continue
            if source is None:
                continue
            if source.name in seen:
                reason = f"duplicate unit name '{source.name}'"
                self.logger.warning("Skipping %s: %s", path, reason)
                skipped.append(SkippedFile(path=path, reason=reason))
                continue
            seen.add(source.name)
            sources.append(source)
        return sources

    def _parse_all(
        self,
        sources: Sequence[SourceFile],
        config: NoirDocConfig,
        skipped: List[SkippedFile],
    ) -> List[SourceUnit]:
        parser = self.parser or RustGrammarParser(strict=config.parser.strict)
        workers = config.parser.workers

        if workers > 1 and len(sources) > 1:
            with ThreadPoolExecutor(max_workers=workers) as pool:
                futures = [pool.submit(parser.parse, source.text, source.name) for source in sources]
                # Joined in discovery order, not completion order.
                pending = [(source, future.result) for source, future in zip(sources, futures)]
                return self._collect(pending, config, skipped)

        pending = [(source, partial(parser.parse, source.text, source.name)) for source in sources]
        return self._collect(pending, config, skipped)

    def _collect(
        self,
        pending: Sequence[Tuple[SourceFile, Callable[[], SourceUnit]]],
        config: NoirDocConfig,
        skipped: List[SkippedFile],
    ) -> List[SourceUnit]:
        units: List[SourceUnit] = []
        for source, outcome in pending:
            try:
                unit = outcome()
            except ParseFailure as exc:
                if config.fail_fast:
                    raise
                self.logger.warning("Skipping unparseable file: %s", exc)
                skipped.append(SkippedFile(path=source.path, reason=str(exc)))
                continue
            if unit.is_empty():
                source_logger("orchestrator", unit.name).info(
                    "no structs, traits, functions or impls to document"
                )
            units.append(unit)
        return units


__all__ = ["BuildResult", "Orchestrator", "SkippedFile"]
