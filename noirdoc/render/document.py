"""Markdown rendering of parsed source units."""

from __future__ import annotations

import re
from typing import List, Sequence

from ..config import OverviewConfig
from ..logging import get_logger
from ..models import FunctionDef, ImplBlock, RenderedDocument, SourceUnit, StructDef, TraitDef
from .doc_comments import parse_doc_comment
from .overview import OverviewRenderer

UNKNOWN_TYPE = "Unknown"

_SECTIONS = (
    ("Structs", "structs"),
    ("Traits", "traits"),
    ("Functions", "functions"),
    ("Implementations", "impls"),
)


class DocumentRenderer:
    """Turns ``SourceUnit`` models into an ordered set of markdown documents."""

    def __init__(self, overview_renderer: OverviewRenderer | None = None) -> None:
        self.overview_renderer = overview_renderer or OverviewRenderer()
        self.logger = get_logger("render")

    def render_flat(
        self, units: Sequence[SourceUnit], overview: OverviewConfig | None = None
    ) -> List[RenderedDocument]:
        """Return the overview page followed by one ``<unit>.md`` page per unit."""
        overview = overview or OverviewConfig()
        documents = [
            RenderedDocument(
                logical_path=f"{overview.slug}.md",
                content=self.overview_renderer.render(
                    overview.title, overview.intro, [unit.name for unit in units]
                ),
                title=overview.label,
            )
        ]
        for unit in units:
            documents.append(
                RenderedDocument(
                    logical_path=f"{unit.name}.md",
                    content=self.render_unit(unit),
                    title=unit.name,
                )
            )
        self.logger.debug("Rendered %d documents (flat layout)", len(documents))
        return documents

    def render_namespace(self, namespace: str, units: Sequence[SourceUnit]) -> List[RenderedDocument]:
        """Return ``<namespace>/index.md`` followed by ``<namespace>/<unit>.md`` pages."""
        display = namespace[:1].upper() + namespace[1:]
        documents = [
            RenderedDocument(
                logical_path=f"{namespace}/index.md",
                content=self.overview_renderer.render(
                    f"{display} Library",
                    f"The {display} library contains the following modules:",
                    [unit.name for unit in units],
                ),
                title=f"{display} Overview",
            )
        ]
        for unit in units:
            documents.append(
                RenderedDocument(
                    logical_path=f"{namespace}/{unit.name}.md",
                    content=self.render_unit(unit),
                    title=unit.name,
                )
            )
        self.logger.debug("Rendered %d documents under %s/", len(documents), namespace)
        return documents

    def render_unit(self, unit: SourceUnit) -> str:
        parts: List[str] = [
            f"# {unit.name}\n\n",
            "This module contains the following components:\n\n",
            "## Table of Contents\n",
        ]
        for title, attribute in _SECTIONS:
            if getattr(unit, attribute):
                parts.append(f"- [{title}](#{_slugify(title)})\n")
        parts.append("\n")

        if unit.structs:
            parts.append("## Structs\n\n")
            parts.extend(self._render_struct(item) for item in unit.structs)
        if unit.traits:
            parts.append("## Traits\n\n")
            parts.extend(self._render_trait(item) for item in unit.traits)
        if unit.functions:
            parts.append("## Functions\n\n")
            parts.extend(self._render_function(item, "###") for item in unit.functions)
        if unit.impls:
            parts.append("## Implementations\n\n")
            parts.extend(self._render_impl(item) for item in unit.impls)

        return "".join(parts)

    @staticmethod
    def _render_struct(struct: StructDef) -> str:
        lines = [f"### {struct.name}\n\n", "Fields:\n"]
        lines.extend(f"- `{field.name}`: {field.type_signature}\n" for field in struct.fields)
        lines.append("\n")
        return "".join(lines)

    def _render_trait(self, trait: TraitDef) -> str:
        parts = [f"### {trait.name}\n\n"]
        parts.extend(self._render_function(method, "####") for method in trait.methods)
        return "".join(parts)

    @staticmethod
    def _render_function(function: FunctionDef, heading: str) -> str:
        # Trait methods and free functions keep the bare doc comment and an
        # argument-less signature; only impl methods list their parameters.
        parts = [f"{heading} `{function.name}`\n\n"]
        if function.doc_comment:
            parts.append(f"{function.doc_comment}\n\n")
        parts.append(_signature_block(function, with_params=False))
        return "".join(parts)

    def _render_impl(self, impl: ImplBlock) -> str:
        parts = [f"### Impl for {impl.target}\n\n"]
        for method in impl.methods:
            parts.append(f"#### `{method.name}`\n\n")
            if method.doc_comment:
                parsed = parse_doc_comment(method.doc_comment)
                if parsed.description:
                    parts.append(f"{parsed.description}\n\n")
                if parsed.params:
                    parts.append("| Parameter | Type | Description |\n")
                    parts.append("|-----------|------|-------------|\n")
                    for name, description in parsed.params:
                        param_type = method.param_type(name) or UNKNOWN_TYPE
                        parts.append(f"| `{name}` | `{param_type}` | {description} |\n")
                    parts.append("\n")
            parts.append(_signature_block(method, with_params=True))
        return "".join(parts)


def _signature_block(function: FunctionDef, *, with_params: bool) -> str:
    params = ""
    if with_params:
        params = ", ".join(f"{param.name}: {param.type_signature}" for param in function.params)
    signature = f"fn {function.name}({params})"
    if function.return_type:
        signature += f" -> {function.return_type}"
    return f"```rust\n{signature}\n```\n\n"


def _slugify(title: str) -> str:
    slug = title.lower()
    slug = re.sub(r"[^a-z0-9\s-]", "", slug)
    slug = re.sub(r"\s+", "-", slug)
    return slug.strip("-")


__all__ = ["DocumentRenderer", "UNKNOWN_TYPE"]
