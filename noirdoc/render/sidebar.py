"""Sidebar navigation built from the rendered documents."""

from __future__ import annotations

from typing import List, Sequence

from ..models import Category, DocEntry, RenderedDocument, SidebarNode

DEFAULT_SIDEBAR_NAME = "someSidebar"

_ENTRY_INDENT = 4
_NESTED_INDENT = 2


class SidebarBuilder:
    """Builds sidebar trees and serializes them as a ``sidebars.js`` module."""

    def build(self, documents: Sequence[RenderedDocument]) -> List[SidebarNode]:
        """One doc entry per document, in emission order."""
        return [DocEntry(id=document.doc_id, label=document.title) for document in documents]

    def build_grouped(self, label: str, documents: Sequence[RenderedDocument]) -> List[SidebarNode]:
        """Wrap the entries for ``documents`` in a single category."""
        return [Category(label=label, items=tuple(self.build(documents)))]

    def serialize(self, nodes: Sequence[SidebarNode], *, sidebar_name: str = DEFAULT_SIDEBAR_NAME) -> str:
        lines = ["module.exports = {\n", f"  {sidebar_name}: [\n"]
        lines.extend(_format_node(node, _ENTRY_INDENT) for node in nodes)
        lines.append("  ],\n};\n")
        return "".join(lines)


def count_entries(nodes: Sequence[SidebarNode]) -> int:
    """Number of doc entries in the tree, categories excluded."""
    total = 0
    for node in nodes:
        if isinstance(node, Category):
            total += count_entries(node.items)
        else:
            total += 1
    return total


def _format_node(node: SidebarNode, indent: int) -> str:
    spaces = " " * indent
    if isinstance(node, Category):
        parts = [f"{spaces}{{type: 'category', label: '{_quote(node.label)}', items: [\n"]
        parts.extend(_format_node(child, indent + _NESTED_INDENT) for child in node.items)
        parts.append(f"{spaces}]}},\n")
        return "".join(parts)
    return f"{spaces}{{type: 'doc', id: '{_quote(node.id)}', label: '{_quote(node.label)}'}},\n"


def _quote(value: str) -> str:
    return value.replace("\\", "\\\\").replace("'", "\\'")


__all__ = ["DEFAULT_SIDEBAR_NAME", "SidebarBuilder", "count_entries"]
