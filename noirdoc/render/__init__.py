"""Markdown and sidebar rendering for parsed source units."""

from __future__ import annotations

from .doc_comments import parse_doc_comment
from .document import DocumentRenderer
from .overview import OverviewRenderer
from .sidebar import SidebarBuilder

__all__ = [
    "DocumentRenderer",
    "OverviewRenderer",
    "SidebarBuilder",
    "parse_doc_comment",
]
