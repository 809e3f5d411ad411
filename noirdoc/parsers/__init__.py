"""Structural parsers producing ``SourceUnit`` models."""

from __future__ import annotations

from .base import ParseFailure, SourceParser
from .tree_sitter import RustGrammarParser

__all__ = [
    "ParseFailure",
    "RustGrammarParser",
    "SourceParser",
]
