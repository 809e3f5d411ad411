"""Docusaurus documentation generator for annotated Noir sources."""

from __future__ import annotations

from .models import (
    Category,
    DocEntry,
    FieldDef,
    FunctionDef,
    ImplBlock,
    ParamDef,
    ParsedDocComment,
    RenderedDocument,
    SidebarNode,
    SourceUnit,
    StructDef,
    TraitDef,
)
from .orchestrator import BuildResult, Orchestrator

__version__ = "0.1.0"

__all__ = [
    "BuildResult",
    "Category",
    "DocEntry",
    "FieldDef",
    "FunctionDef",
    "ImplBlock",
    "Orchestrator",
    "ParamDef",
    "ParsedDocComment",
    "RenderedDocument",
    "SidebarNode",
    "SourceUnit",
    "StructDef",
    "TraitDef",
]
