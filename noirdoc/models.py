"""Core data models shared across noirdoc components."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Tuple, Union


@dataclass(frozen=True)
class FieldDef:
    """A named struct field and its declared type."""

    name: str
    type_signature: str


@dataclass(frozen=True)
class StructDef:
    """A struct declaration. Tuple and unit structs carry no fields."""

    name: str
    fields: Tuple[FieldDef, ...] = ()


@dataclass(frozen=True)
class ParamDef:
    """An explicitly typed function parameter."""

    name: str
    type_signature: str


@dataclass(frozen=True)
class FunctionDef:
    """A free function, trait method or impl method signature."""

    name: str
    params: Tuple[ParamDef, ...] = ()
    return_type: Optional[str] = None
    doc_comment: Optional[str] = None
    attributes: Tuple[str, ...] = ()
    generic_params: Tuple[str, ...] = ()
    is_special: bool = False

    def param_type(self, name: str) -> Optional[str]:
        for param in self.params:
            if param.name == name:
                return param.type_signature
        return None


@dataclass(frozen=True)
class TraitDef:
    """A trait declaration with its method signatures."""

    name: str
    methods: Tuple[FunctionDef, ...] = ()


@dataclass(frozen=True)
class ImplBlock:
    """An impl block and the methods it defines for ``target``."""

    target: str
    methods: Tuple[FunctionDef, ...] = ()


@dataclass(frozen=True)
class SourceUnit:
    """Documentation model extracted from exactly one source file."""

    name: str
    structs: Tuple[StructDef, ...] = ()
    traits: Tuple[TraitDef, ...] = ()
    functions: Tuple[FunctionDef, ...] = ()
    impls: Tuple[ImplBlock, ...] = ()

    def is_empty(self) -> bool:
        return not (self.structs or self.traits or self.functions or self.impls)


@dataclass(frozen=True)
class ParsedDocComment:
    """Doc comment split into free text and ``@param`` tag pairs."""

    description: str
    params: Tuple[Tuple[str, str], ...] = ()


@dataclass(frozen=True)
class SourceFile:
    """An eligible input file handed from discovery to the parser."""

    path: Path
    name: str
    text: str


@dataclass(frozen=True)
class RenderedDocument:
    """A markdown page addressed by its slash-separated logical path."""

    logical_path: str
    content: str
    title: str

    @property
    def doc_id(self) -> str:
        if self.logical_path.endswith(".md"):
            return self.logical_path[: -len(".md")]
        return self.logical_path


@dataclass(frozen=True)
class DocEntry:
    """Sidebar leaf pointing at one rendered document."""

    id: str
    label: str
    kind: str = field(default="doc", init=False)


@dataclass(frozen=True)
class Category:
    """Sidebar group holding nested entries."""

    label: str
    items: Tuple["SidebarNode", ...] = ()
    kind: str = field(default="category", init=False)


SidebarNode = Union[Category, DocEntry]
