"""Tree-sitter powered structural parser.

Noir sources are read with the Rust grammar of tree-sitter. The two languages
share the shape of every construct we document (structs, traits, free
functions and impl blocks), so the adapter only has to map Rust syntax nodes
onto the ``SourceUnit`` schema. Types and patterns are rendered from the exact
source slice of their node with whitespace collapsed, never rebuilt by hand.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Tuple

import tree_sitter_rust
from tree_sitter import Language, Node, Parser

from ..logging import source_logger
from ..models import (
    FieldDef,
    FunctionDef,
    ImplBlock,
    ParamDef,
    SourceUnit,
    StructDef,
    TraitDef,
)
from .base import ParseFailure, SourceParser

RUST_LANGUAGE = Language(tree_sitter_rust.language())

SPECIAL_ATTRIBUTE_MARKER = "unconstrained"

_COMMENT_TYPES = {"line_comment", "block_comment"}
_FUNCTION_TYPES = {"function_item", "function_signature_item"}
_GENERIC_SKIP_TYPES = {"attribute_item", "line_comment", "block_comment"}
_DOC_ATTRIBUTE = re.compile(
    r'^#\s*\[\s*doc\s*=\s*'
    r'(?:r(?P<hashes>#*)"(?P<raw>.*)"(?P=hashes)|"(?P<value>.*)")'
    r'\s*\]$',
    re.DOTALL,
)
_STRING_ESCAPE = re.compile(
    r"\\(?:u\{(?P<code>[0-9A-Fa-f_]{1,8})\}|x(?P<byte>[0-7][0-9A-Fa-f])|(?P<continuation>\r?\n\s*)|(?P<char>.))",
    re.DOTALL,
)
_SIMPLE_ESCAPES = {"n": "\n", "t": "\t", "r": "\r", "0": "\0", "\\": "\\", '"': '"', "'": "'"}
_BLOCK_GUTTER = re.compile(r"^[ \t]*\*[ \t]?")


@dataclass
class _Decorations:
    """Doc comments and attributes collected ahead of the next item."""

    docs: List[str] = field(default_factory=list)
    attributes: List[str] = field(default_factory=list)

    @property
    def doc_comment(self) -> Optional[str]:
        if not self.docs:
            return None
        return "\n".join(self.docs).strip()


class RustGrammarParser(SourceParser):
    """Extracts structs, traits, functions and impl blocks from one source file."""

    def __init__(self, *, strict: bool = True) -> None:
        self.strict = strict

    def parse(self, text: str, name: str) -> SourceUnit:
        logger = source_logger("parser", name)
        source_bytes = text.encode("utf-8")
        tree = Parser(RUST_LANGUAGE).parse(source_bytes)
        root = tree.root_node

        if root.has_error:
            error = _first_error(root) or root
            line, column = error.start_point[0] + 1, error.start_point[1] + 1
            message = f"missing {error.type}" if error.is_missing else "syntax error"
            if self.strict:
                raise ParseFailure(name, message, line=line, column=column)
            logger.warning(
                "line %d, column %d: %s; skipping unparseable regions", line, column, message
            )

        structs: List[StructDef] = []
        traits: List[TraitDef] = []
        functions: List[FunctionDef] = []
        impls: List[ImplBlock] = []

        for node, decorations in self._iter_items(root, source_bytes):
            if node.type == "struct_item":
                structs.append(self._parse_struct(node, source_bytes))
            elif node.type == "trait_item":
                traits.append(self._parse_trait(node, source_bytes))
            elif node.type == "function_item":
                functions.append(self._parse_function(node, decorations, source_bytes))
            elif node.type == "impl_item":
                impls.append(self._parse_impl(node, source_bytes))

        logger.debug(
            "%d structs, %d traits, %d functions, %d impls",
            len(structs),
            len(traits),
            len(functions),
            len(impls),
        )
        return SourceUnit(
            name=name,
            structs=tuple(structs),
            traits=tuple(traits),
            functions=tuple(functions),
            impls=tuple(impls),
        )

    def _iter_items(self, container: Node, source_bytes: bytes) -> Iterator[Tuple[Node, _Decorations]]:
        """Yield each item of ``container`` with the doc comments and attributes above it."""
        pending = _Decorations()
        for child in container.named_children:
            if child.type in _COMMENT_TYPES:
                doc = _doc_comment_value(self._node_text(child, source_bytes))
                if doc is not None:
                    pending.docs.append(doc)
                continue
            if child.type == "attribute_item":
                raw = self._node_text(child, source_bytes)
                match = _DOC_ATTRIBUTE.match(raw.strip())
                if match:
                    pending.docs.append(_doc_attribute_value(match).strip())
                else:
                    pending.attributes.append(_normalise(raw))
                continue
            if child.type == "inner_attribute_item":
                continue
            yield child, pending
            pending = _Decorations()

    def _parse_struct(self, node: Node, source_bytes: bytes) -> StructDef:
        name = self._field_text(node, "name", source_bytes)
        body = node.child_by_field_name("body")
        fields: List[FieldDef] = []
        # Tuple and unit structs have no named fields to report.
        if body is not None and body.type == "field_declaration_list":
            for child in body.named_children:
                if child.type != "field_declaration":
                    continue
                field_name = child.child_by_field_name("name")
                field_type = child.child_by_field_name("type")
                if field_name is None or field_type is None:
                    continue
                fields.append(
                    FieldDef(
                        name=self._node_text(field_name, source_bytes),
                        type_signature=_normalise(self._node_text(field_type, source_bytes)),
                    )
                )
        return StructDef(name=name, fields=tuple(fields))

    def _parse_trait(self, node: Node, source_bytes: bytes) -> TraitDef:
        name = self._field_text(node, "name", source_bytes)
        return TraitDef(name=name, methods=self._parse_methods(node, source_bytes))

    def _parse_impl(self, node: Node, source_bytes: bytes) -> ImplBlock:
        target = _normalise(self._field_text(node, "type", source_bytes))
        return ImplBlock(target=target, methods=self._parse_methods(node, source_bytes))

    def _parse_methods(self, node: Node, source_bytes: bytes) -> Tuple[FunctionDef, ...]:
        body = node.child_by_field_name("body")
        if body is None:
            return ()
        return tuple(
            self._parse_function(member, decorations, source_bytes)
            for member, decorations in self._iter_items(body, source_bytes)
            if member.type in _FUNCTION_TYPES
        )

    def _parse_function(self, node: Node, decorations: _Decorations, source_bytes: bytes) -> FunctionDef:
        name = self._field_text(node, "name", source_bytes)

        params: List[ParamDef] = []
        parameters = node.child_by_field_name("parameters")
        if parameters is not None:
            for child in parameters.named_children:
                # self receivers, variadics and bare types carry no name/type pair.
                if child.type != "parameter":
                    continue
                param = self._parse_param(child, source_bytes)
                if param is not None:
                    params.append(param)

        return_node = node.child_by_field_name("return_type")
        return_type = (
            _normalise(self._node_text(return_node, source_bytes)) if return_node is not None else None
        )

        generic_params: List[str] = []
        type_parameters = node.child_by_field_name("type_parameters")
        if type_parameters is not None:
            generic_params = [
                _normalise(self._node_text(child, source_bytes))
                for child in type_parameters.named_children
                if child.type not in _GENERIC_SKIP_TYPES
            ]

        attributes = tuple(decorations.attributes)
        is_special = _has_const_modifier(node) or any(
            SPECIAL_ATTRIBUTE_MARKER in attribute for attribute in attributes
        )

        return FunctionDef(
            name=name,
            params=tuple(params),
            return_type=return_type,
            doc_comment=decorations.doc_comment,
            attributes=attributes,
            generic_params=tuple(generic_params),
            is_special=is_special,
        )

    def _parse_param(self, node: Node, source_bytes: bytes) -> Optional[ParamDef]:
        pattern = node.child_by_field_name("pattern")
        type_node = node.child_by_field_name("type")
        if pattern is None or type_node is None:
            return None
        pattern_text = _normalise(self._node_text(pattern, source_bytes))
        if any(child.type == "mutable_specifier" for child in node.children):
            pattern_text = f"mut {pattern_text}"
        return ParamDef(
            name=pattern_text,
            type_signature=_normalise(self._node_text(type_node, source_bytes)),
        )

    def _field_text(self, node: Node, field_name: str, source_bytes: bytes) -> str:
        child = node.child_by_field_name(field_name)
        return self._node_text(child, source_bytes) if child is not None else ""

    @staticmethod
    def _node_text(node: Node, source_bytes: bytes) -> str:
        return source_bytes[node.start_byte : node.end_byte].decode("utf-8", errors="replace")


def _normalise(text: str) -> str:
    return " ".join(text.split())


def _doc_comment_value(text: str) -> Optional[str]:
    """Return the documentation carried by an outer doc comment, else ``None``."""
    text = text.rstrip("\r\n")
    if text.startswith("///") and not text.startswith("////"):
        return text[3:].strip()
    if (
        text.startswith("/**")
        and not text.startswith("/***")
        and len(text) > 4
        and text.endswith("*/")
    ):
        # Indentation survives on lines without a `*` gutter.
        lines = [_BLOCK_GUTTER.sub("", line).rstrip() for line in text[3:-2].split("\n")]
        return "\n".join(lines).strip()
    return None


def _doc_attribute_value(match: re.Match) -> str:
    """Decode the string literal of a ``#[doc = ...]`` attribute."""
    if match.group("value") is None:
        # Raw strings carry their text verbatim.
        return match.group("raw")
    return _STRING_ESCAPE.sub(_unescape, match.group("value"))


def _unescape(match: re.Match) -> str:
    if match.group("code") is not None:
        return chr(int(match.group("code").replace("_", ""), 16))
    if match.group("byte") is not None:
        return chr(int(match.group("byte"), 16))
    if match.group("continuation") is not None:
        return ""
    return _SIMPLE_ESCAPES.get(match.group("char"), match.group(0))


def _has_const_modifier(node: Node) -> bool:
    for child in node.children:
        if child.type == "function_modifiers":
            return any(modifier.type == "const" for modifier in child.children)
    return False


def _first_error(node: Node) -> Optional[Node]:
    if node.is_error or node.is_missing:
        return node
    for child in node.children:
        if child.has_error or child.is_missing:
            found = _first_error(child)
            if found is not None:
                return found
    return None


__all__ = ["RUST_LANGUAGE", "RustGrammarParser", "SPECIAL_ATTRIBUTE_MARKER"]
