"""Doc comment interpretation for ``@param`` tags."""

from __future__ import annotations

import re
from typing import List, Tuple

from ..models import ParsedDocComment

PARAM_TAG = re.compile(r"@param\s+(\w+)\s+(.+)")


def parse_doc_comment(doc_comment: str) -> ParsedDocComment:
    """Split ``doc_comment`` into a description and ``(name, description)`` tag pairs.

    Lines matching ``@param <name> <text>`` become tag pairs; every other line is
    kept verbatim in the description. Repeated tags for one name are all kept,
    in order.
    """
    description: List[str] = []
    params: List[Tuple[str, str]] = []

    # Only "\n" separates lines; other Unicode breaks stay part of the text.
    for line in doc_comment.split("\n"):
        line = line.rstrip("\r")
        match = PARAM_TAG.search(line)
        if match:
            params.append((match.group(1), match.group(2).strip()))
        else:
            description.append(line + "\n")

    return ParsedDocComment(description="".join(description).strip(), params=tuple(params))


__all__ = ["PARAM_TAG", "parse_doc_comment"]
