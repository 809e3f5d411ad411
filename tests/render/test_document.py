"""Tests for markdown document rendering."""

from __future__ import annotations

from noirdoc.config import OverviewConfig
from noirdoc.models import (
    FieldDef,
    FunctionDef,
    ImplBlock,
    ParamDef,
    SourceUnit,
    StructDef,
    TraitDef,
)
from noirdoc.render.document import DocumentRenderer


def _point_unit() -> SourceUnit:
    return SourceUnit(
        name="geometry",
        structs=(
            StructDef(
                name="Point",
                fields=(
                    FieldDef(name="x", type_signature="Field"),
                    FieldDef(name="y", type_signature="Field"),
                ),
            ),
        ),
    )


def test_render_unit_lists_struct_fields_under_heading() -> None:
    content = DocumentRenderer().render_unit(_point_unit())

    assert "### Point\n\nFields:\n- `x`: Field\n- `y`: Field\n" in content
    lines = content.splitlines()
    assert lines.index("### Point") < lines.index("- `x`: Field") < lines.index("- `y`: Field")


def test_render_unit_table_of_contents_only_lists_present_sections() -> None:
    unit = SourceUnit(
        name="mixed",
        structs=(StructDef(name="Empty"),),
        impls=(ImplBlock(target="Empty"),),
    )
    content = DocumentRenderer().render_unit(unit)

    assert content.startswith(
        "# mixed\n\n"
        "This module contains the following components:\n\n"
        "## Table of Contents\n"
        "- [Structs](#structs)\n"
        "- [Implementations](#implementations)\n\n"
    )
    assert "## Traits" not in content
    assert "## Functions" not in content
    assert "### Impl for Empty\n\n" in content


def test_render_unit_sections_follow_fixed_order() -> None:
    unit = SourceUnit(
        name="all",
        structs=(StructDef(name="S"),),
        traits=(TraitDef(name="T"),),
        functions=(FunctionDef(name="f"),),
        impls=(ImplBlock(target="S"),),
    )
    content = DocumentRenderer().render_unit(unit)

    positions = [
        content.index(heading)
        for heading in ("## Structs", "## Traits", "## Functions", "## Implementations")
    ]
    assert positions == sorted(positions)


def test_free_functions_render_raw_doc_and_signature_without_params() -> None:
    unit = SourceUnit(
        name="helpers",
        functions=(
            FunctionDef(
                name="bar",
                params=(ParamDef(name="a", type_signature="Field"),),
                return_type="Field",
                doc_comment="Does nothing\n@param a unused",
            ),
        ),
    )
    content = DocumentRenderer().render_unit(unit)

    assert (
        "## Functions\n\n"
        "### `bar`\n\n"
        "Does nothing\n@param a unused\n\n"
        "```rust\nfn bar() -> Field\n```\n\n"
    ) in content
    assert "| Parameter |" not in content


def test_trait_methods_render_without_params() -> None:
    unit = SourceUnit(
        name="hashing",
        traits=(
            TraitDef(
                name="Hash",
                methods=(
                    FunctionDef(name="hash", return_type="Field", doc_comment="Hash it."),
                    FunctionDef(
                        name="update",
                        params=(ParamDef(name="value", type_signature="Field"),),
                    ),
                ),
            ),
        ),
    )
    content = DocumentRenderer().render_unit(unit)

    assert (
        "### Hash\n\n"
        "#### `hash`\n\nHash it.\n\n```rust\nfn hash() -> Field\n```\n\n"
        "#### `update`\n\n```rust\nfn update()\n```\n\n"
    ) in content


def test_impl_methods_render_param_table_and_full_signature() -> None:
    method = FunctionDef(
        name="verify",
        params=(
            ParamDef(name="inner_hash", type_signature="Field"),
            ParamDef(name="count", type_signature="u32"),
        ),
        return_type="bool",
        doc_comment="Checks the hash.\n@param inner_hash The hash.\n@param ghost Not declared.",
    )
    unit = SourceUnit(name="auth", impls=(ImplBlock(target="Account<Context>", methods=(method,)),))
    content = DocumentRenderer().render_unit(unit)

    assert (
        "### Impl for Account<Context>\n\n"
        "#### `verify`\n\n"
        "Checks the hash.\n\n"
        "| Parameter | Type | Description |\n"
        "|-----------|------|-------------|\n"
        "| `inner_hash` | `Field` | The hash. |\n"
        "| `ghost` | `Unknown` | Not declared. |\n\n"
        "```rust\nfn verify(inner_hash: Field, count: u32) -> bool\n```\n\n"
    ) in content


def test_impl_method_without_doc_comment_renders_signature_only() -> None:
    method = FunctionDef(name="init", params=(ParamDef(name="context", type_signature="Context"),))
    unit = SourceUnit(name="actions", impls=(ImplBlock(target="Actions", methods=(method,)),))
    content = DocumentRenderer().render_unit(unit)

    assert "#### `init`\n\n```rust\nfn init(context: Context)\n```\n\n" in content


def test_render_flat_puts_overview_first_and_links_units() -> None:
    units = [SourceUnit(name="foo"), SourceUnit(name="bar")]
    documents = DocumentRenderer().render_flat(units)

    assert [document.logical_path for document in documents] == ["aztec-nr.md", "foo.md", "bar.md"]
    assert [document.title for document in documents] == ["Aztec.nr Overview", "foo", "bar"]
    overview = documents[0].content
    assert overview.startswith("# Aztec.nr Project\n\n")
    assert overview.index("- [foo](foo)\n") < overview.index("- [bar](bar)\n")


def test_render_flat_honours_overview_settings() -> None:
    overview = OverviewConfig(slug="index", title="My Lib", label="Home", intro="Modules:")
    documents = DocumentRenderer().render_flat([SourceUnit(name="foo")], overview)

    assert documents[0].logical_path == "index.md"
    assert documents[0].title == "Home"
    assert documents[0].content == "# My Lib\n\nModules:\n\n- [foo](foo)\n"


def test_render_namespace_nests_paths() -> None:
    documents = DocumentRenderer().render_namespace("aztec", [SourceUnit(name="context")])

    assert [document.logical_path for document in documents] == [
        "aztec/index.md",
        "aztec/context.md",
    ]
    assert [document.doc_id for document in documents] == ["aztec/index", "aztec/context"]
    assert documents[0].title == "Aztec Overview"
    assert documents[0].content.startswith("# Aztec Library\n\n")
    assert "- [context](context)\n" in documents[0].content


def test_render_is_deterministic() -> None:
    renderer = DocumentRenderer()
    units = [_point_unit(), SourceUnit(name="other")]

    assert renderer.render_flat(units) == renderer.render_flat(units)
