"""Tests for the bundled demo run."""

from __future__ import annotations

from pathlib import Path

import pytest

from noirdoc.cli import main
from noirdoc.demo import run_demo


def test_run_demo_documents_sample(tmp_path: Path) -> None:
    output = tmp_path / "demo"

    result = run_demo(output)

    assert [unit.name for unit in result.units] == ["test_noir_file"]
    page = (output / "docs" / "test_noir_file.md").read_text(encoding="utf-8")
    assert "### Impl for AccountActions<&mut PrivateContext>" in page
    assert "| `app_payload` | `AppPayload` |" in page
    assert "| `inner_hash` | `Field` |" in page
    assert "fn entrypoint(app_payload: AppPayload, fee_payload: FeePayload)\n" in page
    assert "fn verify_private_authwit(inner_hash: Field) -> Field\n" in page
    assert "- `is_valid_impl`: fn(&mut PrivateContext, Field) -> bool\n" in page
    assert (output / "sidebars.js").exists()


def test_demo_command_prints_parsed_unit(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    main(["demo", "-o", str(tmp_path / "demo")])

    out = capsys.readouterr().out
    assert "Parsed source unit: test_noir_file" in out
    assert "Documentation generated" in out
