from __future__ import annotations

from pathlib import Path

import pytest

from mermaid_uml.cli import main

FIXTURE_DIR = Path(__file__).resolve().parents[1] / "fixtures"


@pytest.mark.integration
def test_cli_writes_named_output(tmp_path: Path, capsys):
    main([str(FIXTURE_DIR / "zoo.yaml"), "--out-dir", str(tmp_path)])

    out_path = tmp_path / "Zoo.md"
    assert out_path.read_text(encoding="utf-8") == (FIXTURE_DIR / "zoo_flat.md").read_text(
        encoding="utf-8"
    )

    captured = capsys.readouterr()
    assert "Generating Mermaid UML for project: Zoo" in captured.out
    assert f"UML diagram saved to: {out_path}" in captured.out
    assert "warning:" in captured.err and "Ghost" in captured.err


@pytest.mark.integration
def test_cli_flag_suffixes_and_legacy_spellings(tmp_path: Path):
    main(
        [
            str(FIXTURE_DIR / "zoo_split"),
            "--outputDir",
            str(tmp_path),
            "--disableClasses",
            "--disable-interfaces",
            "--disableEnums",
            "--enableNestedInheritance",
            "--enable-namespaces",
        ]
    )
    expected = tmp_path / "Zoo_NoClasses_NoInterfaces_NoEnums_NestedInheritance_WithNamespaces.md"
    text = expected.read_text(encoding="utf-8")
    assert "title: UML Diagram" in text
    assert "class " not in text.replace("  class:", "")


@pytest.mark.integration
def test_cli_project_name_defaults_to_file_stem(tmp_path: Path):
    snapshot = tmp_path / "Farm.yaml"
    snapshot.write_text("types:\n  - name: Barn\n", encoding="utf-8")

    main([str(snapshot), "--out-dir", str(tmp_path / "out")])

    assert (tmp_path / "out" / "Farm.md").exists()


@pytest.mark.integration
def test_cli_strict_fails_on_warnings(tmp_path: Path, capsys):
    with pytest.raises(SystemExit) as exc:
        main([str(FIXTURE_DIR / "zoo.yaml"), "--out-dir", str(tmp_path), "--strict"])
    assert exc.value.code == 2
    assert not (tmp_path / "Zoo.md").exists()


@pytest.mark.integration
def test_cli_reports_load_errors(tmp_path: Path, capsys):
    with pytest.raises(SystemExit) as exc:
        main([str(tmp_path / "missing.yaml")])
    assert exc.value.code == 1
    assert "error: could not load snapshot" in capsys.readouterr().err


@pytest.mark.integration
def test_cli_ignores_unrecognized_flags(tmp_path: Path, capsys):
    main([str(FIXTURE_DIR / "zoo.yaml"), "--out-dir", str(tmp_path), "--someFutureFlag"])

    assert (tmp_path / "Zoo.md").read_text(encoding="utf-8") == (
        FIXTURE_DIR / "zoo_flat.md"
    ).read_text(encoding="utf-8")
    assert "warning: ignoring unrecognized argument '--someFutureFlag'" in capsys.readouterr().err
