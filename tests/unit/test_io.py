from __future__ import annotations

from pathlib import Path

import pytest

from mermaid_uml.io import load_model, snapshot_files
from mermaid_uml.model_view import parse_snapshot
from mermaid_uml.pipeline import RenderConfig, assemble

FIXTURE_DIR = Path(__file__).resolve().parents[1] / "fixtures"


def test_load_single_file():
    model = load_model(FIXTURE_DIR / "zoo.yaml")
    assert model["project"] == "Zoo"
    assert len(model["sources"]) == 3


def test_split_directory_merges_parts_in_filename_order():
    split_dir = FIXTURE_DIR / "zoo_split"
    assert [p.name for p in snapshot_files(split_dir)] == ["10_animals.yaml", "20_staff.json"]

    model = load_model(split_dir)
    assert model["project"] == "Zoo"
    assert [s["path"] for s in model["sources"]] == ["Animals.cs", "20_staff.json"]

    names = [e.name for e in assemble(parse_snapshot(model), RenderConfig())]
    assert names == ["Dog", "Status", "Keeper"]


def test_missing_path(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        load_model(tmp_path / "nope.yaml")


def test_invalid_yaml_names_the_file(tmp_path: Path):
    bad = tmp_path / "bad.yaml"
    bad.write_text("types: [unclosed\n", encoding="utf-8")
    with pytest.raises(ValueError, match="bad.yaml"):
        load_model(bad)


def test_top_level_must_be_mapping(tmp_path: Path):
    bad = tmp_path / "list.yaml"
    bad.write_text("- name: Dog\n", encoding="utf-8")
    with pytest.raises(TypeError):
        load_model(bad)


def test_empty_file_is_an_empty_snapshot(tmp_path: Path):
    empty = tmp_path / "empty.yaml"
    empty.write_text("", encoding="utf-8")
    assert load_model(empty) == {}


def test_conflicting_project_names_are_rejected(tmp_path: Path):
    (tmp_path / "a.yaml").write_text("project: Zoo\ntypes: []\n", encoding="utf-8")
    (tmp_path / "b.yaml").write_text("project: Farm\ntypes: []\n", encoding="utf-8")
    with pytest.raises(ValueError, match="merge conflict"):
        load_model(tmp_path)
