from __future__ import annotations

from pathlib import Path

import pytest

from mermaid_uml.io import load_model
from mermaid_uml.model import EntityKind, RelationshipKind
from mermaid_uml.model_view import parse_snapshot
from mermaid_uml.pipeline import RenderConfig, assemble, generate_diagram, generate_diagram_from_model

FIXTURE_DIR = Path(__file__).resolve().parents[1] / "fixtures"


@pytest.fixture(scope="module")
def zoo():
    return parse_snapshot(load_model(FIXTURE_DIR / "zoo.yaml"))


def relationship_lines(text: str) -> list[str]:
    return [line.strip() for line in text.splitlines() if " : " in line]


def test_flat_render_matches_golden(zoo):
    expected = (FIXTURE_DIR / "zoo_flat.md").read_text(encoding="utf-8")
    assert generate_diagram(zoo, RenderConfig()) == expected


def test_entities_keep_first_seen_order_across_sources(zoo):
    names = [e.name for e in assemble(zoo, RenderConfig())]
    # Classes of a source precede its enums; unresolved Ghost is skipped.
    assert names == ["LivingThing", "Animal", "Dog", "Status", "IPet", "INamed", "Toy", "Keeper"]


def test_no_entity_has_duplicate_edges(zoo):
    for cfg in (RenderConfig(), RenderConfig(nested_inheritance=True)):
        for entity in assemble(zoo, cfg):
            keys = [r.key for r in entity.relationships]
            assert len(keys) == len(set(keys)), entity.name


def test_root_object_never_an_inheritance_target(zoo):
    for entity in assemble(zoo, RenderConfig(nested_inheritance=True)):
        for rel in entity.relationships:
            if rel.kind is RelationshipKind.INHERITANCE:
                assert rel.target != "Object"


def test_nested_inheritance_adds_ancestor_edges(zoo):
    by_name = {e.name: e for e in assemble(zoo, RenderConfig(nested_inheritance=True))}
    inherits = [
        r.target for r in by_name["Dog"].relationships if r.kind is RelationshipKind.INHERITANCE
    ]
    assert inherits == ["Animal", "LivingThing"]


def test_render_is_deterministic(zoo):
    for cfg in (RenderConfig(), RenderConfig(group_by_namespace=True, nested_inheritance=True)):
        assert generate_diagram(zoo, cfg) == generate_diagram(zoo, cfg)


@pytest.mark.parametrize(
    "cfg, dropped",
    [
        (RenderConfig(exclude_classes=True), EntityKind.CLASS),
        (RenderConfig(exclude_interfaces=True), EntityKind.INTERFACE),
        (RenderConfig(exclude_enums=True), EntityKind.ENUM),
    ],
)
def test_kind_filters(zoo, cfg, dropped):
    kinds = {e.kind for e in assemble(zoo, cfg)}
    assert dropped not in kinds
    assert kinds == set(EntityKind) - {dropped}


def test_excluded_enum_edges_still_render(zoo):
    text = generate_diagram(zoo, RenderConfig(exclude_enums=True))
    assert "class Status" not in text
    assert "Dog ..> Status : depends on" in relationship_lines(text)


def test_grouped_render_phase_order(zoo):
    text = generate_diagram(zoo, RenderConfig(group_by_namespace=True))
    lines = text.splitlines()

    body_idx = [i for i, l in enumerate(lines) if l.strip().startswith(("class ", "namespace "))]
    stereo_idx = [i for i, l in enumerate(lines) if l.strip().startswith("<<")]
    rel_idx = [i for i, l in enumerate(lines) if " : " in l]

    assert body_idx and stereo_idx and rel_idx
    assert max(body_idx) < min(stereo_idx)
    assert max(stereo_idx) < min(rel_idx)


def test_grouped_render_namespaces(zoo):
    text = generate_diagram(zoo, RenderConfig(group_by_namespace=True))
    containers = [l.strip() for l in text.splitlines() if l.strip().startswith("namespace ")]
    assert containers == [
        "namespace Zoo {",
        "namespace Zoo-Animals {",
        "namespace Zoo-Staff {",
    ]
    # Enums carry no namespace and render before the first container.
    assert text.index("    class Status {") < text.index("namespace Zoo {")
    assert "        class Dog {" in text


def test_grouped_stereotypes_follow_input_order(zoo):
    text = generate_diagram(zoo, RenderConfig(group_by_namespace=True))
    stereotypes = [l.strip() for l in text.splitlines() if l.strip().startswith("<<")]
    assert stereotypes == [
        "<<abstract>> LivingThing",
        "<<abstract>> Animal",
        "<<Class>> Dog",
        "<<Enum>> Status",
        "<<Interface>> IPet",
        "<<Interface>> INamed",
        "<<Class>> Toy",
        "<<Class>> Keeper",
    ]


def test_generate_from_raw_model():
    model = {"types": [{"name": "Dog", "base_type": "Animal"}], "enums": [{"name": "Mood", "members": ["Happy"]}]}
    text = generate_diagram_from_model(model, RenderConfig())
    assert "    Dog --|> Animal : inherits" in text.splitlines()
    assert "    <<Enum>> Mood" in text.splitlines()
