from __future__ import annotations

from mermaid_uml.model_view import (
    TypeRef,
    as_bool,
    build_type_index,
    parse_snapshot,
    parse_type,
    parse_type_ref,
)


def test_parse_type_ref_shorthand_and_nesting():
    assert parse_type_ref("Toy") == TypeRef(name="Toy")
    assert parse_type_ref(None) is None
    assert parse_type_ref({"namespace": "Zoo"}) is None

    arr = parse_type_ref({"element_type": {"name": "Toy", "namespace": "Zoo"}})
    assert arr is not None and arr.is_array
    assert arr.name == ""
    assert arr.element_type == TypeRef(name="Toy", namespace="Zoo")

    generic = parse_type_ref(
        {"name": "List", "type_arguments": ["Toy", {"name": "Bad"}, 3], "interfaces": ["IEnumerable", ""]}
    )
    assert generic is not None
    assert [a.name for a in generic.type_arguments] == ["Toy", "Bad"]
    assert generic.interfaces == ("IEnumerable",)


def test_as_bool():
    assert as_bool("yes") is True
    assert as_bool("False", True) is False
    assert as_bool(None, True) is True
    assert as_bool(0, True) is False


def test_parse_type_without_name_is_unresolved():
    decl = parse_type({"kind": "class"})
    assert decl is not None
    assert not decl.resolved


def test_parse_type_drops_malformed_members():
    decl = parse_type(
        {
            "name": "Dog",
            "properties": [{"name": "Toys"}, "junk", {"name": "Owner", "type": "Keeper"}],
            "methods": [{"name": "Bark", "parameters": [{"name": "n"}, {"name": "x", "type": "Int32"}]}],
        }
    )
    assert decl is not None
    assert [p.name for p in decl.properties] == ["Owner"]
    (bark,) = decl.methods
    assert bark.return_type == TypeRef(name="Void")
    assert [p.name for p in bark.parameters] == ["x"]


def test_ancestor_chain_falls_back_to_base_type():
    decl = parse_type({"name": "Dog", "base_type": "Animal"})
    assert decl is not None
    assert decl.ancestor_chain == (TypeRef(name="Animal"),)


def test_top_level_declarations_form_a_trailing_source():
    snapshot = parse_snapshot(
        {
            "project": "Zoo",
            "sources": [{"path": "A.cs", "types": [{"name": "A"}]}],
            "types": [{"name": "B"}],
            "enums": [{"name": "E", "members": ["X"]}],
        }
    )
    assert snapshot.project == "Zoo"
    assert [s.path for s in snapshot.sources] == ["A.cs", "<snapshot>"]
    assert [t.name for t in snapshot.sources[1].types] == ["B"]


def test_build_type_index_groups_namespaces():
    snapshot = parse_snapshot(
        {
            "types": [
                {"name": "Item", "namespace": "Zoo"},
                {"name": "Item", "namespace": "Farm"},
                {"name": "Ghost", "resolved": False},
            ]
        }
    )
    assert build_type_index(snapshot) == {"Item": ["Zoo", "Farm"]}
