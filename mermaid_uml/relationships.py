from __future__ import annotations

from typing import Optional

from .builder import is_collection
from .constants import ROOT_OBJECT_NAMES, SYSTEM_NAMESPACE_PREFIX
from .model import DiagramRelationship, LinkStyle, RelationshipKind
from .model_view import PropertyDescription, TypeDescription, TypeRef


class RelationshipBuilder:
    """Collects one entity's outbound edges, dropping (source, target, kind) repeats.

    `freeze()` returns the edges as a tuple in insertion order; the builder
    rejects further additions afterwards.
    """

    def __init__(self) -> None:
        self._edges: list[DiagramRelationship] = []
        self._seen: set[tuple[str, str, RelationshipKind]] = set()
        self._frozen = False

    def add(
        self,
        source: str,
        target: str,
        kind: RelationshipKind,
        link_style: LinkStyle = LinkStyle.SOLID,
    ) -> bool:
        if self._frozen:
            raise RuntimeError("relationship set already frozen")
        rel = DiagramRelationship(source=source, target=target, kind=kind, link_style=link_style)
        if rel.key in self._seen:
            return False
        self._seen.add(rel.key)
        self._edges.append(rel)
        return True

    def freeze(self) -> tuple[DiagramRelationship, ...]:
        self._frozen = True
        return tuple(self._edges)


def _is_root_object(ref: TypeRef) -> bool:
    return ref.name in ROOT_OBJECT_NAMES


def resolve_member_target(type_ref: TypeRef) -> TypeRef:
    """Collapse a member type to the type it points at.

    Arrays resolve to their element type, then a single-argument generic
    resolves to its argument (so `Toy[]`, `List<Toy>` and `List<Toy>[]` all
    give `Toy`). Multi-argument generics stay as they are.
    """
    resolved = type_ref
    if resolved.element_type is not None:
        resolved = resolved.element_type
    if len(resolved.type_arguments) == 1:
        resolved = resolved.type_arguments[0]
    return resolved


def is_system_type(type_ref: TypeRef) -> bool:
    return bool(type_ref.namespace and type_ref.namespace.startswith(SYSTEM_NAMESPACE_PREFIX))


def classify_member(prop_type: TypeRef, target: TypeRef) -> RelationshipKind:
    """Dependency for enums, Aggregation for collection shapes, else Association.

    The collection check looks at the declared (unresolved) member type.
    """
    if target.is_enum:
        return RelationshipKind.DEPENDENCY
    if prop_type.is_array or is_collection(prop_type):
        return RelationshipKind.AGGREGATION
    return RelationshipKind.ASSOCIATION


def _member_edge(
    owner: str, prop: PropertyDescription
) -> Optional[tuple[str, str, RelationshipKind]]:
    target = resolve_member_target(prop.type)
    if not target.name or is_system_type(target):
        return None

    kind = classify_member(prop.type, target)
    if kind is RelationshipKind.AGGREGATION:
        # Element points back at its container.
        return (target.name, owner, kind)
    return (owner, target.name, kind)


def infer_relationships(
    decl: TypeDescription, *, nested_inheritance: bool = False
) -> tuple[DiagramRelationship, ...]:
    """Derive inheritance, realization and member-type edges for one declaration."""
    edges = RelationshipBuilder()
    owner = decl.name

    bases = decl.ancestor_chain if nested_inheritance else (
        (decl.base_type,) if decl.base_type is not None else ()
    )
    for base in bases:
        if not _is_root_object(base):
            edges.add(owner, base.name, RelationshipKind.INHERITANCE, LinkStyle.SOLID)

    iface_kind = (
        RelationshipKind.INHERITANCE if decl.is_interface else RelationshipKind.REALIZATION
    )
    for iface in decl.interfaces:
        edges.add(owner, iface.name, iface_kind, LinkStyle.DASHED)

    for prop in decl.properties:
        edge = _member_edge(owner, prop)
        if edge is not None:
            source, target, kind = edge
            edges.add(source, target, kind, LinkStyle.SOLID)

    return edges.freeze()
