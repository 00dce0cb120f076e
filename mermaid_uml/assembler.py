from __future__ import annotations

from typing import Iterable

from .builder import build_entity, build_enum_entity
from .model import DiagramEntity, EntityKind
from .model_view import SourceUnit
from .relationships import infer_relationships


class DiagramBuilder:
    """Append-only collection of entities in first-seen order.

    Each source contributes its classes/interfaces first, then its enums,
    so output order follows the snapshot's source order.
    """

    def __init__(self, *, nested_inheritance: bool = False) -> None:
        self.nested_inheritance = nested_inheritance
        self._entities: list[DiagramEntity] = []

    def add_source(self, source: SourceUnit) -> None:
        for decl in source.types:
            entity = build_entity(decl)
            if entity is None:
                continue
            self._entities.append(
                entity.with_relationships(
                    infer_relationships(decl, nested_inheritance=self.nested_inheritance)
                )
            )

        for enum_decl in source.enums:
            self._entities.append(build_enum_entity(enum_decl))

    def add_sources(self, sources: Iterable[SourceUnit]) -> "DiagramBuilder":
        for source in sources:
            self.add_source(source)
        return self

    @property
    def entities(self) -> tuple[DiagramEntity, ...]:
        return tuple(self._entities)


def filter_entities(
    entities: Iterable[DiagramEntity],
    *,
    exclude_classes: bool = False,
    exclude_interfaces: bool = False,
    exclude_enums: bool = False,
) -> list[DiagramEntity]:
    """Drop entities whose kind is excluded, keeping order.

    Edges pointing at dropped entities are left in place.
    """
    excluded: set[EntityKind] = set()
    if exclude_classes:
        excluded.add(EntityKind.CLASS)
    if exclude_interfaces:
        excluded.add(EntityKind.INTERFACE)
    if exclude_enums:
        excluded.add(EntityKind.ENUM)
    return [e for e in entities if e.kind not in excluded]
