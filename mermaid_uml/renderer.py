from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional, Sequence

from .constants import DIAGRAM_TITLE_DEFAULT
from .mermaid_fmt import (
    INDENT,
    format_class_body,
    format_relationship,
    format_stereotype,
    mermaid_block,
    mm_front_matter,
    mm_namespace_key,
)
from .model import DiagramEntity


class Layout(ABC):
    """Orders the classDiagram statements for a list of entities."""

    @abstractmethod
    def body(self, entities: Sequence[DiagramEntity]) -> list[str]:
        ...


class FlatLayout(Layout):
    """Each entity's box, stereotype and edges together, in input order."""

    def body(self, entities: Sequence[DiagramEntity]) -> list[str]:
        lines: list[str] = []
        for entity in entities:
            lines.extend(format_class_body(entity))
            lines.append(format_stereotype(entity))
            lines.extend(format_relationship(rel) for rel in entity.relationships)
        return lines


def namespace_key(entity: DiagramEntity) -> Optional[str]:
    if entity.namespace is None or not entity.namespace.strip():
        return None
    return mm_namespace_key(entity.namespace)


def _group_sort_key(item: tuple[Optional[str], list[DiagramEntity]]) -> tuple[bool, str, str]:
    key = item[0]
    if key is None:
        return (False, "", "")
    return (True, key.casefold(), key)


def group_by_namespace(
    entities: Sequence[DiagramEntity],
) -> list[tuple[Optional[str], list[DiagramEntity]]]:
    """Group entities by namespace key.

    The no-namespace group comes first, then keys in case-insensitive order
    (ties broken ordinally so the result stays deterministic).
    """
    groups: dict[Optional[str], list[DiagramEntity]] = {}
    for entity in entities:
        groups.setdefault(namespace_key(entity), []).append(entity)
    return sorted(groups.items(), key=_group_sort_key)


class NamespaceLayout(Layout):
    """Three passes: boxes inside namespace blocks, then stereotypes, then edges.

    Mermaid rejects stereotype and relationship statements that reference a
    class before its namespace block has been declared.
    """

    def body(self, entities: Sequence[DiagramEntity]) -> list[str]:
        lines: list[str] = []

        for key, members in group_by_namespace(entities):
            if key is None:
                for entity in members:
                    lines.extend(format_class_body(entity))
                continue
            lines.append(f"{INDENT}namespace {key} {{")
            for entity in members:
                lines.extend(format_class_body(entity, depth=2))
            lines.append(f"{INDENT}}}")

        lines.append("")
        lines.extend(format_stereotype(entity) for entity in entities)

        lines.append("")
        for entity in entities:
            lines.extend(format_relationship(rel) for rel in entity.relationships)

        return lines


def diagram_title(entities: Sequence[DiagramEntity]) -> str:
    return entities[0].name if entities else DIAGRAM_TITLE_DEFAULT


def render_diagram(
    entities: Sequence[DiagramEntity],
    layout: Optional[Layout] = None,
    *,
    title: Optional[str] = None,
) -> str:
    """Render entities as a fenced Mermaid classDiagram document."""
    layout = layout or FlatLayout()
    lines = mm_front_matter(title or diagram_title(entities))
    lines.append("classDiagram")
    lines.extend(layout.body(entities))
    return mermaid_block("\n".join(lines))
