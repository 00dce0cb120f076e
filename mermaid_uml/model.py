from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Iterable, Optional


class Visibility(Enum):
    PUBLIC = "public"
    PRIVATE = "private"
    PROTECTED = "protected"
    INTERNAL = "internal"
    PROTECTED_OR_INTERNAL = "protected_or_internal"
    UNKNOWN = "unknown"


class EntityKind(Enum):
    CLASS = "Class"
    INTERFACE = "Interface"
    ENUM = "Enum"


class RelationshipKind(Enum):
    INHERITANCE = "inheritance"
    COMPOSITION = "composition"
    AGGREGATION = "aggregation"
    ASSOCIATION = "association"
    DEPENDENCY = "dependency"
    REALIZATION = "realization"
    LINK = "link"


class LinkStyle(Enum):
    SOLID = "solid"
    DASHED = "dashed"


@dataclass(frozen=True)
class DiagramMember:
    """A property row inside a class box."""

    name: str
    type: str
    visibility: Visibility = Visibility.PUBLIC
    is_collection: bool = False


@dataclass(frozen=True)
class DiagramMethod:
    name: str
    return_type: str
    visibility: Visibility = Visibility.PUBLIC
    # "Type name" pairs, declaration order.
    parameters: tuple[str, ...] = ()
    is_async: bool = False


@dataclass(frozen=True)
class DiagramRelationship:
    """Directed edge between two entities, keyed by simple type names."""

    source: str
    target: str
    kind: RelationshipKind
    link_style: LinkStyle = LinkStyle.SOLID

    @property
    def key(self) -> tuple[str, str, RelationshipKind]:
        return (self.source, self.target, self.kind)


@dataclass(frozen=True)
class DiagramEntity:
    """One renderable type (class, interface or enum).

    `name` is the simple type name. Nothing enforces uniqueness across
    namespaces; two types sharing a simple name render as one Mermaid node.
    """

    name: str
    kind: EntityKind
    is_abstract: bool = False
    visibility: Visibility = Visibility.PUBLIC
    namespace: Optional[str] = None
    properties: tuple[DiagramMember, ...] = ()
    methods: tuple[DiagramMethod, ...] = ()
    relationships: tuple[DiagramRelationship, ...] = ()

    def with_relationships(
        self, relationships: Iterable[DiagramRelationship]
    ) -> "DiagramEntity":
        return replace(self, relationships=tuple(relationships))
