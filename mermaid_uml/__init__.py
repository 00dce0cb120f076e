"""Render a type snapshot of a codebase as a Mermaid class diagram."""

from .model import (
    DiagramEntity,
    DiagramMember,
    DiagramMethod,
    DiagramRelationship,
    EntityKind,
    LinkStyle,
    RelationshipKind,
    Visibility,
)
from .pipeline import RenderConfig, assemble, generate_diagram, generate_diagram_from_model

__all__ = [
    "DiagramEntity",
    "DiagramMember",
    "DiagramMethod",
    "DiagramRelationship",
    "EntityKind",
    "LinkStyle",
    "RelationshipKind",
    "Visibility",
    "RenderConfig",
    "assemble",
    "generate_diagram",
    "generate_diagram_from_model",
]
