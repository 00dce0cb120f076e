from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .assembler import DiagramBuilder, filter_entities
from .model import DiagramEntity
from .model_view import Snapshot, parse_snapshot
from .renderer import FlatLayout, Layout, NamespaceLayout, render_diagram

Model = dict[str, Any]


@dataclass(frozen=True)
class RenderConfig:
    exclude_classes: bool = False
    exclude_interfaces: bool = False
    exclude_enums: bool = False
    nested_inheritance: bool = False
    group_by_namespace: bool = False

    def layout(self) -> Layout:
        return NamespaceLayout() if self.group_by_namespace else FlatLayout()


def assemble(snapshot: Snapshot, cfg: RenderConfig) -> list[DiagramEntity]:
    """Build, infer and filter every entity of the snapshot, in first-seen order."""
    builder = DiagramBuilder(nested_inheritance=cfg.nested_inheritance)
    builder.add_sources(snapshot.sources)
    return filter_entities(
        builder.entities,
        exclude_classes=cfg.exclude_classes,
        exclude_interfaces=cfg.exclude_interfaces,
        exclude_enums=cfg.exclude_enums,
    )


def generate_diagram(snapshot: Snapshot, cfg: RenderConfig) -> str:
    return render_diagram(assemble(snapshot, cfg), cfg.layout())


def generate_diagram_from_model(model: Model, cfg: RenderConfig) -> str:
    """Convenience wrapper taking the raw mapping returned by io.load_model()."""
    return generate_diagram(parse_snapshot(model), cfg)
