from __future__ import annotations

from pathlib import Path

from .constants import (
    OUTPUT_SUFFIX_NAMESPACES,
    OUTPUT_SUFFIX_NESTED_INHERITANCE,
    OUTPUT_SUFFIX_NO_CLASSES,
    OUTPUT_SUFFIX_NO_ENUMS,
    OUTPUT_SUFFIX_NO_INTERFACES,
)
from .pipeline import RenderConfig


def output_filename(project_name: str, cfg: RenderConfig) -> str:
    """`<project>[_NoClasses][_NoInterfaces][_NoEnums][_NestedInheritance][_WithNamespaces].md`"""
    name = project_name
    if cfg.exclude_classes:
        name += OUTPUT_SUFFIX_NO_CLASSES
    if cfg.exclude_interfaces:
        name += OUTPUT_SUFFIX_NO_INTERFACES
    if cfg.exclude_enums:
        name += OUTPUT_SUFFIX_NO_ENUMS
    if cfg.nested_inheritance:
        name += OUTPUT_SUFFIX_NESTED_INHERITANCE
    if cfg.group_by_namespace:
        name += OUTPUT_SUFFIX_NAMESPACES
    return name + ".md"


def write_diagram(path: Path, document: str) -> None:
    """Write a rendered (already fenced) Mermaid document."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(document, encoding="utf-8")
