# mermaid_uml/cli.py
from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Optional, Sequence

from .io import load_model
from .model_view import parse_snapshot
from .pipeline import RenderConfig, generate_diagram
from .validate import validate_model
from .writer import output_filename, write_diagram


def _project_name(snapshot_path: Path, declared: Optional[str]) -> str:
    if declared:
        return declared
    return snapshot_path.name if snapshot_path.is_dir() else snapshot_path.stem


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mermaid-uml",
        description="Generate a Mermaid class diagram from a type snapshot (YAML/JSON).",
    )
    parser.add_argument(
        "snapshot",
        type=Path,
        help="Snapshot file, or a directory of snapshot parts merged in filename order.",
    )
    parser.add_argument(
        "--out-dir",
        "--outputDir",
        dest="out_dir",
        type=Path,
        default=None,
        help="Output directory for the generated markdown (default: current directory)",
    )
    parser.add_argument(
        "--disable-classes",
        "--disableClasses",
        dest="disable_classes",
        action="store_true",
        help="Leave classes out of the diagram.",
    )
    parser.add_argument(
        "--disable-interfaces",
        "--disableInterfaces",
        dest="disable_interfaces",
        action="store_true",
        help="Leave interfaces out of the diagram.",
    )
    parser.add_argument(
        "--disable-enums",
        "--disableEnums",
        dest="disable_enums",
        action="store_true",
        help="Leave enums out of the diagram.",
    )
    parser.add_argument(
        "--enable-nested-inheritance",
        "--enableNestedInheritance",
        dest="nested_inheritance",
        action="store_true",
        help="Draw an inheritance edge to every ancestor, not only the direct base type.",
    )
    parser.add_argument(
        "--enable-namespaces",
        "--enableNamespaces",
        dest="namespaces",
        action="store_true",
        help="Group classes into Mermaid namespace blocks.",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Fail generation on validation warnings. Errors always fail.",
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> None:
    """CLI entrypoint."""
    args, unknown = build_parser().parse_known_args(argv)
    for arg in unknown:
        print(f"warning: ignoring unrecognized argument {arg!r}", file=sys.stderr)

    try:
        model = load_model(args.snapshot)
    except (OSError, ValueError, TypeError) as e:
        print(f"error: could not load snapshot: {e}", file=sys.stderr)
        raise SystemExit(1)

    errors, warnings = validate_model(model)
    for warning in warnings:
        print(f"warning: {warning}", file=sys.stderr)

    if errors or (args.strict and warnings):
        for error in errors:
            print(f"error: {error}", file=sys.stderr)
        raise SystemExit(2)

    cfg = RenderConfig(
        exclude_classes=args.disable_classes,
        exclude_interfaces=args.disable_interfaces,
        exclude_enums=args.disable_enums,
        nested_inheritance=args.nested_inheritance,
        group_by_namespace=args.namespaces,
    )

    snapshot = parse_snapshot(model)
    project_name = _project_name(args.snapshot, snapshot.project)
    out_dir: Path = args.out_dir or Path.cwd()
    out_path = out_dir / output_filename(project_name, cfg)

    print(f"Generating Mermaid UML for project: {project_name}")
    write_diagram(out_path, generate_diagram(snapshot, cfg))
    print(f"UML diagram saved to: {out_path}")
