# mermaid_uml/io.py
from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from .constants import SNAPSHOT_SUFFIXES


def _load_yaml_mapping(path: Path) -> dict[str, Any]:
    raw = path.read_text(encoding="utf-8")

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ValueError(f"Failed to parse snapshot {path}: {e}") from e

    if data is None:
        # Empty file: a source with no declarations.
        return {}

    if not isinstance(data, dict):
        raise TypeError(
            f"Top-level snapshot must be a mapping in {path}, got {type(data).__name__}"
        )

    return data


def _normalize_sources(doc: dict[str, Any], *, src_path: Path) -> dict[str, Any]:
    """Move top-level types/enums of a split part into its own `sources` entry.

    Without this, merging two parts would concatenate their classes ahead of
    their enums and lose per-file ordering.
    """
    if "types" not in doc and "enums" not in doc:
        return doc

    out = {k: v for k, v in doc.items() if k not in ("types", "enums", "path")}
    source = {
        "path": doc.get("path") or src_path.name,
        "types": doc.get("types") or [],
        "enums": doc.get("enums") or [],
    }
    existing = out.get("sources") or []
    if not isinstance(existing, list):
        raise TypeError(f"`sources` must be a list in {src_path}")
    out["sources"] = [*existing, source]
    return out


def _deep_merge_model(
    dst: dict[str, Any], src: dict[str, Any], *, src_path: Path
) -> None:
    """Deep-merge `src` into `dst` with deterministic, safe semantics.

    Merge rules:
      - missing key -> copy
      - list + list -> concatenate (preserve file order)
      - dict + dict -> recursive merge
      - scalar conflicts -> error (unless equal)
    """
    for key, value in src.items():
        if key not in dst:
            dst[key] = value
            continue

        existing = dst[key]
        if isinstance(existing, list) and isinstance(value, list):
            dst[key] = existing + value
            continue

        if isinstance(existing, dict) and isinstance(value, dict):
            _deep_merge_model(existing, value, src_path=src_path)
            continue

        if existing == value:
            continue

        raise ValueError(
            f"Snapshot merge conflict on key {key!r} from {src_path}: "
            f"existing={existing!r}, new={value!r}"
        )


def snapshot_files(model_dir: Path) -> list[Path]:
    """Snapshot part files of a directory, in deterministic (sorted) order."""
    return sorted(
        p for p in model_dir.iterdir() if p.is_file() and p.suffix.lower() in SNAPSHOT_SUFFIXES
    )


def load_model(path: Path) -> dict[str, Any]:
    """Load a type snapshot (single YAML/JSON file or a directory of parts)."""
    if not path.exists():
        raise FileNotFoundError(str(path))

    if path.is_dir():
        merged: dict[str, Any] = {}
        for part_path in snapshot_files(path):
            part = _normalize_sources(_load_yaml_mapping(part_path), src_path=part_path)
            _deep_merge_model(merged, part, src_path=part_path)
        return merged

    return _load_yaml_mapping(path)
