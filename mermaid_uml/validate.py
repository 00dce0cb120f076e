# mermaid_uml/validate.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal, Optional

from .builder import map_visibility
from .mermaid_fmt import MERMAID_ID_RE
from .model import Visibility
from .model_view import as_bool, build_type_index, parse_snapshot

Severity = Literal["error", "warning"]

KNOWN_TYPE_KINDS: frozenset[str] = frozenset({"class", "interface", "struct", "record"})


@dataclass(frozen=True)
class ValidationIssue:
    """Structured validation issue for callers that want more than strings."""

    severity: Severity
    code: str
    message: str
    path: str = ""
    hint: Optional[str] = None


@dataclass(frozen=True)
class ValidateConfig:
    """Validation configuration.

    `ignore` drops issues by code; `escalate` turns the named warnings into
    errors.
    """

    ignore: set[str] = field(default_factory=set)
    escalate: set[str] = field(default_factory=set)

    check_mermaid_safe_names: bool = True
    check_duplicate_simple_names: bool = True


def _iter_sources(model: dict[str, Any], emit: Any) -> list[tuple[str, dict[str, Any]]]:
    """Return (json_path, source mapping) pairs, mirroring parse_snapshot order."""
    out: list[tuple[str, dict[str, Any]]] = []

    sources = model.get("sources", []) or []
    if not isinstance(sources, list):
        emit("error", "E_SOURCES_NOT_LIST", "snapshot.sources must be a list", path="/sources")
        sources = []

    for i, src in enumerate(sources):
        if not isinstance(src, dict):
            emit(
                "warning",
                "W_SOURCE_NOT_MAPPING",
                "snapshot.sources contains a non-mapping item; skipping",
                path=f"/sources/{i}",
            )
            continue
        out.append((f"/sources/{i}", src))

    if "types" in model or "enums" in model:
        out.append(("", model))

    return out


def _check_accessibility(value: Any, path: str, emit: Any) -> None:
    if value is None:
        return
    if not isinstance(value, str) or map_visibility(value) is Visibility.UNKNOWN:
        emit(
            "warning",
            "W_UNKNOWN_ACCESSIBILITY",
            f"unrecognized accessibility {value!r}; rendered as '?'",
            path=path,
        )


def _check_members(
    items: Any, section: str, base: str, emit: Any
) -> None:
    if items is None:
        return
    if not isinstance(items, list):
        emit("error", "E_SECTION_NOT_LIST", f"{section} must be a list", path=f"{base}/{section}")
        return

    for j, member in enumerate(items):
        path = f"{base}/{section}/{j}"
        if not isinstance(member, dict):
            emit("warning", "W_MEMBER_NOT_MAPPING", f"{section} item is not a mapping; skipping", path=path)
            continue
        name = member.get("name")
        if not isinstance(name, str) or not name.strip():
            emit("warning", "W_MEMBER_MISSING_NAME", f"{section} item missing string `name`; skipping", path=path)
            continue
        if section == "properties" and member.get("type") in (None, "", {}):
            emit(
                "warning",
                "W_PROPERTY_MISSING_TYPE",
                f"property {name!r} has no type; skipping",
                path=f"{path}/type",
            )
        _check_accessibility(member.get("accessibility"), f"{path}/accessibility", emit)


def validate_model_issues(
    model: dict[str, Any], cfg: Optional[ValidateConfig] = None
) -> list[ValidationIssue]:
    """Return structured validation issues for a loaded snapshot mapping.

    Nothing reported here stops the core from rendering; the CLI decides
    whether errors (or warnings under --strict) abort the run.
    """

    cfg = cfg or ValidateConfig()
    issues: list[ValidationIssue] = []

    def emit(
        severity: Severity,
        code: str,
        message: str,
        path: str = "",
        hint: Optional[str] = None,
    ) -> None:
        if code in cfg.ignore:
            return
        final_severity: Severity = (
            "error" if (severity == "warning" and code in cfg.escalate) else severity
        )
        issues.append(
            ValidationIssue(
                severity=final_severity,
                code=code,
                message=message,
                path=path,
                hint=hint,
            )
        )

    project = model.get("project")
    if project is not None and not isinstance(project, str):
        emit("error", "E_PROJECT_NOT_STRING", "snapshot.project must be a string", path="/project")

    for base, src in _iter_sources(model, emit):
        types = src.get("types", []) or []
        if not isinstance(types, list):
            emit("error", "E_SECTION_NOT_LIST", "types must be a list", path=f"{base}/types")
            types = []

        for i, t in enumerate(types):
            path = f"{base}/types/{i}"
            if not isinstance(t, dict):
                emit("warning", "W_TYPE_NOT_MAPPING", "types item is not a mapping; skipping", path=path)
                continue

            name = t.get("name")
            if not isinstance(name, str) or not name.strip():
                emit(
                    "warning",
                    "W_TYPE_MISSING_NAME",
                    "declared type has no resolvable name; skipping",
                    path=f"{path}/name",
                )
                continue

            if not as_bool(t.get("resolved"), True):
                emit(
                    "warning",
                    "W_TYPE_UNRESOLVED",
                    f"type {name!r} has no semantic symbol; skipping",
                    path=f"{path}/resolved",
                )
                continue

            kind = t.get("kind", "class")
            if not isinstance(kind, str) or kind.lower() not in KNOWN_TYPE_KINDS:
                emit(
                    "warning",
                    "W_UNKNOWN_TYPE_KIND",
                    f"type {name!r} has unknown kind {kind!r}; rendered as a class",
                    path=f"{path}/kind",
                    hint="use one of: " + ", ".join(sorted(KNOWN_TYPE_KINDS)),
                )

            if cfg.check_mermaid_safe_names and not MERMAID_ID_RE.match(name.strip()):
                emit(
                    "warning",
                    "W_NAME_NOT_MERMAID_SAFE",
                    f"type name {name!r} is not Mermaid-safe",
                    path=f"{path}/name",
                )

            _check_accessibility(t.get("accessibility"), f"{path}/accessibility", emit)
            _check_members(t.get("properties"), "properties", path, emit)
            _check_members(t.get("methods"), "methods", path, emit)

        enums = src.get("enums", []) or []
        if not isinstance(enums, list):
            emit("error", "E_SECTION_NOT_LIST", "enums must be a list", path=f"{base}/enums")
            enums = []

        for i, e in enumerate(enums):
            path = f"{base}/enums/{i}"
            if not isinstance(e, dict):
                emit("warning", "W_ENUM_NOT_MAPPING", "enums item is not a mapping; skipping", path=path)
                continue
            name = e.get("name")
            if not isinstance(name, str) or not name.strip():
                emit("warning", "W_ENUM_MISSING_NAME", "enum missing string `name`; skipping", path=f"{path}/name")

    if cfg.check_duplicate_simple_names:
        snapshot = parse_snapshot(model)
        for name, namespaces in build_type_index(snapshot).items():
            distinct = sorted(set(namespaces))
            if len(distinct) > 1:
                emit(
                    "warning",
                    "W_DUPLICATE_SIMPLE_NAME",
                    f"type name {name!r} is declared in several namespaces "
                    f"({', '.join(ns or '<global>' for ns in distinct)}); "
                    "they render as one diagram node",
                )

    return issues


def validate_model(model: dict[str, Any]) -> tuple[list[str], list[str]]:
    """Backwards-compatible wrapper returning (errors, warnings) as strings."""
    errors: list[str] = []
    warnings: list[str] = []
    for issue in validate_model_issues(model):
        text = f"{issue.path}: {issue.message}" if issue.path else issue.message
        if issue.severity == "error":
            errors.append(text)
        else:
            warnings.append(text)
    return errors, warnings
