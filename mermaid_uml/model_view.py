from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

# Typed view over a type snapshot document (see io.load_model). The parsers
# below are lenient: anything malformed is dropped or defaulted here and
# reported by validate.py instead.


@dataclass(frozen=True)
class TypeRef:
    """Reference to a type as the analysis front end resolved it.

    `element_type` is set for arrays; `type_arguments` for constructed
    generics. `interfaces` lists the simple names of every interface the
    referenced type implements.
    """

    name: str
    namespace: Optional[str] = None
    kind: Optional[str] = None
    element_type: Optional["TypeRef"] = None
    type_arguments: tuple["TypeRef", ...] = ()
    interfaces: tuple[str, ...] = ()

    @property
    def is_array(self) -> bool:
        return self.element_type is not None

    @property
    def is_enum(self) -> bool:
        return (self.kind or "").lower() == "enum"


@dataclass(frozen=True)
class ParameterDescription:
    name: str
    type: TypeRef


@dataclass(frozen=True)
class PropertyDescription:
    name: str
    type: TypeRef
    accessibility: str = "public"
    is_implicit: bool = False


@dataclass(frozen=True)
class MethodDescription:
    name: str
    return_type: TypeRef
    accessibility: str = "public"
    parameters: tuple[ParameterDescription, ...] = ()
    is_async: bool = False
    method_kind: str = "ordinary"
    is_implicit: bool = False


@dataclass(frozen=True)
class TypeDescription:
    name: str
    kind: str = "class"
    is_abstract: bool = False
    accessibility: str = "public"
    namespace: Optional[str] = None
    base_type: Optional[TypeRef] = None
    ancestors: tuple[TypeRef, ...] = ()
    interfaces: tuple[TypeRef, ...] = ()
    properties: tuple[PropertyDescription, ...] = ()
    methods: tuple[MethodDescription, ...] = ()
    resolved: bool = True

    @property
    def is_interface(self) -> bool:
        return self.kind.lower() == "interface"

    @property
    def ancestor_chain(self) -> tuple[TypeRef, ...]:
        """Base types nearest first; falls back to the direct base alone."""
        if self.ancestors:
            return self.ancestors
        if self.base_type is not None:
            return (self.base_type,)
        return ()


@dataclass(frozen=True)
class EnumDescription:
    name: str
    members: tuple[str, ...] = ()
    namespace: Optional[str] = None


@dataclass(frozen=True)
class SourceUnit:
    """Declarations collected from one analyzed source file."""

    path: str
    types: tuple[TypeDescription, ...] = ()
    enums: tuple[EnumDescription, ...] = ()


@dataclass(frozen=True)
class Snapshot:
    project: Optional[str]
    sources: tuple[SourceUnit, ...]


def as_bool(value: Any, default: bool = False) -> bool:
    """Convert a YAML scalar to bool, falling back to a default."""
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in ("true", "yes", "1"):
            return True
        if lowered in ("false", "no", "0"):
            return False
    if isinstance(value, int):
        return bool(value)
    return default


def as_str(value: Any) -> Optional[str]:
    """Return a stripped non-empty string, or None."""
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def _as_list(value: Any) -> list[Any]:
    return value if isinstance(value, list) else []


def parse_type_ref(raw: Any) -> Optional[TypeRef]:
    """Parse a type reference mapping (or bare type-name string)."""
    if isinstance(raw, str):
        name = as_str(raw)
        return TypeRef(name=name) if name else None
    if not isinstance(raw, dict):
        return None

    element = parse_type_ref(raw.get("element_type"))
    name = as_str(raw.get("name"))
    if name is None:
        if element is None:
            return None
        # Arrays carry no simple name of their own.
        name = ""

    type_args = tuple(
        ref for ref in (parse_type_ref(a) for a in _as_list(raw.get("type_arguments")))
        if ref is not None
    )
    interfaces = tuple(
        n for n in (as_str(i) for i in _as_list(raw.get("interfaces"))) if n
    )
    return TypeRef(
        name=name,
        namespace=as_str(raw.get("namespace")),
        kind=as_str(raw.get("kind")),
        element_type=element,
        type_arguments=type_args,
        interfaces=interfaces,
    )


def _parse_type_refs(raw: Any) -> tuple[TypeRef, ...]:
    return tuple(
        ref for ref in (parse_type_ref(item) for item in _as_list(raw)) if ref is not None
    )


def parse_property(raw: Any) -> Optional[PropertyDescription]:
    if not isinstance(raw, dict):
        return None
    name = as_str(raw.get("name"))
    type_ref = parse_type_ref(raw.get("type"))
    if name is None or type_ref is None:
        return None
    return PropertyDescription(
        name=name,
        type=type_ref,
        accessibility=as_str(raw.get("accessibility")) or "public",
        is_implicit=as_bool(raw.get("implicit")),
    )


def parse_method(raw: Any) -> Optional[MethodDescription]:
    if not isinstance(raw, dict):
        return None
    name = as_str(raw.get("name"))
    if name is None:
        return None

    params: list[ParameterDescription] = []
    for p in _as_list(raw.get("parameters")):
        if not isinstance(p, dict):
            continue
        p_name = as_str(p.get("name"))
        p_type = parse_type_ref(p.get("type"))
        if p_name and p_type:
            params.append(ParameterDescription(name=p_name, type=p_type))

    return MethodDescription(
        name=name,
        return_type=parse_type_ref(raw.get("return_type")) or TypeRef(name="Void"),
        accessibility=as_str(raw.get("accessibility")) or "public",
        parameters=tuple(params),
        is_async=as_bool(raw.get("async")),
        method_kind=as_str(raw.get("kind")) or "ordinary",
        is_implicit=as_bool(raw.get("implicit")),
    )


def parse_type(raw: Any) -> Optional[TypeDescription]:
    """Parse one declared class/interface entry.

    An entry without a name is kept as unresolved so callers can skip it the
    same way as an explicit `resolved: false`.
    """
    if not isinstance(raw, dict):
        return None
    name = as_str(raw.get("name"))
    properties = tuple(
        p for p in (parse_property(item) for item in _as_list(raw.get("properties"))) if p
    )
    methods = tuple(
        m for m in (parse_method(item) for item in _as_list(raw.get("methods"))) if m
    )
    return TypeDescription(
        name=name or "",
        kind=as_str(raw.get("kind")) or "class",
        is_abstract=as_bool(raw.get("abstract")),
        accessibility=as_str(raw.get("accessibility")) or "public",
        namespace=as_str(raw.get("namespace")),
        base_type=parse_type_ref(raw.get("base_type")),
        ancestors=_parse_type_refs(raw.get("ancestors")),
        interfaces=_parse_type_refs(raw.get("interfaces")),
        properties=properties,
        methods=methods,
        resolved=as_bool(raw.get("resolved"), True) and name is not None,
    )


def parse_enum(raw: Any) -> Optional[EnumDescription]:
    if not isinstance(raw, dict):
        return None
    name = as_str(raw.get("name"))
    if name is None:
        return None
    members = tuple(m for m in (as_str(x) for x in _as_list(raw.get("members"))) if m)
    return EnumDescription(name=name, members=members, namespace=as_str(raw.get("namespace")))


def _parse_source(raw: dict[str, Any], default_path: str) -> SourceUnit:
    return SourceUnit(
        path=as_str(raw.get("path")) or default_path,
        types=tuple(t for t in (parse_type(item) for item in _as_list(raw.get("types"))) if t),
        enums=tuple(e for e in (parse_enum(item) for item in _as_list(raw.get("enums"))) if e),
    )


def parse_snapshot(model: dict[str, Any]) -> Snapshot:
    """Build the typed snapshot from a loaded model mapping.

    Top-level `types`/`enums` (outside `sources`) form one trailing implicit
    source so single-file snapshots stay terse.
    """
    sources: list[SourceUnit] = []
    for i, raw in enumerate(_as_list(model.get("sources"))):
        if isinstance(raw, dict):
            sources.append(_parse_source(raw, default_path=f"<source {i}>"))

    if "types" in model or "enums" in model:
        sources.append(_parse_source(model, default_path="<snapshot>"))

    return Snapshot(project=as_str(model.get("project")), sources=tuple(sources))


def build_type_index(snapshot: Snapshot) -> dict[str, list[str]]:
    """Index declared simple names to the namespaces that declare them."""
    index: dict[str, list[str]] = {}
    for source in snapshot.sources:
        for t in source.types:
            if t.resolved:
                index.setdefault(t.name, []).append(t.namespace or "")
        for e in source.enums:
            index.setdefault(e.name, []).append(e.namespace or "")
    return index
