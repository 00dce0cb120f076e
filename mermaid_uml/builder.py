from __future__ import annotations

import re
from typing import Optional

from .constants import COLLECTION_TYPE_NAMES, ENUM_MEMBER_TYPE, STRING_TYPE_NAME
from .model import DiagramEntity, DiagramMember, DiagramMethod, EntityKind, Visibility
from .model_view import (
    EnumDescription,
    MethodDescription,
    PropertyDescription,
    TypeDescription,
    TypeRef,
)

_ACCESSIBILITY: dict[str, Visibility] = {
    "public": Visibility.PUBLIC,
    "private": Visibility.PRIVATE,
    "protected": Visibility.PROTECTED,
    "internal": Visibility.INTERNAL,
    "friend": Visibility.INTERNAL,
    "protectedorinternal": Visibility.PROTECTED_OR_INTERNAL,
    "protectedinternal": Visibility.PROTECTED_OR_INTERNAL,
    "protectedfriend": Visibility.PROTECTED_OR_INTERNAL,
}


def map_visibility(accessibility: Optional[str]) -> Visibility:
    """Map a source accessibility keyword to a diagram visibility.

    Matching ignores case, whitespace, underscores and dashes, so
    "ProtectedOrInternal", "protected internal" and "protected_or_internal"
    are the same. Anything unrecognized is UNKNOWN.
    """
    key = re.sub(r"[\s_\-]+", "", accessibility or "").lower()
    return _ACCESSIBILITY.get(key, Visibility.UNKNOWN)


def is_collection(type_ref: TypeRef) -> bool:
    """True for enumerable shapes (by name or implemented interface), never strings."""
    if type_ref.name.lower() == STRING_TYPE_NAME:
        return False
    if type_ref.name in COLLECTION_TYPE_NAMES:
        return True
    return any(i in COLLECTION_TYPE_NAMES for i in type_ref.interfaces)


def type_display_name(type_ref: TypeRef) -> str:
    if type_ref.element_type is not None:
        return f"{type_ref.element_type.name}[]"
    if type_ref.type_arguments:
        args = ", ".join(a.name for a in type_ref.type_arguments)
        return f"{type_ref.name}<{args}>"
    return type_ref.name


def build_member(prop: PropertyDescription) -> DiagramMember:
    return DiagramMember(
        name=prop.name,
        type=type_display_name(prop.type),
        visibility=map_visibility(prop.accessibility),
        is_collection=is_collection(prop.type) or prop.type.is_array,
    )


def build_method(method: MethodDescription) -> DiagramMethod:
    # Return and parameter types use the bare simple name, generic arguments
    # dropped ("Task", not "Task<int>").
    return DiagramMethod(
        name=method.name,
        return_type=method.return_type.name,
        visibility=map_visibility(method.accessibility),
        parameters=tuple(f"{p.type.name} {p.name}" for p in method.parameters),
        is_async=method.is_async,
    )


def _is_ordinary_method(method: MethodDescription) -> bool:
    return not method.is_implicit and method.method_kind.lower() == "ordinary"


def build_entity(decl: TypeDescription) -> Optional[DiagramEntity]:
    """Build the diagram entity for a class or interface, without relationships.

    Returns None for declarations the front end could not resolve.
    """
    if not decl.resolved:
        return None

    return DiagramEntity(
        name=decl.name,
        kind=EntityKind.INTERFACE if decl.is_interface else EntityKind.CLASS,
        is_abstract=decl.is_abstract,
        visibility=map_visibility(decl.accessibility),
        namespace=decl.namespace,
        properties=tuple(build_member(p) for p in decl.properties if not p.is_implicit),
        methods=tuple(build_method(m) for m in decl.methods if _is_ordinary_method(m)),
    )


def build_enum_entity(decl: EnumDescription) -> DiagramEntity:
    """Enums render their members as public properties of type `enum`."""
    return DiagramEntity(
        name=decl.name,
        kind=EntityKind.ENUM,
        visibility=Visibility.PUBLIC,
        namespace=decl.namespace,
        properties=tuple(
            DiagramMember(name=m, type=ENUM_MEMBER_TYPE, visibility=Visibility.PUBLIC)
            for m in decl.members
        ),
    )
