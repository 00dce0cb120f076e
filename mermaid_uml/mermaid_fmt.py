from __future__ import annotations

import re

from .model import (
    DiagramEntity,
    DiagramMember,
    DiagramMethod,
    DiagramRelationship,
    EntityKind,
    RelationshipKind,
    Visibility,
)

# Lookup tables are keyed on the closed enums in model.py and must cover every
# member (tests/unit/test_mermaid_fmt.py checks this).

VISIBILITY_TOKENS: dict[Visibility, str] = {
    Visibility.PUBLIC: "+",
    Visibility.PRIVATE: "-",
    Visibility.PROTECTED: "#",
    Visibility.INTERNAL: "~",
    Visibility.PROTECTED_OR_INTERNAL: "~",
    Visibility.UNKNOWN: "?",
}

RELATION_TOKENS: dict[RelationshipKind, str] = {
    RelationshipKind.INHERITANCE: "|>",
    RelationshipKind.COMPOSITION: "*",
    RelationshipKind.AGGREGATION: "o",
    RelationshipKind.ASSOCIATION: ">",
    RelationshipKind.REALIZATION: "|>",
    RelationshipKind.DEPENDENCY: ">",
    RelationshipKind.LINK: "",
}

RELATION_CONTEXT: dict[RelationshipKind, str] = {
    RelationshipKind.INHERITANCE: "inherits",
    RelationshipKind.COMPOSITION: "composes",
    RelationshipKind.AGGREGATION: "aggregates",
    RelationshipKind.ASSOCIATION: "associates",
    RelationshipKind.REALIZATION: "realizes",
    RelationshipKind.DEPENDENCY: "depends on",
    RelationshipKind.LINK: "links",
}

LINK_TOKENS: dict[RelationshipKind, str] = {
    RelationshipKind.INHERITANCE: "--",
    RelationshipKind.COMPOSITION: "--",
    RelationshipKind.AGGREGATION: "--",
    RelationshipKind.ASSOCIATION: "--",
    RelationshipKind.REALIZATION: "..",
    RelationshipKind.DEPENDENCY: "..",
    RelationshipKind.LINK: "..",
}

# Mermaid class names must be alphanumeric/underscore and must not start with
# a digit.
MERMAID_ID_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

INDENT = "    "


def mermaid_block(code: str) -> str:
    """Wrap Mermaid source in a Markdown Mermaid code fence."""
    return "```mermaid\n" + code.rstrip("\n") + "\n```\n"


def mm_front_matter(title: str) -> list[str]:
    return [
        "---",
        f"title: {mm_class_member(title)}",
        "config:",
        "  class:",
        "    hideEmptyMembersBox: true",
        "---",
    ]


def mm_class_member(text: object) -> str:
    # Preserve punctuation; just prevent line breaks from corrupting Mermaid.
    s = str(text).replace("\r", " ").replace("\n", " ").strip()
    s = re.sub(r"\s+", " ", s)
    return s


def mm_namespace_key(namespace: str) -> str:
    """Mermaid namespace ids cannot contain dots."""
    return namespace.strip().replace(".", "-")


def visibility_token(visibility: Visibility) -> str:
    return VISIBILITY_TOKENS[visibility]


def relation_token(kind: RelationshipKind) -> str:
    return RELATION_TOKENS[kind]


def relation_context(kind: RelationshipKind) -> str:
    return RELATION_CONTEXT[kind]


def link_token(kind: RelationshipKind) -> str:
    # The line style follows the relationship kind; LinkStyle on the edge is
    # informational only.
    return LINK_TOKENS[kind]


def format_property(member: DiagramMember) -> str:
    return mm_class_member(
        f"{visibility_token(member.visibility)} {member.type} {member.name}"
    )


def format_method(method: DiagramMethod) -> str:
    async_prefix = "async " if method.is_async else ""
    params = ", ".join(method.parameters)
    return mm_class_member(
        f"{visibility_token(method.visibility)} {async_prefix}"
        f"{method.return_type} {method.name}({params})"
    )


def format_relationship(rel: DiagramRelationship) -> str:
    return (
        f"{INDENT}{rel.source} {link_token(rel.kind)}{relation_token(rel.kind)} "
        f"{rel.target} : {relation_context(rel.kind)}"
    )


def format_stereotype(entity: DiagramEntity) -> str:
    if entity.is_abstract and entity.kind is EntityKind.CLASS:
        return f"{INDENT}<<abstract>> {entity.name}"
    return f"{INDENT}<<{entity.kind.value}>> {entity.name}"


def format_class_body(entity: DiagramEntity, depth: int = 1) -> list[str]:
    """Class box lines: `class Name {`, members, closing brace."""
    outer = INDENT * depth
    inner = INDENT * (depth + 1)
    lines = [f"{outer}class {entity.name} {{"]
    lines.extend(f"{inner}{format_property(p)}" for p in entity.properties)
    lines.extend(f"{inner}{format_method(m)}" for m in entity.methods)
    lines.append(f"{outer}}}")
    return lines
