# mermaid_uml/constants.py
from __future__ import annotations

# Namespace prefix of the platform library; member types under it never
# produce relationships.
SYSTEM_NAMESPACE_PREFIX = "System"

# Universal base type; never rendered as an inheritance target.
ROOT_OBJECT_NAMES: frozenset[str] = frozenset({"Object", "object", "System.Object"})

COLLECTION_TYPE_NAMES: frozenset[str] = frozenset({"IEnumerable", "ICollection", "List"})
STRING_TYPE_NAME = "string"

ENUM_MEMBER_TYPE = "enum"

DIAGRAM_TITLE_DEFAULT = "UML Diagram"

# Snapshot files picked up when the input path is a directory (sorted order).
SNAPSHOT_SUFFIXES: tuple[str, ...] = (".yaml", ".yml", ".json")

# Output filename suffixes, appended in this order for each active flag.
OUTPUT_SUFFIX_NO_CLASSES = "_NoClasses"
OUTPUT_SUFFIX_NO_INTERFACES = "_NoInterfaces"
OUTPUT_SUFFIX_NO_ENUMS = "_NoEnums"
OUTPUT_SUFFIX_NESTED_INHERITANCE = "_NestedInheritance"
OUTPUT_SUFFIX_NAMESPACES = "_WithNamespaces"
