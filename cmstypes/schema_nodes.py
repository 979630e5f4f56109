"""
Typed view of the JSON-Schema fragments embedded in the CMS catalogs.

The catalogs are untyped JSON, so schema fragments are parsed into SchemaNode
trees as soon as they are read. The translator then only ever sees a closed
set of kinds.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, FrozenSet, Optional, Set, Tuple

from cmstypes.constants import MAX_SCHEMA_DEPTH
from cmstypes.errors import CyclicSchemaError, SchemaDepthError


class SchemaKind(str, Enum):
    STRING = "string"
    NUMBER = "number"
    INTEGER = "integer"
    BOOLEAN = "boolean"
    ARRAY = "array"
    OBJECT = "object"
    NULL = "null"
    UNKNOWN = "unknown"


_KINDS_BY_TYPE = {kind.value: kind for kind in SchemaKind if kind is not SchemaKind.UNKNOWN}


@dataclass(frozen=True)
class SchemaNode:
    """
    One node of a JSON-Schema tree.

    Only the attributes that belong to ``kind`` are populated: ``enum_values``
    for strings, ``items`` for arrays, ``properties`` and ``required`` for
    objects. ``properties`` keeps the declaration order of the source.
    """

    kind: SchemaKind
    title: Optional[str] = None
    description: Optional[str] = None
    enum_values: Tuple[Any, ...] = ()
    items: Optional["SchemaNode"] = None
    properties: Tuple[Tuple[str, "SchemaNode"], ...] = ()
    required: FrozenSet[str] = field(default_factory=frozenset)


def _kind_of(raw: dict) -> SchemaKind:
    declared = raw.get("type")
    if isinstance(declared, str):
        return _KINDS_BY_TYPE.get(declared, SchemaKind.UNKNOWN)
    return SchemaKind.UNKNOWN


def _text(value: Any) -> Optional[str]:
    return value if isinstance(value, str) else None


def parse_schema_node(raw: Any, max_depth: int = MAX_SCHEMA_DEPTH) -> SchemaNode:
    """
    Parse a raw JSON-Schema fragment into a SchemaNode tree.

    Anything that is not a dict, or whose ``type`` is missing or unrecognized,
    becomes an UNKNOWN node. Nested collections of the wrong shape are treated
    as absent.

    Args:
        raw: Decoded JSON value
        max_depth: Deepest nesting accepted

    Returns:
        Root SchemaNode

    Raises:
        CyclicSchemaError: If a dict appears among its own descendants
        SchemaDepthError: If the schema nests deeper than max_depth
    """
    return _parse(raw, 0, max_depth, set())


def _parse(raw: Any, depth: int, max_depth: int, ancestors: Set[int]) -> SchemaNode:
    if not isinstance(raw, dict):
        return SchemaNode(kind=SchemaKind.UNKNOWN)

    if id(raw) in ancestors:
        raise CyclicSchemaError(f"Cyclic schema detected at depth {depth}")
    if depth > max_depth:
        raise SchemaDepthError(f"Schema nesting exceeds maximum depth of {max_depth}")

    kind = _kind_of(raw)
    title = _text(raw.get("title"))
    description = _text(raw.get("description"))

    if kind is SchemaKind.STRING:
        enum_values = raw.get("enum")
        return SchemaNode(
            kind=kind,
            title=title,
            description=description,
            enum_values=tuple(enum_values) if isinstance(enum_values, list) else (),
        )

    if kind is SchemaKind.ARRAY:
        ancestors.add(id(raw))
        try:
            items = raw.get("items")
            item_node = _parse(items, depth + 1, max_depth, ancestors) if isinstance(items, dict) else None
        finally:
            ancestors.discard(id(raw))
        return SchemaNode(kind=kind, title=title, description=description, items=item_node)

    if kind is SchemaKind.OBJECT:
        raw_properties = raw.get("properties")
        if not isinstance(raw_properties, dict):
            raw_properties = {}
        raw_required = raw.get("required")
        if not isinstance(raw_required, list):
            raw_required = []

        ancestors.add(id(raw))
        try:
            properties = tuple(
                (str(name), _parse(child, depth + 1, max_depth, ancestors))
                for name, child in raw_properties.items()
            )
        finally:
            ancestors.discard(id(raw))

        return SchemaNode(
            kind=kind,
            title=title,
            description=description,
            properties=properties,
            required=frozenset(name for name in raw_required if isinstance(name, str)),
        )

    return SchemaNode(kind=kind, title=title, description=description)
