"""
JSON Schema to TypeBox code translation.

Translates SchemaNode trees into TypeBox builder expressions, e.g.

    {"type": "object", "properties": {"title": {"type": "string"}}, "required": ["title"]}

becomes

    Type.Object({
      title: Type.String()
    })
"""

import json
import re
from typing import Any

from cmstypes.schema_nodes import SchemaKind, SchemaNode, parse_schema_node

INDENT = "  "
ANY_EXPRESSION = "Type.Any()"

_PRIMITIVES = {
    SchemaKind.STRING: "Type.String()",
    SchemaKind.NUMBER: "Type.Number()",
    SchemaKind.INTEGER: "Type.Integer()",
    SchemaKind.BOOLEAN: "Type.Boolean()",
    SchemaKind.NULL: "Type.Null()",
}

_TS_IDENTIFIER = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")


def _literal(value: Any) -> str:
    return json.dumps(value, ensure_ascii=False)


def _property_key(name: str) -> str:
    if _TS_IDENTIFIER.match(name):
        return name
    return _literal(name)


def translate(node: SchemaNode, indent: str = "") -> str:
    """
    Translate a SchemaNode into a TypeBox expression.

    Args:
        node: Parsed schema node
        indent: Indentation of the line the expression starts on

    Returns:
        TypeBox expression text; Type.Any() for unrecognized kinds
    """
    if node is None or node.kind is SchemaKind.UNKNOWN:
        return ANY_EXPRESSION

    if node.kind is SchemaKind.STRING and node.enum_values:
        # Order and duplicates are kept as declared
        literals = ", ".join(f"Type.Literal({_literal(value)})" for value in node.enum_values)
        return f"Type.Union([{literals}])"

    if node.kind in _PRIMITIVES:
        return _PRIMITIVES[node.kind]

    if node.kind is SchemaKind.ARRAY:
        item_expression = translate(node.items, indent) if node.items is not None else ANY_EXPRESSION
        return f"Type.Array({item_expression})"

    if node.kind is SchemaKind.OBJECT:
        return _translate_object(node, indent)

    return ANY_EXPRESSION


def _translate_object(node: SchemaNode, indent: str) -> str:
    if not node.properties:
        return "Type.Object({})"

    inner = indent + INDENT
    lines = []
    for name, child in node.properties:
        expression = translate(child, inner)
        if name not in node.required:
            expression = f"Type.Optional({expression})"
        lines.append(f"{inner}{_property_key(name)}: {expression}")

    body = ",\n".join(lines)
    return f"Type.Object({{\n{body}\n{indent}}})"


def render_type_code(node: SchemaNode, type_name: str) -> str:
    """
    Render the schema constant and its static type alias for one schema.

    Args:
        node: Root schema node
        type_name: Normalized identifier

    Returns:
        TypeScript source declaring {type_name}Schema and {type_name}Type
    """
    return f"{schema_declaration(type_name, translate(node))}\n\n{type_alias(type_name)}"


def schema_declaration(type_name: str, expression: str) -> str:
    return f"export const {type_name}Schema = {expression};"


def type_alias(type_name: str) -> str:
    return f"export type {type_name}Type = Static<typeof {type_name}Schema>;"


def translate_schema(raw_schema: Any, type_name: str) -> str:
    """Parse a raw JSON-Schema fragment and render its TypeBox code."""
    return render_type_code(parse_schema_node(raw_schema), type_name)
