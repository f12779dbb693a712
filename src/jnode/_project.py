"""Display form and editability of a node."""

from __future__ import annotations

import json
from dataclasses import dataclass

from jnode._cast import display_value
from jnode._types import JsonType, Node, Row

DEFAULT_INDENT = 2


@dataclass(frozen=True)
class Projection:
    rows: tuple[Row, ...] = ()
    is_primitive_leaf: bool = False
    is_object_editable: bool = False

    @property
    def is_editable(self) -> bool:
        return self.is_primitive_leaf or self.is_object_editable


def is_primitive_leaf(rows: tuple[Row, ...]) -> bool:
    """A single unkeyed scalar row."""
    if len(rows) != 1:
        return False
    row = rows[0]
    return row.key is None and row.is_scalar


def is_object_editable(rows: tuple[Row, ...]) -> bool:
    """More than one row, at least one of them a keyed scalar."""
    if len(rows) <= 1:
        return False
    return any(row.key is not None and row.is_scalar for row in rows)


def project(node: Node | None) -> Projection:
    if node is None:
        return Projection()
    rows = tuple(node.rows)
    return Projection(
        rows=rows,
        is_primitive_leaf=is_primitive_leaf(rows),
        is_object_editable=is_object_editable(rows),
    )


def editable_rows(rows: tuple[Row, ...]) -> list[Row]:
    return [row for row in rows if row.key is not None and row.is_scalar]


def normalize(rows: tuple[Row, ...]) -> str:
    """Display text of a node: bare value, or an object of its scalar rows."""
    if not rows:
        return "{}"
    if len(rows) == 1 and rows[0].key is None:
        return display_value(rows[0].value)
    obj = {row.key: row.value for row in editable_rows(rows)}
    return json.dumps(obj, indent=DEFAULT_INDENT, ensure_ascii=False)


def container_placeholder(row: Row) -> str:
    """Summary shown in place of a nested object/array property."""
    count = row.children_count or 0
    if row.type is JsonType.OBJECT:
        return f"{{{count} keys}}"
    if row.type is JsonType.ARRAY:
        return f"[{count} items]"
    return display_value(row.value)
