"""Turn a JSON document into the flat list of selectable nodes."""

from __future__ import annotations

from collections.abc import Iterable

from jnode._cast import load_json
from jnode._types import JsonType, Node, Path, Row


def _row(key: str | None, value: object) -> Row:
    kind = JsonType.of(value)
    if kind.is_container:
        return Row(key, kind, None, len(value))
    return Row(key, kind, value)


def _collect(value: object, path: Path, nodes: list[Node]) -> None:
    if isinstance(value, dict):
        nodes.append(Node(path, tuple(_row(k, v) for k, v in value.items())))
        for k, v in value.items():
            if isinstance(v, (dict, list)):
                _collect(v, path + (k,), nodes)
    elif isinstance(value, list):
        # 배열 자체는 노드가 아니고 원소마다 노드를 만든다
        for i, v in enumerate(value):
            _collect(v, path + (i,), nodes)
    else:
        nodes.append(Node(path, (_row(None, value),)))


def build_nodes(document_text: str) -> list[Node]:
    """Return nodes in document order; invalid JSON yields no nodes."""
    try:
        data = load_json(document_text)
    except (ValueError, TypeError):
        return []
    nodes: list[Node] = []
    _collect(data, (), nodes)
    return nodes


def find_node(nodes: Iterable[Node], path: Path | None) -> Node | None:
    """Return the node whose path equals *path*, or None."""
    if path is None:
        return None
    wanted = tuple(path)
    for node in nodes:
        if node.path == wanted:
            return node
    return None
