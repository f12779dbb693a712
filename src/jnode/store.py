"""In-memory document and node-set stores."""

from __future__ import annotations

import logging
from collections.abc import Callable

from jnode._types import Node, Path
from jnode.graph import build_nodes, find_node

logger = logging.getLogger(__name__)


def _unsubscriber(listeners: list, callback: Callable) -> Callable[[], None]:
    def unsubscribe() -> None:
        if callback in listeners:
            listeners.remove(callback)

    return unsubscribe


class DocumentStore:
    """Holds the canonical JSON text and notifies subscribers on change."""

    def __init__(self, text: str = "{}") -> None:
        self._text: str = text
        self._listeners: list[Callable[[str], None]] = []

    def get_text(self) -> str:
        return self._text

    def set_text(self, text: str) -> None:
        self._text = text
        logger.debug("document updated (%d chars)", len(text))
        for callback in list(self._listeners):
            callback(text)

    def subscribe(self, callback: Callable[[str], None]) -> Callable[[], None]:
        self._listeners.append(callback)
        return _unsubscriber(self._listeners, callback)


class GraphStore:
    """Node set regenerated from a DocumentStore, plus the selected node."""

    def __init__(self, documents: DocumentStore | None = None) -> None:
        self.nodes: list[Node] = []
        self.selected_node: Node | None = None
        self._selection_listeners: list[Callable[[Node | None], None]] = []
        self._regenerated_once: list[Callable[[list[Node]], None]] = []
        self._unsubscribe: Callable[[], None] | None = None
        if documents is not None:
            self.attach(documents)

    def attach(self, documents: DocumentStore) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
        self._unsubscribe = documents.subscribe(self.regenerate)
        self.regenerate(documents.get_text())

    def regenerate(self, text: str) -> None:
        """Rebuild the node set, then fire one-shot regeneration listeners."""
        self.nodes = build_nodes(text)
        logger.debug("regenerated %d nodes", len(self.nodes))
        pending, self._regenerated_once = self._regenerated_once, []
        for callback in pending:
            callback(self.nodes)

    def once_regenerated(self, callback: Callable[[list[Node]], None]) -> None:
        self._regenerated_once.append(callback)

    def get_nodes(self) -> list[Node]:
        return self.nodes

    def get_selected_node(self) -> Node | None:
        return self.selected_node

    def set_selected_node(self, node: Node | None) -> None:
        self.selected_node = node
        for callback in list(self._selection_listeners):
            callback(node)

    def select_path(self, path: Path | None) -> Node | None:
        """Select the node at *path*; no match clears the selection."""
        node = find_node(self.nodes, path)
        self.set_selected_node(node)
        return node

    def subscribe_selection(
        self, callback: Callable[[Node | None], None]
    ) -> Callable[[], None]:
        self._selection_listeners.append(callback)
        return _unsubscriber(self._selection_listeners, callback)
