"""Edit session for the selected node: drafts, save, and selection resync."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from jnode._cast import cast_value, display_value
from jnode._path import path_to_display_string
from jnode._project import Projection, editable_rows, normalize, project
from jnode._types import JsonType, Node, Path
from jnode.errors import EditError
from jnode.mutate import apply_object_edit, apply_primitive_edit
from jnode.store import DocumentStore, GraphStore

logger = logging.getLogger(__name__)


@dataclass
class SaveResult:
    ok: bool
    error: EditError | None = None
    written: bool = False


class EditSession:
    """Edit surface bound to a document store and a node-set store.

    Draft state lives only while editing: `draft_value` for a primitive leaf,
    `draft_rows` (property key -> text) for an object. A save either writes the
    document once or leaves it untouched and sets `error`.
    """

    def __init__(
        self,
        documents: DocumentStore,
        graph: GraphStore,
        *,
        read_only: bool = False,
    ) -> None:
        self.documents = documents
        self.graph = graph
        self.read_only: bool = read_only
        self.is_editing: bool = False
        self.draft_value: str = ""
        self.draft_rows: dict[str, str] = {}
        self.error: str | None = None
        self._unsubscribe = graph.subscribe_selection(self._on_selection_changed)

    def close(self) -> None:
        self._unsubscribe()

    # -- Derived state ------------------------------------------------------

    @property
    def node(self) -> Node | None:
        return self.graph.get_selected_node()

    @property
    def projection(self) -> Projection:
        return project(self.node)

    @property
    def display_text(self) -> str:
        return normalize(self.projection.rows)

    @property
    def path_text(self) -> str:
        node = self.node
        return path_to_display_string(node.path if node else None)

    @property
    def can_edit(self) -> bool:
        return not self.read_only and self.projection.is_editable

    # -- Draft handling -----------------------------------------------------

    def _clear_drafts(self) -> None:
        self.draft_value = ""
        self.draft_rows = {}

    def _seed_drafts(self, projection: Projection) -> None:
        self._clear_drafts()
        if projection.is_primitive_leaf:
            self.draft_value = display_value(projection.rows[0].value)
        elif projection.is_object_editable:
            self.draft_rows = {
                row.key: display_value(row.value)
                for row in editable_rows(projection.rows)
            }

    def _on_selection_changed(self, node: Node | None) -> None:
        if node is None:
            self.is_editing = False
            self._clear_drafts()
            return
        projection = project(node)
        if self.is_editing and projection.is_editable:
            self._seed_drafts(projection)
        else:
            self.is_editing = False
            self._clear_drafts()

    def start_edit(self) -> bool:
        """Enter edit mode with drafts seeded from the node; False if not editable."""
        if not self.can_edit:
            return False
        self._seed_drafts(self.projection)
        self.error = None
        self.is_editing = True
        return True

    def cancel_edit(self) -> None:
        self.is_editing = False
        self._clear_drafts()
        self.error = None

    def update_draft_value(self, text: str) -> None:
        self.draft_value = text

    def update_draft_property(self, key: str, text: str) -> None:
        self.draft_rows[key] = text

    # -- Save -----------------------------------------------------------------

    def _build_document(self, node: Node, projection: Projection) -> str | None:
        current = self.documents.get_text()
        if projection.is_primitive_leaf:
            value = cast_value(self.draft_value, projection.rows[0].type)
            return apply_primitive_edit(current, node.path, value)
        if projection.is_object_editable:
            row_types: dict[str, JsonType] = {
                row.key: row.type for row in projection.rows if row.key is not None
            }
            return apply_object_edit(current, node.path, self.draft_rows, row_types)
        return None

    def save_edit(self) -> SaveResult:
        self.error = None
        node = self.node
        if node is None or not self.is_editing:
            return SaveResult(ok=True)
        try:
            updated = self._build_document(node, self.projection)
        except EditError as exc:
            self.error = str(exc) or "Failed to save changes"
            logger.warning("save rejected at %s: %s", self.path_text, exc)
            return SaveResult(ok=False, error=exc)
        if updated is None:
            return SaveResult(ok=True)

        self.is_editing = False
        self._clear_drafts()
        self._resync_after_regeneration(node.path)
        self.documents.set_text(updated)
        return SaveResult(ok=True, written=True)

    # -- Selection resync -----------------------------------------------------

    def _resync_after_regeneration(self, path: Path) -> None:
        def resync(nodes: list[Node]) -> None:
            match = self.graph.select_path(path)
            if match is None:
                logger.debug("resync: %s no longer addressable", path)
            else:
                logger.debug("resync: reselected %s", path)

        self.graph.once_regenerated(resync)
