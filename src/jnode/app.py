"""Node browser application: pick a node, view it, edit it."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from rich.text import Text
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.logging import TextualHandler
from textual.widgets import Footer, Header, OptionList

from jnode._cast import display_value
from jnode._path import path_to_display_string
from jnode._project import project
from jnode._types import Node
from jnode.modal import NodeModal
from jnode.session import EditSession
from jnode.store import DocumentStore, GraphStore

logger = logging.getLogger(__name__)

SAMPLE_JSON = """\
{
  "name": "jnode",
  "version": "0.1.0",
  "stable": false,
  "license": null,
  "customer": [
    {"id": 1, "name": "Ada", "active": true},
    {"id": 2, "name": "Grace", "active": false}
  ],
  "config": {
    "indent": 2,
    "theme": "dark",
    "nested": {"deep": {"value": null}}
  },
  "scores": [100, 200, 300]
}"""


def node_label(node: Node) -> Text:
    """One-line summary of a node for the node list."""
    label = Text(path_to_display_string(node.path), style="bold")
    projection = project(node)
    if projection.is_primitive_leaf:
        label.append("  ")
        label.append(display_value(projection.rows[0].value), style="cyan")
    else:
        label.append(f"  {{{len(node.rows)} keys}}", style="dim")
    if not projection.is_editable:
        label.stylize("dim")
    return label


class JsonNodeApp(App):
    """TUI app listing the nodes of a document with a node editing panel."""

    CSS = """
    Screen {
        layout: horizontal;
    }
    #nodes {
        width: 1fr;
        height: 1fr;
        border: solid $accent;
    }
    #node-modal {
        width: 1fr;
    }
    """

    TITLE = "JSON Nodes"
    ENABLE_COMMAND_PALETTE = False
    BINDINGS = [
        Binding("ctrl+s", "write", "Write file"),
        Binding("e", "edit", "Edit node"),
        Binding("escape", "close_node", "Close", show=False),
        Binding("q", "quit", "Quit"),
    ]

    def __init__(
        self,
        file_path: str = "",
        initial_content: str = "",
        read_only: bool = False,
        **kwargs,
    ) -> None:
        super().__init__(**kwargs)
        self.file_path = file_path
        self.read_only = read_only
        self.documents = DocumentStore(initial_content or SAMPLE_JSON)
        self.graph = GraphStore(self.documents)
        self.session = EditSession(self.documents, self.graph, read_only=read_only)
        self._dirty: bool = False

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        yield OptionList(id="nodes")
        yield NodeModal(self.session, id="node-modal")
        yield Footer()

    def on_mount(self) -> None:
        self._update_title()
        self._reload_nodes()
        self.query_one("#nodes").focus()

    def _update_title(self) -> None:
        ro = " [RO]" if self.read_only else ""
        modified = " [+]" if self._dirty else ""
        self.sub_title = (self.file_path or "[sample]") + modified + ro

    def _reload_nodes(self) -> None:
        option_list = self.query_one("#nodes", OptionList)
        option_list.clear_options()
        option_list.add_options([node_label(node) for node in self.graph.nodes])
        selected = self.graph.selected_node
        if selected is not None and selected in self.graph.nodes:
            option_list.highlighted = self.graph.nodes.index(selected)

    # -- Event handlers ----------------------------------------------------

    async def on_option_list_option_selected(
        self, event: OptionList.OptionSelected
    ) -> None:
        if not 0 <= event.option_index < len(self.graph.nodes):
            return
        self.session.cancel_edit()
        self.graph.set_selected_node(self.graph.nodes[event.option_index])
        await self.query_one("#node-modal", NodeModal).open()

    def on_node_modal_saved(self, event: NodeModal.Saved) -> None:
        self._dirty = True
        self._update_title()
        self._reload_nodes()
        if self.graph.selected_node is None:
            self.notify("Edited node is no longer addressable", severity="warning")
        else:
            self.notify("Node updated", severity="information")

    def on_node_modal_closed(self, event: NodeModal.Closed) -> None:
        self.query_one("#nodes").focus()

    # -- Actions -----------------------------------------------------------

    async def action_edit(self) -> None:
        modal = self.query_one("#node-modal", NodeModal)
        if not modal.has_class("visible"):
            return
        if not self.session.can_edit:
            self.notify("This node cannot be edited", severity="warning")
            return
        await modal.start_edit()

    def action_close_node(self) -> None:
        modal = self.query_one("#node-modal", NodeModal)
        if modal.has_class("visible"):
            modal.close()

    def action_write(self) -> None:
        if self.read_only:
            self.notify("Read-only mode", severity="warning")
            return
        if not self.file_path:
            self.notify("No file name — start with: jnode <file>", severity="warning")
            return
        try:
            path = Path(self.file_path)
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(self.documents.get_text(), encoding="utf-8")
        except OSError as exc:
            logger.error("write failed: %s", exc)
            self.notify(f"Save failed: {exc}", severity="error", timeout=6)
            return
        self._dirty = False
        self._update_title()
        self.notify(f"Saved: {self.file_path}", severity="information")


def main() -> None:
    parser = argparse.ArgumentParser(
        prog="jnode",
        description="Browse and edit the nodes of a JSON document",
    )
    parser.add_argument(
        "file",
        nargs="?",
        default="",
        help="JSON file to open",
    )
    parser.add_argument(
        "-R", "--read-only",
        action="store_true",
        default=False,
        help="open in read-only mode",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        default=False,
        help="send debug logs to the textual console",
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(name)s: %(message)s",
        handlers=[TextualHandler()],
    )

    file_path: str = args.file
    initial_content = ""
    if file_path:
        path = Path(file_path)
        try:
            if path.exists():
                initial_content = path.read_text(encoding="utf-8") or "{}"
            else:
                initial_content = "{}"
        except OSError as exc:
            print(f"jnode: {exc}", file=sys.stderr)
            sys.exit(1)

    app = JsonNodeApp(
        file_path=file_path,
        initial_content=initial_content,
        read_only=args.read_only,
    )
    app.run()


if __name__ == "__main__":
    main()
