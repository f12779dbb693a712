"""Node panel: shows the selected node and hosts its edit form."""

from __future__ import annotations

from dataclasses import dataclass

from rich.syntax import Syntax
from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical
from textual.message import Message
from textual.widget import Widget
from textual.widgets import Button, Input, Label, Static

from jnode._project import container_placeholder
from jnode.session import EditSession, SaveResult


class NodeModal(Vertical):
    """Content view, JSON path view and in-place edit form for one node."""

    DEFAULT_CSS = """
    NodeModal {
        display: none;
        width: 70;
        height: auto;
        max-height: 80%;
        border: thick $accent;
        background: $surface;
        padding: 0 1;
    }
    NodeModal.visible {
        display: block;
    }
    NodeModal #node-header {
        height: 3;
    }
    NodeModal #node-content-title {
        width: 1fr;
        padding-top: 1;
    }
    NodeModal #node-form {
        height: auto;
    }
    NodeModal #node-error {
        color: $error;
    }
    NodeModal #node-actions {
        height: 3;
    }
    """

    # -- Messages ----------------------------------------------------------

    @dataclass
    class Closed(Message):
        pass

    @dataclass
    class Saved(Message):
        result: SaveResult
        content: str

    # -- Init --------------------------------------------------------------

    def __init__(
        self,
        session: EditSession,
        *,
        name: str | None = None,
        id: str | None = None,
        classes: str | None = None,
    ) -> None:
        super().__init__(name=name, id=id, classes=classes)
        self.session = session
        # input id -> property key; keys are arbitrary text, ids are not
        self._input_keys: dict[str, str] = {}

    def compose(self) -> ComposeResult:
        with Horizontal(id="node-header"):
            yield Static("[b]Content[/b]", id="node-content-title")
            yield Button("Edit", id="node-edit", variant="primary")
            yield Button("✕", id="node-close", variant="error")
        yield Static("", id="node-content")
        yield Vertical(id="node-form")
        yield Static("", id="node-error")
        with Horizontal(id="node-actions"):
            yield Button("Save", id="node-save", variant="success")
            yield Button("Cancel", id="node-cancel")
        yield Static("[b]JSON Path[/b]")
        yield Static("", id="node-path")

    # -- Rendering ---------------------------------------------------------

    def _form_widgets(self) -> list[Widget]:
        session = self.session
        projection = session.projection
        self._input_keys = {}
        if projection.is_primitive_leaf:
            row_type = projection.rows[0].type.value
            return [
                Label(f"Value [dim](enter a {row_type})[/dim]"),
                Input(value=session.draft_value, id="draft-value"),
            ]
        widgets: list[Widget] = []
        for idx, row in enumerate(projection.rows):
            if row.key is None:
                continue
            widgets.append(Label(row.key, markup=False))
            if row.type.is_container:
                widgets.append(Input(value=container_placeholder(row), disabled=True))
                continue
            input_id = f"draft-prop-{idx}"
            self._input_keys[input_id] = row.key
            widgets.append(
                Input(value=session.draft_rows.get(row.key, ""), id=input_id)
            )
        return widgets

    async def refresh_view(self) -> None:
        """Sync every child with the session's current state."""
        session = self.session
        editing = session.is_editing
        self.query_one("#node-content", Static).update(
            Syntax(session.display_text, "json", theme="monokai", word_wrap=True)
        )
        self.query_one("#node-path", Static).update(session.path_text)
        self.query_one("#node-content", Static).display = not editing
        self.query_one("#node-edit", Button).display = session.can_edit and not editing
        self.query_one("#node-actions").display = editing
        self.query_one("#node-error", Static).update(session.error or "")

        form = self.query_one("#node-form", Vertical)
        await form.remove_children()
        if editing:
            await form.mount_all(self._form_widgets())
            inputs = form.query(Input)
            for widget in inputs:
                if not widget.disabled:
                    widget.focus()
                    break

    async def open(self) -> None:
        self.add_class("visible")
        await self.refresh_view()

    def close(self) -> None:
        self.session.cancel_edit()
        self.remove_class("visible")
        self.post_message(self.Closed())

    # -- Actions -----------------------------------------------------------

    async def start_edit(self) -> None:
        if self.session.start_edit():
            await self.refresh_view()

    async def save(self) -> None:
        result = self.session.save_edit()
        await self.refresh_view()
        if result.written:
            self.post_message(self.Saved(result, self.session.documents.get_text()))

    async def cancel(self) -> None:
        self.session.cancel_edit()
        await self.refresh_view()

    # -- Event handlers ----------------------------------------------------

    async def on_button_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        button_id = event.button.id
        if button_id == "node-edit":
            await self.start_edit()
        elif button_id == "node-save":
            await self.save()
        elif button_id == "node-cancel":
            await self.cancel()
        elif button_id == "node-close":
            self.close()

    def on_input_changed(self, event: Input.Changed) -> None:
        input_id = event.input.id
        if input_id == "draft-value":
            self.session.update_draft_value(event.value)
        elif input_id in self._input_keys:
            self.session.update_draft_property(self._input_keys[input_id], event.value)

    async def on_input_submitted(self, event: Input.Submitted) -> None:
        event.stop()
        await self.save()
