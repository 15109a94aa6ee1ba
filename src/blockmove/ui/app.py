"""Textual TUI application for blockmove."""

from __future__ import annotations

from rich.panel import Panel
from rich.style import Style
from rich.text import Text
from textual.app import App, ComposeResult
from textual.events import Key, Resize
from textual.widgets import Input, Static

from .. import columns
from ..commands import register_builtin_commands
from ..core import Editor
from ..selection import SelectionKind
from .controller import UIController, UISnapshot

DEFAULT_MINIBUFFER_PLACEHOLDER = "M-x command"
SELECTION_STYLE = Style(reverse=True)
CURSOR_STYLE = Style(reverse=True, bold=True, color="bright_green")
NAVIGATION_KEYS = {"left", "right", "up", "down"}


def _key_to_sequence(key: str) -> str | None:
    parts = key.lower().split("+")
    mods: list[str] = []
    base = ""
    for part in parts:
        if part == "ctrl":
            mods.append("C")
        elif part == "alt":
            mods.append("M")
        elif part == "shift":
            mods.append("S")
        else:
            base = part
    if not base or not mods:
        return None
    return "-".join([*mods, base])


def selected_spans(snapshot: UISnapshot, line: int) -> tuple[int, int] | None:
    """Return the ``[start, end)`` character span selected on ``line``."""
    selection = snapshot.selection
    if selection is None or not selection.first_line <= line <= selection.last_line:
        return None

    text = snapshot.lines[line - 1]
    tabstop = snapshot.tabstop
    if selection.kind is SelectionKind.LINEWISE:
        return 0, len(text)
    if selection.kind is SelectionKind.BLOCKWISE:
        start = columns.char_index(text, selection.left_col, tabstop)
        end = columns.char_index(text, selection.right_col, tabstop) + 1
        return start, min(end, len(text))

    begin, finish = sorted((selection.anchor, selection.cursor))
    start = columns.char_index(text, begin.col, tabstop) if line == begin.line else 0
    end = columns.char_index(text, finish.col, tabstop) + 1 if line == finish.line else len(text)
    return start, min(end, len(text))


def render_lines(snapshot: UISnapshot) -> Text:
    rendered = Text(tab_size=snapshot.tabstop, no_wrap=True)
    for number, line_text in enumerate(snapshot.lines, start=1):
        if number > 1:
            rendered.append("\n")
        offset = len(rendered.plain)
        rendered.append(line_text)

        span = selected_spans(snapshot, number)
        if span is not None and span[0] < span[1]:
            rendered.stylize(SELECTION_STYLE, offset + span[0], offset + span[1])

        if number == snapshot.cursor.line:
            index = columns.char_index(line_text, snapshot.cursor.col, snapshot.tabstop)
            if index >= len(line_text):
                padding = snapshot.cursor.col - columns.line_end_column(line_text, snapshot.tabstop)
                rendered.append(" " * (max(0, padding) + 1))
                index = len(line_text) + max(0, padding)
            rendered.stylize(CURSOR_STYLE, offset + index, offset + index + 1)
    return rendered


class WorkspaceView(Static):
    can_focus = True


class BlockMoveTuiApp(App[None]):
    """Textual frontend for blockmove."""

    CSS = """
    Screen {
        layout: vertical;
    }

    #workspace {
        height: 1fr;
        padding: 0;
    }

    #status {
        height: 1;
        padding: 0 1;
        background: $panel;
        color: $text;
    }

    #minibuffer {
        height: 3;
        margin: 0 1 1 1;
    }
    """

    def __init__(self, editor: Editor | None = None) -> None:
        super().__init__()
        if editor is None:
            editor = Editor()
            register_builtin_commands(editor)
        self.editor = editor
        self.controller = UIController(self.editor)
        self._quit_requested = False

    @property
    def quit_requested(self) -> bool:
        return self._quit_requested

    def compose(self) -> ComposeResult:
        yield WorkspaceView(id="workspace")
        yield Static(id="status")
        yield Input(placeholder=DEFAULT_MINIBUFFER_PLACEHOLDER, id="minibuffer")

    def on_mount(self) -> None:
        self._hide_minibuffer()
        self.query_one("#workspace", WorkspaceView).focus()
        self._refresh_view()

    def on_resize(self, event: Resize) -> None:
        self.controller.set_window_height(event.size.height - 3)

    def on_input_submitted(self, event: Input.Submitted) -> None:
        if event.input.id != "minibuffer":
            return
        self.controller.handle_minibuffer_submit(event.value)
        self._hide_minibuffer()
        self._apply_ui_action()
        self._refresh_view()

    def on_key(self, event: Key) -> None:
        minibuffer = self.query_one("#minibuffer", Input)
        if minibuffer.display:
            if event.key in {"escape", "ctrl+g"}:
                self.controller.dispatch_key_chord("C-g")
                self._apply_ui_action()
                self._refresh_view()
                event.stop()
            return

        if event.key == "enter":
            self._dispatch("C-m", event)
            return

        if event.key == "backspace":
            self._dispatch("DEL", event)
            return

        if event.key in NAVIGATION_KEYS:
            self._dispatch(event.key, event)
            return

        sequence = _key_to_sequence(event.key)
        if sequence is not None:
            self._dispatch(sequence, event)
            return

        if event.character and event.character.isprintable():
            if self.controller.has_pending_keys():
                self.controller.dispatch_key_chord(event.character)
            else:
                self.controller.handle_text_input(event.character)
            self._apply_ui_action()
            self._refresh_view()
            event.stop()

    def _dispatch(self, chord: str, event: Key) -> None:
        self.controller.dispatch_key_chord(chord)
        self._apply_ui_action()
        self._refresh_view()
        event.stop()

    def _show_minibuffer(self, prompt: str | None = None) -> None:
        minibuffer = self.query_one("#minibuffer", Input)
        minibuffer.placeholder = prompt or DEFAULT_MINIBUFFER_PLACEHOLDER
        minibuffer.display = True
        minibuffer.value = ""
        minibuffer.focus()

    def _hide_minibuffer(self) -> None:
        minibuffer = self.query_one("#minibuffer", Input)
        minibuffer.placeholder = DEFAULT_MINIBUFFER_PLACEHOLDER
        minibuffer.value = ""
        minibuffer.display = False
        self.query_one("#workspace", WorkspaceView).focus()

    def _apply_ui_action(self) -> None:
        action = self.controller.pop_ui_action()
        if action is None:
            return
        if action.name == "open-minibuffer":
            self._show_minibuffer(action.prompt)
            return
        if action.name == "cancel-minibuffer":
            self._hide_minibuffer()
            return
        if action.name == "quit":
            self._quit_requested = True
            self.exit()

    def _refresh_view(self) -> None:
        snapshot = self.controller.snapshot()
        workspace = self.query_one("#workspace", Static)
        status = self.query_one("#status", Static)

        workspace.update(
            Panel(
                render_lines(snapshot),
                title=snapshot.buffer,
                border_style="bright_green" if snapshot.mode == "visual" else "white",
                padding=(0, 1),
            )
        )

        cursor = snapshot.cursor
        flags = "" if snapshot.modifiable else " [RO]"
        selection = ""
        if snapshot.selection is not None:
            selection = f" {snapshot.selection.kind.value}"
        status.update(
            Text(
                f"{snapshot.mode}{selection}{flags} line={cursor.line} col={cursor.col}"
                f" | {snapshot.status}"
            )
        )
