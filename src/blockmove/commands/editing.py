"""Built-in editing, motion, selection and state commands."""

from __future__ import annotations

from pathlib import Path

from .. import columns
from ..buffer import TextBuffer
from ..core import Editor
from ..selection import Position, Selection, SelectionKind


def parse_count(parts: tuple[object, ...], default: int = 1) -> int:
    if not parts:
        return default
    try:
        return int(str(parts[0]))
    except (TypeError, ValueError) as exc:
        raise ValueError("count must be an integer") from exc


def register_editing_commands(editor: Editor) -> None:
    """Register buffer, motion and selection commands."""

    def _writable(ed: Editor) -> TextBuffer:
        buffer = ed.buffer
        if not buffer.modifiable:
            raise ValueError(f"buffer is read-only: {buffer.name}")
        return buffer

    def _goto(ed: Editor, position: Position) -> None:
        buffer = ed.buffer
        buffer.cursor = buffer.clamp(position, tabstop=ed.move_config().tabstop)
        if buffer.selection is not None:
            buffer.selection = buffer.selection.with_cursor(buffer.cursor)

    def _insert_text(ed: Editor, text: str) -> None:
        buffer = _writable(ed)
        tabstop = ed.move_config().tabstop
        before = buffer.snapshot()
        line = buffer.cursor.line
        current = buffer.get_line(line)
        index = buffer.cursor_index(tabstop)
        head, tail = current[:index], current[index:]

        new_lines = (head + text + tail).split("\n")
        buffer.set_lines(line, line, new_lines)
        last = line + len(new_lines) - 1
        end_index = len(new_lines[-1]) - len(tail)
        buffer.selection = None
        buffer.cursor = Position(last, columns.virtual_column(new_lines[-1], end_index, tabstop))
        buffer.record(before)

    def _start_selection(ed: Editor, kind: SelectionKind) -> str:
        buffer = ed.buffer
        if buffer.selection is None:
            buffer.selection = Selection(kind=kind, anchor=buffer.cursor, cursor=buffer.cursor)
            return f"visual {kind.value}"
        if buffer.selection.kind is kind:
            buffer.selection = None
            return "visual off"
        buffer.selection = Selection(kind=kind, anchor=buffer.selection.anchor, cursor=buffer.cursor)
        return f"visual {kind.value}"

    def switch_to_buffer(ed: Editor, name: str) -> None:
        """Switch to buffer NAME, creating it if needed."""
        target = str(name).strip()
        if not target:
            raise ValueError("usage: switch-to-buffer <name>")
        ed.state.switch_to_buffer(target)

    def kill_buffer(ed: Editor, *parts: object) -> str:
        """Kill buffer NAME, or the current buffer when NAME is omitted."""
        target = " ".join(str(part) for part in parts).strip() or ed.state.current_buffer
        replacement = ed.state.kill_buffer(target)
        return f"killed {target} -> {replacement}"

    def find_file(ed: Editor, path: str) -> str:
        """Visit file PATH in a new buffer."""
        buffer = ed.state.load_file(Path(str(path)))
        return f"{buffer.name}: {buffer.line_count()} line(s)"

    def save_buffer(ed: Editor, *parts: object) -> str:
        """Write the current buffer to its file, or to PATH when given."""
        target = Path(str(parts[0])).expanduser() if parts else None
        written = ed.buffer.save(target)
        return f"wrote {written}"

    def insert(ed: Editor, *parts: object) -> None:
        """Insert text at point."""
        _insert_text(ed, " ".join(str(p) for p in parts))

    def newline(ed: Editor) -> None:
        """Split the line at point."""
        _insert_text(ed, "\n")

    def delete_backward_char(ed: Editor, *parts: object) -> None:
        """Delete COUNT chars before point, joining lines at line start."""
        count = max(0, parse_count(parts))
        buffer = _writable(ed)
        tabstop = ed.move_config().tabstop
        before = buffer.snapshot()
        changed = False

        for _ in range(count):
            line = buffer.cursor.line
            text = buffer.get_line(line)
            index = buffer.cursor_index(tabstop)
            if index > 0:
                buffer.set_line(line, text[: index - 1] + text[index:])
                buffer.cursor = Position(line, columns.virtual_column(text, index - 1, tabstop))
            elif line > 1:
                previous = buffer.get_line(line - 1)
                buffer.set_lines(line - 1, line, [previous + text])
                buffer.cursor = Position(line - 1, columns.line_end_column(previous, tabstop))
            else:
                break
            changed = True

        if changed:
            buffer.selection = None
            buffer.record(before)

    def forward_char(ed: Editor, *parts: object) -> None:
        """Move point forward by COUNT characters."""
        _step_chars(ed, max(0, parse_count(parts)))

    def backward_char(ed: Editor, *parts: object) -> None:
        """Move point backward by COUNT characters."""
        _step_chars(ed, -max(0, parse_count(parts)))

    def _step_chars(ed: Editor, steps: int) -> None:
        buffer = ed.buffer
        tabstop = ed.move_config().tabstop
        line = buffer.cursor.line
        index = buffer.cursor_index(tabstop)
        direction = 1 if steps > 0 else -1

        for _ in range(abs(steps)):
            text = buffer.get_line(line)
            if direction > 0 and index < len(text):
                index += 1
            elif direction > 0 and line < buffer.line_count():
                line, index = line + 1, 0
            elif direction < 0 and index > 0:
                index -= 1
            elif direction < 0 and line > 1:
                line -= 1
                index = len(buffer.get_line(line))
            else:
                break

        _goto(ed, Position(line, columns.virtual_column(buffer.get_line(line), index, tabstop)))

    def next_line(ed: Editor, *parts: object) -> None:
        """Move point down COUNT lines, keeping its column when possible."""
        cursor = ed.buffer.cursor
        _goto(ed, Position(cursor.line + max(0, parse_count(parts)), cursor.col))

    def previous_line(ed: Editor, *parts: object) -> None:
        """Move point up COUNT lines, keeping its column when possible."""
        cursor = ed.buffer.cursor
        _goto(ed, Position(cursor.line - max(0, parse_count(parts)), cursor.col))

    def move_beginning_of_line(ed: Editor) -> None:
        """Move point to the beginning of the line."""
        _goto(ed, Position(ed.buffer.cursor.line, 1))

    def move_end_of_line(ed: Editor) -> None:
        """Move point past the last character of the line."""
        buffer = ed.buffer
        text = buffer.get_line(buffer.cursor.line)
        _goto(ed, Position(buffer.cursor.line, columns.line_end_column(text, ed.move_config().tabstop)))

    def goto_line(ed: Editor, line: str, *col: object) -> None:
        """Move point to LINE and optional virtual COL."""
        try:
            target = Position(int(str(line)), int(str(col[0])) if col else 1)
        except ValueError as exc:
            raise ValueError("usage: goto-line <line> [col]") from exc
        _goto(ed, target)

    def visual_char(ed: Editor) -> str:
        """Start, switch to, or leave a characterwise selection."""
        return _start_selection(ed, SelectionKind.CHARWISE)

    def visual_line(ed: Editor) -> str:
        """Start, switch to, or leave a linewise selection."""
        return _start_selection(ed, SelectionKind.LINEWISE)

    def visual_block(ed: Editor) -> str:
        """Start, switch to, or leave a blockwise selection."""
        return _start_selection(ed, SelectionKind.BLOCKWISE)

    def visual_exchange(ed: Editor) -> None:
        """Move point to the other end of the selection."""
        buffer = ed.buffer
        if buffer.selection is None:
            return
        buffer.selection = buffer.selection.exchanged()
        buffer.cursor = buffer.selection.cursor

    def visual_exit(ed: Editor) -> None:
        """Drop the selection."""
        ed.buffer.selection = None

    def toggle_read_only(ed: Editor) -> str:
        """Toggle whether the current buffer may be modified."""
        buffer = ed.buffer
        buffer.modifiable = not buffer.modifiable
        return "read-only" if not buffer.modifiable else "writable"

    def undo(ed: Editor) -> str:
        """Undo the last edit in the current buffer."""
        return "undo" if ed.buffer.undo() else "no further undo information"

    def redo(ed: Editor) -> str:
        """Redo the last undone edit in the current buffer."""
        return "redo" if ed.buffer.redo() else "no further redo information"

    def show_buffer(ed: Editor) -> str:
        """Return the current buffer contents."""
        return ed.buffer.text

    def set_var(ed: Editor, key: str, *value: object) -> None:
        """Set variable KEY to joined VALUE parts."""
        variables = ed.state.variables
        previous = variables.get(key)
        variables[key] = " ".join(str(v) for v in value)
        try:
            ed.move_config()
        except ValueError:
            if previous is None:
                del variables[key]
            else:
                variables[key] = previous
            raise

    def get_var(ed: Editor, key: str) -> object:
        """Get variable KEY from editor state."""
        return ed.state.variables.get(key)

    editor.command("switch-to-buffer", switch_to_buffer, source_kind="builtin")
    editor.command("kill-buffer", kill_buffer, source_kind="builtin")
    editor.command("find-file", find_file, source_kind="builtin")
    editor.command("save-buffer", save_buffer, source_kind="builtin")

    editor.command("insert", insert, source_kind="builtin")
    editor.command("newline", newline, source_kind="builtin")
    editor.command("delete-backward-char", delete_backward_char, source_kind="builtin")
    editor.command("forward-char", forward_char, source_kind="builtin")
    editor.command("backward-char", backward_char, source_kind="builtin")
    editor.command("next-line", next_line, source_kind="builtin")
    editor.command("previous-line", previous_line, source_kind="builtin")
    editor.command("move-beginning-of-line", move_beginning_of_line, source_kind="builtin")
    editor.command("move-end-of-line", move_end_of_line, source_kind="builtin")
    editor.command("goto-line", goto_line, source_kind="builtin")

    editor.command("visual-char", visual_char, source_kind="builtin")
    editor.command("visual-line", visual_line, source_kind="builtin")
    editor.command("visual-block", visual_block, source_kind="builtin")
    editor.command("visual-exchange", visual_exchange, source_kind="builtin")
    editor.command("visual-exit", visual_exit, source_kind="builtin")

    editor.command("toggle-read-only", toggle_read_only, source_kind="builtin")
    editor.command("undo", undo, source_kind="builtin")
    editor.command("redo", redo, source_kind="builtin")
    editor.command("show-buffer", show_buffer, source_kind="builtin")
    editor.command("set", set_var, source_kind="builtin")
    editor.command("get", get_var, source_kind="builtin")
