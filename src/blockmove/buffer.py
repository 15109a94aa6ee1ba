"""Line-addressed text buffer with cursor, selection and undo history."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from . import columns
from .selection import Position, Selection
from .undo import BufferSnapshot, UndoEntry, UndoManager


class TextBuffer:
    """Ordered list of lines addressed 1..line_count()."""

    def __init__(
        self,
        name: str,
        lines: Iterable[str] | None = None,
        *,
        path: Path | None = None,
        modifiable: bool = True,
    ) -> None:
        self.name = name
        self.lines: list[str] = list(lines) if lines is not None else []
        if not self.lines:
            self.lines = [""]
        self.path = path
        self.modifiable = modifiable
        self.cursor = Position(1, 1)
        self.selection: Selection | None = None
        self.history = UndoManager()

    @classmethod
    def from_text(cls, name: str, text: str, **kwargs: object) -> TextBuffer:
        return cls(name, text.split("\n"), **kwargs)  # type: ignore[arg-type]

    @classmethod
    def from_file(cls, path: Path) -> TextBuffer:
        resolved = path.expanduser()
        text = resolved.read_text(encoding="utf-8") if resolved.exists() else ""
        if text.endswith("\n"):
            text = text[:-1]
        return cls.from_text(resolved.name, text, path=resolved)

    @property
    def text(self) -> str:
        return "\n".join(self.lines)

    def line_count(self) -> int:
        return len(self.lines)

    def get_line(self, line: int) -> str:
        if not 1 <= line <= len(self.lines):
            raise IndexError(f"line {line} out of range 1..{len(self.lines)}")
        return self.lines[line - 1]

    def set_line(self, line: int, text: str) -> None:
        self.get_line(line)
        self.lines[line - 1] = text

    def set_lines(self, first: int, last: int, new_lines: Iterable[str]) -> None:
        """Replace lines ``first..last``; ``last == first - 1`` inserts before ``first``."""
        if first < 1 or last < first - 1 or last > len(self.lines):
            raise IndexError(f"bad line range {first}..{last}")
        self.lines[first - 1 : last] = list(new_lines)
        if not self.lines:
            self.lines = [""]

    def save(self, path: Path | None = None) -> Path:
        target = path or self.path
        if target is None:
            raise ValueError(f"buffer {self.name} has no file")
        target.write_text(self.text + "\n", encoding="utf-8")
        self.path = target
        return target

    def clamp(
        self,
        position: Position,
        *,
        tabstop: int = columns.DEFAULT_TABSTOP,
        past_end: bool = False,
    ) -> Position:
        """Return the nearest valid position, snapped to a character's first cell.

        The column just past the last character is valid; anything further
        right is only kept when ``past_end`` is set.
        """
        line = max(1, min(position.line, len(self.lines)))
        text = self.lines[line - 1]
        col = max(1, position.col)
        if not past_end:
            col = min(col, columns.line_end_column(text, tabstop))
        return Position(line, columns.cell_start(text, col, tabstop))

    def cursor_index(self, tabstop: int = columns.DEFAULT_TABSTOP) -> int:
        text = self.lines[self.cursor.line - 1]
        return columns.char_index(text, self.cursor.col, tabstop)

    def snapshot(self) -> BufferSnapshot:
        return BufferSnapshot(
            lines=tuple(self.lines),
            cursor=self.cursor,
            selection=self.selection,
        )

    def restore(self, snapshot: BufferSnapshot) -> None:
        self.lines = list(snapshot.lines)
        self.cursor = snapshot.cursor
        self.selection = snapshot.selection

    def record(self, before: BufferSnapshot) -> None:
        """Push one undo entry covering everything since ``before``."""
        self.history.push(UndoEntry(before=before, after=self.snapshot()))

    def undo(self) -> bool:
        snapshot = self.history.undo()
        if snapshot is None:
            return False
        self.restore(snapshot)
        return True

    def redo(self) -> bool:
        snapshot = self.history.redo()
        if snapshot is None:
            return False
        self.restore(snapshot)
        return True
