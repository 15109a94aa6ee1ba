"""Linear undo/redo history of buffer snapshots."""

from __future__ import annotations

from dataclasses import dataclass

from .selection import Position, Selection


@dataclass(frozen=True)
class BufferSnapshot:
    lines: tuple[str, ...]
    cursor: Position
    selection: Selection | None = None


@dataclass(frozen=True)
class UndoEntry:
    before: BufferSnapshot
    after: BufferSnapshot


class UndoManager:
    def __init__(self, max_entries: int = 500) -> None:
        self._undo_stack: list[UndoEntry] = []
        self._redo_stack: list[UndoEntry] = []
        self._max_entries = max_entries

    @property
    def depth(self) -> int:
        return len(self._undo_stack)

    def clear(self) -> None:
        self._undo_stack.clear()
        self._redo_stack.clear()

    def push(self, entry: UndoEntry) -> None:
        self._undo_stack.append(entry)
        # Cap history
        if len(self._undo_stack) > self._max_entries:
            self._undo_stack.pop(0)
        # Any new edit invalidates redo history
        self._redo_stack.clear()

    def can_undo(self) -> bool:
        return bool(self._undo_stack)

    def can_redo(self) -> bool:
        return bool(self._redo_stack)

    def undo(self) -> BufferSnapshot | None:
        if not self._undo_stack:
            return None
        entry = self._undo_stack.pop()
        self._redo_stack.append(entry)
        return entry.before

    def redo(self) -> BufferSnapshot | None:
        if not self._redo_stack:
            return None
        entry = self._redo_stack.pop()
        self._undo_stack.append(entry)
        return entry.after
