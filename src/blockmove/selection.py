"""Cursor positions, visual selections and selection-shape detection."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum


@dataclass(frozen=True, order=True)
class Position:
    """1-based line and virtual column."""

    line: int
    col: int

    def shifted(self, *, lines: int = 0, cols: int = 0) -> Position:
        return Position(self.line + lines, self.col + cols)


class SelectionKind(str, Enum):
    CHARWISE = "char"
    LINEWISE = "line"
    BLOCKWISE = "block"


@dataclass(frozen=True)
class Selection:
    """Visual selection between a fixed ``anchor`` and the moving ``cursor``."""

    kind: SelectionKind
    anchor: Position
    cursor: Position

    @property
    def first_line(self) -> int:
        return min(self.anchor.line, self.cursor.line)

    @property
    def last_line(self) -> int:
        return max(self.anchor.line, self.cursor.line)

    @property
    def left_col(self) -> int:
        return min(self.anchor.col, self.cursor.col)

    @property
    def right_col(self) -> int:
        return max(self.anchor.col, self.cursor.col)

    @property
    def line_span(self) -> int:
        return self.last_line - self.first_line + 1

    @property
    def is_trailing_edge(self) -> bool:
        """True when the cursor rests on the right/bottom corner."""
        if self.kind is SelectionKind.BLOCKWISE:
            if self.cursor.col != self.anchor.col:
                return self.cursor.col > self.anchor.col
            return self.cursor.line >= self.anchor.line
        return (self.cursor.line, self.cursor.col) >= (self.anchor.line, self.anchor.col)

    def with_cursor(self, cursor: Position) -> Selection:
        return replace(self, cursor=cursor)

    def shifted(self, *, lines: int = 0, cols: int = 0) -> Selection:
        return Selection(
            kind=self.kind,
            anchor=self.anchor.shifted(lines=lines, cols=cols),
            cursor=self.cursor.shifted(lines=lines, cols=cols),
        )

    def exchanged(self) -> Selection:
        """Put the cursor on the opposite corner."""
        return Selection(kind=self.kind, anchor=self.cursor, cursor=self.anchor)


def block_from_corners(
    *,
    first_line: int,
    last_line: int,
    left_col: int,
    right_col: int,
    cursor_line: int,
    trailing: bool,
) -> Selection:
    """Build a blockwise selection with the cursor on the requested corner.

    ``cursor_line`` keeps the cursor on the row it occupied before; only the
    column side is chosen by ``trailing``.
    """
    anchor_line = first_line if cursor_line == last_line else last_line
    cursor_col, anchor_col = (right_col, left_col) if trailing else (left_col, right_col)
    return Selection(
        kind=SelectionKind.BLOCKWISE,
        anchor=Position(anchor_line, anchor_col),
        cursor=Position(cursor_line, cursor_col),
    )


@dataclass(frozen=True)
class Ready:
    """The selection already has the shape a horizontal block move needs."""

    selection: Selection


@dataclass(frozen=True)
class NeedsCoercion:
    """The selection must first be switched to ``target``."""

    source: SelectionKind
    target: SelectionKind


ShapeCheck = Ready | NeedsCoercion


def detect_shape(selection: Selection) -> ShapeCheck:
    """Decide whether ``selection`` can be moved horizontally as a block."""
    if selection.kind is SelectionKind.BLOCKWISE:
        return Ready(selection)
    if selection.kind is SelectionKind.CHARWISE and selection.line_span == 1:
        return Ready(selection)
    return NeedsCoercion(source=selection.kind, target=SelectionKind.BLOCKWISE)
