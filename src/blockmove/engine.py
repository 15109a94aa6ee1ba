"""Move-and-reselect engine for lines, blocks and single characters."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from . import columns
from .buffer import TextBuffer
from .config import MoveConfig
from .indent import BracketIndenter, Reindenter
from .selection import (
    NeedsCoercion,
    Position,
    Selection,
    SelectionKind,
    block_from_corners,
    detect_shape,
)

logger = logging.getLogger(__name__)

COERCED_MESSAGE = "switched to block selection; repeat to move"


class MoveOutcome(str, Enum):
    MOVED = "moved"
    NOOP = "noop"
    COERCED = "coerced"


@dataclass(frozen=True)
class MoveResult:
    outcome: MoveOutcome
    distance: int = 0
    message: str | None = None

    @property
    def moved(self) -> bool:
        return self.outcome is MoveOutcome.MOVED


NOOP = MoveResult(MoveOutcome.NOOP)


class MoveEngine:
    """Relocate text in a ``TextBuffer`` and restore its cursor/selection.

    Every operation either performs exactly one undoable edit or leaves the
    buffer, cursor, selection and undo history untouched.
    """

    def __init__(self, config: MoveConfig | None = None, reindent: Reindenter | None = None) -> None:
        self.config = config or MoveConfig()
        self.reindent = reindent or BracketIndenter(
            shiftwidth=self.config.shiftwidth,
            tabstop=self.config.tabstop,
            expandtab=self.config.expandtab,
        )

    def move_lines_vertically(self, buffer: TextBuffer, distance: int) -> MoveResult:
        """Move the cursor line by ``distance`` lines, keeping the cursor on its token."""
        if not buffer.modifiable:
            logger.debug("move-lines: buffer %s is read-only", buffer.name)
            return NOOP

        tabstop = self.config.tabstop
        line = buffer.cursor.line
        offset = buffer.cursor.col - columns.first_nonblank_column(buffer.get_line(line), tabstop)

        before = buffer.snapshot()
        new_line = self._relocate(buffer, line, line, distance)
        if new_line is None:
            return NOOP

        indent = columns.first_nonblank_column(buffer.get_line(new_line), tabstop)
        buffer.selection = None
        buffer.cursor = buffer.clamp(Position(new_line, max(1, offset + indent)), tabstop=tabstop)
        buffer.record(before)
        return MoveResult(MoveOutcome.MOVED, distance=new_line - line)

    def move_block_vertically(self, buffer: TextBuffer, distance: int) -> MoveResult:
        """Move the lines spanned by the selection and reselect them."""
        selection = buffer.selection
        if selection is None:
            return self.move_lines_vertically(buffer, distance)
        if not buffer.modifiable:
            logger.debug("move-block: buffer %s is read-only", buffer.name)
            return NOOP

        tabstop = self.config.tabstop
        indents = {
            line: columns.first_nonblank_column(buffer.get_line(line), tabstop)
            for line in (selection.anchor.line, selection.cursor.line)
        }
        before = buffer.snapshot()
        new_first = self._relocate(buffer, selection.first_line, selection.last_line, distance)
        if new_first is None:
            return NOOP

        delta = new_first - selection.first_line
        if selection.kind is SelectionKind.BLOCKWISE:
            # Block corners keep their columns; a column past a line end is valid.
            moved = selection.shifted(lines=delta)
        else:
            moved = Selection(
                kind=selection.kind,
                anchor=self._rebase(buffer, selection.anchor, delta, indents[selection.anchor.line]),
                cursor=self._rebase(buffer, selection.cursor, delta, indents[selection.cursor.line]),
            )
        buffer.selection = moved
        buffer.cursor = moved.cursor
        buffer.record(before)
        return MoveResult(MoveOutcome.MOVED, distance=delta)

    def move_block_horizontally(self, buffer: TextBuffer, distance: int) -> MoveResult:
        """Shift the selected rectangle ``distance`` columns left (<0) or right (>0)."""
        selection = buffer.selection
        if selection is None or distance == 0:
            return NOOP
        if not buffer.modifiable:
            logger.debug("move-block: buffer %s is read-only", buffer.name)
            return NOOP

        shape = detect_shape(selection)
        if isinstance(shape, NeedsCoercion):
            coerced = self._coerce_to_block(buffer, selection)
            buffer.selection = coerced
            buffer.cursor = coerced.cursor
            logger.debug("move-block: %s selection coerced to block", shape.source.value)
            return MoveResult(MoveOutcome.COERCED, message=COERCED_MESSAGE)

        tabstop = self.config.tabstop
        texts = [buffer.get_line(n) for n in range(selection.first_line, selection.last_line + 1)]
        left, right = self._block_columns(buffer, selection, texts)

        if distance < 0:
            magnitude = min(-distance, left - 1)
        else:
            magnitude = distance
            if not self.config.allow_past_end_of_line:
                shortest = min(columns.display_width(text, tabstop) for text in texts)
                magnitude = min(magnitude, shortest - right)
        if magnitude <= 0:
            logger.debug("move-block: clamped to zero columns")
            return NOOP
        if all(columns.display_width(text, tabstop) < left for text in texts):
            logger.debug("move-block: no content at column %d", left)
            return NOOP

        cuts = [self._cut_block(text, left, right) for text in texts]
        remainders = [cut[0] for cut in cuts if cut is not None]
        if distance > 0:
            limit = None if self.config.allow_past_end_of_line else left + magnitude
            shift = self._landing_column(remainders, left + magnitude, forward=True, limit=limit) - left
        else:
            shift = self._landing_column(remainders, left - magnitude, forward=False) - left
        if shift == 0 or (shift > 0) != (distance > 0):
            logger.debug("move-block: no cell boundary to land on")
            return NOOP

        before = buffer.snapshot()
        for line, cut in enumerate(cuts, start=selection.first_line):
            if cut is not None:
                buffer.set_line(line, self._place_block(cut, left, right, shift))

        # Both branches keep the cursor on the same corner, so is_trailing_edge is unchanged.
        if selection.kind is SelectionKind.BLOCKWISE:
            moved = block_from_corners(
                first_line=selection.first_line,
                last_line=selection.last_line,
                left_col=left + shift,
                right_col=right + shift,
                cursor_line=selection.cursor.line,
                trailing=selection.is_trailing_edge,
            )
        else:
            moved = selection.shifted(cols=shift)

        buffer.selection = moved
        buffer.cursor = moved.cursor
        buffer.record(before)
        return MoveResult(MoveOutcome.MOVED, distance=shift)

    def move_char_horizontally(self, buffer: TextBuffer, distance: int) -> MoveResult:
        """Move the character under the cursor ``distance`` columns."""
        if not buffer.modifiable:
            logger.debug("move-char: buffer %s is read-only", buffer.name)
            return NOOP

        tabstop = self.config.tabstop
        line = buffer.cursor.line
        text = buffer.get_line(line)
        index = columns.char_index(text, buffer.cursor.col, tabstop)
        if index >= len(text):
            return NOOP

        current = columns.virtual_column(text, index, tabstop)
        target = current + distance
        if not self.config.allow_past_end_of_line:
            target = min(target, columns.line_end_column(text, tabstop) - 1)
        target = max(1, target)
        rest = text[:index] + text[index + 1 :]
        # Land beside a wide character rather than inside it, continuing in the move direction.
        target = columns.snap_to_boundary(rest, target, forward=target > current, tabstop=tabstop)
        if target == current:
            return NOOP

        before = buffer.snapshot()
        head, tail = columns.split_at_column(rest, target, tabstop)
        buffer.set_line(line, head + text[index] + tail)
        buffer.selection = None
        buffer.cursor = Position(line, target)
        buffer.record(before)
        return MoveResult(MoveOutcome.MOVED, distance=target - current)

    def _relocate(self, buffer: TextBuffer, first: int, last: int, distance: int) -> int | None:
        """Splice lines ``first..last`` to their clamped target; return the new first line."""
        if distance <= 0:
            after = max(1, first + distance) - 1
        else:
            after = min(buffer.line_count(), last + distance)
        if first - 1 <= after <= last:
            logger.debug("move: lines %d..%d already at boundary", first, last)
            return None

        block = buffer.lines[first - 1 : last]
        buffer.set_lines(first, last, [])
        if after > last:
            after -= len(block)
        buffer.set_lines(after + 1, after, block)

        new_first = after + 1
        if self.config.auto_indent:
            self.reindent(buffer.lines, new_first, new_first + len(block) - 1)
        return new_first

    def _block_columns(self, buffer: TextBuffer, selection: Selection, texts: list[str]) -> tuple[int, int]:
        """Columns spanned by the selection, widened so no selected line splits a wide character."""
        tabstop = self.config.tabstop
        marks = (selection.anchor, selection.cursor)
        left = min(
            columns.cell_start(buffer.get_line(mark.line), mark.col, tabstop) for mark in marks
        )
        right = max(columns.cell_end(buffer.get_line(mark.line), mark.col, tabstop) for mark in marks)
        while True:
            widened_left, widened_right = left, right
            for text in texts:
                bounds = columns.glyph_bounds(text, left, tabstop)
                if bounds is not None:
                    widened_left = min(widened_left, bounds[0])
                bounds = columns.glyph_bounds(text, right, tabstop)
                if bounds is not None:
                    widened_right = max(widened_right, bounds[1])
            if (widened_left, widened_right) == (left, right):
                return left, right
            left, right = widened_left, widened_right

    def _cut_block(self, text: str, left: int, right: int) -> tuple[str, str] | None:
        """Split ``text`` into the line without the block and the block itself."""
        tabstop = self.config.tabstop
        if columns.display_width(text, tabstop) < left:
            return None
        before, block, after = columns.cut_columns(text, left, right, tabstop)
        return before + after, columns.expand_tabs(block, left, tabstop)

    def _landing_column(
        self,
        remainders: list[str],
        column: int,
        *,
        forward: bool,
        limit: int | None = None,
    ) -> int:
        """Nearest column from ``column`` that is a cell boundary on every remaining line."""
        tabstop = self.config.tabstop
        landing = column
        while True:
            snapped = [
                columns.snap_to_boundary(text, landing, forward=forward, tabstop=tabstop)
                for text in remainders
            ]
            candidate = max(snapped, default=landing) if forward else min(snapped, default=landing)
            if candidate == landing:
                break
            landing = candidate
        if limit is not None and landing > limit:
            return self._landing_column(remainders, column, forward=False)
        return landing

    def _place_block(self, cut: tuple[str, str], left: int, right: int, shift: int) -> str:
        tabstop = self.config.tabstop
        remainder, block = cut
        head, tail = columns.split_at_column(remainder, left + shift, tabstop)
        if tail:
            block = block.ljust(len(block) + right - left + 1 - columns.display_width(block, tabstop))
        return head + block + tail

    def _rebase(self, buffer: TextBuffer, mark: Position, delta: int, old_indent: int) -> Position:
        """Move ``mark`` by ``delta`` lines, keeping its offset from the line's indent."""
        tabstop = self.config.tabstop
        line = mark.line + delta
        indent = columns.first_nonblank_column(buffer.get_line(line), tabstop)
        return buffer.clamp(Position(line, max(1, mark.col - old_indent + indent)), tabstop=tabstop)

    def _coerce_to_block(self, buffer: TextBuffer, selection: Selection) -> Selection:
        if selection.kind is SelectionKind.LINEWISE:
            tabstop = self.config.tabstop
            width = max(
                columns.display_width(buffer.get_line(n), tabstop)
                for n in range(selection.first_line, selection.last_line + 1)
            )
            return block_from_corners(
                first_line=selection.first_line,
                last_line=selection.last_line,
                left_col=1,
                right_col=max(1, width),
                cursor_line=selection.cursor.line,
                trailing=selection.cursor.line >= selection.anchor.line,
            )
        return Selection(SelectionKind.BLOCKWISE, selection.anchor, selection.cursor)
