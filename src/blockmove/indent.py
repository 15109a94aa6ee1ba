"""Heuristic reindent rule used after vertical moves."""

from __future__ import annotations

from collections.abc import Callable

from . import columns

OPENERS = (":", "{", "(", "[")
CLOSERS = ("}", ")", "]")

Reindenter = Callable[[list[str], int, int], None]


class BracketIndenter:
    """Indent each line from the nearest non-blank line above it.

    One ``shiftwidth`` deeper after a line ending in an opener, one shallower
    for a line that starts with a closer. Blank lines are left alone.
    """

    def __init__(self, *, shiftwidth: int = 4, tabstop: int = columns.DEFAULT_TABSTOP, expandtab: bool = True) -> None:
        self.shiftwidth = shiftwidth
        self.tabstop = tabstop
        self.expandtab = expandtab

    def __call__(self, lines: list[str], first: int, last: int) -> None:
        """Reindent ``lines[first - 1 : last]`` in place."""
        for line in range(first, last + 1):
            text = lines[line - 1]
            body = text.lstrip(" \t")
            if not body:
                continue
            width = self.indent_for(lines, line)
            lines[line - 1] = columns.indent_string(width, expandtab=self.expandtab, tabstop=self.tabstop) + body

    def indent_for(self, lines: list[str], line: int) -> int:
        body = lines[line - 1].lstrip(" \t")
        above = line - 1
        while above >= 1 and not lines[above - 1].strip():
            above -= 1
        if above < 1:
            return 0

        previous = lines[above - 1]
        width = columns.first_nonblank_column(previous, self.tabstop) - 1
        if previous.rstrip().endswith(OPENERS):
            width += self.shiftwidth
        if body.startswith(CLOSERS):
            width -= self.shiftwidth
        return max(0, width)
