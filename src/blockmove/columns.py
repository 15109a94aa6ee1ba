"""Virtual (display) column helpers shared by every mover.

Columns are 1-based. A tab advances to the next multiple of ``tabstop``;
other characters take their terminal cell width.
"""

from __future__ import annotations

from wcwidth import wcwidth

DEFAULT_TABSTOP = 8


def char_width(ch: str, vcol: int, tabstop: int = DEFAULT_TABSTOP) -> int:
    """Return the number of cells ``ch`` occupies when it starts at ``vcol``."""
    if ch == "\t":
        return tabstop - (vcol - 1) % tabstop
    if ch.isascii():
        return 1
    width = wcwidth(ch)
    return width if width > 0 else 1


def display_width(text: str, tabstop: int = DEFAULT_TABSTOP) -> int:
    vcol = 1
    for ch in text:
        vcol += char_width(ch, vcol, tabstop)
    return vcol - 1


def line_end_column(text: str, tabstop: int = DEFAULT_TABSTOP) -> int:
    """Column just past the last cell of ``text``."""
    return display_width(text, tabstop) + 1


def virtual_column(text: str, index: int, tabstop: int = DEFAULT_TABSTOP) -> int:
    """Return the starting column of ``text[index]``."""
    return display_width(text[: max(0, index)], tabstop) + 1


def char_index(text: str, vcol: int, tabstop: int = DEFAULT_TABSTOP) -> int:
    """Return the index of the character covering ``vcol``.

    Columns past the end of the line map to ``len(text)``.
    """
    start = 1
    for index, ch in enumerate(text):
        end = start + char_width(ch, start, tabstop)
        if vcol < end:
            return index
        start = end
    return len(text)


def cell_start(text: str, vcol: int, tabstop: int = DEFAULT_TABSTOP) -> int:
    """Snap ``vcol`` to the first column of the character covering it."""
    index = char_index(text, vcol, tabstop)
    if index >= len(text):
        return vcol
    return virtual_column(text, index, tabstop)


def cell_end(text: str, vcol: int, tabstop: int = DEFAULT_TABSTOP) -> int:
    """Return the last column of the character covering ``vcol``."""
    index = char_index(text, vcol, tabstop)
    if index >= len(text):
        return vcol
    start = virtual_column(text, index, tabstop)
    return start + char_width(text[index], start, tabstop) - 1


def glyph_bounds(text: str, vcol: int, tabstop: int = DEFAULT_TABSTOP) -> tuple[int, int] | None:
    """Return the first and last column of the non-tab character covering ``vcol``."""
    index = char_index(text, vcol, tabstop)
    if index >= len(text) or text[index] == "\t":
        return None
    start = virtual_column(text, index, tabstop)
    return start, start + char_width(text[index], start, tabstop) - 1


def snap_to_boundary(text: str, vcol: int, *, forward: bool, tabstop: int = DEFAULT_TABSTOP) -> int:
    """Move ``vcol`` off the inside of a wide character.

    Tabs may be split, so a column inside a tab is returned unchanged.
    """
    bounds = glyph_bounds(text, vcol, tabstop)
    if bounds is None or bounds[0] == vcol:
        return vcol
    return bounds[1] + 1 if forward else bounds[0]


def first_nonblank_column(text: str, tabstop: int = DEFAULT_TABSTOP) -> int:
    stripped = text.lstrip(" \t")
    return virtual_column(text, len(text) - len(stripped), tabstop)


def split_at_column(text: str, vcol: int, tabstop: int = DEFAULT_TABSTOP) -> tuple[str, str]:
    """Split ``text`` so the right part starts exactly at ``vcol``.

    A character straddling the cut is replaced by spaces; only tabs may
    straddle, so callers snap ``vcol`` with ``snap_to_boundary`` first. A line
    shorter than ``vcol - 1`` cells is padded so the cut still lands on ``vcol``.
    """
    pieces: list[str] = []
    start = 1
    for index, ch in enumerate(text):
        if start >= vcol:
            return "".join(pieces), text[index:]
        width = char_width(ch, start, tabstop)
        end = start + width
        if end > vcol:
            left_cells = vcol - start
            pieces.append(" " * left_cells)
            return "".join(pieces), " " * (width - left_cells) + text[index + 1 :]
        pieces.append(ch)
        start = end
    left = "".join(pieces)
    if start < vcol:
        left += " " * (vcol - start)
    return left, ""


def cut_columns(
    text: str,
    left: int,
    right: int,
    tabstop: int = DEFAULT_TABSTOP,
) -> tuple[str, str, str]:
    """Cut the cells ``[left, right]`` out of ``text``.

    Returns ``(before, block, after)``. ``before`` is padded to ``left - 1``
    cells only when the line reaches into the block; the block itself is
    never padded on the right.
    """
    if display_width(text, tabstop) < left:
        return text, "", ""
    before, rest = split_at_column(text, left, tabstop)
    rest_width = display_width(" " * (left - 1) + rest, tabstop) - (left - 1)
    if rest_width <= right - left + 1:
        return before, rest, ""
    # Re-expand tabs relative to the block start before cutting the right edge.
    block, after = _split_relative(rest, left, right + 1, tabstop)
    return before, block, after


def _split_relative(text: str, origin: int, vcol: int, tabstop: int) -> tuple[str, str]:
    prefix = " " * (origin - 1)
    left, right = split_at_column(prefix + text, vcol, tabstop)
    return left[len(prefix) :], right


def expand_tabs(text: str, start: int, tabstop: int = DEFAULT_TABSTOP) -> str:
    """Replace tabs with the spaces they occupy when ``text`` starts at ``start``."""
    if "\t" not in text:
        return text
    pieces: list[str] = []
    vcol = start
    for ch in text:
        width = char_width(ch, vcol, tabstop)
        pieces.append(" " * width if ch == "\t" else ch)
        vcol += width
    return "".join(pieces)


def indent_string(width: int, *, expandtab: bool, tabstop: int = DEFAULT_TABSTOP) -> str:
    if width <= 0:
        return ""
    if expandtab or tabstop <= 0:
        return " " * width
    return "\t" * (width // tabstop) + " " * (width % tabstop)
