import pytest

from blockmove.buffer import TextBuffer
from blockmove.config import MoveConfig
from blockmove.engine import COERCED_MESSAGE, MoveEngine, MoveOutcome
from blockmove.selection import Position, Selection, SelectionKind


def _buffer(lines: list[str], cursor: tuple[int, int] = (1, 1)) -> TextBuffer:
    buffer = TextBuffer("test", lines)
    buffer.cursor = Position(*cursor)
    return buffer


def _select(buffer: TextBuffer, kind: SelectionKind, anchor: tuple[int, int], cursor: tuple[int, int]) -> None:
    buffer.selection = Selection(kind=kind, anchor=Position(*anchor), cursor=Position(*cursor))
    buffer.cursor = buffer.selection.cursor


def _engine(**overrides: object) -> MoveEngine:
    return MoveEngine(MoveConfig(**overrides))  # type: ignore[arg-type]


def test_move_line_down_by_one() -> None:
    buffer = _buffer(["a", "b", "c"])

    result = _engine().move_lines_vertically(buffer, 1)

    assert result.outcome is MoveOutcome.MOVED
    assert buffer.lines == ["b", "a", "c"]
    assert buffer.cursor.line == 2
    assert buffer.history.depth == 1


def test_move_line_at_boundary_is_noop() -> None:
    top = _buffer(["a", "b", "c"])
    assert _engine().move_lines_vertically(top, -1).outcome is MoveOutcome.NOOP
    assert top.lines == ["a", "b", "c"]
    assert top.history.depth == 0

    bottom = _buffer(["a", "b", "c"], cursor=(3, 1))
    assert _engine().move_lines_vertically(bottom, 4).outcome is MoveOutcome.NOOP
    assert bottom.lines == ["a", "b", "c"]
    assert bottom.cursor == Position(3, 1)


def test_move_line_clamps_to_buffer_edges() -> None:
    down = _buffer(["a", "b", "c", "d"])
    result = _engine().move_lines_vertically(down, 10)
    assert down.lines == ["b", "c", "d", "a"]
    assert down.cursor.line == 4
    assert result.distance == 3

    up = _buffer(["a", "b", "c", "d"], cursor=(4, 1))
    _engine().move_lines_vertically(up, -10)
    assert up.lines == ["d", "a", "b", "c"]
    assert up.cursor.line == 1


@pytest.mark.parametrize("distance", [-7, -2, -1, 0, 1, 2, 9])
@pytest.mark.parametrize("first,last", [(1, 1), (2, 3), (4, 5), (1, 5)])
def test_vertical_moves_conserve_lines_and_stay_in_bounds(distance: int, first: int, last: int) -> None:
    lines = ["one", "two", "three", "four", "five"]
    buffer = _buffer(list(lines))
    _select(buffer, SelectionKind.LINEWISE, (first, 1), (last, 1))

    _engine(auto_indent=False).move_block_vertically(buffer, distance)

    assert sorted(buffer.lines) == sorted(lines)
    assert buffer.line_count() == len(lines)
    selection = buffer.selection
    assert selection is not None
    assert 1 <= selection.first_line <= selection.last_line <= len(lines)
    moved = buffer.lines[selection.first_line - 1 : selection.last_line]
    assert moved == lines[first - 1 : last]


def test_move_block_down_and_up_reselects() -> None:
    buffer = _buffer(["1", "2", "3", "4", "5"])
    _select(buffer, SelectionKind.LINEWISE, (2, 1), (3, 1))

    _engine().move_block_vertically(buffer, 1)
    assert buffer.lines == ["1", "4", "2", "3", "5"]
    assert buffer.selection is not None
    assert (buffer.selection.first_line, buffer.selection.last_line) == (3, 4)
    assert buffer.cursor == Position(4, 1)

    _engine().move_block_vertically(buffer, -1)
    assert buffer.lines == ["1", "2", "3", "4", "5"]
    assert (buffer.selection.first_line, buffer.selection.last_line) == (2, 3)


def test_move_block_without_selection_moves_cursor_line() -> None:
    buffer = _buffer(["a", "b"])
    _engine().move_block_vertically(buffer, 1)
    assert buffer.lines == ["b", "a"]


def test_move_line_keeps_cursor_on_token_after_reindent() -> None:
    buffer = _buffer(["def f():", "    return 1", "x = 2"], cursor=(3, 3))

    _engine().move_lines_vertically(buffer, -1)

    assert buffer.lines == ["def f():", "    x = 2", "    return 1"]
    assert buffer.cursor == Position(2, 7)


def test_reindent_disabled_is_pure_reorder() -> None:
    buffer = _buffer(["def f():", "    return 1", "x = 2"], cursor=(3, 3))

    _engine(auto_indent=False).move_lines_vertically(buffer, -1)

    assert buffer.lines == ["def f():", "x = 2", "    return 1"]
    assert buffer.cursor == Position(2, 3)


def test_reindent_only_touches_moved_lines() -> None:
    lines = ["if a:", "  odd", "b = 1", "  c = 2"]
    buffer = _buffer(list(lines))
    _select(buffer, SelectionKind.LINEWISE, (3, 1), (3, 1))

    _engine().move_block_vertically(buffer, -1)

    assert buffer.lines[0] == "if a:"
    assert buffer.lines[1] == "    b = 1"
    assert buffer.lines[2] == "  odd"
    assert buffer.lines[3] == "  c = 2"


def test_read_only_buffer_is_inert() -> None:
    buffer = _buffer(["abc", "def"], cursor=(1, 2))
    buffer.modifiable = False
    engine = _engine()

    assert engine.move_lines_vertically(buffer, 1).outcome is MoveOutcome.NOOP
    assert engine.move_char_horizontally(buffer, 1).outcome is MoveOutcome.NOOP

    _select(buffer, SelectionKind.LINEWISE, (1, 1), (2, 1))
    selection = buffer.selection
    assert engine.move_block_vertically(buffer, 1).outcome is MoveOutcome.NOOP
    assert engine.move_block_horizontally(buffer, 1).outcome is MoveOutcome.NOOP

    assert buffer.lines == ["abc", "def"]
    assert buffer.selection == selection
    assert buffer.history.depth == 0


def test_block_right_clamped_by_shortest_line_is_noop() -> None:
    buffer = _buffer(["abc", "de"])
    _select(buffer, SelectionKind.BLOCKWISE, (1, 1), (2, 2))

    result = _engine(allow_past_end_of_line=False).move_block_horizontally(buffer, 5)

    assert result.outcome is MoveOutcome.NOOP
    assert buffer.lines == ["abc", "de"]
    assert buffer.history.depth == 0


def test_block_right_keeps_trailing_cursor_corner() -> None:
    buffer = _buffer(["abcd", "efgh"])
    _select(buffer, SelectionKind.BLOCKWISE, (1, 1), (2, 2))
    assert buffer.selection is not None and buffer.selection.is_trailing_edge

    result = _engine().move_block_horizontally(buffer, 1)

    assert result.distance == 1
    assert buffer.lines == ["cabd", "gefh"]
    assert buffer.selection == Selection(SelectionKind.BLOCKWISE, Position(1, 2), Position(2, 3))
    assert buffer.selection.is_trailing_edge
    assert buffer.cursor == Position(2, 3)


def test_block_left_keeps_leading_cursor_corner() -> None:
    buffer = _buffer(["abcd", "efgh"])
    _select(buffer, SelectionKind.BLOCKWISE, (2, 3), (1, 2))
    assert buffer.selection is not None and not buffer.selection.is_trailing_edge

    _engine().move_block_horizontally(buffer, -1)

    assert buffer.lines == ["bcad", "fgeh"]
    assert buffer.selection == Selection(SelectionKind.BLOCKWISE, Position(2, 2), Position(1, 1))
    assert not buffer.selection.is_trailing_edge


def test_block_left_clamps_at_first_column() -> None:
    buffer = _buffer(["abcd"])
    _select(buffer, SelectionKind.BLOCKWISE, (1, 3), (1, 3))

    result = _engine().move_block_horizontally(buffer, -10)
    assert result.distance == -2
    assert buffer.lines == ["cabd"]

    assert _engine().move_block_horizontally(buffer, -1).outcome is MoveOutcome.NOOP
    assert buffer.history.depth == 1


def test_block_right_past_end_pads_with_spaces() -> None:
    buffer = _buffer(["ab", "cd"])
    _select(buffer, SelectionKind.BLOCKWISE, (1, 2), (2, 2))

    _engine().move_block_horizontally(buffer, 3)

    assert buffer.lines == ["a   b", "c   d"]
    assert buffer.selection is not None
    assert (buffer.selection.left_col, buffer.selection.right_col) == (5, 5)


def test_block_skips_lines_ending_before_block() -> None:
    buffer = _buffer(["abcdef", "ab"])
    _select(buffer, SelectionKind.BLOCKWISE, (1, 3), (2, 4))

    _engine().move_block_horizontally(buffer, 1)

    assert buffer.lines == ["abecdf", "ab"]


def test_block_pads_partial_segment_when_text_follows() -> None:
    buffer = _buffer(["abcdef", "abc"])
    _select(buffer, SelectionKind.BLOCKWISE, (1, 3), (2, 4))

    _engine().move_block_horizontally(buffer, -1)

    assert buffer.lines == ["acdbef", "ac b"]


def test_block_with_no_content_is_noop() -> None:
    buffer = _buffer(["ab", "cd"])
    _select(buffer, SelectionKind.BLOCKWISE, (1, 5), (2, 6))

    assert _engine().move_block_horizontally(buffer, -1).outcome is MoveOutcome.NOOP
    assert buffer.lines == ["ab", "cd"]


def test_linewise_selection_is_coerced_before_moving() -> None:
    buffer = _buffer(["ab", "cdef"])
    _select(buffer, SelectionKind.LINEWISE, (1, 1), (2, 1))
    engine = _engine()

    result = engine.move_block_horizontally(buffer, 1)

    assert result.outcome is MoveOutcome.COERCED
    assert result.message == COERCED_MESSAGE
    assert buffer.lines == ["ab", "cdef"]
    assert buffer.selection == Selection(SelectionKind.BLOCKWISE, Position(1, 1), Position(2, 4))
    assert buffer.history.depth == 0

    assert engine.move_block_horizontally(buffer, 1).outcome is MoveOutcome.MOVED
    assert buffer.lines == [" ab", " cdef"]


def test_multiline_charwise_selection_is_coerced() -> None:
    buffer = _buffer(["abc", "def"])
    _select(buffer, SelectionKind.CHARWISE, (1, 2), (2, 3))

    result = _engine().move_block_horizontally(buffer, 1)

    assert result.outcome is MoveOutcome.COERCED
    assert buffer.selection == Selection(SelectionKind.BLOCKWISE, Position(1, 2), Position(2, 3))


def test_single_line_charwise_selection_moves_directly() -> None:
    buffer = _buffer(["hello world"])
    _select(buffer, SelectionKind.CHARWISE, (1, 1), (1, 5))

    _engine().move_block_horizontally(buffer, 1)

    assert buffer.lines == [" helloworld"]
    assert buffer.selection == Selection(SelectionKind.CHARWISE, Position(1, 2), Position(1, 6))


def test_horizontal_block_without_selection_is_noop() -> None:
    buffer = _buffer(["abc"])
    assert _engine().move_block_horizontally(buffer, 1).outcome is MoveOutcome.NOOP


def test_move_char_clamps_before_line_end() -> None:
    buffer = _buffer(["hello"])

    result = _engine(allow_past_end_of_line=False).move_char_horizontally(buffer, 10)

    assert result.outcome is MoveOutcome.MOVED
    assert buffer.lines == ["elloh"]
    assert buffer.cursor == Position(1, 5)


def test_move_char_past_end_pads_line() -> None:
    buffer = _buffer(["hello"])

    _engine().move_char_horizontally(buffer, 10)

    assert buffer.lines == ["ello      h"]
    assert buffer.cursor == Position(1, 11)


def test_move_char_left_and_lower_bound() -> None:
    buffer = _buffer(["abc"], cursor=(1, 3))
    _engine().move_char_horizontally(buffer, -1)
    assert buffer.lines == ["acb"]
    assert buffer.cursor == Position(1, 2)

    _engine().move_char_horizontally(buffer, -5)
    assert buffer.lines == ["cab"]
    assert buffer.cursor == Position(1, 1)

    assert _engine().move_char_horizontally(buffer, -1).outcome is MoveOutcome.NOOP


@pytest.mark.parametrize("allow_past", [True, False])
def test_zero_distance_char_move_records_nothing(allow_past: bool) -> None:
    buffer = _buffer(["hello"], cursor=(1, 3))

    result = _engine(allow_past_end_of_line=allow_past).move_char_horizontally(buffer, 0)

    assert result.outcome is MoveOutcome.NOOP
    assert buffer.lines == ["hello"]
    assert buffer.history.depth == 0


def test_move_char_on_empty_line_is_noop() -> None:
    buffer = _buffer([""])
    assert _engine().move_char_horizontally(buffer, 1).outcome is MoveOutcome.NOOP


def test_each_move_is_a_single_undo_step() -> None:
    buffer = _buffer(["a", "b", "c"])
    _engine().move_lines_vertically(buffer, 2)
    assert buffer.lines == ["b", "c", "a"]

    assert buffer.undo()
    assert buffer.lines == ["a", "b", "c"]
    assert buffer.cursor == Position(1, 1)
    assert buffer.redo()
    assert buffer.lines == ["b", "c", "a"]


def test_move_char_steps_over_wide_character() -> None:
    buffer = _buffer(["a中b"])

    result = _engine().move_char_horizontally(buffer, 1)

    assert buffer.lines == ["中ab"]
    assert buffer.cursor == Position(1, 3)
    assert result.distance == 2

    _engine().move_char_horizontally(buffer, -1)
    assert buffer.lines == ["a中b"]
    assert buffer.cursor == Position(1, 1)


def test_move_wide_character() -> None:
    buffer = _buffer(["中ab"])

    _engine().move_char_horizontally(buffer, 1)

    assert buffer.lines == ["a中b"]
    assert buffer.cursor == Position(1, 2)


def test_block_right_lands_after_wide_character() -> None:
    buffer = _buffer(["ab中"])
    _select(buffer, SelectionKind.BLOCKWISE, (1, 1), (1, 1))

    result = _engine().move_block_horizontally(buffer, 2)

    assert buffer.lines == ["b中a"]
    assert result.distance == 3
    assert buffer.selection == Selection(SelectionKind.BLOCKWISE, Position(1, 4), Position(1, 4))


def test_block_landing_is_a_boundary_on_every_line() -> None:
    buffer = _buffer(["ab中c", "a中bc"])
    _select(buffer, SelectionKind.BLOCKWISE, (1, 1), (2, 1))

    result = _engine().move_block_horizontally(buffer, 2)

    assert buffer.lines == ["b中ac", "中bac"]
    assert result.distance == 3


def test_block_right_without_past_end_backs_off_wide_character() -> None:
    buffer = _buffer(["ab中"])
    _select(buffer, SelectionKind.BLOCKWISE, (1, 1), (1, 1))

    result = _engine(allow_past_end_of_line=False).move_block_horizontally(buffer, 2)

    assert buffer.lines == ["ba中"]
    assert result.distance == 1


def test_block_widens_over_wide_character_on_inner_line() -> None:
    buffer = _buffer(["abc", "中x", "def"])
    _select(buffer, SelectionKind.BLOCKWISE, (1, 2), (3, 2))

    _engine().move_block_horizontally(buffer, 1)

    assert buffer.lines == ["cab", "x中", "fde"]
    assert buffer.selection == Selection(SelectionKind.BLOCKWISE, Position(1, 2), Position(3, 3))


def test_block_expands_tabs_it_carries() -> None:
    buffer = _buffer(["\tab"])
    _select(buffer, SelectionKind.BLOCKWISE, (1, 1), (1, 5))

    _engine(tabstop=4).move_block_horizontally(buffer, 1)

    assert buffer.lines == ["b    a"]
    assert buffer.selection == Selection(SelectionKind.BLOCKWISE, Position(1, 2), Position(1, 6))


def test_block_landing_inside_tab_splits_the_tab() -> None:
    buffer = _buffer(["x\ty"])
    _select(buffer, SelectionKind.BLOCKWISE, (1, 5), (1, 5))

    _engine(tabstop=4).move_block_horizontally(buffer, -1)

    assert buffer.lines == ["x  y "]
    assert buffer.cursor == Position(1, 4)


def test_single_column_block_keeps_leading_corner() -> None:
    buffer = _buffer(["ab", "cd"])
    _select(buffer, SelectionKind.BLOCKWISE, (2, 1), (1, 1))

    _engine().move_block_horizontally(buffer, 1)

    assert buffer.lines == ["ba", "dc"]
    assert buffer.selection == Selection(SelectionKind.BLOCKWISE, Position(2, 2), Position(1, 2))
    assert not buffer.selection.is_trailing_edge


def test_vertical_block_move_rebases_marks_after_reindent() -> None:
    buffer = _buffer(["x", "        longword"])
    _select(buffer, SelectionKind.CHARWISE, (2, 9), (2, 16))

    _engine().move_block_vertically(buffer, -1)

    assert buffer.lines == ["longword", "x"]
    assert buffer.selection == Selection(SelectionKind.CHARWISE, Position(1, 1), Position(1, 8))
    assert buffer.cursor == Position(1, 8)


def test_move_line_with_cursor_on_tab() -> None:
    buffer = _buffer(["a", "\tfoo"], cursor=(2, 5))

    _engine(auto_indent=False).move_lines_vertically(buffer, -1)

    assert buffer.lines == ["\tfoo", "a"]
    assert buffer.cursor == Position(1, 1)


def test_move_line_after_tab_indent_keeps_token() -> None:
    buffer = _buffer(["a", "\tfoo"], cursor=(2, 10))

    _engine().move_lines_vertically(buffer, -1)

    assert buffer.lines == ["foo", "a"]
    assert buffer.cursor == Position(1, 2)
