from pathlib import Path

import pytest

from blockmove.buffer import TextBuffer
from blockmove.selection import Position
from blockmove.undo import UndoManager


def test_buffer_never_empty() -> None:
    buffer = TextBuffer("empty")
    assert buffer.lines == [""]

    buffer.set_lines(1, 1, [])
    assert buffer.lines == [""]
    assert buffer.line_count() == 1


def test_set_lines_inserts_and_replaces() -> None:
    buffer = TextBuffer.from_text("t", "a\nb\nc")

    buffer.set_lines(2, 1, ["x", "y"])
    assert buffer.lines == ["a", "x", "y", "b", "c"]

    buffer.set_lines(2, 3, [])
    assert buffer.text == "a\nb\nc"

    with pytest.raises(IndexError):
        buffer.set_lines(3, 5, ["z"])
    with pytest.raises(IndexError):
        buffer.get_line(0)


def test_clamp_snaps_to_character_cells() -> None:
    buffer = TextBuffer("t", ["a\tb", "ab"])

    assert buffer.clamp(Position(1, 5)) == Position(1, 2)
    assert buffer.clamp(Position(9, 9)) == Position(2, 3)
    assert buffer.clamp(Position(2, 20), past_end=True) == Position(2, 20)
    assert buffer.clamp(Position(0, 0)) == Position(1, 1)


def test_undo_history_is_capped() -> None:
    buffer = TextBuffer("t", ["a"])
    buffer.history = UndoManager(max_entries=2)

    for text in ("b", "c", "d"):
        before = buffer.snapshot()
        buffer.set_line(1, text)
        buffer.record(before)

    assert buffer.history.depth == 2
    assert buffer.undo()
    assert buffer.undo()
    assert not buffer.undo()
    assert buffer.lines == ["b"]

    assert buffer.redo()
    assert buffer.lines == ["c"]


def test_new_edit_clears_redo() -> None:
    buffer = TextBuffer("t", ["a"])
    before = buffer.snapshot()
    buffer.set_line(1, "b")
    buffer.record(before)

    buffer.undo()
    before = buffer.snapshot()
    buffer.set_line(1, "c")
    buffer.record(before)

    assert not buffer.history.can_redo()
    assert not buffer.redo()


def test_file_round_trip(tmp_path: Path) -> None:
    path = tmp_path / "src.py"
    path.write_text("x = 1\ny = 2\n", encoding="utf-8")

    buffer = TextBuffer.from_file(path)
    assert buffer.name == "src.py"
    assert buffer.lines == ["x = 1", "y = 2"]

    buffer.set_line(1, "x = 3")
    assert buffer.save() == path
    assert path.read_text(encoding="utf-8") == "x = 3\ny = 2\n"

    missing = TextBuffer.from_file(tmp_path / "new.txt")
    assert missing.lines == [""]

    with pytest.raises(ValueError, match="has no file"):
        TextBuffer("scratch").save()
