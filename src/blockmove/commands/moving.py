"""Line, block and character move commands."""

from __future__ import annotations

from collections.abc import Callable

from ..buffer import TextBuffer
from ..core import Editor
from ..engine import MoveEngine, MoveOutcome, MoveResult
from ..keymap import with_modifier
from .editing import parse_count

MoveOperation = Callable[[MoveEngine, TextBuffer, int], MoveResult]

NORMAL_MOVE_KEYS: tuple[tuple[str, str], ...] = (
    ("j", "move-line-down"),
    ("k", "move-line-up"),
    ("h", "move-char-left"),
    ("l", "move-char-right"),
)
VISUAL_MOVE_KEYS: tuple[tuple[str, str], ...] = (
    ("j", "move-block-down"),
    ("k", "move-block-up"),
    ("h", "move-block-left"),
    ("l", "move-block-right"),
)


def register_move_commands(editor: Editor) -> None:
    """Register the move-line, move-block and move-char commands."""

    def _mover(operation: MoveOperation, sign: int, *, half_page: bool = False) -> Callable[..., object]:
        def run(ed: Editor, *parts: object) -> str | None:
            engine = ed.engine()
            distance = sign * max(0, parse_count(parts))
            if half_page:
                distance *= engine.config.half_page
            result = operation(engine, ed.buffer, distance)
            if result.outcome is MoveOutcome.COERCED:
                return result.message
            return None

        return run

    def _define(name: str, operation: MoveOperation, sign: int, doc: str, *, half_page: bool = False) -> None:
        fn = _mover(operation, sign, half_page=half_page)
        fn.__doc__ = doc
        fn.__name__ = name.replace("-", "_")
        editor.command(name, fn, source_kind="builtin")

    vertical_block = MoveEngine.move_block_vertically
    vertical_line = MoveEngine.move_lines_vertically
    horizontal_block = MoveEngine.move_block_horizontally
    horizontal_char = MoveEngine.move_char_horizontally

    _define("move-block-down", vertical_block, 1, "Move the selected lines down COUNT lines.")
    _define("move-block-up", vertical_block, -1, "Move the selected lines up COUNT lines.")
    _define(
        "move-block-half-page-down",
        vertical_block,
        1,
        "Move the selected lines down COUNT half pages.",
        half_page=True,
    )
    _define(
        "move-block-half-page-up",
        vertical_block,
        -1,
        "Move the selected lines up COUNT half pages.",
        half_page=True,
    )
    _define("move-block-left", horizontal_block, -1, "Move the selected block left COUNT columns.")
    _define("move-block-right", horizontal_block, 1, "Move the selected block right COUNT columns.")

    _define("move-line-down", vertical_line, 1, "Move the current line down COUNT lines.")
    _define("move-line-up", vertical_line, -1, "Move the current line up COUNT lines.")
    _define(
        "move-line-half-page-down",
        vertical_line,
        1,
        "Move the current line down COUNT half pages.",
        half_page=True,
    )
    _define(
        "move-line-half-page-up",
        vertical_line,
        -1,
        "Move the current line up COUNT half pages.",
        half_page=True,
    )

    _define("move-char-left", horizontal_char, -1, "Move the character at point left COUNT columns.")
    _define("move-char-right", horizontal_char, 1, "Move the character at point right COUNT columns.")

    def install_move_bindings(ed: Editor) -> str:
        """Bind <key-modifier>-h/j/k/l to the move commands in normal and visual modes."""
        modifier = ed.move_config().key_modifier
        move_commands = {name for _key, name in (*NORMAL_MOVE_KEYS, *VISUAL_MOVE_KEYS)}

        for mode, keys in (("normal", NORMAL_MOVE_KEYS), ("visual", VISUAL_MOVE_KEYS)):
            keymap = ed.state.mode_keymaps.setdefault(mode, {})
            for sequence in [seq for seq, name in keymap.items() if name in move_commands]:
                del keymap[sequence]
            for key, command_name in keys:
                ed.bind_key(with_modifier(modifier, key), command_name, scope="mode", mode=mode)

        return f"move keys bound to {modifier}-h/j/k/l"

    editor.command("install-move-bindings", install_move_bindings, source_kind="builtin")
