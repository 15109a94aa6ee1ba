"""blockmove package."""

__all__ = [
    "CommandInfo",
    "Editor",
    "EditorState",
    "KeyBindingInfo",
    "MoveConfig",
    "MoveEngine",
    "MoveOutcome",
    "MoveResult",
    "Position",
    "Selection",
    "SelectionKind",
    "TextBuffer",
    "parse_key_sequence",
]
__version__ = "0.1.0"

from .buffer import TextBuffer
from .config import MoveConfig
from .core import CommandInfo, Editor, KeyBindingInfo
from .engine import MoveEngine, MoveOutcome, MoveResult
from .keymap import parse_key_sequence
from .selection import Position, Selection, SelectionKind
from .state import EditorState
