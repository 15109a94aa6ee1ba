"""Runtime editor state: buffers, variables and keymaps."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from .buffer import TextBuffer
from .keymap import KeySequence

SCRATCH_BUFFER = "*scratch*"


@dataclass
class EditorState:
    """Runtime mutable editor state."""

    buffers: dict[str, TextBuffer] = field(
        default_factory=lambda: {SCRATCH_BUFFER: TextBuffer(SCRATCH_BUFFER)}
    )
    variables: dict[str, object] = field(default_factory=dict)
    global_keymap: dict[KeySequence, str] = field(default_factory=dict)
    mode_keymaps: dict[str, dict[KeySequence, str]] = field(default_factory=dict)
    current_buffer: str = SCRATCH_BUFFER
    buffer_history: list[str] = field(default_factory=lambda: [SCRATCH_BUFFER])

    def selected_buffer(self) -> TextBuffer:
        return self.ensure_buffer(self.current_buffer)

    def current_mode(self) -> str:
        """``visual`` while a selection is active, ``normal`` otherwise."""
        return "normal" if self.selected_buffer().selection is None else "visual"

    def ensure_buffer(self, name: str) -> TextBuffer:
        buffer = self.buffers.get(name)
        if buffer is None:
            buffer = TextBuffer(name)
            self.buffers[name] = buffer
        return buffer

    def switch_to_buffer(self, name: str) -> TextBuffer:
        buffer = self.ensure_buffer(name)
        self.current_buffer = name
        self.mark_buffer_recent(name)
        return buffer

    def load_file(self, path: Path) -> TextBuffer:
        buffer = TextBuffer.from_file(path)
        name = buffer.name
        suffix = 2
        while name in self.buffers and self.buffers[name].path != buffer.path:
            name = f"{buffer.name}<{suffix}>"
            suffix += 1
        buffer.name = name
        self.buffers[name] = buffer
        self.current_buffer = name
        self.mark_buffer_recent(name)
        return buffer

    def mark_buffer_recent(self, name: str) -> None:
        self.buffer_history = [item for item in self.buffer_history if item != name]
        self.buffer_history.insert(0, name)

    def recent_buffer(self, *, exclude: set[str] | None = None) -> str | None:
        excluded = exclude or set()

        for name in self.buffer_history:
            if name not in excluded and name in self.buffers:
                return name

        for name in self.buffers:
            if name not in excluded:
                return name

        return None

    def kill_buffer(self, name: str) -> str:
        if name not in self.buffers:
            raise KeyError(f"unknown buffer: {name}")

        del self.buffers[name]
        self.buffer_history = [item for item in self.buffer_history if item != name]

        replacement = self.recent_buffer(exclude={name})
        if replacement is None:
            replacement = SCRATCH_BUFFER
            self.ensure_buffer(replacement)

        if self.current_buffer == name:
            self.current_buffer = replacement
        self.mark_buffer_recent(replacement)
        return replacement
