"""UI adapter that maps user input to editor operations."""

from __future__ import annotations

import shlex
from dataclasses import dataclass

from ..core import Editor
from ..keymap import KeySequence, format_key_sequence, parse_key_sequence
from ..selection import Position, Selection

DEFAULT_EDIT_BINDINGS: tuple[tuple[str, str], ...] = (
    ("C-m", "newline"),
    ("DEL", "delete-backward-char"),
    ("C-f", "forward-char"),
    ("right", "forward-char"),
    ("C-b", "backward-char"),
    ("left", "backward-char"),
    ("C-a", "move-beginning-of-line"),
    ("C-e", "move-end-of-line"),
    ("C-n", "next-line"),
    ("down", "next-line"),
    ("C-p", "previous-line"),
    ("up", "previous-line"),
    ("C-space", "visual-char"),
    ("C-@", "visual-char"),
    ("C-x l", "visual-line"),
    ("C-x r", "visual-block"),
    ("C-x C-x", "visual-exchange"),
    ("C-x u", "undo"),
    ("C-x y", "redo"),
    ("C-x C-q", "toggle-read-only"),
    ("C-x C-s", "save-buffer"),
)

UI_ACTION_BINDINGS: dict[KeySequence, str] = {
    ("M-x",): "open-minibuffer",
    ("C-q",): "quit",
    ("C-x", "C-c"): "quit",
}

MINIBUFFER_HELP = "commands: run set get bind press mode buf commands help"


@dataclass(frozen=True)
class UISnapshot:
    """Immutable UI state for rendering."""

    buffer: str
    lines: tuple[str, ...]
    cursor: Position
    selection: Selection | None
    mode: str
    modifiable: bool
    tabstop: int
    status: str


@dataclass(frozen=True)
class UIAction:
    """UI actions consumed by the Textual layer."""

    name: str
    prompt: str | None = None


class UIController:
    """Stateful adapter between UI events and editor core APIs."""

    def __init__(self, editor: Editor) -> None:
        self.editor = editor
        self._status = "ready"
        self._pending_keys: list[str] = []
        self._ui_action: UIAction | None = None
        self._bind_default_edit_keys()

    def snapshot(self) -> UISnapshot:
        buffer = self.editor.buffer
        return UISnapshot(
            buffer=buffer.name,
            lines=tuple(buffer.lines),
            cursor=buffer.cursor,
            selection=buffer.selection,
            mode=self.editor.mode,
            modifiable=buffer.modifiable,
            tabstop=self.editor.move_config().tabstop,
            status=self._status,
        )

    def set_window_height(self, height: int) -> None:
        self.editor.state.variables["window-height"] = str(max(1, height))

    def handle_text_input(self, text: str) -> str:
        if not text:
            return self._status
        self._pending_keys.clear()
        self._ui_action = None
        return self._run_editor_command("insert", text, quiet=True) or self._set_status(
            f"inserted {len(text)} char(s)"
        )

    def handle_minibuffer_submit(self, line: str) -> str:
        return self.execute_minibuffer(line)

    def dispatch_key_chord(self, chord: str) -> str:
        try:
            sequence = parse_key_sequence(chord)
        except ValueError as exc:
            self._pending_keys.clear()
            self._ui_action = None
            return self._set_status(str(exc))

        status = self._status
        for key in sequence:
            status = self._dispatch_single_key(key)
        return status

    def has_pending_keys(self) -> bool:
        return bool(self._pending_keys)

    def pop_ui_action(self) -> UIAction | None:
        action = self._ui_action
        self._ui_action = None
        return action

    def execute_minibuffer(self, line: str) -> str:
        try:
            parts = shlex.split(line)
        except ValueError as exc:
            return self._set_status(f"parse error: {exc}")

        if not parts:
            return self._set_status("empty command")

        cmd, args = parts[0], parts[1:]
        try:
            if cmd == "run":
                if not args:
                    return self._set_status("usage: run <cmd> [args...]")
                return self._run_editor_command(args[0], *args[1:]) or self._status
            if cmd in {"set", "get"}:
                if not args:
                    return self._set_status(f"usage: {cmd} <name>{' <value>' if cmd == 'set' else ''}")
                return self._run_editor_command(cmd, *args) or self._status
            if cmd == "bind":
                return self._bind_command(args)
            if cmd == "press":
                if not args:
                    return self._set_status("usage: press <key>")
                return self.dispatch_key_chord(" ".join(args))
            if cmd == "mode":
                return self._set_status(self.editor.mode)
            if cmd == "buf":
                return self._set_status(self.editor.state.current_buffer)
            if cmd == "commands":
                return self._set_status(" ".join(self.editor.commands))
            if cmd == "help":
                return self._set_status(MINIBUFFER_HELP)
            return self._set_status(f"unknown command: {cmd}")
        except KeyError as exc:
            return self._set_status(exc.args[0])
        except ValueError as exc:
            return self._set_status(str(exc))

    def _dispatch_single_key(self, key: str) -> str:
        if key == "C-g":
            self._pending_keys.clear()
            self._ui_action = UIAction(name="cancel-minibuffer")
            if self.editor.buffer.selection is not None:
                self.editor.run("visual-exit")
            return self._set_status("cancelled")

        candidate = tuple([*self._pending_keys, key])
        self._ui_action = None

        action = UI_ACTION_BINDINGS.get(candidate)
        if action is not None:
            self._pending_keys.clear()
            self._ui_action = UIAction(name=action)
            return self._set_status(self._action_status(action))

        try:
            command_name = self.editor.resolve_key(candidate)
        except KeyError:
            command_name = None

        if command_name is not None:
            self._pending_keys.clear()
            return self._run_editor_command(command_name) or self._status

        if self.editor.has_prefix_binding(candidate) or self._has_ui_prefix(candidate):
            self._pending_keys = list(candidate)
            return self._set_status(f"pending {format_key_sequence(candidate)}")

        self._pending_keys.clear()
        return self._set_status(f"unbound key sequence: {format_key_sequence(candidate)}")

    def _run_editor_command(self, command_name: str, *args: object, quiet: bool = False) -> str | None:
        try:
            result = self.editor.run(command_name, *args)
        except KeyError as exc:
            return self._set_status(exc.args[0])
        except ValueError as exc:
            return self._set_status(str(exc))
        except Exception as exc:
            return self._set_status(f"command error: {exc}")

        if result is not None:
            return self._set_status(str(result))
        if quiet:
            return None
        return self._set_status(f"ran {command_name}")

    def _bind_command(self, args: list[str]) -> str:
        usage = "usage: bind <key> <cmd> [global|mode:<name>]"
        if len(args) < 2:
            return self._set_status(usage)

        key, command_name = args[0], args[1]
        scope_spec = args[2] if len(args) >= 3 else "global"

        if scope_spec == "global":
            self.editor.bind_key(key, command_name, scope="global")
            return self._set_status(f"bound {key} -> {command_name} (global)")

        if scope_spec.startswith("mode:") and scope_spec[len("mode:") :]:
            mode = scope_spec[len("mode:") :]
            self.editor.bind_key(key, command_name, scope="mode", mode=mode)
            return self._set_status(f"bound {key} -> {command_name} (mode:{mode})")

        return self._set_status(usage)

    def _set_status(self, message: str) -> str:
        self._status = message
        return message

    def _bind_default_edit_keys(self) -> None:
        for sequence, command_name in DEFAULT_EDIT_BINDINGS:
            key = parse_key_sequence(sequence)
            if key in self.editor.state.global_keymap:
                continue
            try:
                self.editor.bind_key(key, command_name, scope="global")
            except KeyError:
                continue
        if "install-move-bindings" in self.editor.commands:
            self.editor.run("install-move-bindings")

    def _has_ui_prefix(self, sequence: KeySequence) -> bool:
        return any(
            len(bound) > len(sequence) and bound[: len(sequence)] == sequence
            for bound in UI_ACTION_BINDINGS
        )

    def _action_status(self, action: str) -> str:
        if action == "open-minibuffer":
            return "open minibuffer"
        if action == "quit":
            return "quit requested"
        return action
