"""Editor runtime: command registry, hooks and modal keymaps."""

from __future__ import annotations

import inspect
import logging
from collections import defaultdict
from collections.abc import Callable
from dataclasses import dataclass

from .buffer import TextBuffer
from .config import MoveConfig
from .engine import MoveEngine
from .keymap import KeySequence, KeySequenceInput, format_key_sequence, parse_key_sequence
from .state import EditorState

Command = Callable[..., object]
Hook = Callable[..., object]
logger = logging.getLogger(__name__)

_SOURCE_KINDS = {"builtin", "runtime"}


@dataclass(frozen=True)
class CommandInfo:
    """Command registration metadata."""

    name: str
    fn: Command
    doc: str
    signature: str
    module: str
    source_kind: str


@dataclass(frozen=True)
class KeyBindingInfo:
    """Resolved key binding metadata."""

    sequence: KeySequence
    command_name: str
    scope: str
    mode: str | None = None


class Editor:
    """Live editor runtime with command, hook and keymap APIs."""

    def __init__(self) -> None:
        self.state = EditorState()
        self._commands: dict[str, CommandInfo] = {}
        self._hooks: dict[str, list[Hook]] = defaultdict(list)

    @property
    def buffer(self) -> TextBuffer:
        return self.state.selected_buffer()

    @property
    def mode(self) -> str:
        return self.state.current_mode()

    def move_config(self) -> MoveConfig:
        return MoveConfig.from_variables(self.state.variables)

    def engine(self) -> MoveEngine:
        return MoveEngine(self.move_config())

    def command(self, name: str, fn: Command, *, source_kind: str = "runtime") -> None:
        doc = inspect.getdoc(fn) or "(undocumented command)"
        try:
            signature = str(inspect.signature(fn))
        except (TypeError, ValueError):
            signature = "(...)"

        self._commands[name] = CommandInfo(
            name=name,
            fn=fn,
            doc=doc,
            signature=signature,
            module=str(getattr(fn, "__module__", "")),
            source_kind=source_kind if source_kind in _SOURCE_KINDS else "runtime",
        )

    def get_command_info(self, name: str) -> CommandInfo:
        command = self._commands.get(name)
        if command is None:
            raise KeyError(f"unknown command: {name}")
        return command

    def command_infos(self) -> list[CommandInfo]:
        return [self._commands[name] for name in self.commands]

    def run(self, name: str, *args: object) -> object:
        info = self.get_command_info(name)
        self.emit("before-command", name, args)
        result = info.fn(self, *args)
        self.emit("after-command", name, args, result)
        return result

    def on(self, event: str, fn: Hook) -> None:
        self._hooks[event].append(fn)

    def emit(self, event: str, *args: object) -> None:
        for fn in self._hooks.get(event, []):
            try:
                fn(self, *args)
            except Exception:
                logger.exception("hook failed for event %s", event)

    def bind_key(
        self,
        sequence: KeySequenceInput,
        command_name: str,
        *,
        scope: str = "global",
        mode: str | None = None,
    ) -> None:
        if command_name not in self._commands:
            raise KeyError(f"unknown command: {command_name}")

        key = parse_key_sequence(sequence)

        if scope == "global":
            self.state.global_keymap[key] = command_name
            return

        if scope == "mode":
            if not mode:
                raise ValueError("mode name required for mode scope")
            self.state.mode_keymaps.setdefault(mode, {})[key] = command_name
            return

        raise ValueError(f"unknown keymap scope: {scope}")

    def resolve_key(self, sequence: KeySequenceInput) -> str:
        return self.describe_key(sequence).command_name

    def describe_key(self, sequence: KeySequenceInput) -> KeyBindingInfo:
        key = parse_key_sequence(sequence)

        for scope, mode_name, keymap in self._active_keymaps():
            command_name = keymap.get(key)
            if command_name is not None:
                return KeyBindingInfo(sequence=key, command_name=command_name, scope=scope, mode=mode_name)

        raise KeyError(f"unbound key sequence: {format_key_sequence(key)}")

    def where_is(self, name: str) -> list[KeyBindingInfo]:
        if name not in self._commands:
            raise KeyError(f"unknown command: {name}")

        bindings: list[KeyBindingInfo] = []
        for scope, mode_name, keymap in self._active_keymaps():
            for sequence, command_name in sorted(keymap.items()):
                if command_name == name:
                    bindings.append(
                        KeyBindingInfo(sequence=sequence, command_name=name, scope=scope, mode=mode_name)
                    )
        return bindings

    def has_prefix_binding(self, sequence: KeySequenceInput) -> bool:
        key = parse_key_sequence(sequence)
        for _scope, _mode_name, keymap in self._active_keymaps():
            for bound in keymap:
                if len(bound) > len(key) and bound[: len(key)] == key:
                    return True
        return False

    def command_execute(self, sequence: KeySequenceInput, *args: object) -> object:
        return self.run(self.resolve_key(sequence), *args)

    @property
    def commands(self) -> list[str]:
        return sorted(self._commands)

    def _active_keymaps(self) -> list[tuple[str, str | None, dict[KeySequence, str]]]:
        mode = self.mode
        return [
            ("mode", mode, self.state.mode_keymaps.get(mode, {})),
            ("global", None, self.state.global_keymap),
        ]
