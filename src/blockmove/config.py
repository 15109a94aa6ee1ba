"""Move configuration read from editor variables at invocation time."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

from .columns import DEFAULT_TABSTOP
from .keymap import MODIFIER_ALIASES

_TRUE = {"1", "true", "yes", "on", "t"}
_FALSE = {"0", "false", "no", "off", "nil"}


@dataclass(frozen=True)
class MoveConfig:
    """Immutable settings consulted by the move engine."""

    auto_indent: bool = True
    allow_past_end_of_line: bool = True
    key_modifier: str = "M"
    tabstop: int = DEFAULT_TABSTOP
    shiftwidth: int = 4
    expandtab: bool = True
    window_height: int = 24

    @classmethod
    def from_variables(cls, variables: Mapping[str, object]) -> MoveConfig:
        defaults = cls()
        return cls(
            auto_indent=parse_bool(variables.get("auto-indent", defaults.auto_indent)),
            allow_past_end_of_line=parse_bool(
                variables.get("allow-past-end-of-line", defaults.allow_past_end_of_line)
            ),
            key_modifier=parse_modifier(variables.get("key-modifier", defaults.key_modifier)),
            tabstop=parse_positive_int(variables.get("tabstop", defaults.tabstop), "tabstop"),
            shiftwidth=parse_positive_int(
                variables.get("shiftwidth", defaults.shiftwidth), "shiftwidth"
            ),
            expandtab=parse_bool(variables.get("expandtab", defaults.expandtab)),
            window_height=parse_positive_int(
                variables.get("window-height", defaults.window_height), "window-height"
            ),
        )

    @property
    def half_page(self) -> int:
        return max(1, self.window_height // 2)


def parse_bool(value: object) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    raise ValueError(f"expected a boolean, got {value!r}")


def parse_positive_int(value: object, name: str) -> int:
    try:
        number = int(str(value).strip())
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer") from exc
    if number < 1:
        raise ValueError(f"{name} must be positive")
    return number


def parse_modifier(value: object) -> str:
    mod = MODIFIER_ALIASES.get(str(value).strip().upper())
    if mod is None:
        raise ValueError(f"unknown key modifier: {value}")
    return mod
