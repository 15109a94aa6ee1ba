"""Key chord parsing and modifier helpers."""

from __future__ import annotations

from collections.abc import Sequence

MODIFIER_ORDER = ("C", "M", "S")
MODIFIER_ALIASES = {
    "C": "C",
    "CTRL": "C",
    "CONTROL": "C",
    "M": "M",
    "META": "M",
    "ALT": "M",
    "S": "S",
    "SHIFT": "S",
}
KEY_ALIASES = {
    "spc": "space",
    "ret": "enter",
    "return": "enter",
    "esc": "escape",
    "backspace": "DEL",
    "del": "DEL",
}

KeySequence = tuple[str, ...]
KeySequenceInput = str | Sequence[str]


def parse_key_sequence(sequence: KeySequenceInput) -> KeySequence:
    """Parse ``"C-x l"`` or ``["ctrl-x", "l"]`` into a canonical tuple."""
    if isinstance(sequence, str):
        tokens = sequence.split()
    else:
        tokens = [str(tok).strip() for tok in sequence]

    if not tokens:
        raise ValueError("empty key sequence")
    return tuple(parse_chord(token) for token in tokens)


def format_key_sequence(sequence: KeySequence) -> str:
    return " ".join(sequence)


def with_modifier(modifier: str, key: str) -> str:
    """Return the canonical chord for ``key`` held with ``modifier``."""
    return parse_chord(f"{modifier}-{key}")


def parse_chord(token: str) -> str:
    token = token.strip()
    if not token:
        raise ValueError("empty key token")

    parts = token.split("-")
    if any(part == "" for part in parts):
        raise ValueError(f"invalid key token: {token}")

    modifiers: set[str] = set()
    for raw_mod in parts[:-1]:
        mod = MODIFIER_ALIASES.get(raw_mod.upper())
        if mod is None:
            raise ValueError(f"unknown key modifier: {raw_mod}")
        modifiers.add(mod)

    base = parts[-1]
    base = KEY_ALIASES.get(base.lower(), base if base == "DEL" else base.lower())
    return "-".join([*(mod for mod in MODIFIER_ORDER if mod in modifiers), base])
