"""Top-level CLI entrypoint dispatcher."""

from __future__ import annotations

import argparse
import logging
from collections.abc import Sequence
from pathlib import Path

from . import cli
from .commands import register_builtin_commands
from .core import Editor
from .tui import run_tui


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="blockmove")
    parser.add_argument("file", nargs="?", type=Path, help="file to open")
    parser.add_argument("--shell", action="store_true", help="run the line-based shell instead of the TUI")
    parser.add_argument("--no-auto-indent", action="store_true", help="do not reindent moved lines")
    parser.add_argument(
        "--no-past-end-of-line",
        action="store_true",
        help="stop horizontal moves at the end of the shortest line",
    )
    parser.add_argument("--modifier", default=None, help="modifier for move keys (default: M)")
    parser.add_argument("--log-file", type=Path, default=None, help="write debug log to this file")
    return parser


def build_editor(args: argparse.Namespace) -> Editor:
    editor = Editor()
    register_builtin_commands(editor)
    if args.no_auto_indent:
        editor.run("set", "auto-indent", "false")
    if args.no_past_end_of_line:
        editor.run("set", "allow-past-end-of-line", "false")
    if args.modifier:
        editor.run("set", "key-modifier", args.modifier)
    if args.file is not None:
        editor.run("find-file", str(args.file))
    return editor


def main(argv: Sequence[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.log_file is not None:
        logging.basicConfig(
            filename=args.log_file,
            level=logging.DEBUG,
            format="%(asctime)s %(name)s %(levelname)s %(message)s",
        )

    try:
        editor = build_editor(args)
    except ValueError as exc:
        parser.error(str(exc))

    if args.shell:
        editor.run("install-move-bindings")
        cli.main(editor)
        return
    run_tui(editor)
