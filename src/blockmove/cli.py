"""Line-based interactive shell for blockmove."""

from __future__ import annotations

import shlex

from .commands import register_builtin_commands
from .core import Editor

BIND_USAGE = "usage: :bind <key> <cmd> [global|mode:<name>]"
_USAGES = {
    ":run": "usage: :run <cmd> [args...]",
    ":bind": BIND_USAGE,
    ":press": "usage: :press <key> [args...]",
    ":eval": "usage: :eval <python>",
}


def _print_help() -> None:
    print("Commands:")
    print("  :commands                list command names")
    print("  :buf                     show current buffer name")
    print("  :show                    print buffer with cursor and selection")
    print("  :run <cmd> [args...]     run command")
    print("  :bind <key> <cmd> [scope] bind key (scope: global|mode:<name>)")
    print("  :press <key> [args...]   execute key sequence")
    print("  :mode                    show the active editing mode")
    print("  :eval <python>           exec python with variable 'editor'")
    print("  :quit                    exit shell")


def _split(payload: str) -> list[str] | None:
    try:
        return shlex.split(payload)
    except ValueError as exc:
        print(f"parse error: {exc}")
        return None


def _report(result: object) -> None:
    if result is not None:
        print(result)


def _run_command(editor: Editor, payload: str) -> None:
    parts = _split(payload)
    if parts is None:
        return
    if not parts:
        print("usage: :run <cmd> [args...]")
        return

    name, args = parts[0], parts[1:]
    try:
        result = editor.run(name, *args)
    except KeyError as exc:
        print(exc.args[0])
        return
    except Exception as exc:
        print(f"command error: {exc}")
        return
    _report(result)


def _eval_code(editor: Editor, payload: str) -> None:
    try:
        exec(payload, {}, {"editor": editor})
    except Exception as exc:
        print(f"eval error: {exc}")


def _bind_key(editor: Editor, payload: str) -> None:
    parts = _split(payload)
    if parts is None:
        return
    if len(parts) < 2:
        print(BIND_USAGE)
        return

    key, command_name = parts[0], parts[1]
    scope_spec = parts[2] if len(parts) >= 3 else "global"

    try:
        if scope_spec == "global":
            editor.bind_key(key, command_name, scope="global")
            print(f"bound {key} -> {command_name} (global)")
            return
        if scope_spec.startswith("mode:") and scope_spec[len("mode:") :]:
            mode = scope_spec[len("mode:") :]
            editor.bind_key(key, command_name, scope="mode", mode=mode)
            print(f"bound {key} -> {command_name} (mode:{mode})")
            return
        print(BIND_USAGE)
    except KeyError as exc:
        print(exc.args[0])
    except ValueError as exc:
        print(exc)


def _press_key(editor: Editor, payload: str) -> None:
    parts = _split(payload)
    if parts is None:
        return
    if not parts:
        print("usage: :press <key> [args...]")
        return

    key, args = parts[0], parts[1:]
    try:
        result = editor.command_execute(key, *args)
    except KeyError as exc:
        print(exc.args[0])
        return
    except Exception as exc:
        print(f"command error: {exc}")
        return
    _report(result)


def render_buffer(editor: Editor) -> str:
    """Render the buffer with line numbers; ``>`` marks the cursor line, ``|`` selected lines."""
    buffer = editor.buffer
    selection = buffer.selection
    rows: list[str] = []
    for number, text in enumerate(buffer.lines, start=1):
        if number == buffer.cursor.line:
            marker = ">"
        elif selection is not None and selection.first_line <= number <= selection.last_line:
            marker = "|"
        else:
            marker = " "
        rows.append(f"{marker}{number:>4} {text}")

    cursor = buffer.cursor
    status = f"[{buffer.name}] {editor.mode} line={cursor.line} col={cursor.col}"
    if selection is not None:
        status += (
            f" {selection.kind.value} {selection.first_line}-{selection.last_line}"
            f" cols {selection.left_col}-{selection.right_col}"
        )
    if not buffer.modifiable:
        status += " read-only"
    rows.append(status)
    return "\n".join(rows)


def _handle_input(editor: Editor, raw: str) -> bool:
    if not raw:
        return True
    if raw in {":q", ":quit", ":exit"}:
        return False
    if raw == ":help":
        _print_help()
        return True
    if raw == ":commands":
        for name in editor.commands:
            print(name)
        return True
    if raw == ":buf":
        print(editor.state.current_buffer)
        return True
    if raw == ":show":
        print(render_buffer(editor))
        return True
    if raw == ":mode":
        print(editor.mode)
        return True

    for prefix, handler in (
        (":run", _run_command),
        (":bind", _bind_key),
        (":press", _press_key),
        (":eval", _eval_code),
    ):
        if raw == prefix:
            print(_USAGES[prefix])
            return True
        if raw.startswith(prefix + " "):
            handler(editor, raw[len(prefix) + 1 :])
            return True

    print("unknown input. use :help")
    return True


def main(editor: Editor | None = None) -> None:
    if editor is None:
        editor = Editor()
        register_builtin_commands(editor)
        editor.run("install-move-bindings")

    print("blockmove shell. Type: :help")
    while True:
        try:
            raw = input("blockmove> ").strip()
        except (EOFError, KeyboardInterrupt):
            print()
            break

        if not _handle_input(editor, raw):
            break


if __name__ == "__main__":
    main()
