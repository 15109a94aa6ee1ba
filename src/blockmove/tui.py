"""TUI entrypoint."""

from __future__ import annotations

from .core import Editor
from .ui.app import BlockMoveTuiApp


def run_tui(editor: Editor | None = None) -> None:
    app = BlockMoveTuiApp(editor)
    app.run()
