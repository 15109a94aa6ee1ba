from pathlib import Path

import pytest

from blockmove import main as main_module
from blockmove.core import Editor


def test_main_dispatches_to_tui_by_default(monkeypatch) -> None:
    editors: list[Editor] = []
    monkeypatch.setattr(main_module, "run_tui", editors.append)

    main_module.main([])

    assert len(editors) == 1
    assert editors[0].buffer.name == "*scratch*"


def test_main_shell_flag_runs_shell(monkeypatch) -> None:
    editors: list[Editor] = []
    monkeypatch.setattr(main_module.cli, "main", editors.append)

    main_module.main(["--shell", "--modifier", "ctrl"])

    assert editors[0].resolve_key("C-j") == "move-line-down"


def test_main_applies_options_and_loads_file(monkeypatch, tmp_path: Path) -> None:
    path = tmp_path / "data.txt"
    path.write_text("a\nb\n", encoding="utf-8")
    editors: list[Editor] = []
    monkeypatch.setattr(main_module, "run_tui", editors.append)

    main_module.main([str(path), "--no-auto-indent", "--no-past-end-of-line"])

    config = editors[0].move_config()
    assert not config.auto_indent
    assert not config.allow_past_end_of_line
    assert editors[0].buffer.lines == ["a", "b"]


def test_main_rejects_unknown_modifier() -> None:
    with pytest.raises(SystemExit):
        main_module.main(["--modifier", "hyper"])
