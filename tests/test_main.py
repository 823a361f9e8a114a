"""Test the command-line entry point."""

import json
from pathlib import Path
from unittest.mock import MagicMock, patch

from tedit import __main__ as cli
from tedit.config import DEFAULT_SETTINGS


def test_parse_args_defaults():
    with patch("tedit.__main__.default_config_path", return_value=Path("/cfg/config.json")):
        args = cli.parse_args([])
    assert args.file is None
    assert args.config == str(Path("/cfg/config.json"))
    assert not args.generate_config
    assert args.log_file is None


def test_parse_args_with_file_and_config():
    args = cli.parse_args(["notes.txt", "-c", "my.json", "--log-file", "t.log"])
    assert args.file == "notes.txt"
    assert args.config == "my.json"
    assert args.log_file == "t.log"


def test_version(capsys):
    assert cli.main(["--version"]) == 0
    assert capsys.readouterr().out.strip()


def test_generate_config(tmp_path, capsys):
    target = tmp_path / "sub" / "config.json"
    assert cli.main(["--generate-config", "-c", str(target)]) == 0
    assert json.loads(target.read_text()) == DEFAULT_SETTINGS
    assert str(target) in capsys.readouterr().out


def test_generate_config_failure(tmp_path, capsys):
    blocker = tmp_path / "file"
    blocker.write_text("x")
    assert cli.main(["--generate-config", "-c", str(blocker / "config.json")]) == 1
    assert "could not write" in capsys.readouterr().err


def test_main_runs_editor(tmp_path):
    config_path = tmp_path / "config.json"
    config_path.write_text(json.dumps({"tab_size": 2}))
    editor = MagicMock()
    with patch("tedit.editor.Editor", return_value=editor) as editor_cls:
        assert cli.main(["doc.txt", "-c", str(config_path)]) == 0
    config = editor_cls.call_args[0][0]
    assert config.file == Path("doc.txt")
    assert config.tab_size == 2
    editor.run.assert_called_once()


def test_main_reports_terminal_errors(tmp_path, capsys):
    editor = MagicMock()
    editor.run.side_effect = OSError("not a tty")
    with patch("tedit.editor.Editor", return_value=editor):
        assert cli.main(["-c", str(tmp_path / "none.json")]) == 1
    assert "not a tty" in capsys.readouterr().err
