#!/usr/bin/env python3
"""
CLI tests: exit codes, godir output and wiring to the adapters.
"""
import os
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

import wmenu_cli
from desktop.wmctrl import Window
from utils import runner
from utils.helper import shell_init


class ScriptedMenu:
    answers = []
    calls = []

    def __init__(self, cfg=None):
        self.cfg = cfg

    def select(self, items, prompt=""):
        ScriptedMenu.calls.append((list(items), prompt))
        return ScriptedMenu.answers.pop(0) if ScriptedMenu.answers else None


class RecordingWM:
    actions = []

    def __init__(self, program="wmctrl"):
        self.program = program

    def list_windows(self):
        return [Window(id="0x10", desktop=0, host="h", title="Editor")]

    def list_desktops(self):
        return []

    def activate(self, target, by_id=True):
        RecordingWM.actions.append(("activate", target, by_id))
        return 0

    def relocate(self, target, by_id=True):
        RecordingWM.actions.append(("relocate", target, by_id))
        return 0

    def close(self, target, by_id=True):
        RecordingWM.actions.append(("close", target, by_id))
        return 0

    def switch_desktop(self, desktop_id):
        RecordingWM.actions.append(("switch", desktop_id))
        return 0


@pytest.fixture
def cli(tmp_path, monkeypatch):
    cfg = tmp_path / "config.json"
    cfg.write_text('{"logging": {"command_log": false}}', encoding="utf-8")
    ScriptedMenu.answers = []
    ScriptedMenu.calls = []
    RecordingWM.actions = []
    monkeypatch.setattr(wmenu_cli, "DmenuMenu", ScriptedMenu)
    monkeypatch.setattr(wmenu_cli, "WmctrlWindowManager", RecordingWM)
    monkeypatch.setattr(runner, "_log_file", None)

    def invoke(*args):
        return wmenu_cli.run(["-c", str(cfg), *args])

    return invoke


class TestCli:
    def test_gowin(self, cli):
        ScriptedMenu.answers = ["Editor"]
        assert cli("gowin") == 0
        assert RecordingWM.actions == [("activate", "0x10", True)]
        assert ScriptedMenu.calls[0] == (["Editor"], "window:")

    def test_killwin_cancelled(self, cli):
        assert cli("killwin") == 0
        assert RecordingWM.actions == []

    def test_godir_prints_directory(self, cli, tmp_path, monkeypatch, capsys):
        (tmp_path / "proj").mkdir()
        monkeypatch.chdir(tmp_path)
        ScriptedMenu.answers = [str(tmp_path / "proj")]
        assert cli("godir", str(tmp_path)) == 0
        out = capsys.readouterr().out.strip()
        assert os.path.realpath(out) == os.path.realpath(tmp_path / "proj")

    def test_godir_quit_exits_2(self, cli, tmp_path, monkeypatch, capsys):
        monkeypatch.chdir(tmp_path)
        ScriptedMenu.answers = ["QUIT"]
        assert cli("godir") == 2
        assert os.path.realpath(capsys.readouterr().out.strip()) == os.path.realpath(tmp_path)

    def test_godir_recursive(self, cli, tmp_path, monkeypatch, capsys):
        (tmp_path / "a" / "b").mkdir(parents=True)
        monkeypatch.chdir(tmp_path)
        ScriptedMenu.answers = [str(tmp_path / "a"), str(tmp_path / "a" / "b"), "QUIT"]
        assert cli("godir", "-r") == 0
        assert os.path.realpath(capsys.readouterr().out.strip()) == os.path.realpath(tmp_path / "a" / "b")

    def test_godir_bad_selection_exits_1(self, cli, tmp_path, monkeypatch, capsys, caplog):
        monkeypatch.chdir(tmp_path)
        ScriptedMenu.answers = [str(tmp_path / "missing")]
        assert cli("godir") == 1
        assert capsys.readouterr().out.splitlines() == [os.getcwd()]
        assert "cannot enter" in caplog.text

    def test_godir_stdout_is_one_path_with_bad_config(self, tmp_path, monkeypatch, capsys, caplog):
        cfg = tmp_path / "bad.json"
        cfg.write_text('{"menu": {"colour": "x"}, "logging": {"command_log": false}}', encoding="utf-8")
        (tmp_path / "p").mkdir()
        monkeypatch.chdir(tmp_path)
        monkeypatch.setattr(wmenu_cli, "DmenuMenu", ScriptedMenu)
        monkeypatch.setattr(runner, "_log_file", None)
        ScriptedMenu.answers = [str(tmp_path / "p")]
        assert wmenu_cli.run(["-c", str(cfg), "godir", str(tmp_path)]) == 0
        lines = capsys.readouterr().out.splitlines()
        assert len(lines) == 1
        assert os.path.realpath(lines[0]) == os.path.realpath(tmp_path / "p")
        assert "Failed to load config" in caplog.text

    def test_godir_recursive_survives_bad_entry(self, cli, tmp_path, monkeypatch, capsys):
        (tmp_path / "a").mkdir()
        monkeypatch.chdir(tmp_path)
        ScriptedMenu.answers = [str(tmp_path / "a"), "typo-not-a-dir", "QUIT"]
        assert cli("godir", "-r") == 0
        lines = capsys.readouterr().out.splitlines()
        assert len(lines) == 1
        assert os.path.realpath(lines[0]) == os.path.realpath(tmp_path / "a")

    def test_browse_uses_configured_opener(self, cli, tmp_path, monkeypatch):
        src = tmp_path / "links"
        src.write_text("https://a.example\nhttps://b.example\nhttps://c.example\n", encoding="utf-8")
        opened = []
        monkeypatch.setattr(wmenu_cli, "open_target", lambda t, opener=None: opened.append((t, opener)))
        ScriptedMenu.answers = ["https://b.example"]
        assert cli("browse", str(src)) == 0
        assert opened == [("https://b.example", None)]

    def test_missing_tool_exits_127(self, cli, monkeypatch, capsys):
        def boom(self):
            raise runner.CommandNotFound("wmctrl")

        monkeypatch.setattr(RecordingWM, "list_desktops", boom)
        assert cli("godesk") == 127
        assert "wmctrl: command not found" in capsys.readouterr().err

    def test_shell_init(self, cli, capsys):
        assert cli("shell-init") == 0
        out = capsys.readouterr().out
        assert out == shell_init("wmenu")
        assert 'gowin() { wmenu gowin "$@"; }' in out
        assert '_d="$(wmenu godir -r "$@")"' in out

    def test_doctor_reports_tools(self, cli, monkeypatch, capsys):
        monkeypatch.setattr(wmenu_cli, "which", lambda c: c != "wmctrl")
        assert cli("doctor") == 1
        out = capsys.readouterr().out
        assert "dmenu" in out
        assert "wmctrl      : no" in out
