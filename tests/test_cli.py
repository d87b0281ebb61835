"""Tests for unitylog/cli.py"""

import io
import json

import pytest

from unitylog.cli import build_parser, format_text, run


def run_cli(argv):
    return run(build_parser().parse_args(argv))


@pytest.fixture
def log_file(tmp_path, editor_log):
    path = tmp_path / "Editor.log"
    path.write_text(editor_log, encoding="utf-8")
    return path


class TestArguments:
    def test_defaults(self):
        args = build_parser().parse_args([])
        assert args.file is None
        assert args.count is None
        assert args.no_collapse is False
        assert args.output == "text"

    def test_short_flags(self):
        args = build_parser().parse_args(["Player.log", "-c", "5", "-n"])
        assert args.file == "Player.log"
        assert args.count == 5
        assert args.no_collapse is True


class TestRun:
    def test_json_output(self, log_file, capsys):
        assert run_cli([str(log_file), "--output", "json"]) == 0
        records = json.loads(capsys.readouterr().out)
        assert [r["type"] for r in records] == ["Log", "Warning", "Error"]

    def test_no_collapse(self, log_file, capsys):
        run_cli([str(log_file), "--output", "json", "-n"])
        assert len(json.loads(capsys.readouterr().out)) == 4

    def test_text_output(self, log_file, capsys):
        run_cli([str(log_file), "--type", "error", "-c", "1"])
        out = capsys.readouterr().out
        assert out == (
            "[Error] NullReferenceException thrown\n"
            "    Game.Player:Die () (at Assets/Scripts/Player.cs:80)\n"
        )

    def test_html_output(self, log_file, capsys):
        run_cli([str(log_file), "--output", "html"])
        out = capsys.readouterr().out
        assert "<!DOCTYPE html>" in out
        assert str(log_file) in out

    def test_reads_stdin(self, monkeypatch, capsys, player_log):
        monkeypatch.setattr("sys.stdin", io.StringIO(player_log))
        assert run_cli(["--output", "json"]) == 0
        records = json.loads(capsys.readouterr().out)
        assert {r["type"] for r in records} == {"Unknown"}

    def test_crlf_file(self, tmp_path, editor_log, capsys):
        path = tmp_path / "Player.log"
        path.write_bytes(editor_log.replace("\n", "\r\n").encode("utf-8"))
        run_cli([str(path), "--output", "json"])
        assert len(json.loads(capsys.readouterr().out)) == 3

    def test_missing_file(self, tmp_path, capsys):
        assert run_cli([str(tmp_path / "nope.log")]) == 1
        assert "cannot read" in capsys.readouterr().err

    def test_bad_count(self, log_file, capsys):
        assert run_cli([str(log_file), "-c", "0"]) == 2
        assert "--count" in capsys.readouterr().err

    def test_bad_type(self, log_file, capsys):
        assert run_cli([str(log_file), "--type", "fatal"]) == 2


class TestFormatText:
    def test_without_short(self):
        assert format_text({"type": "Log", "message": "hi", "short": ""}) == "[Log] hi"

    def test_nothing_marker(self):
        assert format_text(None) == "(nothing)"
