"""Tests for unitylog/report_generator.py"""

from conftest import editor_block
from unitylog.report_generator import ReportGenerator
from unitylog.segmenter import LogSegmenter


class TestRender:
    def test_contains_entries_and_stats(self, editor_log):
        entries = LogSegmenter().segment(editor_log)
        html = ReportGenerator(title="Build 42").render(entries)
        assert "<title>Build 42</title>" in html
        assert "NullReferenceException thrown" in html
        assert 'class="status-badge type-error"' in html
        assert 'class="status-badge type-warning"' in html
        assert "Game.Enemy:Update () (at Assets/Scripts/Enemy.cs:40)" in html

    def test_escapes_log_text(self):
        text = editor_block("<script>alert(1)</script>") + "\n\n"
        html = ReportGenerator().render(LogSegmenter().segment(text))
        assert "<script>alert(1)</script>" not in html
        assert "&lt;script&gt;" in html

    def test_fallback_notice(self, player_log):
        html = ReportGenerator().render(LogSegmenter().segment(player_log))
        assert "No engine log calls were found" in html
        assert 'class="status-badge type-unknown"' in html

    def test_empty(self):
        html = ReportGenerator().render([])
        assert "No log entries found." in html

    def test_source_shown(self, editor_log):
        html = ReportGenerator().render(LogSegmenter().segment(editor_log), source="Editor.log")
        assert "Editor.log" in html


class TestGenerateReport:
    def test_writes_file(self, tmp_path, editor_log):
        entries = LogSegmenter().segment(editor_log)
        path = ReportGenerator().generate_report("logs/Player.log", entries, tmp_path / "out")
        assert path == tmp_path / "out" / "Player.html"
        assert "Missing reference" in path.read_text(encoding="utf-8")

    def test_unsafe_name(self, tmp_path):
        path = ReportGenerator().generate_report("my log?.txt", [], tmp_path)
        assert path.name == "my_log_.html"
