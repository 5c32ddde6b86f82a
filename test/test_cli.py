#!/usr/bin/env python3
"""Tests for the converter and CLI."""

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from transcript_view.cli import main
from transcript_view.converter import convert_transcript, get_file_extension
from transcript_view.models import MalformedItemError


class TestGetFileExtension:
    def test_html(self):
        assert get_file_extension("html") == "html"

    def test_markdown_normalized(self):
        assert get_file_extension("markdown") == "md"
        assert get_file_extension("md") == "md"


class TestConvertTranscript:
    def test_default_output_path(self, transcript_json: Path):
        output = convert_transcript(transcript_json)
        assert output == transcript_json.with_suffix(".html")
        html = output.read_text(encoding="utf-8")
        assert "<title>conversation</title>" in html
        assert "item-card tool" in html

    def test_markdown_output(self, transcript_jsonl: Path, tmp_path: Path):
        target = tmp_path / "out" / "log.md"
        output = convert_transcript(transcript_jsonl, target, output_format="markdown")
        assert output == target
        content = target.read_text(encoding="utf-8")
        assert content.startswith("# conversation")
        assert "<summary>Run the tests</summary>" in content

    def test_thinking_and_title(self, transcript_json: Path):
        output = convert_transcript(transcript_json, is_thinking=True, title="Run 5")
        html = output.read_text(encoding="utf-8")
        assert "<title>Run 5</title>" in html
        assert "class='thinking'" in html

    def test_missing_input(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            convert_transcript(tmp_path / "nope.json")

    def test_malformed_input(self, tmp_path: Path):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps([{"kind": "video", "id": "v"}]), encoding="utf-8")
        with pytest.raises(MalformedItemError):
            convert_transcript(path)
        assert not path.with_suffix(".html").exists()

    def test_unsupported_format(self, transcript_json: Path):
        with pytest.raises(ValueError, match="Unsupported format"):
            convert_transcript(transcript_json, output_format="pdf")


class TestCli:
    def test_convert_html(self, transcript_json: Path):
        runner = CliRunner()
        result = runner.invoke(main, [str(transcript_json)])
        assert result.exit_code == 0, result.output
        assert "Successfully converted" in result.output
        assert transcript_json.with_suffix(".html").exists()

    def test_convert_markdown_with_output(self, transcript_jsonl: Path, tmp_path: Path):
        target = tmp_path / "custom.md"
        runner = CliRunner()
        result = runner.invoke(
            main,
            [str(transcript_jsonl), "-f", "md", "-o", str(target), "--thinking", "--title", "T"],
        )
        assert result.exit_code == 0, result.output
        content = target.read_text(encoding="utf-8")
        assert content.startswith("# T")
        assert "is thinking" in content

    def test_missing_file(self, tmp_path: Path):
        runner = CliRunner()
        result = runner.invoke(main, [str(tmp_path / "missing.json")])
        assert result.exit_code == 1
        assert "Error:" in result.output

    def test_malformed_file(self, tmp_path: Path):
        path = tmp_path / "bad.jsonl"
        path.write_text('{"kind": "message", "id": "m"}\n', encoding="utf-8")
        runner = CliRunner()
        result = runner.invoke(main, [str(path)])
        assert result.exit_code == 1
        assert "line 1 of bad.jsonl" in result.output

    def test_invalid_format_choice(self, transcript_json: Path):
        runner = CliRunner()
        result = runner.invoke(main, [str(transcript_json), "-f", "pdf"])
        assert result.exit_code == 2

    def test_open_browser(self, transcript_json: Path, monkeypatch: pytest.MonkeyPatch):
        launched: list[str] = []
        monkeypatch.setattr("click.launch", lambda url: launched.append(url))
        runner = CliRunner()
        result = runner.invoke(main, [str(transcript_json), "--open-browser"])
        assert result.exit_code == 0, result.output
        assert launched == [str(transcript_json.with_suffix(".html"))]
