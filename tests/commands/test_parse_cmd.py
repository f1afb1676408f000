"""Tests for the parse and lessons commands."""

import argparse
import io
import json
from pathlib import Path

import pytest

from slidemark import parse
from slidemark.commands import lessons_cmd, parse_cmd
from slidemark.config import CONFIG_FILE_NAME


@pytest.fixture(autouse=True)
def isolated_cwd(tmp_path, monkeypatch):
    """Keep config discovery away from the real working directory."""
    work = tmp_path / "work"
    work.mkdir()
    monkeypatch.chdir(work)
    for name in ("SLIDEMARK_PARSER_PROFILE_URL", "SLIDEMARK_PARSER_PLAY_ENABLED"):
        monkeypatch.delenv(name, raising=False)
    return work


def _parse_args(file, format="summary", titles_only=False, config=None):
    return argparse.Namespace(file=Path(file), format=format, titles_only=titles_only, config=config)


class TestFormatSummary:
    def test_sample(self, sample_doc_text):
        summary = parse_cmd.format_summary(parse(sample_doc_text))
        assert summary.splitlines() == [
            "Go Concurrency Patterns",
            "Building blocks",
            "15:04 02 Jan 2006",
            "Tags: go, concurrency, talks",
            "2 author(s), 3 section(s)",
        ]

    def test_title_only(self):
        assert parse_cmd.format_summary(parse("T\n\n* A\n")) == "T\n0 author(s), 1 section(s)"


class TestParseRun:
    def test_json(self, sample_doc_file, capsys):
        assert parse_cmd.run(_parse_args(sample_doc_file, format="json")) == 0
        data = json.loads(capsys.readouterr().out)
        assert data["title"] == "Go Concurrency Patterns"
        assert len(data["sections"]) == 2

    def test_outline(self, sample_doc_file, capsys):
        assert parse_cmd.run(_parse_args(sample_doc_file, format="outline")) == 0
        assert capsys.readouterr().out.splitlines()[1] == "** Goroutines"

    def test_titles_only(self, sample_doc_file, capsys):
        assert parse_cmd.run(_parse_args(sample_doc_file, format="json", titles_only=True)) == 0
        assert json.loads(capsys.readouterr().out)["sections"] == []

    def test_stdin(self, monkeypatch, capsys):
        monkeypatch.setattr("sys.stdin", io.StringIO("From stdin\n\n* A\n"))
        assert parse_cmd.run(_parse_args("-")) == 0
        assert capsys.readouterr().out.startswith("From stdin\n")

    def test_parse_error(self, tmp_path, capsys):
        bad = tmp_path / "bad.slide"
        bad.write_text("Title\n\n* A\n\n.nope\n", encoding="utf-8")

        assert parse_cmd.run(_parse_args(bad)) == 1
        assert f"{bad}:5: unknown command" in capsys.readouterr().err

    def test_invalid_utf8(self, tmp_path, capsys):
        bad = tmp_path / "bad.slide"
        bad.write_bytes(b"T\xff\n\n* A\n")

        assert parse_cmd.run(_parse_args(bad)) == 1
        assert "not valid UTF-8" in capsys.readouterr().err

    def test_missing_file(self, tmp_path, capsys):
        assert parse_cmd.run(_parse_args(tmp_path / "missing.slide")) == 1
        assert "Error reading" in capsys.readouterr().err

    def test_config_profile_url(self, tmp_path, isolated_cwd, capsys):
        (isolated_cwd / CONFIG_FILE_NAME).write_text(
            '[parser]\nprofile_url = "https://social.example/"\n', encoding="utf-8"
        )
        doc = tmp_path / "talk.slide"
        doc.write_text("T\n\n@gopher\n\n* A\n", encoding="utf-8")

        assert parse_cmd.run(_parse_args(doc, format="json")) == 0
        author = json.loads(capsys.readouterr().out)["authors"][0]
        assert author["elements"][0]["url"] == "https://social.example/gopher"

    def test_bad_config(self, tmp_path, sample_doc_file, capsys):
        config = tmp_path / "bad.toml"
        config.write_text("[parser\n", encoding="utf-8")

        assert parse_cmd.run(_parse_args(sample_doc_file, config=config)) == 1
        assert "Error loading config" in capsys.readouterr().err


def _lessons_args(content_dir, output=None, quiet=False):
    return argparse.Namespace(content_dir=Path(content_dir), output=output, quiet=quiet, config=None)


class TestLessonsRun:
    def test_stdout(self, lesson_dir, capsys):
        assert lessons_cmd.run(_lessons_args(lesson_dir)) == 0
        data = json.loads(capsys.readouterr().out)
        assert sorted(data) == ["basics", "flow"]
        assert data["basics"]["pages"][0]["files"][0]["name"] == "hello.go"

    def test_output_file(self, lesson_dir, tmp_path, capsys):
        out = tmp_path / "lessons.json"

        assert lessons_cmd.run(_lessons_args(lesson_dir, output=out)) == 0

        assert json.loads(out.read_text(encoding="utf-8"))["flow"]["title"] == "Flow control"
        assert capsys.readouterr().out == f"Wrote 2 lesson(s) to {out}\n"

    def test_output_file_quiet(self, lesson_dir, tmp_path, capsys):
        out = tmp_path / "lessons.json"

        assert lessons_cmd.run(_lessons_args(lesson_dir, output=out, quiet=True)) == 0
        assert capsys.readouterr().out == ""

    def test_not_a_directory(self, tmp_path, capsys):
        assert lessons_cmd.run(_lessons_args(tmp_path / "nope")) == 1
        assert "is not a directory" in capsys.readouterr().err

    def test_broken_lesson(self, lesson_dir, capsys):
        (lesson_dir / "bad.article").write_text("Bad\n", encoding="utf-8")

        assert lessons_cmd.run(_lessons_args(lesson_dir)) == 1
        assert "parsing bad.article" in capsys.readouterr().err
