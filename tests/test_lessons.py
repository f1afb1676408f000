"""Tests for the lesson loader."""

import json

import pytest

from slidemark.lessons import (
    Lesson,
    LessonLoadError,
    find_play_code,
    lesson_parser,
    lesson_to_json,
    load_lessons,
    parse_lesson,
)
from slidemark.models import Code, Section, Text
from slidemark.utilities.hasher import calculate_hash


class TestFindPlayCode:
    def test_only_runnable_snippets(self):
        runnable = Code(file_name="a.go", play=True)
        section = Section(
            number=[1],
            title="S",
            elements=[
                Code(file_name="b.go"),
                Text(lines=["x"]),
                Section(number=[1, 1], title="Sub", elements=[runnable]),
            ],
        )
        assert list(find_play_code(section)) == [runnable]


class TestParseLesson:
    def test_pages_from_top_level_sections(self, lesson_dir):
        lesson = parse_lesson(lesson_dir / "basics.article")

        assert lesson.title == "Basics"
        assert lesson.description == "The first lesson"
        assert [p.title for p in lesson.pages] == ["Hello", "Next"]
        assert lesson.pages[0].content["kind"] == "section"
        assert lesson.pages[0].content["title"] == "Hello"

    def test_play_files_collected(self, lesson_dir):
        lesson = parse_lesson(lesson_dir / "basics.article")
        raw = (lesson_dir / "hello.go").read_bytes()

        (hello,) = lesson.pages[0].files
        assert hello.name == "hello.go"
        assert hello.content == raw.decode("utf-8")
        assert hello.hash == calculate_hash(raw)
        assert lesson.pages[1].files == []

    def test_lesson_parser_enables_play(self):
        assert lesson_parser().context.play_enabled is True
        assert lesson_parser({"parser": {"play_enabled": False}}).context.play_enabled is True

    def test_lesson_parser_keeps_config(self):
        parser = lesson_parser({"parser": {"profile_url": "https://p/"}})
        assert parser.profile_url == "https://p/"


class TestLoadLessons:
    def test_loads_matching_files_sorted(self, lesson_dir):
        lessons = load_lessons(lesson_dir)

        assert list(lessons) == ["basics", "flow"]
        assert all(isinstance(lesson, Lesson) for lesson in lessons.values())
        assert lessons["flow"].title == "Flow control"
        assert lessons["flow"].description == ""

    def test_extension_from_config(self, lesson_dir):
        (lesson_dir / "extra.slide").write_text("Extra\n\n* One\n", encoding="utf-8")

        lessons = load_lessons(lesson_dir, {"lessons": {"extension": ".slide"}})

        assert list(lessons) == ["extra"]

    def test_malformed_lessons_table_uses_default_extension(self, lesson_dir):
        assert list(load_lessons(lesson_dir, {"lessons": ".slide"})) == ["basics", "flow"]

    def test_empty_directory(self, tmp_path):
        assert load_lessons(tmp_path) == {}

    def test_parse_error_names_file(self, lesson_dir):
        (lesson_dir / "broken.article").write_text("Broken\n\n* A\n\n.nope\n", encoding="utf-8")

        with pytest.raises(LessonLoadError) as exc_info:
            load_lessons(lesson_dir)

        err = exc_info.value
        assert err.path.name == "broken.article"
        assert str(err).startswith("parsing broken.article: ")
        assert "unknown command" in str(err)

    def test_invalid_utf8_lesson(self, lesson_dir):
        (lesson_dir / "binary.article").write_bytes(b"Binary\n\n* A\n\n\xff\xfe\n")

        with pytest.raises(LessonLoadError) as exc_info:
            load_lessons(lesson_dir)

        assert str(exc_info.value).startswith("parsing binary.article: ")
        assert "not valid UTF-8" in str(exc_info.value)

    def test_missing_play_file(self, lesson_dir):
        (lesson_dir / "gone.article").write_text(
            "Gone\n\n* A\n\n.play missing.go\n", encoding="utf-8"
        )

        with pytest.raises(LessonLoadError):
            load_lessons(lesson_dir)


class TestLessonToJson:
    def test_encodes_pages_and_files(self, lesson_dir):
        data = json.loads(lesson_to_json(parse_lesson(lesson_dir / "basics.article")))

        assert data["title"] == "Basics"
        assert data["pages"][0]["files"][0]["name"] == "hello.go"
        assert data["pages"][0]["content"]["elements"][1]["play"] is True
