from pathlib import Path

from egghead_cli.models.catalog import Course, Lesson, Technology
from egghead_cli.utils.path import lesson_file_name, lesson_path, safe_name

TECHNOLOGY = Technology(name="React")
COURSE = Course(name="Redux: The Basics", code="redux", url="", lesson_count=12)


def test_lesson_file_name_pads_number() -> None:
    lesson = Lesson(name="Introduction", lesson_number=3, url="")
    assert lesson_file_name(lesson) == "03 Introduction.mp4"


def test_lesson_file_name_keeps_wide_numbers() -> None:
    lesson = Lesson(name="Wrap up", lesson_number=112, url="")
    assert lesson_file_name(lesson) == "112 Wrap up.mp4"


def test_safe_name_replaces_unsafe_characters_with_spaces() -> None:
    assert safe_name("Redux: The Basics") == "Redux The Basics"
    assert safe_name("a/b\\c") == "a b c"
    assert "?" not in safe_name("What is a closure?")


def test_lesson_path_layout() -> None:
    lesson = Lesson(name="Use <Provider>", lesson_number=1, url="")

    path = lesson_path(Path("/videos"), TECHNOLOGY, COURSE, lesson)

    assert path == Path("/videos/React/Redux The Basics/01 Use Provider.mp4")


def test_lesson_path_ignores_url_and_size() -> None:
    a = Lesson(name="Intro", lesson_number=1, url="https://cdn/a.mp4")
    b = Lesson(name="Intro", lesson_number=1, url="")

    assert lesson_path(Path("d"), TECHNOLOGY, COURSE, a) == lesson_path(
        Path("d"), TECHNOLOGY, COURSE, b
    )
