"""
Utilities for deriving the on-disk location of downloaded lessons.
"""

import re
from pathlib import Path

from pathvalidate import sanitize_filename

from egghead_cli.models.catalog import Course, Lesson, Technology

LESSON_EXTENSION = "mp4"

_WHITESPACE_REGEX = re.compile(r"\s+")


def safe_name(name: str) -> str:
    """Makes a catalog name safe to use as a single path component."""
    cleaned = sanitize_filename(name, replacement_text=" ", platform="universal")
    return _WHITESPACE_REGEX.sub(" ", cleaned).strip()


def technology_dir(download_path: Path, technology: Technology) -> Path:
    return download_path / safe_name(technology.name)


def course_dir(download_path: Path, technology: Technology, course: Course) -> Path:
    return technology_dir(download_path, technology) / safe_name(course.name)


def lesson_file_name(lesson: Lesson) -> str:
    """Builds '<NN> <lesson name>.mp4' with a zero-padded lesson number."""
    title = safe_name(f"{lesson.lesson_number:02} {lesson.name}")
    return f"{title}.{LESSON_EXTENSION}"


def lesson_path(
    download_path: Path, technology: Technology, course: Course, lesson: Lesson
) -> Path:
    """
    Returns the destination of a lesson file.

    The result depends only on the technology name, course name, lesson number
    and lesson name, so the same lesson always maps to the same file.
    """
    return course_dir(download_path, technology, course) / lesson_file_name(lesson)
