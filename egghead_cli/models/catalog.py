"""
Immutable value types for the course catalog and the transfer plan.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path


@dataclass(frozen=True)
class Lesson:
    """One downloadable unit of a course, numbered by its feed position."""

    name: str
    lesson_number: int
    url: str


@dataclass(frozen=True)
class LessonWithFileSize(Lesson):
    """A lesson together with the byte size its resource advertises."""

    file_size: int | None = None

    @classmethod
    def from_lesson(
        cls, lesson: Lesson, file_size: int | None
    ) -> "LessonWithFileSize":
        return cls(
            name=lesson.name,
            lesson_number=lesson.lesson_number,
            url=lesson.url,
            file_size=file_size,
        )


@dataclass(frozen=True)
class Course:
    """A named course with its stable remote code and advertised lesson count."""

    name: str
    code: str
    url: str
    lesson_count: int


@dataclass(frozen=True)
class CourseWithLessons(Course):
    """A course enriched with its ordered lessons."""

    lessons: tuple[Lesson, ...] = ()

    @classmethod
    def from_course(
        cls, course: Course, lessons: list[Lesson] | tuple[Lesson, ...]
    ) -> "CourseWithLessons":
        return cls(
            name=course.name,
            code=course.code,
            url=course.url,
            lesson_count=course.lesson_count,
            lessons=tuple(lessons),
        )

    @property
    def total_size(self) -> int:
        """Sum of the known lesson sizes."""
        return sum(getattr(lesson, "file_size", None) or 0 for lesson in self.lessons)


@dataclass(frozen=True)
class Technology:
    """A top-level catalog grouping and its courses, sorted by name."""

    name: str
    courses: tuple[Course, ...] = field(default_factory=tuple)

    def with_courses(self, courses) -> "Technology":
        return Technology(name=self.name, courses=tuple(courses))

    @property
    def lesson_count(self) -> int:
        """Advertised lesson total over all courses."""
        return sum(course.lesson_count for course in self.courses)


class FilterKind(Enum):
    """Which level of the catalog a filter narrows."""

    TECHNOLOGY = "technology"
    COURSE = "course"


@dataclass(frozen=True)
class TransferTask:
    """A single, fully specified lesson download in the ordered plan."""

    technology: Technology
    course: Course
    lesson: LessonWithFileSize
    destination: Path
    sequence_index: int
    total_count: int

    @property
    def position(self) -> int:
        """1-based position of the task in the plan."""
        return self.sequence_index + 1

    def describe(self) -> str:
        return f"{self.technology.name} / {self.course.name} / {self.lesson.name}"


def sort_by_name(items):
    """Sorts catalog entries by name; case-sensitive and locale independent."""
    return sorted(items, key=lambda item: item.name)


def count_lessons(technologies) -> int:
    """Advertised lesson total over a list of technologies."""
    return sum(technology.lesson_count for technology in technologies)


def count_courses(technologies) -> int:
    return sum(len(technology.courses) for technology in technologies)
