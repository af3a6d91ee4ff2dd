"""
Data Models Layer.

This package contains the value types used throughout the application: the
course catalog, the authenticated session, configuration and statistics.
"""

from .catalog import (
    Course,
    CourseWithLessons,
    FilterKind,
    Lesson,
    LessonWithFileSize,
    Technology,
    TransferTask,
)
from .config import DownloadConfig
from .session import Credentials, Session
from .stats import DownloadStats

__all__ = [
    "Course",
    "CourseWithLessons",
    "Credentials",
    "DownloadConfig",
    "DownloadStats",
    "FilterKind",
    "Lesson",
    "LessonWithFileSize",
    "Session",
    "Technology",
    "TransferTask",
]
