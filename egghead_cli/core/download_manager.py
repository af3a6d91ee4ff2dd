"""
The main orchestrator: enriches a filtered catalog with lessons and file sizes,
orders it into a transfer plan and downloads the plan one lesson at a time.
"""

import asyncio
import logging
from enum import Enum
from pathlib import Path
from typing import Callable, List, Optional, Sequence

from egghead_cli.api.feed import LessonFeedService
from egghead_cli.exceptions import RetrievalError, TransferError
from egghead_cli.media import Downloader, FileSizeProber
from egghead_cli.models.catalog import (
    Course,
    CourseWithLessons,
    LessonWithFileSize,
    Technology,
    TransferTask,
    count_lessons,
)
from egghead_cli.models.config import DEFAULT_PROBE_WORKERS
from egghead_cli.models.session import Session, require_authenticated
from egghead_cli.models.stats import DownloadStats
from egghead_cli.storage.file_gate import FileSystemGate
from egghead_cli.utils.formatting import format_size
from egghead_cli.utils.path import lesson_path

log = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int], None]
ByteProgressCallback = Callable[[int, Optional[int]], None]


class TransferOutcome(Enum):
    """How a single task in the plan ended."""

    DOWNLOADED = "downloaded"
    SKIPPED = "skipped"
    UNAVAILABLE = "unavailable"


class _LessonCounter:
    """Shared 'lessons checked / lessons total' counter for the enrichment stage."""

    def __init__(self, total: int, callback: Optional[ProgressCallback]):
        self.checked = 0
        self.total = total
        self._callback = callback

    def _notify(self) -> None:
        if self._callback:
            self._callback(self.checked, self.total)

    def adjust_total(self, delta: int) -> None:
        self.total += delta
        self._notify()

    def advance(self) -> None:
        self.checked += 1
        self._notify()


class DownloadScheduler:
    """Orchestrates the enrich, plan and transfer stages for one session."""

    def __init__(
        self,
        session: Session,
        feed_service: LessonFeedService,
        prober: FileSizeProber,
        downloader: Downloader,
        gate: FileSystemGate,
        probe_workers: int = DEFAULT_PROBE_WORKERS,
    ):
        if probe_workers < 1:
            raise ValueError("probe_workers must be at least 1.")
        self.session = require_authenticated(session)
        self.feed_service = feed_service
        self.prober = prober
        self.downloader = downloader
        self.gate = gate
        self.probe_workers = probe_workers
        self.stats = DownloadStats()

    @classmethod
    def for_session(
        cls,
        session: Session,
        probe_workers: int = DEFAULT_PROBE_WORKERS,
        overwrite: bool = False,
    ) -> "DownloadScheduler":
        """Builds a scheduler wired to the session's HTTP client."""
        session = require_authenticated(session)
        return cls(
            session=session,
            feed_service=LessonFeedService(),
            prober=FileSizeProber(session.client),
            downloader=Downloader(session.client),
            gate=FileSystemGate(overwrite=overwrite),
            probe_workers=probe_workers,
        )

    # Stage A: enrichment

    async def enrich(
        self,
        technologies: Sequence[Technology],
        on_progress: Optional[ProgressCallback] = None,
    ) -> List[Technology]:
        """
        Attaches lessons and their file sizes to every course.

        Technologies and courses are processed one at a time; within a course
        at most probe_workers size probes are in flight. on_progress receives
        (lessons checked, lessons total) as probes complete.

        Raises:
            TransferError: On the first failed feed fetch or probe; the rest of
                the batch is cancelled.
        """
        counter = _LessonCounter(count_lessons(technologies), on_progress)
        enriched = []
        for technology in technologies:
            courses = []
            for course in technology.courses:
                courses.append(await self._enrich_course(technology, course, counter))
            enriched.append(technology.with_courses(courses))
        return enriched

    async def _enrich_course(
        self, technology: Technology, course: Course, counter: _LessonCounter
    ) -> CourseWithLessons:
        try:
            lessons = await self.feed_service.list_lessons(self.session, course)
        except RetrievalError as e:
            raise TransferError(
                f"{technology.name} / {course.name}: {e}",
                url=e.url or course.url,
            ) from e

        if len(lessons) != course.lesson_count:
            log.warning(
                f"[yellow]Course '{course.name}' lists {course.lesson_count} lessons "
                f"but its feed has {len(lessons)}.[/yellow]"
            )
            counter.adjust_total(len(lessons) - course.lesson_count)

        semaphore = asyncio.Semaphore(self.probe_workers)

        async def probe(lesson) -> LessonWithFileSize:
            async with semaphore:
                try:
                    size = await self.prober.probe(lesson.url)
                except TransferError as e:
                    raise TransferError(
                        f"Could not check the size of lesson {lesson.lesson_number} "
                        f"'{lesson.name}' of {technology.name} / {course.name}: {e}",
                        url=lesson.url,
                    ) from e
            counter.advance()
            return LessonWithFileSize.from_lesson(lesson, size)

        tasks = [asyncio.ensure_future(probe(lesson)) for lesson in lessons]
        try:
            sized_lessons = await asyncio.gather(*tasks)
        except BaseException:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

        return CourseWithLessons.from_course(course, sized_lessons)

    # Stage B: flattening and ordering

    @staticmethod
    def plan(
        technologies: Sequence[Technology], download_path: Path
    ) -> List[TransferTask]:
        """
        Flattens an enriched catalog into transfer tasks.

        Tasks are ordered by technology name, course name and lesson number, so
        the plan does not depend on the order in which enrichment finished.
        """
        entries = [
            (technology, course, lesson)
            for technology in technologies
            for course in technology.courses
            for lesson in getattr(course, "lessons", ())
        ]
        entries.sort(key=lambda e: (e[0].name, e[1].name, e[2].lesson_number))

        download_path = Path(download_path)
        tasks = []
        for index, (technology, course, lesson) in enumerate(entries):
            if not isinstance(lesson, LessonWithFileSize):
                lesson = LessonWithFileSize.from_lesson(lesson, None)
            tasks.append(
                TransferTask(
                    technology=technology,
                    course=course,
                    lesson=lesson,
                    destination=lesson_path(download_path, technology, course, lesson),
                    sequence_index=index,
                    total_count=len(entries),
                )
            )
        return tasks

    # Stage C: transfer

    async def transfer(
        self,
        tasks: Sequence[TransferTask],
        on_task_start: Optional[Callable[[TransferTask], None]] = None,
        on_progress: Optional[ByteProgressCallback] = None,
        on_task_done: Optional[Callable[[TransferTask, TransferOutcome], None]] = None,
    ) -> DownloadStats:
        """
        Executes the plan strictly in order, one task at a time.

        stats.finished is True only if every task reached an outcome; a failure
        or cancellation leaves it False.

        Raises:
            TransferError: On the first failed download or local write. The
                task, the byte count reached and the partially written file are
                left for the caller and the next run to deal with.
        """
        self.stats.start()
        finished = False
        try:
            for task in tasks:
                if on_task_start:
                    on_task_start(task)
                outcome = await self._transfer_task(task, on_progress)
                if on_task_done:
                    on_task_done(task, outcome)
            finished = True
        finally:
            self.stats.stop(finished)
        return self.stats

    async def _transfer_task(
        self, task: TransferTask, on_progress: Optional[ByteProgressCallback]
    ) -> TransferOutcome:
        lesson = task.lesson
        if not lesson.url:
            log.warning(
                f"[yellow]No downloadable file for {task.position}/{task.total_count}: "
                f"{task.describe()}[/yellow]"
            )
            self.stats.lessons_unavailable += 1
            return TransferOutcome.UNAVAILABLE

        try:
            self.gate.ensure_directory(task.destination.parent)
            if not self.gate.should_download(task.destination, lesson.file_size):
                log.debug(f"Skipping '{task.destination.name}' (already downloaded).")
                self.stats.lessons_skipped_exists += 1
                return TransferOutcome.SKIPPED

            written = await self.downloader.download_file(
                lesson.url, task.destination, lesson.file_size, on_progress=on_progress
            )
        except (TransferError, OSError) as e:
            self.stats.lessons_failed += 1
            reached = getattr(e, "bytes_downloaded", None) or 0
            raise TransferError(
                f"Failed to download {task.position}/{task.total_count}: "
                f"{task.describe()} after {format_size(reached)} of "
                f"{format_size(lesson.file_size)} ({e})",
                url=lesson.url,
                bytes_downloaded=reached,
                task=task,
            ) from e

        self.stats.lessons_downloaded += 1
        self.stats.total_size_downloaded += written
        self.stats.courses_processed.add(f"{task.technology.name}/{task.course.name}")
        return TransferOutcome.DOWNLOADED

    async def run(
        self,
        technologies: Sequence[Technology],
        download_path: Path,
        on_enrich_progress: Optional[ProgressCallback] = None,
        on_task_start: Optional[Callable[[TransferTask], None]] = None,
        on_progress: Optional[ByteProgressCallback] = None,
    ) -> DownloadStats:
        """Runs enrichment, planning and transfer back to back."""
        enriched = await self.enrich(technologies, on_progress=on_enrich_progress)
        tasks = self.plan(enriched, download_path)
        log.info(f"Transferring {len(tasks)} lessons...")
        return await self.transfer(
            tasks, on_task_start=on_task_start, on_progress=on_progress
        )
