"""
Retrieves the ordered lesson list of a course from its RSS feed.
"""

import asyncio
import logging
from typing import List, Optional

import aiohttp

from egghead_cli.exceptions import RetrievalError
from egghead_cli.models.catalog import Course, Lesson
from egghead_cli.models.session import Session, require_authenticated
from egghead_cli.web.extractor import Extractor

log = logging.getLogger(__name__)


class LessonFeedService:
    """Maps the items of a per-course feed to numbered lessons."""

    def __init__(self, extractor: Optional[Extractor] = None):
        self._extractor = extractor or Extractor()

    async def list_lessons(
        self, session: Optional[Session], course: Course
    ) -> List[Lesson]:
        """
        Returns the lessons of a course in feed order, numbered from 1.

        Items without an enclosure are kept with an empty url so the numbering
        always covers every feed item.

        Raises:
            RetrievalError: If the feed cannot be fetched.
        """
        session = require_authenticated(session)
        client = session.client

        feed_url = client.url("course_feed", code=course.code)
        params = {
            "user_email": session.credentials.email,
            "user_token": session.access_token,
        }
        try:
            document = await client.get_text(feed_url, params=params)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise RetrievalError(
                f"Could not retrieve the lessons of '{course.name}': {e}", url=feed_url
            ) from e

        lessons = [
            Lesson(
                name=item.title,
                lesson_number=lesson_number,
                url=item.enclosure_url,
            )
            for lesson_number, item in enumerate(
                self._extractor.extract_feed_items(document), start=1
            )
        ]

        missing = sum(1 for lesson in lessons if not lesson.url)
        if missing:
            log.debug(
                f"{missing} lesson(s) of '{course.name}' have no downloadable file."
            )
        return lessons
