"""
Retrieves the technology -> course catalog for a signed-in session.
"""

import asyncio
import logging
import re
from typing import Callable, List, Optional

import aiohttp

from egghead_cli.exceptions import RetrievalError
from egghead_cli.models.catalog import Course, Technology, sort_by_name
from egghead_cli.models.session import Session, require_authenticated
from egghead_cli.web.extractor import CourseListing, Extractor

log = logging.getLogger(__name__)

_COURSE_CODE_REGEX = re.compile(r"/courses/(?P<code>[^/?#]+)")

ProgressCallback = Callable[[int, int], None]


def parse_course_code(url: str) -> str:
    """
    Extracts the stable course code from a course URL.

    Returns an empty string when the URL has no '/courses/<code>' segment.
    """
    match = _COURSE_CODE_REGEX.search(url or "")
    return match.group("code") if match else ""


class CatalogService:
    """Materializes the sorted catalog tree from the courses page."""

    def __init__(self, extractor: Optional[Extractor] = None):
        self._extractor = extractor or Extractor()

    async def list_catalog(
        self,
        session: Optional[Session],
        on_progress: Optional[ProgressCallback] = None,
    ) -> List[Technology]:
        """
        Returns every technology with its courses, both levels sorted by name.

        Raises:
            NotAuthenticated: If the session is missing or not signed in.
            RetrievalError: If the catalog page cannot be fetched.
        """
        session = require_authenticated(session)
        client = session.client

        catalog_url = client.url("courses")
        try:
            document = await client.get_text(catalog_url)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise RetrievalError(
                f"Could not retrieve the course listing: {e}", url=catalog_url
            ) from e
        listings = self._extractor.extract_catalog(document)

        technologies = []
        for index, listing in enumerate(listings, start=1):
            courses = [self._to_course(course) for course in listing.courses]
            technologies.append(
                Technology(name=listing.name, courses=tuple(sort_by_name(courses)))
            )
            if on_progress:
                on_progress(index, len(listings))

        log.debug(
            f"Catalog contains {len(technologies)} technologies and "
            f"{sum(len(t.courses) for t in technologies)} courses."
        )
        return sort_by_name(technologies)

    @staticmethod
    def _to_course(listing: CourseListing) -> Course:
        code = parse_course_code(listing.url)
        if not code:
            log.debug(f"Could not derive a course code from '{listing.url}'.")
        return Course(
            name=listing.name,
            code=code,
            url=listing.url,
            lesson_count=listing.lesson_count,
        )
