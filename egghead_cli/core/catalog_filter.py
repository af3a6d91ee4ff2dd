"""
Narrows a catalog to the technologies or courses a user asked for.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence

from egghead_cli.exceptions import CourseNotFound, FilterAmbiguous, TechnologyNotFound
from egghead_cli.models.catalog import FilterKind, Technology, count_courses

log = logging.getLogger(__name__)


def _matches(name: str, query: str) -> bool:
    return query.lower() in name.lower()


@dataclass(frozen=True)
class CatalogFilter:
    """A case-insensitive substring filter on technology or course names."""

    kind: FilterKind
    name: str

    @classmethod
    def from_options(
        cls, technology: Optional[str] = None, course: Optional[str] = None
    ) -> Optional["CatalogFilter"]:
        """
        Builds the filter from caller input; None means no filter.

        Raises:
            FilterAmbiguous: If both a technology and a course name are given.
        """
        if technology and course:
            raise FilterAmbiguous(technology, course)
        if technology:
            return cls(FilterKind.TECHNOLOGY, technology)
        if course:
            return cls(FilterKind.COURSE, course)
        return None

    def apply(self, technologies: Sequence[Technology]) -> List[Technology]:
        """
        Returns the matching part of the catalog, order preserved.

        A technology filter keeps whole technologies. A course filter keeps
        every technology but only its matching courses, so technologies may be
        left with no courses.

        Raises:
            TechnologyNotFound, CourseNotFound: If no course survives the filter.
        """
        if self.kind is FilterKind.TECHNOLOGY:
            result = [t for t in technologies if _matches(t.name, self.name)]
        else:
            result = [
                t.with_courses(c for c in t.courses if _matches(c.name, self.name))
                for t in technologies
            ]

        if count_courses(result) == 0:
            if self.kind is FilterKind.TECHNOLOGY:
                raise TechnologyNotFound(self.name)
            raise CourseNotFound(self.name)

        log.debug(
            f"Filter {self.kind.value}='{self.name}' matched "
            f"{count_courses(result)} courses."
        )
        return result


def apply_filter(
    catalog_filter: Optional[CatalogFilter], technologies: Sequence[Technology]
) -> List[Technology]:
    """Applies an optional filter; no filter returns the catalog unchanged."""
    if catalog_filter is None:
        return list(technologies)
    return catalog_filter.apply(technologies)
