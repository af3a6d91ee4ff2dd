"""
Turns raw egghead.io documents into typed records.

Every piece of markup knowledge lives here, so the services only ever see the
record shapes below and never the structure of a page or feed.
"""

import logging
from dataclasses import dataclass, field
from urllib.parse import parse_qs, urlparse

from bs4 import BeautifulSoup

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class CourseListing:
    """A course as it appears on the catalog page."""

    name: str
    url: str
    lesson_count: int


@dataclass(frozen=True)
class TechnologyListing:
    """A technology section of the catalog page with its courses."""

    name: str
    courses: list[CourseListing] = field(default_factory=list)


@dataclass(frozen=True)
class FeedItem:
    """One item of a course feed."""

    title: str
    ordinal: int
    enclosure_url: str


def _clean_text(text: str) -> str:
    text = text.strip()
    if text.startswith("<![CDATA[") and text.endswith("]]>"):
        text = text[9:-3].strip()
    return text


def _parse_int(text: str) -> int:
    try:
        return int(text.strip())
    except ValueError:
        return 0


class Extractor:
    """Structured extraction of sign-in, membership, catalog and feed documents."""

    def __init__(self, parser: str = "html.parser"):
        self.parser = parser

    def _soup(self, document: str) -> BeautifulSoup:
        return BeautifulSoup(document, self.parser)

    def extract_csrf_token(self, document: str) -> str:
        """Returns the anti-forgery token of the sign-in page, or ''."""
        meta = self._soup(document).select_one('meta[name="csrf-token"]')
        return (meta.get("content") or "").strip() if meta else ""

    def extract_access_token(self, document: str) -> str:
        """
        Returns the durable feed token from the membership page, or ''.

        The token is carried as the ``user_token`` query parameter of the
        course feed links, or as a ``data-user-token`` attribute.
        """
        soup = self._soup(document)
        for link in soup.select('a[href*="user_token="]'):
            values = parse_qs(urlparse(link["href"]).query).get("user_token")
            if values and values[0]:
                return values[0]
        holder = soup.select_one("[data-user-token]")
        if holder:
            return (holder.get("data-user-token") or "").strip()
        return ""

    def extract_catalog(self, document: str) -> list[TechnologyListing]:
        """Returns the technology sections and their courses in page order."""
        soup = self._soup(document)
        technologies = []

        for wrapper in soup.select(
            ".jump-into-technologies .technologies-list .item-wrapper"
        ):
            title = wrapper.select_one(".title")
            anchor = wrapper.select_one("a.anchor-to-technology")
            code_name = anchor.get("data-technology", "") if anchor else ""
            section = soup.find(id=f"technology-{code_name}") if code_name else None

            courses = []
            if section is not None:
                for card in section.select(".card-course .card-content"):
                    course_title = card.select_one(".course-title")
                    link = card.select_one("a.link-overlay")
                    total = card.select_one(".lessons-in-course-number-holder .total")
                    courses.append(
                        CourseListing(
                            name=course_title.get_text().strip() if course_title else "",
                            url=(link.get("href") or "") if link else "",
                            lesson_count=_parse_int(total.get_text()) if total else 0,
                        )
                    )
            else:
                log.debug(f"No course section found for technology '{code_name}'.")

            technologies.append(
                TechnologyListing(
                    name=title.get_text().strip() if title else "", courses=courses
                )
            )

        return technologies

    def extract_feed_items(self, document: str) -> list[FeedItem]:
        """Returns the feed items in document order, numbered from 1."""
        soup = self._soup(document)
        items = []
        for ordinal, item in enumerate(soup.find_all("item"), start=1):
            title = item.find("title")
            enclosure = item.find("enclosure")
            items.append(
                FeedItem(
                    title=_clean_text(title.get_text()) if title else "",
                    ordinal=ordinal,
                    enclosure_url=(enclosure.get("url") or "") if enclosure else "",
                )
            )
        return items
