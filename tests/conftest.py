from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from typing import Any

import pytest
from aiohttp import web
from aiohttp.test_utils import TestServer

from egghead_cli.api.client import URLS
from egghead_cli.models.session import Credentials, Session

CATALOG_HTML = """
<html><body>
<div class="jump-into-technologies"><div class="technologies-list">
  <div class="item-wrapper">
    <a class="anchor-to-technology" data-technology="vue"></a>
    <span class="title"> Vue </span>
  </div>
  <div class="item-wrapper">
    <a class="anchor-to-technology" data-technology="react"></a>
    <span class="title">React</span>
  </div>
</div></div>

<section id="technology-react">
  <div class="card-course"><div class="card-content">
    <a class="link-overlay" href="https://egghead.io/courses/redux-basics"></a>
    <h3 class="course-title">Redux Basics</h3>
    <div class="lessons-in-course-number-holder"><span class="total">3</span></div>
  </div></div>
  <div class="card-course"><div class="card-content">
    <a class="link-overlay" href="/courses/hooks-in-depth?ref=list"></a>
    <h3 class="course-title">Hooks in Depth</h3>
    <div class="lessons-in-course-number-holder"><span class="total"> 12 </span></div>
  </div></div>
</section>

<section id="technology-vue">
  <div class="card-course"><div class="card-content">
    <a class="link-overlay" href="https://egghead.io/playlists/vuex"></a>
    <h3 class="course-title">Vuex Essentials</h3>
    <div class="lessons-in-course-number-holder"><span class="total">n/a</span></div>
  </div></div>
</section>
</body></html>
"""

FEED_XML = """<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0"><channel>
  <title>Redux Basics</title>
  <item>
    <title>Introduction</title>
    <enclosure url="https://cdn.example.com/redux/01.mp4" length="1000" type="video/mp4"/>
  </item>
  <item>
    <title>Reducers</title>
  </item>
  <item>
    <title>Store</title>
    <enclosure url="https://cdn.example.com/redux/03.mp4" length="2000" type="video/mp4"/>
  </item>
</channel></rss>
"""


class FakeClient:
    """Serves canned documents keyed by URL and records every request."""

    def __init__(
        self,
        documents: dict[str, str] | None = None,
        error: Exception | None = None,
    ):
        self.documents = documents or {}
        self.error = error
        self.requests: list[tuple[str, dict[str, str] | None]] = []

    def url(self, name: str, **kwargs: Any) -> str:
        return URLS[name].format(**kwargs)

    async def get_text(self, url: str, params: dict[str, str] | None = None) -> str:
        self.requests.append((url, params))
        if self.error is not None:
            raise self.error
        return self.documents[url]


def make_session(client: Any = None, token: str = "tok-123") -> Session:
    return Session(
        credentials=Credentials(email="dev@example.com", password="hunter2"),
        access_token=token,
        client=client if client is not None else FakeClient(),
    )


def serve(
    app: web.Application, scenario: Callable[[TestServer], Awaitable[Any]]
) -> Any:
    """Runs scenario against app served on a local test server."""

    async def _run() -> Any:
        async with TestServer(app) as server:
            return await scenario(server)

    return asyncio.run(_run())


@pytest.fixture
def session() -> Session:
    return make_session()
