"""
Async HTTP transport for egghead.io with a persistent cookie jar.
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, Optional

import aiohttp

log = logging.getLogger(__name__)

BASE_URL = "https://egghead.io"

URLS = {
    "login": f"{BASE_URL}/users/sign_in",
    "membership": f"{BASE_URL}/users/edit",
    "courses": f"{BASE_URL}/courses",
    "course_feed": f"{BASE_URL}/courses/{{code}}/course_feed",
}


class EggheadClient:
    """
    Thin async wrapper around a single aiohttp session.

    The session's cookie jar carries the signed-in state between the sign-in
    form submission and every later page, feed, probe and download request.
    """

    def __init__(self, max_connections: int = 10, base_url: str = BASE_URL):
        """
        Initializes the client.

        Args:
            max_connections: Upper bound for simultaneous connections per host,
                matched to the size probe worker count.
            base_url: Root of the site; every endpoint in URLS is rebased onto it.
        """
        self.max_connections = max_connections
        self.base_url = base_url.rstrip("/")
        self._session: Optional[aiohttp.ClientSession] = None

    def url(self, name: str, **kwargs: Any) -> str:
        """Builds an endpoint URL from its name, rebased onto base_url."""
        return URLS[name].format(**kwargs).replace(BASE_URL, self.base_url, 1)

    async def _initialize_session(self) -> aiohttp.ClientSession:
        """Ensures an active aiohttp session is available."""
        if self._session is None or self._session.closed:
            connector = aiohttp.TCPConnector(
                limit=self.max_connections * 2,
                limit_per_host=self.max_connections,
                ttl_dns_cache=300,
                enable_cleanup_closed=True,
            )
            self._session = aiohttp.ClientSession(
                connector=connector,
                cookie_jar=aiohttp.CookieJar(),
                headers={
                    "Accept": "*/*",
                    "Accept-Language": "en-GB,en-US;q=0.8,en;q=0.6",
                    "User-Agent": "Mozilla/5.0 (Windows NT 10.0; Win64; x64; rv:121.0) Gecko/20100101 Firefox/121.0",
                    "Accept-Encoding": "gzip, deflate",
                },
                timeout=aiohttp.ClientTimeout(total=None, sock_connect=15, sock_read=90),
            )
        return self._session

    async def close(self) -> None:
        """Gracefully closes the aiohttp session."""
        if self._session and not self._session.closed:
            await self._session.close()

    async def __aenter__(self) -> "EggheadClient":
        await self._initialize_session()
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    async def get_text(self, url: str, params: Optional[Dict[str, str]] = None) -> str:
        """GETs a document and returns its body; raises on error statuses."""
        session = await self._initialize_session()
        log.debug(f"GET {url}")
        async with session.get(url, params=params, allow_redirects=True) as r:
            r.raise_for_status()
            return await r.text()

    async def post_form(self, url: str, form: Dict[str, str]) -> str:
        """POSTs an url-encoded form and returns the response body."""
        session = await self._initialize_session()
        log.debug(f"POST {url}")
        async with session.post(
            url,
            data=form,
            allow_redirects=True,
            headers={"Origin": self.base_url, "Referer": url},
        ) as r:
            r.raise_for_status()
            return await r.text()

    async def head_content_length(self, url: str) -> Optional[int]:
        """
        Issues a HEAD request and returns the declared Content-Length.

        Returns None if the header is missing or not a number.
        """
        session = await self._initialize_session()
        async with session.head(url, allow_redirects=True) as r:
            r.raise_for_status()
            value = r.headers.get("Content-Length")
        if value is None:
            return None
        try:
            return int(value)
        except ValueError:
            log.debug(f"Ignoring malformed Content-Length '{value}' for {url}")
            return None

    @asynccontextmanager
    async def stream(self, url: str) -> AsyncIterator[aiohttp.ClientResponse]:
        """Opens a streamed GET; the body is read by the caller."""
        session = await self._initialize_session()
        async with session.get(url, allow_redirects=True) as r:
            r.raise_for_status()
            yield r
