"""
Resolves the size of a remote lesson file without downloading it.
"""

import asyncio
import logging
from typing import Optional

import aiohttp

from egghead_cli.api.client import EggheadClient
from egghead_cli.exceptions import TransferError

log = logging.getLogger(__name__)


class FileSizeProber:
    """Metadata-only size lookups over HEAD requests."""

    def __init__(self, client: EggheadClient):
        self._client = client

    async def probe(self, url: str) -> Optional[int]:
        """
        Returns the declared Content-Length of a resource, or None if unknown.

        An empty url (a lesson without a file) is unknown and costs no request.

        Raises:
            TransferError: If the request fails.
        """
        if not url:
            return None
        try:
            return await self._client.head_content_length(url)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise TransferError(f"Size probe failed: {e}", url=url) from e
