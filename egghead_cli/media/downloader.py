"""
Handles the low-level downloading of lesson files over HTTP.
"""

import asyncio
import logging
import os
from pathlib import Path
from typing import Callable, Optional

import aiofiles
import aiohttp

from egghead_cli.api.client import EggheadClient
from egghead_cli.exceptions import TransferError

log = logging.getLogger(__name__)

ByteProgressCallback = Callable[[int, Optional[int]], None]


class Downloader:
    """Streams a remote file to disk, replacing whatever was there."""

    CHUNK_SIZE = 131072  # 128 KB

    def __init__(self, client: EggheadClient, chunk_size: int = CHUNK_SIZE):
        self._client = client
        self.chunk_size = chunk_size

    async def download_file(
        self,
        url: str,
        destination_path: Path,
        expected_size: Optional[int] = None,
        on_progress: Optional[ByteProgressCallback] = None,
    ) -> int:
        """
        Downloads url into destination_path and returns the number of bytes written.

        on_progress receives the cumulative byte count and the expected total
        (the response Content-Length when expected_size is unknown).

        Raises:
            TransferError: On any transport or write failure. The partially
                written file is left in place and bytes_downloaded records how
                far it got.
        """
        bytes_downloaded = 0
        try:
            async with self._client.stream(url) as response:
                total = expected_size
                if total is None and response.content_length is not None:
                    total = response.content_length
                if on_progress:
                    on_progress(0, total)

                async with aiofiles.open(destination_path, "wb") as f:
                    async for chunk in response.content.iter_chunked(self.chunk_size):
                        await f.write(chunk)
                        bytes_downloaded += len(chunk)
                        if on_progress:
                            on_progress(bytes_downloaded, total)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            log.debug(
                f"Download of '{os.path.basename(destination_path)}' failed "
                f"after {bytes_downloaded} bytes: {e}"
            )
            raise TransferError(
                f"Download failed: {e}", url=url, bytes_downloaded=bytes_downloaded
            ) from e
        except OSError as e:
            raise TransferError(
                f"Could not write '{destination_path}': {e}",
                url=url,
                bytes_downloaded=bytes_downloaded,
            ) from e

        return bytes_downloaded
