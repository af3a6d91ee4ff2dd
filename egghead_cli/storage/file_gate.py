"""
Decides whether a lesson file on disk must be (re)downloaded.
"""

import logging
from pathlib import Path
from typing import Optional

log = logging.getLogger(__name__)


class FileSystemGate:
    """
    Local existence and size checks in front of every transfer.

    File size is the only integrity signal: a file whose size matches the
    expected size is complete, anything else is stale and is removed.
    """

    def __init__(self, overwrite: bool = False):
        """
        Args:
            overwrite: Delete and re-download files even when they are complete.
        """
        self.overwrite = overwrite

    @staticmethod
    def ensure_directory(directory_path: Path) -> None:
        """Creates a directory if it does not already exist."""
        directory_path.mkdir(parents=True, exist_ok=True)

    def should_download(self, path: Path, expected_size: Optional[int]) -> bool:
        """
        Returns True if path must be downloaded.

        - No file: download.
        - File of the expected size: skip, the file is left untouched.
        - File of any other size: delete it, then download.
        - Unknown expected size: download, completeness cannot be verified.
        """
        if not path.is_file():
            return True

        if self.overwrite:
            log.debug(f"Overwriting '{path.name}'.")
            path.unlink()
            return True

        if expected_size is None:
            return True

        actual_size = path.stat().st_size
        if actual_size == expected_size:
            return False

        log.debug(
            f"Discarding '{path.name}': {actual_size} bytes on disk, "
            f"{expected_size} expected."
        )
        path.unlink()
        return True
