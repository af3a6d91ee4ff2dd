"""
Media Transfer Layer.

This package is responsible for the lesson files themselves: probing their
size and streaming them to disk.
"""

from .downloader import Downloader
from .prober import FileSizeProber

__all__ = ["Downloader", "FileSizeProber"]
