"""
egghead.io Access Layer.

This package handles all communication with egghead.io: the HTTP transport,
sign-in, the course catalog and the per-course lesson feeds.
"""

from .auth import SessionAuthenticator
from .catalog import CatalogService
from .client import EggheadClient
from .feed import LessonFeedService

__all__ = ["CatalogService", "EggheadClient", "LessonFeedService", "SessionAuthenticator"]
