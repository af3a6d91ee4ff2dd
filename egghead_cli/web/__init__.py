"""
Web Scraping Layer.

This package turns the HTML pages and RSS feeds served by egghead.io into
typed records.
"""

from .extractor import CourseListing, Extractor, FeedItem, TechnologyListing

__all__ = ["CourseListing", "Extractor", "FeedItem", "TechnologyListing"]
