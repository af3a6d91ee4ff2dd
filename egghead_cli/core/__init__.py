"""
Core application engine for orchestrating the download process.

This package contains the primary logic. `CatalogFilter` narrows the catalog
to what the user asked for and the `DownloadScheduler` turns the result into
downloaded lesson files.
"""
