"""Catalog Module for gnomex.

Talks to the extensions.gnome.org catalog:
- Paginated search into an index keyed by UUID
- Version-aware download URL construction
- Streamed archive download with progress reporting
"""

from .client import CatalogClient, CatalogIndex, Extension, SearchPage, VersionBuild
from .download import ExtensionDownloader, build_download_url, megabytes, resolve_build

__all__ = [
    "CatalogClient",
    "CatalogIndex",
    "Extension",
    "SearchPage",
    "VersionBuild",
    "ExtensionDownloader",
    "build_download_url",
    "megabytes",
    "resolve_build",
]
