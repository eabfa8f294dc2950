"""Catalog Client for gnomex.

Queries the extensions.gnome.org search endpoint page by page and collects the
results into a CatalogIndex keyed by extension UUID.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import requests

from ..config import Settings
from ..errors import CatalogError

logger = logging.getLogger(__name__)


@dataclass
class VersionBuild:
    """A build of an extension for one shell release line."""
    pk: int
    version: int

    @classmethod
    def from_api(cls, data: dict) -> "VersionBuild":
        return cls(pk=int(data.get("pk", 0)), version=int(data["version"]))


@dataclass
class Extension:
    """Normalized extension record."""
    uuid: str
    name: str
    creator: str = ""
    description: str = ""
    link: str = ""
    shell_version_map: Dict[str, VersionBuild] = field(default_factory=dict)

    @classmethod
    def from_api(cls, data: dict) -> "Extension":
        uuid = data["uuid"]
        if not isinstance(uuid, str) or not uuid:
            raise ValueError(f"invalid extension uuid: {uuid!r}")

        versions = data.get("shell_version_map") or {}
        return cls(
            uuid=uuid,
            name=data.get("name") or "",
            creator=data.get("creator") or "",
            description=data.get("description") or "",
            link=data.get("link") or "",
            shell_version_map={
                str(shell): VersionBuild.from_api(build) for shell, build in versions.items()
            },
        )

    def build_for(self, shell_version: str) -> Optional[VersionBuild]:
        """Build published for exactly this "major.minor" shell version."""
        return self.shell_version_map.get(shell_version)


# UUID -> Extension, owned by a single command invocation.
CatalogIndex = Dict[str, Extension]


@dataclass
class SearchPage:
    """One page of search results."""
    page: int
    numpages: int
    extensions: List[Extension] = field(default_factory=list)


class CatalogClient:
    """Client for the extensions.gnome.org search endpoint.

    Every query goes to the network; there is no local cache. Failures are
    never retried and surface as CatalogError with the URL and raw body.
    """

    def __init__(self, settings: Optional[Settings] = None, session: Optional[requests.Session] = None):
        self.settings = settings or Settings.load()
        self._session = session or requests.Session()
        self._session.headers["User-Agent"] = self.settings.user_agent
        self._session.headers["Accept"] = "application/json"

    def fetch_page(self, query: str, shell_version: str, page: int) -> SearchPage:
        """Fetch a single 1-based page of results."""
        if page < 1:
            raise ValueError(f"page numbers start at 1, got {page}")

        params = {"search": query, "shell_version": shell_version, "page": str(page)}
        try:
            url = requests.Request("GET", self.settings.search_url, params=params).prepare().url or ""
        except requests.exceptions.RequestException as e:
            raise CatalogError(f"unable to form request to search: {e}", url=self.settings.search_url)
        logger.debug("GET %s", url)

        try:
            response = self._session.get(
                self.settings.search_url, params=params, timeout=self.settings.timeout_s
            )
        except requests.exceptions.RequestException as e:
            raise CatalogError(f"unable to search: {e}", url=url)

        body = response.text
        if not response.ok:
            raise CatalogError(
                f"unable to search: HTTP {response.status_code}", url=url, body=body
            )

        try:
            data: Any = response.json()
        except ValueError as e:
            raise CatalogError(f"unable to parse search result: {e}", url=url, body=body)

        try:
            return self._parse_page(data, page)
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise CatalogError(f"unable to parse search result: {e}", url=url, body=body)

    @staticmethod
    def _parse_page(data: Any, page: int) -> SearchPage:
        if not isinstance(data, dict):
            raise TypeError("search result is not an object")
        items = data.get("extensions") or []
        if not isinstance(items, list):
            raise TypeError("'extensions' is not a list")
        return SearchPage(
            page=page,
            numpages=int(data.get("numpages") or 0),
            extensions=[Extension.from_api(item) for item in items],
        )

    def fetch(self, query: str, shell_version: str, index: Optional[CatalogIndex] = None) -> CatalogIndex:
        """Collect every page of results for ``query`` into ``index``.

        Pages are requested 1, 2, ... in order until the page number reaches
        the page count declared by the server. A later entry for a UUID
        replaces an earlier one. The index is updated in place and returned.
        """
        if index is None:
            index = {}

        page = 1
        while True:
            result = self.fetch_page(query, shell_version, page)
            for extension in result.extensions:
                index[extension.uuid] = extension

            if page >= result.numpages:
                break
            page += 1

        logger.debug("search %r: %d page(s), %d extension(s)", query, page, len(index))
        return index
