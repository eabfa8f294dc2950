"""Acquisition of extension archives.

Resolves the build matching the installed shell, derives the download URL and
streams the archive into a temporary file. Progress is reported through a
plain callable receiving the cumulative byte count; rendering it is up to the
caller.
"""

from __future__ import annotations

import logging
import re
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Callable, Iterator, Optional

import requests

from ..config import Settings
from ..errors import DownloadError, IncompatibleShellVersionError
from .client import Extension, VersionBuild

logger = logging.getLogger(__name__)

ProgressSink = Callable[[int], None]

_PLACEHOLDER_RE = re.compile(r"UUID|VERSION")


def build_download_url(template: str, uuid: str, version: int) -> str:
    """Fill the first UUID and first VERSION placeholders of ``template``.

    The server publishes archives under the UUID with "@" removed.
    """
    values = {"UUID": uuid.replace("@", ""), "VERSION": str(version)}

    def _sub(m: "re.Match[str]") -> str:
        key = m.group(0)
        return values.pop(key, key)

    return _PLACEHOLDER_RE.sub(_sub, template)


def resolve_build(extension: Extension, shell_version: str) -> VersionBuild:
    build = extension.build_for(shell_version)
    if build is None:
        raise IncompatibleShellVersionError(
            extension.uuid, shell_version, available=sorted(extension.shell_version_map)
        )
    return build


def megabytes(received: int) -> float:
    return received / 1024 / 1024


def _temp_prefix(uuid: str) -> str:
    return re.sub(r"[^\w.-]", "_", uuid) + "-"


class ExtensionDownloader:
    """Downloads extension archives for one shell version."""

    def __init__(self, settings: Optional[Settings] = None, session: Optional[requests.Session] = None):
        self.settings = settings or Settings.load()
        self._session = session or requests.Session()

    def download_url(self, extension: Extension, shell_version: str) -> str:
        build = resolve_build(extension, shell_version)
        return build_download_url(self.settings.download_url_template, extension.uuid, build.version)

    def download(
        self,
        extension: Extension,
        shell_version: str,
        on_progress: Optional[ProgressSink] = None,
    ) -> Path:
        """Stream the archive to a new temporary file and return its path.

        The caller owns the returned file. On any failure nothing is left on
        disk.
        """
        url = self.download_url(extension, shell_version)
        logger.debug("downloading %s", url)

        headers = {
            "User-Agent": self.settings.user_agent,
            "Accept-Encoding": "gzip, deflate",
        }
        try:
            response = self._session.get(
                url, headers=headers, stream=True, timeout=self.settings.download_timeout_s
            )
        except requests.exceptions.RequestException as e:
            raise DownloadError(f"unable to download extension: {e}", url=url)

        try:
            if not response.ok:
                raise DownloadError(
                    f"unable to download extension: HTTP {response.status_code}", url=url
                )

            try:
                tmp = tempfile.NamedTemporaryFile(
                    prefix=_temp_prefix(extension.uuid),
                    suffix=".shell-extension.zip",
                    delete=False,
                )
            except OSError as e:
                raise DownloadError(f"unable to create file to save: {e}", url=url)

            path = Path(tmp.name)
            received = 0
            try:
                with tmp:
                    for chunk in response.iter_content(chunk_size=self.settings.chunk_size):
                        if not chunk:
                            continue
                        tmp.write(chunk)
                        received += len(chunk)
                        if on_progress is not None:
                            on_progress(received)
            except requests.exceptions.RequestException as e:
                path.unlink(missing_ok=True)
                raise DownloadError(f"download interrupted: {e}", url=url)
            except OSError as e:
                path.unlink(missing_ok=True)
                raise DownloadError(f"unable to write to file: {e}", url=url)
            except BaseException:
                path.unlink(missing_ok=True)
                raise
        finally:
            response.close()

        logger.debug("saved %d bytes to %s", received, path)
        return path

    @contextmanager
    def acquire(
        self,
        extension: Extension,
        shell_version: str,
        on_progress: Optional[ProgressSink] = None,
    ) -> Iterator[Path]:
        """Download the archive and delete it when the block exits."""
        path = self.download(extension, shell_version, on_progress=on_progress)
        try:
            yield path
        finally:
            path.unlink(missing_ok=True)
            logger.debug("removed %s", path)
