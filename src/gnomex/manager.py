"""Wrapper around the local `gnome-extensions` executable.

gnomex never touches ~/.local/share/gnome-shell/extensions itself; every
install/enable/disable/uninstall/list goes through this class.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Union

from .errors import ExtensionManagerError, LocalEnvironmentError
from .shell import ExecResult, run

logger = logging.getLogger(__name__)


class ExtensionManager:
    """Runs gnome-extensions subcommands, raising on failure."""

    def __init__(self, command: str = "gnome-extensions"):
        self.command = command

    def _call(self, *args: str) -> ExecResult:
        argv = [self.command, *args]
        try:
            res = run(argv)
        except OSError as e:
            raise LocalEnvironmentError(f"unable to run {self.command}: {e}") from e

        if res.code != 0:
            raise ExtensionManagerError(
                f"{self.command} {args[0]} failed",
                command=argv,
                returncode=res.code,
                stderr=res.stderr,
            )
        return res

    def install(self, archive: Union[str, Path]) -> None:
        self._call("install", "--force", str(archive))

    def enable(self, uuid: str) -> None:
        self._call("enable", uuid)

    def disable(self, uuid: str) -> None:
        self._call("disable", uuid)

    def uninstall(self, uuid: str) -> None:
        self._call("uninstall", uuid)

    def list_installed(self) -> List[str]:
        """UUIDs of the installed extensions, one per output line."""
        res = self._call("list")
        uuids = [line.strip() for line in res.stdout.splitlines() if line.strip()]
        logger.debug("%d installed extension(s)", len(uuids))
        return uuids
