"""Error types for gnomex.

Every failure the core can produce is a subclass of GnomexError. Core modules
raise; only the CLI entry point turns an error into a diagnostic and an exit
status.

Categories:
- LocalEnvironmentError: gnome-shell / gnome-extensions cannot be run or parsed
- NetworkError: catalog query or download failed (CatalogError, DownloadError)
- LogicalAbsenceError: extension missing from the catalog, or not published
  for the installed shell (ExtensionNotFoundError, IncompatibleShellVersionError)
- ExtensionManagerError: gnome-extensions reported a failure
"""

from __future__ import annotations

from typing import List, Optional


class GnomexError(Exception):
    """Base class for all gnomex errors."""

    exit_code: int = 1
    # Recoverable errors concern a single extension; batch commands may skip them.
    recoverable: bool = False

    def details(self) -> List[str]:
        """Extra diagnostic lines printed below the message."""
        return []


class LocalEnvironmentError(GnomexError):
    """A local executable is missing or produced unusable output."""
    pass


class NetworkError(GnomexError):
    """Request construction, transport or decoding failure."""

    def __init__(self, message: str, url: str = "", body: str = ""):
        super().__init__(message)
        self.url = url
        self.body = body

    def details(self) -> List[str]:
        lines = []
        if self.url:
            lines.append(f"url: {self.url}")
        if self.body:
            lines.append(self.body)
        return lines


class CatalogError(NetworkError):
    """Error from catalog search operations."""
    pass


class DownloadError(NetworkError):
    """Error while downloading an extension archive."""
    pass


class LogicalAbsenceError(GnomexError):
    """The requested extension cannot be used with this shell."""

    recoverable = True


class ExtensionNotFoundError(LogicalAbsenceError):
    def __init__(self, uuid: str):
        super().__init__(f"extension with UUID {uuid} not found")
        self.uuid = uuid


class IncompatibleShellVersionError(LogicalAbsenceError):
    def __init__(self, uuid: str, shell_version: str, available: Optional[List[str]] = None):
        super().__init__(
            f"extension {uuid} is not available for GNOME Shell {shell_version}"
        )
        self.uuid = uuid
        self.shell_version = shell_version
        self.available = available or []

    def details(self) -> List[str]:
        if not self.available:
            return []
        return ["published for: " + ", ".join(self.available)]


class ExtensionManagerError(GnomexError):
    """gnome-extensions exited with a non-zero status."""

    def __init__(self, message: str, command: Optional[List[str]] = None, returncode: int = 0, stderr: str = ""):
        super().__init__(message)
        self.command = command or []
        self.returncode = returncode
        self.stderr = stderr

    def details(self) -> List[str]:
        lines = []
        if self.command:
            lines.append(f"command: {' '.join(self.command)} (exit code {self.returncode})")
        if self.stderr.strip():
            lines.append(self.stderr.strip())
        return lines
