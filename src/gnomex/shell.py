from __future__ import annotations

import logging
import re
import subprocess
from dataclasses import dataclass
from typing import List

from .errors import LocalEnvironmentError

logger = logging.getLogger(__name__)

# First dotted number in the text, e.g. "GNOME Shell 3.34.3" -> ("3", "34")
_VERSION_RE = re.compile(r"(\d+)\.(\d+)")


@dataclass
class ExecResult:
    code: int
    stdout: str
    stderr: str


def run(argv: List[str]) -> ExecResult:
    """Run a command without a shell and capture its output.

    Raises OSError when the executable cannot be started.
    """
    logger.debug("exec: %s", " ".join(argv))
    p = subprocess.run(argv, capture_output=True, text=True)
    return ExecResult(p.returncode, p.stdout or "", p.stderr or "")


def parse_shell_version(text: str) -> str:
    """Return the "major.minor" part of a `gnome-shell --version` line."""
    m = _VERSION_RE.search(text or "")
    if not m:
        raise LocalEnvironmentError(f"unable to parse GNOME Shell version from {text.strip()!r}")
    return f"{int(m.group(1))}.{int(m.group(2))}"


def probe_shell_version(command: str = "gnome-shell") -> str:
    try:
        res = run([command, "--version"])
    except OSError as e:
        raise LocalEnvironmentError(f"unable to run {command}: {e}") from e

    if res.code != 0:
        raise LocalEnvironmentError(
            f"{command} --version failed (exit code {res.code}): {res.stderr.strip()}"
        )

    version = parse_shell_version(res.stdout)
    logger.debug("GNOME Shell version: %s", version)
    return version
