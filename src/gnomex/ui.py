"""Terminal rendering for gnomex.

Extension summaries, the about page and the live download counter.
"""

from __future__ import annotations

import time
from typing import Iterable, Optional

from rich.console import Console
from rich.live import Live
from rich.text import Text

from .catalog.client import Extension
from .catalog.download import megabytes


def short_info(extension: Extension) -> Text:
    text = Text()
    text.append(extension.name, style="yellow")
    text.append(f" ({extension.uuid}) ", style="green")
    text.append("by ", style="magenta")
    text.append(extension.creator, style="cyan")
    return text


def show_extensions(console: Console, extensions: Iterable[Extension]) -> int:
    """Print one line per extension and return how many were printed."""
    count = 0
    for extension in extensions:
        console.print(short_info(extension))
        count += 1
    return count


def show_about(console: Console, extension: Extension, home_url: str) -> None:
    console.print(short_info(extension))
    console.print(f"{home_url}{extension.link}", markup=False, highlight=False, soft_wrap=True)
    console.print()
    console.print(extension.description, markup=False, highlight=False)


def show_restart_hint(console: Console) -> None:
    text = Text("to activate the extension restart GNOME Shell by pressing ")
    text.append("Alt + F2", style="yellow")
    text.append(" and enter ")
    text.append("r", style="yellow")
    console.print(text)


class DownloadProgress:
    """Live "N.NN MB downloaded" line.

    ``update`` is meant to be passed as the downloader's progress sink. The
    display starts on the first update and is left on screen by ``stop``.
    Redraws happen on the calling thread only, at most once per
    ``min_interval`` seconds.
    """

    min_interval = 0.125

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()
        self.received = 0
        self._live: Optional[Live] = None
        self._last_draw = 0.0

    def render(self) -> Text:
        return Text(f"{megabytes(self.received):.2f} MB downloaded")

    def update(self, received: int) -> None:
        self.received = received
        if self._live is None:
            self._live = Live(
                self.render(),
                console=self.console,
                auto_refresh=False,
                transient=False,
            )
            self._live.start(refresh=True)
            self._last_draw = time.monotonic()
            return

        now = time.monotonic()
        if now - self._last_draw >= self.min_interval:
            self._live.update(self.render(), refresh=True)
            self._last_draw = now

    def stop(self) -> None:
        if self._live is None:
            return
        self._live.update(self.render(), refresh=True)
        self._live.stop()
        self._live = None

    def __enter__(self) -> "DownloadProgress":
        return self

    def __exit__(self, *exc: object) -> None:
        self.stop()
