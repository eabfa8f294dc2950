"""Tests for terminal rendering."""

import io
import threading
from unittest.mock import patch

from rich.console import Console

from gnomex.catalog.client import Extension
from gnomex.ui import DownloadProgress, short_info, show_about, show_extensions, show_restart_hint


def _console():
    return Console(file=io.StringIO(), width=120)


def _extension():
    return Extension(
        uuid="user-theme@gnome-shell-extensions.gcampax.github.com",
        name="User Themes",
        creator="fmuellner",
        description="Load shell themes from user directory.",
        link="/extension/19/user-themes/",
    )


class TestRendering:
    """Tests for extension rendering."""

    def test_short_info(self):
        """Test the one-line summary."""
        assert short_info(_extension()).plain == (
            "User Themes (user-theme@gnome-shell-extensions.gcampax.github.com) by fmuellner"
        )

    def test_show_extensions(self):
        """Test one line per extension and the count returned."""
        console = _console()
        count = show_extensions(console, [_extension(), Extension(uuid="b@x", name="B", creator="c")])

        assert count == 2
        assert len(console.file.getvalue().splitlines()) == 2

    def test_show_about(self):
        """Test the about page has the full link and description."""
        console = _console()
        show_about(console, _extension(), "https://extensions.gnome.org")

        lines = console.file.getvalue().splitlines()
        assert lines[1] == "https://extensions.gnome.org/extension/19/user-themes/"
        assert lines[2] == ""
        assert lines[3] == "Load shell themes from user directory."

    def test_restart_hint(self):
        """Test the hint names the key combination."""
        console = _console()
        show_restart_hint(console)
        assert "Alt + F2" in console.file.getvalue()


class TestDownloadProgress:
    """Tests for DownloadProgress."""

    def test_render(self):
        """Test the counter shows megabytes with two decimals."""
        progress = DownloadProgress(_console())
        progress.received = 1024 * 1024 * 3 // 2
        assert progress.render().plain == "1.50 MB downloaded"

    def test_update_and_stop(self):
        """Test updates track the latest count and stop leaves the final line."""
        console = _console()
        with DownloadProgress(console) as progress:
            for received in (10, 524288, 2097152):
                progress.update(received)
            assert progress.received == 2097152
            progress.stop()

        assert "2.00 MB downloaded" in console.file.getvalue()

    def test_no_background_refresh(self):
        """Test the live line is redrawn only from the caller's thread."""
        progress = DownloadProgress(_console())
        threads = threading.active_count()
        progress.update(1)
        try:
            assert progress._live.auto_refresh is False
            assert threading.active_count() == threads
        finally:
            progress.stop()

    def test_redraw_throttled(self):
        """Test updates arriving faster than min_interval are not redrawn."""
        progress = DownloadProgress(_console())
        progress.update(1)
        with patch.object(progress._live, "update") as mock_update:
            progress.min_interval = 3600
            progress.update(2)
            mock_update.assert_not_called()

            progress.min_interval = 0
            progress.update(3)
            mock_update.assert_called_once()
        assert progress.received == 3
        progress.stop()

    def test_stop_without_updates(self):
        """Test stopping before any data arrived prints nothing."""
        console = _console()
        progress = DownloadProgress(console)
        progress.stop()
        progress.stop()
        assert console.file.getvalue() == ""
