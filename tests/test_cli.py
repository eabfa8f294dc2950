"""Tests for the command line entry point."""

import pytest
from unittest.mock import patch

from gnomex import __version__
from gnomex.cli import HELP_TEXT, build_parser, main, run
from gnomex.config import Settings
from gnomex.errors import CatalogError, ExtensionManagerError, ExtensionNotFoundError


class TestParser:
    """Tests for argument parsing."""

    def test_search_optional_query(self):
        """Test search works with and without a query."""
        parser = build_parser()
        assert parser.parse_args(["search"]).query == ""
        assert parser.parse_args(["search", "user themes"]).query == "user themes"

    def test_upgrade_many(self):
        """Test upgrade accepts zero or more uuids."""
        parser = build_parser()
        assert parser.parse_args(["upgrade"]).uuids == []
        assert parser.parse_args(["upgrade", "a@x", "b@x"]).uuids == ["a@x", "b@x"]

    @pytest.mark.parametrize("argv", [
        ["install"],
        ["install", "a@x", "b@x"],
        ["about"],
        ["search", "one", "two"],
        ["list", "extra"],
        ["frobnicate"],
    ])
    def test_malformed_arguments(self, argv, capsys):
        """Test wrong argument counts print usage and exit non-zero."""
        with pytest.raises(SystemExit) as exc_info:
            run(argv)
        assert exc_info.value.code == 2
        assert "usage: gnomex" in capsys.readouterr().err


class TestRun:
    """Tests for run/main."""

    def test_no_arguments_prints_help(self, capsys):
        """Test no arguments prints the full help text."""
        assert run([]) == 0
        out = capsys.readouterr().out
        assert out.startswith(f"gnomex version {__version__}")
        assert "install <uuid>          install extension with the uuid" in out
        assert "$ gnomex upgrade dash-to-dock@micxgx.gmail.com Resource_Monitor@Ory0n" in out

    def test_help_command(self, capsys):
        """Test the help command."""
        assert run(["help"]) == 0
        assert "search [query]" in capsys.readouterr().out

    def test_version_command(self, capsys):
        """Test the version command."""
        assert run(["version"]) == 0
        assert __version__ in capsys.readouterr().out

    def test_command_result(self):
        """Test the command's return value becomes the exit status."""
        with patch("gnomex.catalog.commands.cmd_upgrade", return_value=1) as mock_cmd:
            assert run(["upgrade", "a@x"]) == 1
        assert mock_cmd.call_args.args[0].uuids == ["a@x"]

    def test_install_not_found_exits_zero(self, capsys):
        """Test install of an unknown uuid is reported without a failing exit status."""
        with patch("gnomex.catalog.commands.Settings.load", return_value=Settings(shell_version="3.36")), \
                patch("gnomex.catalog.commands.CatalogClient") as mock_client:
            mock_client.return_value.fetch.return_value = {}
            assert run(["install", "missing-id"]) == 0
        assert "missing-id not found" in capsys.readouterr().out

    def test_about_not_found_exits_one(self, capsys):
        """Test about of an unknown uuid is reported and exits 1."""
        with patch("gnomex.catalog.commands.Settings.load", return_value=Settings(shell_version="3.36")), \
                patch("gnomex.catalog.commands.CatalogClient") as mock_client:
            mock_client.return_value.fetch.return_value = {}
            assert run(["about", "missing-id"]) == 1
        assert "missing-id not found" in capsys.readouterr().err

    def test_logical_absence_exit_status(self, capsys):
        """Test logical absence reaching the entry point exits 1."""
        with patch("gnomex.catalog.commands.cmd_about", side_effect=ExtensionNotFoundError("missing-id")):
            assert run(["about", "missing-id"]) == 1
        assert "missing-id not found" in capsys.readouterr().err

    def test_network_error_diagnostics(self, capsys):
        """Test catalog errors print the failing URL and raw body."""
        error = CatalogError(
            "unable to parse search result: Expecting value",
            url="https://extensions.gnome.org/extension-query?search=x&shell_version=3.36&page=1",
            body="<html>rate limited</html>",
        )
        with patch("gnomex.catalog.commands.cmd_search", side_effect=error):
            assert run(["search", "x"]) == 1

        err = capsys.readouterr().err
        assert "unable to parse search result" in err
        assert "page=1" in err
        assert "<html>rate limited</html>" in err

    def test_manager_error(self, capsys):
        """Test gnome-extensions failures exit 1 with stderr shown."""
        error = ExtensionManagerError(
            "gnome-extensions enable failed",
            command=["gnome-extensions", "enable", "a@x"],
            returncode=2,
            stderr="Extension does not exist",
        )
        with patch("gnomex.catalog.commands.cmd_enable", side_effect=error):
            assert run(["enable", "a@x"]) == 1
        assert "Extension does not exist" in capsys.readouterr().err

    def test_main_exits(self):
        """Test main raises SystemExit with the status."""
        with patch("gnomex.cli.run", return_value=0):
            with pytest.raises(SystemExit) as exc_info:
                main()
        assert exc_info.value.code == 0
