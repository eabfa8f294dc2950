"""Tests for the error hierarchy."""

from gnomex.errors import (
    CatalogError,
    DownloadError,
    ExtensionManagerError,
    ExtensionNotFoundError,
    GnomexError,
    IncompatibleShellVersionError,
    LocalEnvironmentError,
    NetworkError,
)


class TestErrors:
    """Tests for error categories."""

    def test_only_logical_absence_is_recoverable(self):
        """Test batch commands may skip only missing/incompatible extensions."""
        assert ExtensionNotFoundError("a@x").recoverable is True
        assert IncompatibleShellVersionError("a@x", "40.1").recoverable is True
        assert LocalEnvironmentError("no gnome-shell").recoverable is False
        assert CatalogError("timeout").recoverable is False
        assert DownloadError("reset").recoverable is False
        assert ExtensionManagerError("failed").recoverable is False

    def test_all_exit_non_zero(self):
        """Test every category exits with status 1."""
        for err in (ExtensionNotFoundError("a@x"), CatalogError("x"), LocalEnvironmentError("x")):
            assert isinstance(err, GnomexError)
            assert err.exit_code == 1

    def test_network_details(self):
        """Test network errors carry url and body."""
        err = DownloadError("unable to download extension: HTTP 404", url="https://e.g.o/x.zip", body="nope")
        assert isinstance(err, NetworkError)
        assert err.details() == ["url: https://e.g.o/x.zip", "nope"]
        assert CatalogError("x").details() == []

    def test_not_found_message(self):
        """Test the not-found message names the uuid."""
        assert str(ExtensionNotFoundError("missing-id")) == "extension with UUID missing-id not found"
