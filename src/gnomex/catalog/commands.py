"""Catalog CLI Commands for gnomex.

Top-level commands:
- search/about (catalog only)
- install/upgrade (catalog + download + gnome-extensions)
- list/enable/disable/uninstall (gnome-extensions only)

Each cmd_* function returns the process exit status. Errors propagate as
GnomexError to the entry point in gnomex.cli.
"""

from __future__ import annotations

import argparse
import logging
from typing import List, Optional

from rich.console import Console

from ..config import Settings
from ..errors import ExtensionNotFoundError, GnomexError
from ..manager import ExtensionManager
from ..shell import probe_shell_version
from ..ui import DownloadProgress, short_info, show_about, show_extensions, show_restart_hint
from .client import CatalogClient, Extension
from .download import ExtensionDownloader, resolve_build

logger = logging.getLogger(__name__)

console = Console()


def resolve_shell_version(settings: Settings) -> str:
    """Pinned version from settings, otherwise ask gnome-shell."""
    if settings.shell_version:
        return settings.shell_version
    return probe_shell_version(settings.shell_command)


def find_extension(client: CatalogClient, uuid: str, shell_version: str) -> Extension:
    """Search the catalog for ``uuid`` and return the exact match.

    The endpoint does free-text matching, so the search may return other
    extensions or none at all.
    """
    index = client.fetch(uuid, shell_version)
    try:
        return index[uuid]
    except KeyError:
        raise ExtensionNotFoundError(uuid) from None


def install_extension(
    uuid: str,
    *,
    client: CatalogClient,
    downloader: ExtensionDownloader,
    manager: ExtensionManager,
    shell_version: str,
) -> Extension:
    """Download, install and enable one extension.

    Nothing is downloaded if the extension is missing or has no build for
    ``shell_version``; gnome-extensions is never called if the download
    fails. The archive is removed afterwards in every case.
    """
    extension = find_extension(client, uuid, shell_version)
    console.print(short_info(extension))

    resolve_build(extension, shell_version)

    console.print("downloading extension")
    with DownloadProgress(console) as progress, downloader.acquire(
        extension, shell_version, on_progress=progress.update
    ) as archive:
        progress.stop()

        manager.install(archive)
        console.print("[green]extension installed[/green]")

        manager.enable(extension.uuid)
        console.print("[green]extension enabled[/green]")

    return extension


def upgrade_extensions(
    uuids: List[str],
    *,
    client: CatalogClient,
    downloader: ExtensionDownloader,
    manager: ExtensionManager,
    shell_version: str,
) -> List[str]:
    """Reinstall the given extensions, or every installed one if none given.

    Returns the UUIDs that were skipped because they are missing from the
    catalog or not published for this shell. Any other error aborts.
    """
    targets = uuids or manager.list_installed()
    skipped: List[str] = []

    for uuid in targets:
        try:
            install_extension(
                uuid,
                client=client,
                downloader=downloader,
                manager=manager,
                shell_version=shell_version,
            )
        except GnomexError as e:
            if not e.recoverable:
                raise
            console.print(f"[yellow]skipping {uuid}:[/yellow] {e}")
            for line in e.details():
                console.print(f"  {line}", style="dim", markup=False)
            skipped.append(uuid)

    return skipped


# --- Catalog Commands ---

def cmd_search(args: argparse.Namespace) -> int:
    """Search extensions."""
    settings = Settings.load()
    shell_version = resolve_shell_version(settings)
    client = CatalogClient(settings)

    index = client.fetch(args.query or "", shell_version)
    if not index:
        console.print("[yellow]No extensions found.[/yellow]")
        return 0

    show_extensions(console, index.values())
    return 0


def cmd_about(args: argparse.Namespace) -> int:
    """Print detailed information about an extension."""
    settings = Settings.load()
    shell_version = resolve_shell_version(settings)
    client = CatalogClient(settings)

    extension = find_extension(client, args.uuid, shell_version)
    show_about(console, extension, settings.home_url)
    return 0


def cmd_install(args: argparse.Namespace) -> int:
    """Install and enable an extension."""
    settings = Settings.load()
    shell_version = resolve_shell_version(settings)

    try:
        install_extension(
            args.uuid,
            client=CatalogClient(settings),
            downloader=ExtensionDownloader(settings),
            manager=ExtensionManager(settings.extensions_command),
            shell_version=shell_version,
        )
    except ExtensionNotFoundError as e:
        # Absent from the catalog: reported, exit status 0.
        console.print(str(e), style="red", markup=False, highlight=False)
        return 0
    show_restart_hint(console)
    return 0


def cmd_upgrade(args: argparse.Namespace) -> int:
    """Upgrade the given extensions, or all installed ones."""
    settings = Settings.load()
    manager = ExtensionManager(settings.extensions_command)

    uuids = list(args.uuids) or manager.list_installed()
    if not uuids:
        console.print("[yellow]No extensions installed.[/yellow]")
        return 0

    shell_version = resolve_shell_version(settings)
    skipped = upgrade_extensions(
        uuids,
        client=CatalogClient(settings),
        downloader=ExtensionDownloader(settings),
        manager=manager,
        shell_version=shell_version,
    )
    if skipped:
        console.print(f"[yellow]{len(skipped)} extension(s) not upgraded.[/yellow]")
        return 1

    show_restart_hint(console)
    return 0


# --- gnome-extensions Commands ---

def _manager() -> ExtensionManager:
    return ExtensionManager(Settings.load().extensions_command)


def cmd_list(args: argparse.Namespace) -> int:
    """List installed extensions."""
    uuids = _manager().list_installed()
    if not uuids:
        console.print("[yellow]No extensions installed.[/yellow]")
        return 0
    for uuid in uuids:
        console.print(uuid, markup=False, highlight=False)
    return 0


def cmd_uninstall(args: argparse.Namespace) -> int:
    """Uninstall an extension."""
    _manager().uninstall(args.uuid)
    console.print(f"[green]extension {args.uuid} uninstalled[/green]")
    return 0


def cmd_enable(args: argparse.Namespace) -> int:
    """Enable an extension."""
    _manager().enable(args.uuid)
    console.print(f"[green]extension {args.uuid} enabled[/green]")
    return 0


def cmd_disable(args: argparse.Namespace) -> int:
    """Disable an extension."""
    _manager().disable(args.uuid)
    console.print(f"[yellow]extension {args.uuid} disabled[/yellow]")
    return 0


# --- Parser Setup ---

def add_catalog_commands(subparsers: argparse._SubParsersAction) -> None:
    """Add extension commands to the main parser."""

    # search
    p_search = subparsers.add_parser("search", help="Search extensions")
    p_search.add_argument("query", nargs="?", default="", help="Search text (empty lists everything)")
    p_search.set_defaults(func=cmd_search)

    # list
    p_list = subparsers.add_parser("list", help="List installed extensions")
    p_list.set_defaults(func=cmd_list)

    # install
    p_install = subparsers.add_parser("install", help="Install the extension with the UUID")
    p_install.add_argument("uuid", help="Extension UUID")
    p_install.set_defaults(func=cmd_install)

    # uninstall
    p_uninstall = subparsers.add_parser("uninstall", help="Uninstall the extension with the UUID")
    p_uninstall.add_argument("uuid", help="Extension UUID")
    p_uninstall.set_defaults(func=cmd_uninstall)

    # enable
    p_enable = subparsers.add_parser("enable", help="Enable an installed extension")
    p_enable.add_argument("uuid", help="Extension UUID")
    p_enable.set_defaults(func=cmd_enable)

    # disable
    p_disable = subparsers.add_parser("disable", help="Disable an installed extension")
    p_disable.add_argument("uuid", help="Extension UUID")
    p_disable.set_defaults(func=cmd_disable)

    # upgrade
    p_upgrade = subparsers.add_parser("upgrade", help="Upgrade extensions (all installed if none given)")
    p_upgrade.add_argument("uuids", nargs="*", metavar="uuid", help="Extension UUIDs")
    p_upgrade.set_defaults(func=cmd_upgrade)

    # about
    p_about = subparsers.add_parser("about", help="Print detailed information of the extension")
    p_about.add_argument("uuid", help="Extension UUID")
    p_about.set_defaults(func=cmd_about)


def run_catalog_command(args: argparse.Namespace) -> Optional[int]:
    """Run an extension command if func is set."""
    if getattr(args, "func", None):
        return args.func(args)
    return None
