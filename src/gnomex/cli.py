"""gnomex CLI - GNOME Shell extension manager.

Usage:
    gnomex search [query]      # Search extensions.gnome.org
    gnomex list                # List installed extensions
    gnomex install <uuid>      # Download, install and enable
    gnomex uninstall <uuid>    # Uninstall
    gnomex enable <uuid>       # Enable an installed extension
    gnomex disable <uuid>      # Disable an installed extension
    gnomex upgrade [uuid...]   # Reinstall given (or all installed) extensions
    gnomex about <uuid>        # Show description and catalog link
    gnomex version             # Print gnomex version
    gnomex help                # Print help
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.text import Text

from . import __version__
from .errors import GnomexError

console = Console()
err_console = Console(stderr=True)

HELP_TEXT = f"""gnomex version {__version__}

Search, install and uninstall GNOME Shell extensions.

Commands
    search [query]          search extensions
    list                    list installed extensions
    install <uuid>          install extension with the uuid
    uninstall <uuid>        uninstall extension with the uuid
    enable <uuid>           enable extension with the uuid
    disable <uuid>          disable extension with the uuid
    upgrade [uuid]...       upgrade extensions
    about <uuid>            print detailed information of the extension
    version                 print gnomex version
    help                    print this help information

Options
    -v, --verbose           print debug information

Examples
    Search extension with query "user themes"
    $ gnomex search "user themes"

    Search all extensions
    $ gnomex search

    Install dash-to-dock extension
    $ gnomex install dash-to-dock@micxgx.gmail.com

    Uninstall dash-to-dock extension
    $ gnomex uninstall dash-to-dock@micxgx.gmail.com

    List installed extensions
    $ gnomex list

    Upgrade all extensions
    $ gnomex upgrade

    Upgrade some extensions
    $ gnomex upgrade dash-to-dock@micxgx.gmail.com Resource_Monitor@Ory0n
"""


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
    )
    # urllib3 is chatty at DEBUG and would repeat every request.
    logging.getLogger("urllib3").setLevel(logging.INFO if verbose else logging.WARNING)


def _print_help() -> int:
    console.print(HELP_TEXT, markup=False, highlight=False, soft_wrap=True, end="")
    return 0


def _print_version() -> int:
    console.print(f"gnomex version {__version__}")
    return 0


def _report(error: GnomexError) -> None:
    err_console.print(Text(str(error), style="red"), soft_wrap=True)
    for line in error.details():
        err_console.print(line, markup=False, highlight=False, soft_wrap=True)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gnomex",
        description="Search, install and uninstall GNOME Shell extensions.",
        epilog="type `gnomex help` to see usage",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Print debug information")

    sub = parser.add_subparsers(dest="subcmd")

    p_version = sub.add_parser("version", help="Print gnomex version")
    p_version.set_defaults(func=lambda args: _print_version())

    p_help = sub.add_parser("help", help="Print this help information")
    p_help.set_defaults(func=lambda args: _print_help())

    from .catalog.commands import add_catalog_commands
    add_catalog_commands(sub)

    return parser


def run(argv: Optional[List[str]] = None) -> int:
    """Parse ``argv`` and run the command, returning the exit status."""
    argv = sys.argv[1:] if argv is None else argv
    if not argv:
        return _print_help()

    parser = build_parser()
    args = parser.parse_args(argv)

    _configure_logging(args.verbose)

    if not getattr(args, "func", None):
        return _print_help()

    from .catalog.commands import run_catalog_command

    try:
        result = run_catalog_command(args)
    except GnomexError as e:
        _report(e)
        return e.exit_code
    except KeyboardInterrupt:
        err_console.print("\n[yellow]Interrupted.[/yellow]")
        return 130

    return result if result is not None else 0


def main() -> None:
    raise SystemExit(run())


if __name__ == "__main__":
    main()
