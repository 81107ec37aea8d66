"""
Command-line entry point for wifi-menu.
"""

import argparse
import logging
import sys
from dataclasses import replace
from typing import Optional

from rich.logging import RichHandler

from wifi_menu import __version__
from wifi_menu.config import load_settings
from wifi_menu.errors import SessionCancelled, WifiMenuError
from wifi_menu.messaging import (
    emit_error,
    emit_info,
    emit_warning,
    print_banner,
    set_no_color,
)
from wifi_menu.orchestrator import ConnectionOrchestrator


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="wifi-menu",
        description="Interactive Wi-Fi network manager for OpenBSD",
    )
    parser.add_argument(
        "--config", help="Path to the configuration file (default: /etc/wifi-menu.cfg)"
    )
    parser.add_argument("--no-color", action="store_true", help="Disable coloured output")
    parser.add_argument("--no-banner", action="store_true", help="Do not print the banner")
    parser.add_argument(
        "--no-sandbox", action="store_true", help="Skip unveil/pledge restriction"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log every command run")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def configure_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(show_path=False, rich_tracebacks=False)],
    )


def main(argv: Optional[list[str]] = None, orchestrator_factory=ConnectionOrchestrator) -> int:
    """Run one interactive session and return the process exit status."""
    args = build_parser().parse_args(argv)
    set_no_color(args.no_color)
    configure_logging(args.verbose)

    if not args.no_banner:
        print_banner()

    try:
        settings = load_settings(args.config)
        if args.no_sandbox:
            settings = replace(settings, sandbox_enabled=False)
        return orchestrator_factory(settings).run()
    except SessionCancelled as e:
        if e.exit_code == 0:
            emit_info(str(e))
        else:
            emit_warning(str(e))
        return e.exit_code
    except WifiMenuError as e:
        emit_error(str(e))
        return e.exit_code
    except KeyboardInterrupt:
        emit_warning("Interrupted")
        return 130


if __name__ == "__main__":
    sys.exit(main())
