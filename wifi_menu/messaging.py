"""
Operator-facing console output.

Diagnostics go through ``logging``; these helpers are for what the operator
reads during an interactive session.
"""

import os
from typing import Iterable

from rich.console import Console
from rich.markup import escape

_console = Console(highlight=False)
_err_console = Console(stderr=True, highlight=False)


def set_no_color(no_color: bool = True) -> None:
    """Disable colour on both consoles (``--no-color`` / ``NO_COLOR``)."""
    global _console, _err_console
    if no_color or os.environ.get("NO_COLOR"):
        _console = Console(highlight=False, no_color=True)
        _err_console = Console(stderr=True, highlight=False, no_color=True)


def get_console() -> Console:
    return _console


def emit_info(message: str) -> None:
    _console.print(f"[green]✅ \\[INFO][/green] {escape(message)}")


def emit_success(message: str) -> None:
    _console.print(f"[bold cyan]\\[+][/bold cyan] {escape(message)}")


def emit_warning(message: str) -> None:
    _err_console.print(f"[yellow]⚠️ \\[WARN][/yellow] {escape(message)}")


def emit_error(message: str) -> None:
    _err_console.print(f"[red]❌ \\[ERROR][/red] {escape(message)}")


def emit_menu(title: str, entries: Iterable[str]) -> list[str]:
    """Print a 1-based numbered menu and return the entries in display order."""
    items = list(entries)
    emit_info(title)
    for index, entry in enumerate(items, start=1):
        _console.print(f"{index}) {escape(entry)}")
    return items


def print_banner() -> None:
    banner = (
        "\n[green]   .;'                     `;,[/green]\n"
        "[green]  .;'  ,;'             `;,  `;,[/green]"
        "    OpenBSD wireless network manager\n"
        "[green] .;'  ,;'  ,;'     `;,  `;,  `;,[/green]\n"
        "[green] ::   ::   :   [/green][bright_black]( )[/bright_black][green]   :   ::   ::[/green]\n"
        "[green] ':.  ':.  ':. [/green][bright_black]/_\\ [/bright_black][green],:'  ,:'  ,:'[/green]\n"
        "[green]  ':.  ':.    [/green][bright_black]/___\\ [/bright_black][green]   ,:'  ,:'[/green]\n"
        "[green]   ':.       [/green][bright_black]/_____\\ [/bright_black][green]     ,:'[/green]\n"
        "[green]            [/green][bright_black]/       \\ [/bright_black]\n"
    )
    _console.print(banner)
