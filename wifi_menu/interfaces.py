"""
Discovery and selection of wireless interfaces.
"""

import logging
import re

from wifi_menu.command_runner import ShellExecutor
from wifi_menu.config import Settings
from wifi_menu.errors import InvalidSelection, NoInterfaceFound, SessionCancelled
from wifi_menu.messaging import emit_info, emit_menu
from wifi_menu.prompts import InputProvider, parse_choice

logger = logging.getLogger(__name__)

# ifconfig prints one "name: flags=..." header line per interface
_INTERFACE_HEADER = re.compile(r"^([\w.-]+):")


def parse_interface_list(output: str, group: str = "") -> list[str]:
    """Extract interface names from ifconfig output, first occurrence wins."""
    seen = set()
    names = []
    for line in output.splitlines():
        match = _INTERFACE_HEADER.match(line)
        if not match:
            continue
        name = match.group(1)
        if name == group or name in seen:
            continue
        seen.add(name)
        names.append(name)
    return names


class InterfaceDirectory:
    """Enumerates members of the wireless interface group."""

    def __init__(self, executor: ShellExecutor, settings: Settings):
        self.executor = executor
        self.settings = settings

    def discover(self) -> list[str]:
        """
        Return every interface in the wireless group that answers a query.

        An empty list is a valid result; the caller decides whether that is
        fatal.
        """
        result = self.executor.run(
            [self.settings.ifconfig, self.settings.wireless_group], capture=True
        )
        if not result.success:
            logger.debug(
                f"Group query for '{self.settings.wireless_group}' "
                f"exited with {result.exit_code}"
            )
            return []

        interfaces = []
        for name in parse_interface_list(result.stdout, self.settings.wireless_group):
            query = self.executor.run([self.settings.ifconfig, name], quiet=True)
            if query.success:
                interfaces.append(name)
            else:
                logger.debug(f"Skipping {name}: interface query failed")
        logger.debug(f"Discovered wireless interfaces: {interfaces}")
        return interfaces

    def probe(self, interface: str) -> bool:
        """Try to bring ``interface`` administratively up; never raises."""
        result = self.executor.run(
            [self.settings.ifconfig, interface, "up"], quiet=True
        )
        if not result.success:
            logger.info(f"Interface {interface} could not be brought up")
        return result.success


def choose_interface(candidates: list[str], prompt: InputProvider) -> str:
    """
    Pick one interface from ``candidates``.

    A single candidate is used without asking. Empty input at the menu
    cancels the session with exit status 0.
    """
    if not candidates:
        raise NoInterfaceFound("No Wi-Fi interfaces found")

    if len(candidates) == 1:
        emit_info(f"Using detected Wi-Fi interface: {candidates[0]}")
        return candidates[0]

    emit_menu("Available Wi-Fi interfaces:", candidates)
    choice = prompt.read_line(
        "\nChoose interface (number) or press Enter to cancel: "
    )
    if not choice:
        raise SessionCancelled("Exiting.", exit_code=0)
    index = parse_choice(choice, len(candidates))
    if index is None:
        raise InvalidSelection("Invalid interface selection")
    return candidates[index]


def activation_order(selected: str, candidates: list[str]) -> list[str]:
    """The operator's choice first, then the rest in discovery order."""
    return [selected] + [name for name in candidates if name != selected]
