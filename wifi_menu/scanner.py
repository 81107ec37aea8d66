"""
Wireless network scanning.
"""

import logging
import re

from wifi_menu.command_runner import ShellExecutor
from wifi_menu.config import Settings
from wifi_menu.errors import NoNetworksFound, ScanFailed

logger = logging.getLogger(__name__)

# A quoted SSID may contain spaces; an unquoted one ends at whitespace
_NWID_TOKEN = re.compile(r'\bnwid\s+("[^"]*"|\S+)')


def _unquote(token: str) -> str:
    if token.startswith('"'):
        token = token[1:]
        if token.endswith('"'):
            token = token[:-1]
    return token


def parse_scan_output(output: str) -> list[str]:
    """
    Extract SSIDs from ``ifconfig <if> scan`` output in reported order.

    Duplicates are kept: a network seen on several channels appears once per
    report. Hidden networks (empty SSIDs) are not selectable and are dropped.
    """
    networks = []
    for line in output.splitlines():
        match = _NWID_TOKEN.search(line)
        if not match:
            continue
        ssid = _unquote(match.group(1))
        if not ssid:
            continue
        networks.append(ssid)
    return networks


class NetworkScanner:
    """Triggers a scan on an interface that is already up."""

    def __init__(self, executor: ShellExecutor, settings: Settings):
        self.executor = executor
        self.settings = settings

    def scan(self, interface: str) -> list[str]:
        result = self.executor.run(
            [self.settings.ifconfig, interface, "scan"], capture=True
        )
        if not result.success:
            raise ScanFailed(f"Failed to scan for wifi networks on {interface}")

        networks = parse_scan_output(result.stdout)
        logger.debug(f"Scan on {interface} reported {len(networks)} network(s)")
        if not networks:
            raise NoNetworksFound(f"No available Wi-Fi connections found on {interface}")
        return networks
