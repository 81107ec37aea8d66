"""
wifi-menu: interactive Wi-Fi network manager for OpenBSD.

Discovers wireless interfaces, replays a saved network profile or scans for
a new network, applies it with ifconfig, requests a DHCP lease and restarts
dependent services.
"""

__version__ = "1.0.0"

from .command_runner import CommandResult, ShellExecutor
from .config import Session, Settings, load_settings
from .errors import SessionCancelled, WifiMenuError
from .orchestrator import ConnectionOrchestrator, SessionState
from .profiles import NetworkProfile, list_profiles, read_profile, write_profile
from .prompts import ConsoleInput, InputProvider

__all__ = [
    "__version__",
    "CommandResult",
    "ShellExecutor",
    "Session",
    "Settings",
    "load_settings",
    "SessionCancelled",
    "WifiMenuError",
    "ConnectionOrchestrator",
    "SessionState",
    "NetworkProfile",
    "list_profiles",
    "read_profile",
    "write_profile",
    "ConsoleInput",
    "InputProvider",
]
