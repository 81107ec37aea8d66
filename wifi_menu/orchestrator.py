"""
Connection orchestration.

One run walks a fixed sequence of states::

    START -> INTERFACE_READY -> PROFILE_DECISION
          -> SCAN_AND_CREATE | REPLAY_SAVED
          -> APPLYING -> LEASE_REQUESTED -> SERVICES_RESTARTED

Any ``WifiMenuError`` moves the run to FAILED and propagates to the caller.
The one exception is a failed service restart, which is reported and the
run still succeeds.
"""

import logging
import os
import time
from enum import Enum
from typing import Callable, Optional

from wifi_menu.command_runner import ShellExecutor
from wifi_menu.config import Session, Settings
from wifi_menu.errors import (
    ConfigCopyFailed,
    InterfaceUnavailable,
    InvalidSelection,
    JoinFailed,
    LeaseFailed,
    NoInterfaceFound,
    PermissionDenied,
    ProfileWriteFailed,
    ServiceRestartFailed,
    SessionCancelled,
    WifiMenuError,
)
from wifi_menu.interfaces import InterfaceDirectory, activation_order, choose_interface
from wifi_menu.messaging import emit_error, emit_info, emit_menu, emit_success, emit_warning
from wifi_menu.profiles import (
    NetworkProfile,
    ensure_profile_dir,
    list_profiles,
    profile_path,
    read_profile,
    validate_passphrase,
    write_profile,
)
from wifi_menu.prompts import ConsoleInput, InputProvider, parse_choice
from wifi_menu.sandbox import SandboxGuard, restrict_process
from wifi_menu.scanner import NetworkScanner

logger = logging.getLogger(__name__)

# ifconfig arguments that drop every address and association setting
CLEAR_WIRELESS_ARGS = ["-inet6", "-inet", "-bssid", "-chan", "-nwid", "-nwkey", "-wpa", "-wpakey"]


class SessionState(Enum):
    START = "start"
    INTERFACE_READY = "interface-ready"
    PROFILE_DECISION = "profile-decision"
    SCAN_AND_CREATE = "scan-and-create"
    REPLAY_SAVED = "replay-saved"
    APPLYING = "applying"
    LEASE_REQUESTED = "lease-requested"
    SERVICES_RESTARTED = "services-restarted"
    FAILED = "failed"


class ConnectionOrchestrator:
    """Drives one interactive connection session from start to finish."""

    def __init__(
        self,
        settings: Settings,
        executor: Optional[ShellExecutor] = None,
        prompt: Optional[InputProvider] = None,
        guard: Optional[SandboxGuard] = None,
        geteuid: Callable[[], int] = os.geteuid,
        sleep: Callable[[float], None] = time.sleep,
    ):
        """
        Args:
            settings: Loaded configuration
            executor: Runs external commands (defaults to ShellExecutor)
            prompt: Source of operator input (defaults to the terminal)
            guard: Sandbox guard override; detected per platform if None
            geteuid: Effective-uid lookup, replaceable in tests
            sleep: Delay used between interface rediscovery rounds
        """
        self.settings = settings
        self.session = Session(settings=settings)
        self.executor = executor or ShellExecutor()
        self.prompt = prompt or ConsoleInput()
        self.guard = guard
        self.interfaces = InterfaceDirectory(self.executor, settings)
        self.scanner = NetworkScanner(self.executor, settings)
        self._geteuid = geteuid
        self._sleep = sleep
        self.state = SessionState.START
        self.history = [SessionState.START]
        self.service_failures: list[str] = []

    def _enter(self, state: SessionState) -> None:
        logger.debug(f"State {self.state.value} -> {state.value}")
        self.state = state
        self.history.append(state)

    def _ifconfig(self, *args: str, **kwargs):
        return self.executor.run([self.settings.ifconfig, *args], **kwargs)

    def run(self) -> int:
        """
        Execute the whole session.

        Returns:
            0 once the interface is configured and leased

        Raises:
            WifiMenuError: for any terminal failure (state becomes FAILED)
            SessionCancelled: when the operator leaves a menu
        """
        try:
            self.check_privileges()
            interface = self.select_interface()
            self.session = self.session.with_interface(interface)
            self._enter(SessionState.INTERFACE_READY)

            self.prepare_profile_dir()
            restrict_process(self.session, self.guard)
            self.clear_wireless_settings(interface)

            self._enter(SessionState.PROFILE_DECISION)
            filename = self.choose_saved_profile(interface)
            if filename is None:
                self._enter(SessionState.SCAN_AND_CREATE)
                profile = self.scan_and_create(interface)
                filename = profile.filename
            else:
                self._enter(SessionState.REPLAY_SAVED)
                profile = self.replay_saved(filename)

            self._enter(SessionState.APPLYING)
            self.apply_profile(interface, profile, filename)

            self._enter(SessionState.LEASE_REQUESTED)
            self.request_lease(interface)

            self._enter(SessionState.SERVICES_RESTARTED)
            self.restart_services()
        except WifiMenuError:
            self._enter(SessionState.FAILED)
            raise
        return 0

    # --- START -> INTERFACE_READY ---

    def check_privileges(self) -> None:
        if self._geteuid() != 0:
            raise PermissionDenied("This script must be run as root")

    def select_interface(self) -> str:
        """
        Discover, choose and bring up an interface.

        If the chosen interface will not come up the remaining candidates are
        tried in discovery order without asking again. When none comes up,
        discovery starts over.
        """
        while True:
            candidates = self.interfaces.discover()
            if not candidates:
                raise NoInterfaceFound(
                    f"No Wi-Fi interfaces found (group {self.settings.wireless_group} in ifconfig)"
                )

            selected = choose_interface(candidates, self.prompt)
            for name in activation_order(selected, candidates):
                if not self.interfaces.probe(name):
                    continue
                if name != selected:
                    emit_warning(f"{selected} could not be brought up; using {name}")
                return name

            emit_warning("No Wi-Fi interfaces could be brought up; choose another.")
            self._sleep(self.settings.rediscover_delay)

    # --- INTERFACE_READY -> PROFILE_DECISION ---

    def prepare_profile_dir(self) -> None:
        try:
            if ensure_profile_dir(self.session.profile_dir):
                emit_warning(
                    f"No saved wifi configuration directory found; "
                    f"created {self.session.profile_dir}"
                )
        except OSError as e:
            raise ProfileWriteFailed(
                f"Cannot create directory {self.session.profile_dir}: {e}"
            )

    def clear_wireless_settings(self, interface: str) -> None:
        result = self._ifconfig(interface, *CLEAR_WIRELESS_ARGS)
        if not result.success:
            emit_warning(f"Failed to clear wireless settings on {interface}")

    def choose_saved_profile(self, interface: str) -> Optional[str]:
        """
        Offer the saved profiles for ``interface``.

        Returns the chosen filename, or None to create a new profile (no saved
        profiles, empty input or an answer outside the list).
        """
        saved = list_profiles(self.session.profile_dir, interface)
        if not saved:
            emit_warning("There are no previously saved wifi connections")
            return None

        emit_menu("Saved wifi configurations:", saved)
        choice = self.prompt.read_line(
            "\nChoose a previously saved wifi connection "
            "or press Enter to create a new one: "
        )
        if not choice:
            return None
        index = parse_choice(choice, len(saved))
        if index is None:
            emit_warning(f"No saved configuration numbered '{choice}'; creating a new one")
            return None
        emit_info(f'"{saved[index]}" is selected')
        return saved[index]

    # --- SCAN_AND_CREATE / REPLAY_SAVED ---

    def bring_up(self, interface: str) -> None:
        if not self._ifconfig(interface, "up").success:
            raise InterfaceUnavailable(f"Interface {interface} is not available")

    def scan_and_create(self, interface: str) -> NetworkProfile:
        """
        Scan, let the operator pick a network and save it as a new profile.

        The profile is written before any join attempt so it survives a
        failed connection.
        """
        self.bring_up(interface)
        emit_info(f"Scanning for wifi networks on interface {interface}...")
        networks = self.scanner.scan(interface)

        emit_menu("Available wifi networks:", networks)
        choice = self.prompt.read_line("\nChoose a Wi-Fi network or press Enter to quit: ")
        if not choice:
            raise SessionCancelled("Exiting", exit_code=1)
        index = parse_choice(choice, len(networks))
        if index is None:
            raise InvalidSelection("Invalid network selection")
        ssid = networks[index]

        passphrase = self.prompt.read_secret(
            f'Enter the passphrase for "{ssid}" (leave empty if open network): '
        )
        validate_passphrase(passphrase)

        hostap_choice = self.prompt.read_line(
            "\nDo you want to configure Host-based Access Point mode? (y/N): "
        )
        profile = NetworkProfile(
            ssid=ssid,
            interface=interface,
            passphrase=passphrase or None,
            hostap=hostap_choice.strip().lower() in ("y", "yes"),
        )
        write_profile(
            self.session.profile_dir, profile, self.settings.hostap_directive
        )
        emit_info(f'Creating new configuration using "{ssid}"')
        return profile

    def replay_saved(self, filename: str) -> NetworkProfile:
        emit_info(f'Connecting using saved configuration file "{filename}"')
        return read_profile(self.session.profile_dir, filename)

    # --- APPLYING ---

    def apply_profile(self, interface: str, profile: NetworkProfile, filename: str) -> None:
        """Join the network, then install the profile as the boot-time config."""
        self.bring_up(interface)

        result = self._ifconfig(interface, *profile.join_arguments())
        if not result.success:
            raise JoinFailed(f"Failed to join wifi network {profile.ssid}")

        source = profile_path(self.session.profile_dir, filename)
        target = self.session.system_config_path
        result = self.executor.run([self.settings.cp, source, target])
        if not result.success:
            raise ConfigCopyFailed(f"Failed to copy configuration file to {target}")
        emit_success(f'Configured interface {interface}; ESSID is "{profile.ssid}"')

    # --- LEASE_REQUESTED ---

    def request_lease(self, interface: str) -> None:
        result = self.executor.run(
            [self.settings.dhcpleasectl, "-w", str(self.settings.lease_timeout), interface]
        )
        if not result.success:
            raise LeaseFailed(
                f"Failed to request DHCP lease on {interface} using dhcpleasectl"
            )
        self.ensure_default_route(interface)

    def ensure_default_route(self, interface: str) -> None:
        route = self.settings.route
        if self.executor.run([route, "-n", "get", "default"], quiet=True).success:
            return
        result = self.executor.run(
            [route, "-n", "add", "default", "-iface", interface], quiet=True
        )
        if not result.success:
            emit_warning(f"Failed to set default route via {interface}")

    # --- SERVICES_RESTARTED ---

    def restart_services(self) -> list[str]:
        """Restart dependent services; failures are reported, never raised."""
        self.service_failures = []
        for service in self.settings.services:
            result = self.executor.run([self.settings.rcctl, "restart", service])
            if result.success:
                continue
            error = ServiceRestartFailed(f"Failed to restart {service} service")
            logger.debug(f"rcctl exit code {result.exit_code} for {service}")
            emit_error(str(error))
            self.service_failures.append(service)
        return self.service_failures
