"""
Saved network profiles.

One plain-text file per (SSID, interface) pair lives in the profile
directory, named ``<ssid>.<interface>``. The first line selects the join
mode::

    join "HomeNet" wpakey "correct horse"
    mode 11g mediaopt hostap

    inet autoconf

The same text is later copied verbatim to the interface's system
configuration file, so it must stay valid ``hostname.if(5)`` syntax.
"""

import logging
import os
import re
from dataclasses import dataclass
from typing import Optional

from wifi_menu.errors import (
    InvalidProfile,
    PassphraseTooLong,
    PassphraseTooShort,
    ProfileWriteFailed,
)
from wifi_menu.messaging import emit_warning

logger = logging.getLogger(__name__)

MODE_KEYED = "keyed"
MODE_OPEN = "open"

MIN_PASSPHRASE_LENGTH = 8
MAX_PASSPHRASE_LENGTH = 63

DEFAULT_HOSTAP_DIRECTIVE = "mode 11g mediaopt hostap"

DIRECTORY_MODE = 0o700
FILE_MODE = 0o600

_JOIN_LINE = re.compile(r'^(join|nwid)\s+"([^"]+)"(?:\s+wpakey\s+"([^"]+)")?')
_HOSTAP_LINE = re.compile(r"\bmediaopt\s+hostap\b")


def validate_passphrase(passphrase: str) -> None:
    """An empty passphrase means an open network; otherwise WPA-PSK bounds apply."""
    if not passphrase:
        return
    if len(passphrase) < MIN_PASSPHRASE_LENGTH:
        raise PassphraseTooShort(
            "Passphrase must be between 8 and 63 characters for WPA networks"
        )
    if len(passphrase) > MAX_PASSPHRASE_LENGTH:
        raise PassphraseTooLong(
            "Passphrase must be between 8 and 63 characters for WPA networks"
        )


def _check_quotable(label: str, value: str) -> None:
    if '"' in value or "\n" in value or "\r" in value:
        raise InvalidProfile(f"{label} cannot contain quotes or line breaks")


@dataclass(frozen=True)
class NetworkProfile:
    """Join parameters for one network on one interface."""

    ssid: str
    interface: str
    passphrase: Optional[str] = None
    hostap: bool = False

    def __post_init__(self):
        if not self.ssid:
            raise InvalidProfile("SSID must not be empty")
        _check_quotable("SSID", self.ssid)
        if not self.passphrase:
            object.__setattr__(self, "passphrase", None)
        else:
            _check_quotable("Passphrase", self.passphrase)

    @property
    def mode(self) -> str:
        return MODE_KEYED if self.passphrase else MODE_OPEN

    @property
    def filename(self) -> str:
        # A slash must not escape the profile directory and a leading dot
        # would hide the file from list_profiles
        safe_ssid = self.ssid.replace(os.sep, "_")
        if safe_ssid.startswith("."):
            safe_ssid = "_" + safe_ssid[1:]
        return f"{safe_ssid}.{self.interface}"

    def join_arguments(self) -> list[str]:
        """ifconfig arguments that associate with this network."""
        if self.mode == MODE_KEYED:
            return ["join", self.ssid, "wpakey", self.passphrase]
        return ["nwid", self.ssid]

    def to_text(self, hostap_directive: str = DEFAULT_HOSTAP_DIRECTIVE) -> str:
        if self.mode == MODE_KEYED:
            first = f'join "{self.ssid}" wpakey "{self.passphrase}"'
        else:
            first = f'nwid "{self.ssid}"'
        lines = [first]
        if self.hostap:
            lines.append(hostap_directive)
        lines.extend(["", "inet autoconf"])
        return "\n".join(lines) + "\n"


def parse_profile(text: str, interface: str = "") -> NetworkProfile:
    """
    Parse the text form of a profile.

    Every line is scanned and the last join/nwid line governs, so a file with
    conflicting lines resolves to its final one. Only a file with no such
    line is invalid.
    """
    found = None
    hostap = False
    for line in text.splitlines():
        match = _JOIN_LINE.match(line.strip())
        if match:
            found = match.groups()
        elif _HOSTAP_LINE.search(line):
            hostap = True

    if found is None:
        raise InvalidProfile("Invalid configuration file: no join/nwid line found")

    keyword, ssid, key = found
    if keyword == "nwid":
        key = None
    # A join line without wpakey is an open network. Saved keys are replayed
    # as written; length bounds apply only when a profile is created.
    return NetworkProfile(ssid=ssid, interface=interface, passphrase=key, hostap=hostap)


def ensure_profile_dir(directory: str) -> bool:
    """
    Create the profile directory (owner-only) if it is missing.

    Returns True when the directory had to be created.
    """
    if os.path.isdir(directory):
        return False
    os.makedirs(directory, mode=DIRECTORY_MODE, exist_ok=True)
    # makedirs honours the umask; force the final mode explicitly
    os.chmod(directory, DIRECTORY_MODE)
    logger.info(f"Created profile directory {directory}")
    return True


def list_profiles(directory: str, interface: Optional[str] = None) -> list[str]:
    """
    Return saved profile filenames in directory-listing order.

    Hidden entries are skipped. When ``interface`` is given only profiles
    scoped to that interface are returned. A missing directory is created and
    reported as empty.
    """
    try:
        created = ensure_profile_dir(directory)
    except OSError as e:
        raise ProfileWriteFailed(f"Cannot create directory {directory}: {e}")
    if created:
        emit_warning(
            f"No saved wifi configuration directory found; created {directory}"
        )
        return []

    names = [name for name in os.listdir(directory) if not name.startswith(".")]
    if interface:
        suffix = f".{interface}"
        names = [name for name in names if name.endswith(suffix)]
    return names


def profile_path(directory: str, filename: str) -> str:
    return os.path.join(directory, filename)


def read_profile(directory: str, filename: str) -> NetworkProfile:
    """Load and parse ``filename``; the interface comes from its suffix."""
    path = profile_path(directory, filename)
    try:
        with open(path, encoding="utf-8") as f:
            text = f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise InvalidProfile(f"Cannot open {path}: {e}")

    interface = filename.rsplit(".", 1)[1] if "." in filename else ""
    return parse_profile(text, interface=interface)


def write_profile(
    directory: str,
    profile: NetworkProfile,
    hostap_directive: str = DEFAULT_HOSTAP_DIRECTIVE,
) -> str:
    """
    Write ``profile`` as ``<ssid>.<interface>``, replacing any older copy.

    Returns the path written. Failing to tighten permissions afterwards is
    only logged.
    """
    path = profile_path(directory, profile.filename)
    try:
        ensure_profile_dir(directory)
        fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, FILE_MODE)
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(profile.to_text(hostap_directive))
    except OSError as e:
        raise ProfileWriteFailed(f"Cannot write to {path}: {e}")

    try:
        os.chmod(path, FILE_MODE)
    except OSError as e:
        logger.warning(f"Could not set permissions on {path}: {e}")
    logger.debug(f"Saved profile {path}")
    return path
