"""
Failure taxonomy for a wifi-menu session.

Every terminal failure is a ``WifiMenuError`` subclass whose message is the
single diagnostic line shown to the operator.
"""


class WifiMenuError(Exception):
    """Base class for all terminal failures."""

    exit_code = 1


class ConfigError(WifiMenuError):
    """Configuration file holds an unusable value."""


class PermissionDenied(WifiMenuError):
    """The process lacks root privileges."""


class NoInterfaceFound(WifiMenuError):
    """No wireless interface is present in the wireless group."""


class InterfaceUnavailable(WifiMenuError):
    """The selected interface cannot be brought up."""


class InvalidSelection(WifiMenuError):
    """A menu choice was outside the presented range."""


class ScanFailed(WifiMenuError):
    """The scan command exited with a non-zero status."""


class NoNetworksFound(WifiMenuError):
    """The scan succeeded but reported no selectable network."""


class PassphraseTooShort(WifiMenuError):
    """A non-empty passphrase is shorter than 8 characters."""


class PassphraseTooLong(WifiMenuError):
    """A passphrase is longer than 63 characters."""


class ProfileWriteFailed(WifiMenuError):
    """A profile could not be written to the profile directory."""


class InvalidProfile(WifiMenuError):
    """A saved profile has no usable mode/SSID line."""


class JoinFailed(WifiMenuError):
    """The join command for the selected network failed."""


class ConfigCopyFailed(WifiMenuError):
    """The profile could not be copied to the system configuration file."""


class LeaseFailed(WifiMenuError):
    """No address lease was obtained within the wait window."""


class ServiceRestartFailed(WifiMenuError):
    """A dependent service did not restart. Reported, never fatal."""


class SessionCancelled(Exception):
    """The operator left a menu with empty input."""

    def __init__(self, message: str = "Exiting.", exit_code: int = 0):
        super().__init__(message)
        self.exit_code = exit_code
