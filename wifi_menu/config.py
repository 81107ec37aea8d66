import configparser
import logging
import os
from dataclasses import dataclass, replace
from typing import Optional

from wifi_menu.errors import ConfigError

logger = logging.getLogger(__name__)

CONFIG_FILE = "/etc/wifi-menu.cfg"
DEFAULT_SECTION = "wifi_menu"

# Values used when the config file is absent or a key is missing
DEFAULTS = {
    "profile_dir": "/etc/wifi_saved",
    "system_config": "/etc/hostname.{interface}",
    "wireless_group": "wlan",
    "ifconfig": "/sbin/ifconfig",
    "route": "/sbin/route",
    "cp": "/bin/cp",
    "dhcpleasectl": "/usr/sbin/dhcpleasectl",
    "rcctl": "/usr/sbin/rcctl",
    "services": "unbound",
    "lease_timeout": "10",
    "rediscover_delay": "1.0",
    "sandbox_enabled": "true",
    "hostap_directive": "mode 11g mediaopt hostap",
}

_TRUE_VALUES = ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Settings:
    """Paths and tunables for one run. Never mutated after loading."""

    profile_dir: str = DEFAULTS["profile_dir"]
    system_config: str = DEFAULTS["system_config"]
    wireless_group: str = DEFAULTS["wireless_group"]
    ifconfig: str = DEFAULTS["ifconfig"]
    route: str = DEFAULTS["route"]
    cp: str = DEFAULTS["cp"]
    dhcpleasectl: str = DEFAULTS["dhcpleasectl"]
    rcctl: str = DEFAULTS["rcctl"]
    services: tuple[str, ...] = ("unbound",)
    lease_timeout: int = 10
    rediscover_delay: float = 1.0
    sandbox_enabled: bool = True
    hostap_directive: str = DEFAULTS["hostap_directive"]

    def system_config_path(self, interface: str) -> str:
        """Location of the boot-time configuration file for ``interface``."""
        return self.system_config.format(interface=interface)

    def command_paths(self) -> list[str]:
        return [self.ifconfig, self.route, self.cp, self.dhcpleasectl, self.rcctl]


@dataclass
class Session:
    """Context threaded through every component call during one run."""

    settings: Settings
    interface: Optional[str] = None

    def with_interface(self, interface: str) -> "Session":
        return replace(self, interface=interface)

    @property
    def profile_dir(self) -> str:
        return self.settings.profile_dir

    @property
    def system_config_path(self) -> str:
        return self.settings.system_config_path(self.interface)


def _as_bool(value: str) -> bool:
    return str(value).strip().lower() in _TRUE_VALUES


def _as_number(key: str, value: str, kind):
    try:
        number = kind(value)
    except (TypeError, ValueError):
        raise ConfigError(f"Invalid value for '{key}' in configuration: {value!r}")
    if number < 0:
        raise ConfigError(f"'{key}' must not be negative (got {value!r})")
    return number


def load_settings(config_file: Optional[str] = None) -> Settings:
    """
    Read settings from the INI file, falling back to defaults.

    A missing file is not an error; a malformed numeric value is.
    """
    path = config_file or os.environ.get("WIFI_MENU_CONFIG", CONFIG_FILE)
    config = configparser.ConfigParser()
    try:
        found = config.read(path)
    except configparser.Error as e:
        raise ConfigError(f"Cannot parse configuration file {path}: {e}")
    if found:
        logger.debug(f"Loaded configuration from {path}")
    else:
        logger.debug(f"No configuration file at {path}, using defaults")

    values = dict(DEFAULTS)
    if config.has_section(DEFAULT_SECTION):
        values.update(config[DEFAULT_SECTION])

    services = tuple(s.strip() for s in values["services"].split(",") if s.strip())
    if "{interface}" not in values["system_config"]:
        raise ConfigError("'system_config' must contain the {interface} placeholder")

    return Settings(
        profile_dir=values["profile_dir"],
        system_config=values["system_config"],
        wireless_group=values["wireless_group"],
        ifconfig=values["ifconfig"],
        route=values["route"],
        cp=values["cp"],
        dhcpleasectl=values["dhcpleasectl"],
        rcctl=values["rcctl"],
        services=services,
        lease_timeout=_as_number("lease_timeout", values["lease_timeout"], int),
        rediscover_delay=_as_number(
            "rediscover_delay", values["rediscover_delay"], float
        ),
        sandbox_enabled=_as_bool(values["sandbox_enabled"]),
        hostap_directive=values["hostap_directive"].strip(),
    )
