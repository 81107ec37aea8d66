"""
Base classes and interfaces for process sandboxing.
"""

import platform
import sysconfig
from abc import ABC, abstractmethod
from dataclasses import dataclass

# pledge(2) promises needed once the session is interactive: file access,
# spawning the network tools and turning terminal echo off for passphrases
DEFAULT_PROMISES = "stdio rpath wpath cpath fattr tty proc exec unix"


@dataclass
class SandboxOptions:
    """What the process may still touch after the sandbox is applied."""

    # Executables the orchestrator spawns
    exec_paths: list[str] = None
    # Read-only locations (system config, devices, the Python runtime)
    read_paths: list[str] = None
    # Read-write-create locations (profile directory, system config file)
    write_paths: list[str] = None
    # Device nodes opened read-write (terminal for passphrase prompts)
    device_paths: list[str] = None

    promises: str = DEFAULT_PROMISES

    def __post_init__(self):
        """Initialize default values."""
        if self.exec_paths is None:
            self.exec_paths = ["/bin/sh"]
        if self.read_paths is None:
            self.read_paths = ["/etc", "/dev"]
        if self.write_paths is None:
            self.write_paths = ["/tmp"]
        if self.device_paths is None:
            self.device_paths = ["/dev/tty"]

    def unveil_rules(self) -> list[tuple[str, str]]:
        """Flatten the options into (path, permissions) pairs."""
        rules = [(path, "rx") for path in self.exec_paths]
        rules += [(path, "r") for path in self.read_paths]
        rules += [(path, "rw") for path in self.device_paths]
        rules += [(path, "rwc") for path in self.write_paths]
        return rules


class SandboxGuard(ABC):
    """Abstract base class for platform-specific process restriction."""

    @abstractmethod
    def is_available(self) -> bool:
        """Check if the restriction mechanism is available on this system."""
        pass

    @abstractmethod
    def apply(self, options: SandboxOptions) -> None:
        """
        Restrict the current process.

        Args:
            options: Paths and promises that stay available

        Raises:
            OSError: if the kernel rejects the restriction
        """
        pass

    @abstractmethod
    def get_platform(self) -> str:
        """Get the platform this guard supports."""
        pass


def get_current_platform() -> str:
    """Get the current platform name."""
    system = platform.system().lower()
    if system == "darwin":
        return "macos"
    return system


def python_runtime_paths() -> list[str]:
    """Directories the interpreter may still import modules from."""
    paths = sysconfig.get_paths()
    seen = []
    for key in ("stdlib", "platstdlib", "purelib", "platlib"):
        path = paths.get(key)
        if path and path not in seen:
            seen.append(path)
    return seen
