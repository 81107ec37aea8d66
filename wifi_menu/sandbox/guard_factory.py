"""
Factory for the platform-specific sandbox guard, plus the entry point the
orchestrator calls before interactive work begins.
"""

import logging
from typing import Optional

from wifi_menu.config import Session
from wifi_menu.messaging import emit_warning

from .base import SandboxGuard, SandboxOptions, get_current_platform, python_runtime_paths
from .openbsd_guard import OpenBSDGuard

logger = logging.getLogger(__name__)


class NoOpGuard(SandboxGuard):
    """No-op guard for platforms without a restriction mechanism."""

    def is_available(self) -> bool:
        """Always available as a fallback."""
        return True

    def get_platform(self) -> str:
        """Platform-agnostic."""
        return "noop"

    def apply(self, options: SandboxOptions) -> None:
        """Leave the process unrestricted."""
        pass


def get_sandbox_guard(platform: Optional[str] = None) -> SandboxGuard:
    """
    Get the appropriate sandbox guard for the current platform.

    Args:
        platform: Override platform detection (mainly for testing)

    Returns:
        SandboxGuard instance for the current platform
    """
    if platform is None:
        platform = get_current_platform()

    guards = [
        OpenBSDGuard(),
    ]

    for guard in guards:
        if guard.get_platform() == platform and guard.is_available():
            return guard

    return NoOpGuard()


def options_for_session(session: Session) -> SandboxOptions:
    """Build the exposure list for the selected interface."""
    settings = session.settings
    write_paths = [settings.profile_dir, "/tmp"]
    if session.interface:
        write_paths.append(session.system_config_path)
    return SandboxOptions(
        exec_paths=settings.command_paths() + ["/bin/sh"],
        read_paths=["/etc", "/dev"] + python_runtime_paths(),
        write_paths=write_paths,
    )


def restrict_process(session: Session, guard: Optional[SandboxGuard] = None) -> bool:
    """
    Apply the sandbox if the platform supports one.

    Never raises: an unavailable or failing mechanism is reported as a
    warning and the session continues unrestricted.

    Returns:
        True if the process is now restricted
    """
    if not session.settings.sandbox_enabled:
        logger.info("Sandboxing disabled by configuration")
        return False

    if guard is None:
        guard = get_sandbox_guard()
    if guard.get_platform() == "noop" or not guard.is_available():
        logger.warning(
            f"Process sandboxing is not available on {get_current_platform()}; "
            f"continuing unrestricted"
        )
        return False

    try:
        guard.apply(options_for_session(session))
    except OSError as e:
        emit_warning(f"Sandbox setup failed: {e}")
        return False

    logger.info(f"Process restricted with {guard.__class__.__name__}")
    return True
