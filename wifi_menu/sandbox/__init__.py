"""
Best-effort process sandboxing for wifi-menu.

Supports:
- OpenBSD: unveil(2) limits the visible filesystem, pledge(2) the syscalls
- Other platforms: no restriction, reported as a warning
"""

from .base import SandboxGuard, SandboxOptions
from .guard_factory import NoOpGuard, get_sandbox_guard, restrict_process
from .openbsd_guard import OpenBSDGuard

__all__ = [
    "SandboxGuard",
    "SandboxOptions",
    "NoOpGuard",
    "OpenBSDGuard",
    "get_sandbox_guard",
    "restrict_process",
]
