"""
OpenBSD process restriction using unveil(2) and pledge(2).
"""

import ctypes
import errno
import logging
import os
from typing import Optional

from .base import SandboxGuard, SandboxOptions

logger = logging.getLogger(__name__)


class OpenBSDGuard(SandboxGuard):
    """Restricts filesystem visibility and syscalls through libc."""

    def __init__(self):
        self._libc = None

    def _load_libc(self):
        if self._libc is None:
            self._libc = ctypes.CDLL(None, use_errno=True)
        return self._libc

    def is_available(self) -> bool:
        """Check that libc exports both unveil and pledge."""
        try:
            libc = self._load_libc()
        except OSError:
            return False
        return hasattr(libc, "unveil") and hasattr(libc, "pledge")

    def get_platform(self) -> str:
        """Get the platform this guard supports."""
        return "openbsd"

    def _unveil(self, path: Optional[str], permissions: Optional[str]) -> None:
        libc = self._load_libc()
        c_path = path.encode() if path is not None else None
        c_perms = permissions.encode() if permissions is not None else None
        if libc.unveil(c_path, c_perms) == 0:
            return
        err = ctypes.get_errno()
        if err == errno.ENOENT and path is not None:
            # Parent directory missing; nothing there to expose
            logger.debug(f"unveil skipped missing path {path}")
            return
        raise OSError(err, f"unveil({path}, {permissions}): {os.strerror(err)}")

    def apply(self, options: SandboxOptions) -> None:
        """
        Expose only the configured paths, then lock the view and pledge.

        Args:
            options: Paths and promises that stay available
        """
        for path, permissions in options.unveil_rules():
            self._unveil(path, permissions)
        # Disallow further unveil calls
        self._unveil(None, None)

        libc = self._load_libc()
        if libc.pledge(options.promises.encode(), None) != 0:
            err = ctypes.get_errno()
            raise OSError(err, f"pledge({options.promises}): {os.strerror(err)}")
        logger.debug(f"Pledged '{options.promises}'")
