"""wifi-menu - entry point for ``python -m wifi_menu``."""

import sys

from wifi_menu.cli import main

if __name__ == "__main__":
    sys.exit(main())
