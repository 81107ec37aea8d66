"""
Input providers for the interactive menus.
"""

from abc import ABC, abstractmethod
from typing import Optional

from rich.markup import escape

from wifi_menu.messaging import get_console


class InputProvider(ABC):
    """Source of operator answers for the orchestrator's prompts."""

    @abstractmethod
    def read_line(self, prompt: str) -> str:
        """Read one line of input, without the trailing newline."""
        pass

    @abstractmethod
    def read_secret(self, prompt: str) -> str:
        """Read one line of input with terminal echo suppressed."""
        pass


class ConsoleInput(InputProvider):
    """Reads from the controlling terminal through the rich console."""

    def _read(self, prompt: str, password: bool) -> str:
        try:
            return get_console().input(escape(prompt), password=password)
        except EOFError:
            # Closed stdin behaves like pressing Enter
            return ""

    def read_line(self, prompt: str) -> str:
        return self._read(prompt, password=False).strip()

    def read_secret(self, prompt: str) -> str:
        return self._read(prompt, password=True)


def parse_choice(choice: str, count: int) -> Optional[int]:
    """Map a 1-based menu answer to a list index, or None if out of range."""
    # Plain digits only; int() would also take signs and underscores
    choice = choice.strip()
    if not choice.isdecimal():
        return None
    number = int(choice)
    if 1 <= number <= count:
        return number - 1
    return None
