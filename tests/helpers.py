"""Test doubles shared by the wifi-menu test modules."""

import os

from wifi_menu.command_runner import CommandResult, mask_secrets
from wifi_menu.config import Settings
from wifi_menu.prompts import InputProvider

IFCONFIG = "/sbin/ifconfig"


class RecordingExecutor:
    """
    Stand-in for ShellExecutor that records argv lists and returns canned
    results.

    Responses are registered per argv prefix; the longest matching prefix
    wins. A list of results is consumed one per call, the last one repeating.
    Unmatched commands succeed with empty output.
    """

    def __init__(self):
        self.calls = []
        self._responses = {}

    def on(self, *prefix, exit_code=0, stdout=""):
        result = CommandResult(command=" ".join(prefix), exit_code=exit_code, stdout=stdout)
        self._responses.setdefault(tuple(prefix), []).append(result)
        return self

    def run(self, argv, capture=False, quiet=False, timeout=None):
        argv = list(argv)
        self.calls.append(argv)
        best = None
        for prefix in self._responses:
            if tuple(argv[: len(prefix)]) == prefix:
                if best is None or len(prefix) > len(best):
                    best = prefix
        if best is None:
            return CommandResult(command=mask_secrets(argv), exit_code=0)
        queue = self._responses[best]
        return queue.pop(0) if len(queue) > 1 else queue[0]

    def calls_starting_with(self, *prefix):
        return [call for call in self.calls if tuple(call[: len(prefix)]) == prefix]


class ScriptedInput(InputProvider):
    """Answers prompts from fixed lists; running out is a test failure."""

    def __init__(self, lines=(), secrets=()):
        self.lines = list(lines)
        self.secrets = list(secrets)
        self.prompts = []

    def read_line(self, prompt):
        self.prompts.append(prompt)
        if not self.lines:
            raise AssertionError(f"Unexpected prompt: {prompt!r}")
        return self.lines.pop(0)

    def read_secret(self, prompt):
        self.prompts.append(prompt)
        if not self.secrets:
            raise AssertionError(f"Unexpected secret prompt: {prompt!r}")
        return self.secrets.pop(0)


def make_settings(tmp_dir, **overrides):
    """Settings pointing every file location into ``tmp_dir``."""
    values = dict(
        profile_dir=os.path.join(tmp_dir, "wifi_saved"),
        system_config=os.path.join(tmp_dir, "hostname.{interface}"),
        rediscover_delay=0,
        sandbox_enabled=False,
    )
    values.update(overrides)
    return Settings(**values)


def ifconfig_group_output(*names):
    """Render ``ifconfig wlan`` style output for the given interfaces."""
    lines = []
    for name in names:
        lines.append(f"{name}: flags=8843<UP,BROADCAST,RUNNING,SIMPLEX,MULTICAST> mtu 1500")
        lines.append("\tlladdr 00:11:22:33:44:55")
        lines.append("\tgroups: wlan")
    return "\n".join(lines) + "\n"


def scan_output(*ssids):
    """Render ``ifconfig <if> scan`` style output listing ``ssids``."""
    lines = [
        "iwn0: flags=8843<UP,BROADCAST,RUNNING,SIMPLEX,MULTICAST> mtu 1500",
        "\tieee80211: nwid \"\" chan 6 bssid 00:00:00:00:00:00 -64dBm",
    ]
    for index, ssid in enumerate(ssids):
        token = f'"{ssid}"' if " " in ssid else ssid
        lines.append(
            f"\t\tnwid {token} chan {index + 1} bssid 00:1a:2b:3c:4d:{index:02x} "
            f"80% HT-MCS15 privacy,short_preamble,short_slottime,wpa2"
        )
    return "\n".join(lines) + "\n"
