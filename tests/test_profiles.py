"""Tests for the saved profile store."""

import os
import shutil
import stat
import tempfile
import unittest
from unittest.mock import patch

from wifi_menu.errors import (
    InvalidProfile,
    PassphraseTooLong,
    PassphraseTooShort,
    ProfileWriteFailed,
)
from wifi_menu.profiles import (
    MODE_KEYED,
    MODE_OPEN,
    NetworkProfile,
    list_profiles,
    parse_profile,
    read_profile,
    validate_passphrase,
    write_profile,
)


class TestPassphraseBounds(unittest.TestCase):
    def test_short_passphrases_rejected(self):
        for length in range(1, 8):
            with self.assertRaises(PassphraseTooShort):
                validate_passphrase("x" * length)

    def test_empty_and_valid_lengths_accepted(self):
        for length in (0, 8, 20, 63):
            validate_passphrase("x" * length)

    def test_long_passphrase_rejected(self):
        with self.assertRaises(PassphraseTooLong):
            validate_passphrase("x" * 64)


class TestNetworkProfile(unittest.TestCase):
    def test_mode_follows_passphrase(self):
        self.assertEqual(NetworkProfile("Cafe", "iwn0").mode, MODE_OPEN)
        self.assertEqual(NetworkProfile("Home", "iwn0", "hunter22").mode, MODE_KEYED)

    def test_empty_passphrase_means_open(self):
        profile = NetworkProfile("Cafe", "iwn0", passphrase="")
        self.assertIsNone(profile.passphrase)
        self.assertEqual(profile.join_arguments(), ["nwid", "Cafe"])

    def test_keyed_join_arguments(self):
        profile = NetworkProfile("Home Net", "iwn0", "hunter22")
        self.assertEqual(
            profile.join_arguments(), ["join", "Home Net", "wpakey", "hunter22"]
        )

    def test_filename_is_ssid_dot_interface(self):
        self.assertEqual(NetworkProfile("HomeNet", "iwn0").filename, "HomeNet.iwn0")

    def test_filename_never_contains_separator(self):
        self.assertEqual(NetworkProfile("a/b", "iwn0").filename, "a_b.iwn0")

    def test_filename_never_hidden(self):
        self.assertEqual(NetworkProfile(".hidden", "iwn0").filename, "_hidden.iwn0")

    def test_empty_ssid_rejected(self):
        with self.assertRaises(InvalidProfile):
            NetworkProfile("", "iwn0")

    def test_quote_in_ssid_rejected(self):
        with self.assertRaises(InvalidProfile):
            NetworkProfile('say "hi"', "iwn0")

    def test_keyed_text_form(self):
        text = NetworkProfile("HomeNet", "iwn0", "hunter22").to_text()
        self.assertEqual(text, 'join "HomeNet" wpakey "hunter22"\n\ninet autoconf\n')

    def test_open_hostap_text_form(self):
        text = NetworkProfile("Cafe", "iwn0", hostap=True).to_text()
        self.assertEqual(
            text, 'nwid "Cafe"\nmode 11g mediaopt hostap\n\ninet autoconf\n'
        )


class TestParseProfile(unittest.TestCase):
    def test_last_matching_line_wins(self):
        text = (
            'join "First" wpakey "password1"\n'
            'nwid "Second"\n'
            'join "Third" wpakey "password3"\n'
            "\ninet autoconf\n"
        )
        profile = parse_profile(text, "iwn0")
        self.assertEqual(profile.ssid, "Third")
        self.assertEqual(profile.passphrase, "password3")

    def test_last_line_can_switch_to_open(self):
        text = 'join "Home" wpakey "password1"\nnwid "Guest"\n'
        profile = parse_profile(text)
        self.assertEqual(profile.ssid, "Guest")
        self.assertEqual(profile.mode, MODE_OPEN)

    def test_missing_mode_line(self):
        with self.assertRaises(InvalidProfile):
            parse_profile("inet autoconf\n")

    def test_join_without_key_is_open(self):
        profile = parse_profile('join "Cafe"\n\ninet autoconf\n', "iwn0")
        self.assertEqual(profile.ssid, "Cafe")
        self.assertEqual(profile.mode, MODE_OPEN)
        self.assertEqual(profile.join_arguments(), ["nwid", "Cafe"])

    def test_saved_key_replayed_regardless_of_length(self):
        for key in ("short", "k" * 70):
            profile = parse_profile(f'join "Home" wpakey "{key}"\n', "iwn0")
            self.assertEqual(profile.passphrase, key)
            self.assertEqual(profile.join_arguments(), ["join", "Home", "wpakey", key])

    def test_hostap_directive_detected(self):
        profile = parse_profile('nwid "AP"\nmode 11g mediaopt hostap\n')
        self.assertTrue(profile.hostap)


class TestProfileStore(unittest.TestCase):
    def setUp(self):
        self.tmp = tempfile.mkdtemp(prefix="wifi_menu_test_")
        self.directory = os.path.join(self.tmp, "wifi_saved")

    def tearDown(self):
        shutil.rmtree(self.tmp, ignore_errors=True)

    def test_list_creates_missing_directory(self):
        self.assertEqual(list_profiles(self.directory), [])
        self.assertTrue(os.path.isdir(self.directory))
        mode = stat.S_IMODE(os.stat(self.directory).st_mode)
        self.assertEqual(mode, 0o700)

    def test_list_skips_hidden_entries(self):
        os.makedirs(self.directory)
        for name in ("Home.iwn0", ".swp", "Cafe.iwn0"):
            open(os.path.join(self.directory, name), "w").close()
        self.assertCountEqual(list_profiles(self.directory), ["Home.iwn0", "Cafe.iwn0"])

    def test_list_filters_by_interface(self):
        os.makedirs(self.directory)
        for name in ("Home.iwn0", "Home.athn0"):
            open(os.path.join(self.directory, name), "w").close()
        self.assertEqual(list_profiles(self.directory, "athn0"), ["Home.athn0"])

    def test_dot_prefixed_ssid_is_listed_after_write(self):
        profile = NetworkProfile(".hidden", "iwn0", "password1")
        write_profile(self.directory, profile)
        self.assertEqual(list_profiles(self.directory, "iwn0"), [profile.filename])
        recovered = read_profile(self.directory, profile.filename)
        self.assertEqual(recovered.ssid, ".hidden")
        self.assertEqual(recovered.passphrase, "password1")

    def test_round_trip(self):
        cases = [
            NetworkProfile("HomeNet", "iwn0", "correct horse battery"),
            NetworkProfile("Cafe Free WiFi", "iwn0"),
            NetworkProfile("Lab", "athn0", "x" * 63, hostap=True),
        ]
        for original in cases:
            write_profile(self.directory, original)
            recovered = read_profile(self.directory, original.filename)
            self.assertEqual(recovered, original)

    def test_write_sets_owner_only_mode(self):
        path = write_profile(self.directory, NetworkProfile("Home", "iwn0", "hunter22"))
        self.assertEqual(path, os.path.join(self.directory, "Home.iwn0"))
        self.assertEqual(stat.S_IMODE(os.stat(path).st_mode), 0o600)

    def test_write_overwrites_existing_profile(self):
        write_profile(self.directory, NetworkProfile("Home", "iwn0", "oldpassword"))
        write_profile(self.directory, NetworkProfile("Home", "iwn0", "newpassword"))
        self.assertEqual(read_profile(self.directory, "Home.iwn0").passphrase, "newpassword")

    def test_chmod_failure_is_not_fatal(self):
        profile = NetworkProfile("Home", "iwn0", "hunter22")
        with patch("wifi_menu.profiles.os.chmod", side_effect=OSError("denied")):
            os.makedirs(self.directory)
            path = write_profile(self.directory, profile)
        self.assertTrue(os.path.exists(path))

    def test_write_failure_raises(self):
        profile = NetworkProfile("Home", "iwn0", "hunter22")
        with patch("wifi_menu.profiles.os.open", side_effect=PermissionError("denied")):
            with self.assertRaises(ProfileWriteFailed):
                write_profile(self.directory, profile)

    def test_read_missing_file(self):
        os.makedirs(self.directory)
        with self.assertRaises(InvalidProfile):
            read_profile(self.directory, "Nope.iwn0")

    def test_read_takes_interface_from_filename(self):
        os.makedirs(self.directory)
        with open(os.path.join(self.directory, "Office.iwn0"), "w") as f:
            f.write('join "Office" wpakey "officepass"\n\ninet autoconf\n')
        profile = read_profile(self.directory, "Office.iwn0")
        self.assertEqual(profile.interface, "iwn0")
        self.assertEqual(profile.ssid, "Office")


if __name__ == "__main__":
    unittest.main()
