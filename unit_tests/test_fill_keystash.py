# SPDX-FileCopyrightText: Copyright 2024 Siemens AG
#
# SPDX-License-Identifier: Apache-2.0

import importlib.util
import os
import tempfile
import unittest

from sslhelper.keystash import fill_keystash
from unit_tests.utils_for_test import build_keystash, generate_ec_key, read_keystash_file

SCRIPT_PATH = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "scripts", "fill_keystash.py")


def _load_script():
    """Import the `fill_keystash` script as a module."""
    spec = importlib.util.spec_from_file_location("fill_keystash_script", SCRIPT_PATH)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


class TestFillKeyStash(unittest.TestCase):

    def setUp(self):
        self._tmp_dir = tempfile.TemporaryDirectory()
        self.tmp_dir = self._tmp_dir.name

    def tearDown(self):
        self._tmp_dir.cleanup()

    def test_fill_empty_keystash(self):
        """
        GIVEN an empty keystash.
        WHEN it is filled up to three keys.
        THEN three keys are generated and persisted.
        """
        stash = build_keystash(self.tmp_dir)
        self.assertEqual(fill_keystash(stash, 3), 3)
        self.assertEqual(len(read_keystash_file(stash.path)), 3)

    def test_fill_keeps_stored_keys(self):
        """
        GIVEN a keystash with two stored keys.
        WHEN it is filled up to three keys.
        THEN only one key is generated and the stored keys stay in the file.
        """
        keys = [generate_ec_key(), generate_ec_key()]
        stash = build_keystash(self.tmp_dir, keys=keys)
        self.assertEqual(fill_keystash(stash, 3), 1)

        entries = read_keystash_file(stash.path)
        self.assertEqual(len(entries), 3)

    def test_fill_already_full(self):
        """
        GIVEN a keystash with two stored keys.
        WHEN it is filled up to one key.
        THEN no key is generated.
        """
        stash = build_keystash(self.tmp_dir, keys=[generate_ec_key(), generate_ec_key()])
        self.assertEqual(fill_keystash(stash, 1), 0)
        self.assertEqual(len(stash), 2)

    def test_script_main(self):
        """
        GIVEN the fill script and a path to a new keystash file.
        WHEN the script is run with a count of two and a fixed seed.
        THEN the file contains two keys.
        """
        script = _load_script()
        path = os.path.join(self.tmp_dir, "keystash.yml")
        generated = script.main(["-n", "2", "--path", path, "--seed", "1"])
        self.assertEqual(generated, 2)
        self.assertEqual(len(read_keystash_file(path)), 2)

    def test_script_rejects_negative_count(self):
        """
        GIVEN the fill script.
        WHEN it is run with a negative count.
        THEN the argument parser exits with an error.
        """
        script = _load_script()
        with self.assertRaises(SystemExit):
            script.main(["-n", "-1", "--path", os.path.join(self.tmp_dir, "keystash.yml")])


if __name__ == "__main__":
    unittest.main()
