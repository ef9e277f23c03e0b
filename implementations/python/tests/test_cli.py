"""Tests for the mprlist command-line interface."""

from __future__ import annotations

import contextlib
import io
import os
import sys
import tempfile
import unittest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from mprlist import __version__
from mprlist._cli import main

SORTED_AB = "15141f081e010507030801621f081e010a0703080161"
UNSORTED_AB = "15141f081e010a07030801611f081e01050703080162"


def _run(argv):
    out, err = io.StringIO(), io.StringIO()
    code = 0
    with contextlib.redirect_stdout(out), contextlib.redirect_stderr(err):
        try:
            main(argv)
        except SystemExit as e:
            code = e.code
    return code, out.getvalue(), err.getvalue()


class TestEncodeCommand(unittest.TestCase):
    def test_sorted(self):
        code, out, _ = _run(["encode", "--type", "content", "10:/a", "5:/b"])
        self.assertEqual(code, 0)
        self.assertEqual(out.strip(), SORTED_AB)

    def test_unsorted(self):
        code, out, _ = _run(["encode", "--type", "content", "--unsorted", "10:/a", "5:/b"])
        self.assertEqual(code, 0)
        self.assertEqual(out.strip(), UNSORTED_AB)

    def test_default_type(self):
        _, out, _ = _run(["encode", "10:/a"])
        self.assertTrue(out.startswith("1e"))

    def test_base64(self):
        _, out, _ = _run(["encode", "--type", "content", "--base64", "10:/a", "5:/b"])
        self.assertEqual(out.strip(), "FRQfCB4BBQcDCAFiHwgeAQoHAwgBYQ==")

    def test_bad_delegation(self):
        for arg in ("x:/a", "10", "10:"):
            with self.subTest(arg=arg):
                code, _, err = _run(["encode", arg])
                self.assertEqual(code, 2)
                self.assertIn("mprlist: error", err)


class TestDecodeCommand(unittest.TestCase):
    def test_sorted(self):
        code, out, _ = _run(["decode", UNSORTED_AB])
        self.assertEqual(code, 0)
        self.assertEqual(out.splitlines(), ["/b(5)", "/a(10)"])

    def test_unsorted(self):
        _, out, _ = _run(["decode", "--unsorted", UNSORTED_AB])
        self.assertEqual(out.splitlines(), ["/a(10)", "/b(5)"])

    def test_input_file(self):
        with tempfile.TemporaryDirectory() as d:
            path = os.path.join(d, "wire.bin")
            with open(path, "wb") as f:
                f.write(bytes.fromhex(SORTED_AB))
            _, out, _ = _run(["decode", "--input", path])
        self.assertEqual(out.splitlines(), ["/b(5)", "/a(10)"])

    def test_error_code(self):
        code, _, err = _run(["decode", "1500"])
        self.assertEqual(code, 2)
        self.assertIn("[ERR_EMPTY_LIST]", err)

    def test_bad_hex(self):
        code, _, err = _run(["decode", "15z"])
        self.assertEqual(code, 2)
        self.assertIn("bad hex", err)

    def test_missing_input(self):
        code, _, _ = _run(["decode"])
        self.assertEqual(code, 2)


class TestMisc(unittest.TestCase):
    def test_version(self):
        code, out, _ = _run(["version"])
        self.assertEqual(code, 0)
        self.assertEqual(out.strip(), "mprlist {}".format(__version__))

    def test_no_command(self):
        code, _, _ = _run([])
        self.assertEqual(code, 1)


if __name__ == "__main__":
    unittest.main()
