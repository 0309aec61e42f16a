"""
Tests for the command line front end.

Author: xwest
"""

import unittest
import sys
import os
import io
from contextlib import redirect_stdout, redirect_stderr
from unittest import mock

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from patternformula.cli import main, build_argument_parser


def run_cli(argv, stdin=None):
    """Run main() and return (status, stdout, stderr)."""
    out, err = io.StringIO(), io.StringIO()
    with redirect_stdout(out), redirect_stderr(err):
        if stdin is None:
            status = main(argv)
        else:
            with mock.patch("sys.stdin", io.StringIO(stdin)):
                status = main(argv)
    return status, out.getvalue(), err.getvalue()


class TestCliOutput(unittest.TestCase):
    """Each rendering is printed on its own line."""

    def test_default_is_xml(self):
        status, out, err = run_cli(["a + 5"])
        self.assertEqual(status, 0)
        self.assertEqual(
            out,
            '<?xml version="1.0" ?><operation type="add"><variable>a</variable><integer>5</integer></operation>\n'
        )
        self.assertEqual(err, "")

    def test_normative(self):
        status, out, _ = run_cli(["--format", "normative", " a + 5 "])
        self.assertEqual(status, 0)
        self.assertEqual(out, "a+5\n")

    def test_debug(self):
        status, out, _ = run_cli(["--format", "debug", "a+5"])
        self.assertEqual(status, 0)
        self.assertEqual(out, " [a +  5I ] \n")

    def test_formula_starting_with_minus(self):
        status, out, _ = run_cli(["--format", "normative", "--", " - bust_circ / 2"])
        self.assertEqual(status, 0)
        self.assertEqual(out, "-bust_circ/2\n")


class TestCliInput(unittest.TestCase):
    """Formula text from standard input."""

    def test_reads_stdin_by_default(self):
        status, out, _ = run_cli(["--format", "normative"], stdin="a + 1\n")
        self.assertEqual(status, 0)
        self.assertEqual(out, "a+1\n")

    def test_reads_stdin_for_dash(self):
        status, out, _ = run_cli(["--format", "normative", "-"], stdin="max(a; b)\n")
        self.assertEqual(status, 0)
        self.assertEqual(out, "max(a,b)\n")


class TestCliErrors(unittest.TestCase):
    """Invalid formulas exit with status 1 and a diagnostic."""

    def test_invalid_formula(self):
        status, out, err = run_cli(["(a"])
        self.assertEqual(status, 1)
        self.assertEqual(out, "")
        self.assertTrue(err.startswith("error: Invalid formula '(a'"))
        self.assertIn("Unexpected end of input", err)
        self.assertIn("-->", err)

    def test_strict_rejects_trailing_text(self):
        status, out, _ = run_cli(["--format", "normative", "a b"])
        self.assertEqual((status, out), (0, "a\n"))

        status, _, err = run_cli(["--strict", "a b"])
        self.assertEqual(status, 1)
        self.assertIn("S005", err)

    def test_max_depth(self):
        status, _, err = run_cli(["--max-depth", "2", "((a))"])
        self.assertEqual(status, 1)
        self.assertIn("S006", err)


class TestArgumentParser(unittest.TestCase):
    """Argument defaults."""

    def test_defaults(self):
        args = build_argument_parser().parse_args([])
        self.assertEqual(args.formula, "-")
        self.assertEqual(args.format, "xml")
        self.assertFalse(args.strict)
        self.assertFalse(args.verbose)

    def test_unknown_format_is_rejected(self):
        with redirect_stderr(io.StringIO()):
            with self.assertRaises(SystemExit):
                build_argument_parser().parse_args(["--format", "json", "a"])


if __name__ == '__main__':
    unittest.main()
