"""
Help rendering tests.

Scope
- Validate column widths (one more than the widest short/long column).
- Validate multi-line descriptions and block separation.
- Validate purity (same output twice, options untouched) and print_help.

Conventions
- Test method names follow CamelCase per project convention.
- Expected listings are spelled out with explicit padding widths.
"""

from __future__ import annotations

import io
import unittest
from unittest import TestCase

from getoptic import Arity, Option, Parser
from getoptic.handlers import ignore


def _parser(*options):
    return Parser(options, ignore)


class TestRenderHelp(TestCase):
    """Parser.render_help(header)."""

    def setUp(self):
        self.subject = _parser(
            Option("v", "verbose", handler=ignore, descr="chatty output on stderr"),
            Option("V?", "version", handler=ignore, descr="show version number"),
            Option("o", "output", Arity.OPTIONAL, ignore, "FILE", "output FILE"),
            Option("c", (), Arity.OPTIONAL, ignore, "FILE", "input FILE"),
            Option("L", "libdir", Arity.REQUIRED, ignore, "DIR", "library directory"),
        )

    def testListing(self):
        # widest short column "-o[FILE]" (8) → 9; widest long column "--output[=FILE]" (15) → 16
        self.assertEqual(self.subject.render_help("Usage: ic [OPTION...] files..."), "\n".join([
            "Usage: ic [OPTION...] files...",
            "-v" + " " * 7 + "--verbose" + " " * 7 + "chatty output on stderr",
            "-V,-?" + " " * 4 + "--version" + " " * 7 + "show version number",
            "-o[FILE] " + "--output[=FILE] " + "output FILE",
            "-c[FILE] " + " " * 16 + "input FILE",
            "-L DIR" + " " * 3 + "--libdir=DIR" + " " * 4 + "library directory",
        ]))

    def testIdempotent(self):
        first = self.subject.render_help("Options")
        second = self.subject.render_help("Options")
        self.assertEqual(first, second)
        self.assertEqual(self.subject.options[2].helprow(), ("-o[FILE]", "--output[=FILE]", "output FILE"))

    def testMultiLineDescription(self):
        subject = _parser(
            Option("x", "extra", handler=ignore, descr="first\nsecond"),
            Option("y", (), Arity.REQUIRED, ignore, "N", "why"),
        )
        # col0 = len("-y N") + 1 = 5, col1 = len("--extra") + 1 = 8
        self.assertEqual(subject.render_help("H"), "\n".join([
            "H",
            "-x   --extra first",
            " " * 13 + "second",
            "-y N" + " " * 9 + "why",
        ]))

    def testTrailingLineBreakAddsNoLine(self):
        subject = _parser(Option("a", handler=ignore, descr="alpha\n"))
        self.assertEqual(subject.render_help("H"), "H\n-a  alpha")

    def testBlankLineInsideDescriptionKept(self):
        subject = _parser(Option("a", handler=ignore, descr="one\n\nthree"))
        self.assertEqual(subject.render_help("H"), "H\n-a  one\n    \n    three")

    def testEmptyDescription(self):
        subject = _parser(Option("a", "all", handler=ignore))
        self.assertEqual(subject.render_help("H"), "H\n-a --all ")

    def testNoOptions(self):
        self.assertEqual(_parser().render_help("Options:"), "Options:")

    def testHeaderMustBeString(self):
        with self.assertRaises(TypeError):
            self.subject.render_help(None)


class TestPrintHelp(TestCase):
    """Parser.print_help(header) writes the same listing."""

    def testPrintsListingVerbatim(self):
        subject = _parser(Option("o", "output", Arity.REQUIRED, ignore, "[FILE]", "[bold]raw[/bold]"))
        stream = io.StringIO()
        subject.print_help("Usage: x", file=stream)
        self.assertEqual(stream.getvalue(), subject.render_help("Usage: x") + "\n")


if __name__ == "__main__":
    unittest.main()
