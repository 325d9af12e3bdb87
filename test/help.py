# python
"""
Help rendering tests (rich side).

Scope
- stylize(): plain vs. styled Text, host palette overrides.
- print_help(): plain and panel output on a captured console.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import io
import unittest
from unittest import TestCase
from unittest.mock import patch

from rich.console import Console

from schemargs import Argument, Number, String, generate_help, print_help, stylize

HELP = generate_help("search", "Search with custom parameters", {
    "query": Argument(String(), position=0, descr="search query"),
    "count": Argument(Number().default(5), short="c"),
})


def _console():
    return Console(file=io.StringIO(), color_system=None, force_terminal=False, width=100)


class TestStylize(TestCase):

    def testPlainKeepsText(self):
        text = stylize(HELP, colorful=False)
        self.assertEqual(text.plain, HELP.rstrip("\n"))
        self.assertEqual(text.spans, [])

    def testColorfulAddsSpans(self):
        text = stylize(HELP)
        self.assertEqual(text.plain, HELP.rstrip("\n"))
        styled = {text.plain[span.start:span.end] for span in text.spans}
        self.assertIn("search", styled)
        self.assertIn("ARGUMENTS:", styled)
        self.assertIn("--count", styled)
        self.assertIn("<query:str>", styled)
        self.assertIn("(default: 5)", styled)

    def testHostPaletteOverride(self):
        with patch.object(__import__("__main__"), "__styles__", {"section": "bold red"}, create=True):
            text = stylize(HELP)
        styles = {str(span.style) for span in text.spans if text.plain[span.start:span.end] == "OPTIONS:"}
        self.assertEqual(styles, {"bold red"})


class TestPrintHelp(TestCase):

    def testPlainOutput(self):
        console = _console()
        print_help(HELP, colorful=False, console=console)
        self.assertEqual(console.file.getvalue(), HELP)

    def testFancyOutput(self):
        console = _console()
        print_help(HELP, colorful=False, fancy=True, console=console)
        output = console.file.getvalue()
        self.assertIn("[ SEARCH ]", output)
        self.assertIn("<query:str> - search query", output)


if __name__ == "__main__":
    unittest.main()
