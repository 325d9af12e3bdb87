# python
"""
Fault model tests.

Scope
- Options surface (title, code, hint) and copy.replace() support.
- Validation issues and their messages.
- Rendering through rich (plain and fancy, colorless for comparison).
- trigger(): raising, shell-mode exits and warnings.
- getdoc() and FaultCode.normalize() host lookups.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import copy
import io
import unittest
from unittest import TestCase
from unittest.mock import patch

from rich.console import Console

from schemargs import (
    ConfigurationError,
    EmptyOptionValueWarning,
    FaultCode,
    HelpRequested,
    Issue,
    ParserFault,
    UnknownOptionError,
    ValidationError,
    getdoc,
    trigger,
)
from schemargs import faults


def _render(renderable):
    console = Console(file=io.StringIO(), color_system=None, force_terminal=False, width=120)
    console.print(renderable)
    return console.file.getvalue()


class TestOptions(TestCase):
    """Read-only options and replacement."""

    def testDefaults(self):
        fault = ParserFault("boom")
        self.assertEqual(fault.message, "boom")
        self.assertEqual(fault.title, "error")
        self.assertIsNone(fault.code)
        self.assertIsNone(fault.hint)
        self.assertEqual(str(fault), "boom")

    def testOptionsAreReadOnly(self):
        fault = ConfigurationError("bad", code=FaultCode.DUPLICATED_POSITION)
        with self.assertRaises(TypeError):
            fault.options["code"] = 0  # type: ignore[index]

    def testReplaceMergesOptions(self):
        fault = UnknownOptionError("unknown option '--x'", token="--x", suggestions=["--y"])
        replaced = copy.replace(fault, hint="try --y")
        self.assertIsInstance(replaced, UnknownOptionError)
        self.assertEqual(replaced.token, "--x")
        self.assertEqual(replaced.suggestions, ("--y",))
        self.assertEqual(replaced.hint, "try --y")
        self.assertIsNone(fault.hint)

    def testReplaceKeepsIssues(self):
        fault = ValidationError([(("count",), "expected a number")])
        replaced = copy.replace(fault, colorful=False)
        self.assertEqual(replaced.issues, fault.issues)
        self.assertEqual(replaced.message, fault.message)


class TestValidationError(TestCase):
    """Issues and messages."""

    def testSingleIssueMessage(self):
        fault = ValidationError([(("count",), "expected a number")])
        self.assertEqual(fault.message, "invalid argument count: expected a number")
        self.assertEqual(fault.code, FaultCode.INVALID_VALUES)
        self.assertEqual(fault.title, "invalid arguments")

    def testSingleIssueFromIssueInstance(self):
        fault = ValidationError([Issue(("ids", 2), "expected a number")])
        self.assertEqual(fault.message, "invalid argument ids.2: expected a number")
        self.assertEqual(str(fault), fault.message)

    def testManyIssuesMessage(self):
        fault = ValidationError([(("a",), "x"), (("b", 0), "y")])
        self.assertEqual(fault.message, "2 invalid arguments")
        self.assertEqual(str(fault.issues[1]), "b.0: y")

    def testIssueWithoutPath(self):
        self.assertEqual(str(Issue((), "broken")), "broken")


class TestRendering(TestCase):
    """rich rendering of faults."""

    def testPlainRendering(self):
        fault = ValidationError(
            [(("count",), "expected a number")],
            hint="pass a number",
            colorful=False,
        )
        output = _render(fault)
        self.assertIn("[ %d | Invalid Arguments ]" % FaultCode.INVALID_VALUES, output)
        self.assertIn("invalid argument count: expected a number", output)
        self.assertIn(" • count: expected a number", output)
        self.assertIn(" → pass a number", output)

    def testFancyRendering(self):
        fault = ConfigurationError("bad schema", title="broken", fancy=True, colorful=False)
        output = _render(fault)
        self.assertIn("bad schema", output)
        self.assertIn("Broken", output)
        self.assertIn("╭", output)

    def testHostCodesRemapping(self):
        with patch.object(__import__("__main__"), "__codes__", {FaultCode.UNKNOWN_OPTION: "E-OPT"}, create=True):
            self.assertEqual(FaultCode.UNKNOWN_OPTION.normalize(), "E-OPT")
            self.assertIn("E-OPT", _render(UnknownOptionError("x", code=FaultCode.UNKNOWN_OPTION, colorful=False)))
        self.assertEqual(FaultCode.UNKNOWN_OPTION.normalize(), str(FaultCode.UNKNOWN_OPTION.value))


class TestTrigger(TestCase):
    """Surfacing faults."""

    def testRaisesOutsideShell(self):
        with self.assertRaises(ConfigurationError):
            trigger(ConfigurationError("bad"))

    def testShellExitsWithStatus(self):
        with patch.object(faults, "console", Console(file=io.StringIO())):
            with self.assertRaises(SystemExit) as context:
                trigger(ConfigurationError("bad"), shell=True, status=2)
        self.assertEqual(context.exception.code, 2)

    def testHelpRequestedExitsCleanly(self):
        with patch("sys.stdout", new_callable=io.StringIO) as stdout:
            with self.assertRaises(SystemExit) as context:
                trigger(HelpRequested("help requested", text="usage"), shell=True)
        self.assertEqual(context.exception.code, 0)
        self.assertIn("usage", stdout.getvalue())

    def testWarningIsIssued(self):
        with self.assertWarns(EmptyOptionValueWarning):
            trigger(EmptyOptionValueWarning("empty inline value"))

    def testRejectsPlainObjects(self):
        with self.assertRaises(TypeError):
            trigger(ValueError("plain"))


class TestGetdoc(TestCase):
    """Host documentation lookup."""

    def testNothingRegistered(self):
        self.assertIsNone(getdoc(FaultCode.UNKNOWN_OPTION))

    def testRegistered(self):
        docs = {FaultCode.UNKNOWN_OPTION: "see --help"}
        with patch.object(__import__("__main__"), "__docs__", docs, create=True):
            self.assertEqual(getdoc(FaultCode.UNKNOWN_OPTION), "see --help")

    def testRejectsNonCodes(self):
        with self.assertRaises(TypeError):
            getdoc(11112)


if __name__ == "__main__":
    unittest.main()
