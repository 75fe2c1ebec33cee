"""
Fault layer tests (codes, trigger, rich rendering).

Conventions
- Test method names follow CamelCase per project convention.
- Rendering is checked with a colorless rich Console so output is plain text.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from rich.console import Console
from rich.panel import Panel

from usagematch import faults
from usagematch.faults import (
    FaultCode,
    PatternException,
    InvalidPatternError,
    LeafNotFoundError,
    UnknownPatternKindError,
    trigger,
)

class TestFaults(TestCase):

    def testTriggerRaisesWithMergedOptions(self):
        with self.assertRaises(LeafNotFoundError) as context:
            trigger(LeafNotFoundError("missing"), code=FaultCode.LEAF_NOT_FOUND, title="leaf not found")
        self.assertIs(context.exception.options["code"], FaultCode.LEAF_NOT_FOUND)
        self.assertEqual(str(context.exception), "missing")

    def testTriggerRejectsPlainObjects(self):
        with self.assertRaises(TypeError):
            trigger(ValueError("nope"))

    def testFaultsKeepBuiltinFamilies(self):
        self.assertTrue(issubclass(InvalidPatternError, ValueError))
        self.assertTrue(issubclass(UnknownPatternKindError, TypeError))
        self.assertTrue(issubclass(LeafNotFoundError, LookupError))
        self.assertTrue(issubclass(LeafNotFoundError, PatternException))

    def testPlainRendering(self):
        fault = LeafNotFoundError(
            "command(go, False) not in list",
            code=FaultCode.LEAF_NOT_FOUND,
            title="leaf not found",
            hint="normalize the tree again",
        )
        console = Console(color_system=None, force_terminal=False, width=120)
        with console.capture() as capture:
            console.print(fault)
        output = capture.get()
        self.assertIn("21202", output)
        self.assertIn("Leaf Not Found", output)
        self.assertIn("command(go, False) not in list", output)
        self.assertIn("normalize the tree again", output)

    def testFancyRenderingUsesPanel(self):
        fault = InvalidPatternError("bad", code=FaultCode.INVALID_PATTERN, fancy=True)
        self.assertIsInstance(fault.__rich__(), Panel)

    def testShellModePrintsAndExits(self):
        with self.assertRaises(SystemExit):
            with faults.console.capture() as capture:
                trigger(UnknownPatternKindError("odd node"), code=FaultCode.UNKNOWN_PATTERN_KIND, shell=True)
        self.assertIn("odd node", capture.get())

    def testCodeNormalizesToNumber(self):
        self.assertEqual(FaultCode.MALFORMED_GRAMMAR.normalize(), "21101")


if __name__ == "__main__":
    unittest.main()
