"""
Normalization tests.

Scope
- Identity fixing: equal leaves across the tree become one shared instance.
- Repeating arguments: per-alternative repeats switch to list or counter values.
- Idempotence and error propagation.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from usagematch import (
    Argument,
    Command,
    Option,
    Required,
    Optional,
    OneOrMore,
    Either,
    LeafTable,
    LeafNotFoundError,
    fix_identities,
    fix_repeating_arguments,
    normalize,
)


class TestIdentities(TestCase):

    def testEqualLeavesShareOneInstance(self):
        tree = Required(Option("-v"), Optional(Option("-v")), Either(Command("a"), Required(Option("-v"))))
        fix_identities(tree)
        first = tree.children[0]
        self.assertIs(tree.children[1].children[0], first)
        self.assertIs(tree.children[2].children[1].children[0], first)

    def testDifferentLeavesStayApart(self):
        tree = Required(Option("-v"), Option("-q"))
        fix_identities(tree)
        self.assertIsNot(tree.children[0], tree.children[1])

    def testLeafRootUnchanged(self):
        leaf = Command("go")
        self.assertIs(fix_identities(leaf), leaf)

    def testTableResolvesCanonicalInstance(self):
        canonical = Argument("<x>")
        table = LeafTable(Required(canonical, Argument("<x>"), Command("go")))
        self.assertEqual(len(table), 2)
        self.assertIs(table.resolve(Argument("<x>")), canonical)
        self.assertEqual(list(table), [canonical, Command("go")])

    def testLeafMissingFromTableRaises(self):
        table = LeafTable(Required(Command("a")))
        with self.assertRaises(LeafNotFoundError):
            fix_identities(Required(Command("b")), table)


class TestRepeatingArguments(TestCase):

    def testRepeatedArgumentBecomesList(self):
        tree = normalize(Required(Argument("<x>"), Argument("<x>")))
        self.assertEqual(tree.children[0].value, [])
        self.assertIs(tree.children[0], tree.children[1])

    def testOneOrMoreArgumentBecomesList(self):
        tree = normalize(OneOrMore(Argument("<file>")))
        self.assertEqual(tree.children[0].value, [])

    def testRepeatedValuedOptionSplitsDefault(self):
        tree = normalize(OneOrMore(Option("-f", "--file", 1, "a.txt b.txt")))
        self.assertEqual(tree.children[0].value, ["a.txt", "b.txt"])

    def testRepeatedCommandBecomesCounter(self):
        tree = normalize(Required(Command("go"), Command("go")))
        self.assertEqual(tree.children[0].value, 0)
        self.assertNotIsInstance(tree.children[0].value, bool)

    def testRepeatedFlagBecomesCounter(self):
        tree = normalize(Required(OneOrMore(Option("-v")), Command("run")))
        self.assertEqual(tree.children[0].children[0].value, 0)
        self.assertIs(tree.children[1].value, False)

    def testRepeatsAcrossAlternativesDoNotCount(self):
        tree = normalize(Either(Command("a"), Command("a")))
        self.assertIs(tree.children[0].value, False)

    def testRepeatThroughOptionalCounts(self):
        tree = normalize(Required(Option("-v"), Optional(Option("-v"))))
        self.assertEqual(tree.children[0].value, 0)
        self.assertIs(tree.children[1].children[0], tree.children[0])

    def testSingleOccurrencesLeftAlone(self):
        tree = normalize(Required(Command("go"), Argument("<x>"), Option("-f", None, 1)))
        self.assertEqual([child.value for child in tree.children], [False, None, None])

    def testRepeatsFoundBeforeValuesChange(self):
        # separate instances: both are detected as repeats, then both switch
        tree = fix_repeating_arguments(Required(Argument("<x>"), Argument("<x>")))
        self.assertIsNot(tree.children[0], tree.children[1])
        self.assertEqual([child.value for child in tree.children], [[], []])


class TestNormalize(TestCase):

    @staticmethod
    def build():
        return Required(
            Command("add"),
            OneOrMore(Argument("<file>")),
            Optional(Option("-v"), Option("-m", "--message", 1, "wip")),
            Optional(Option("-v")),
        )

    def testReturnsSameRoot(self):
        tree = self.build()
        self.assertIs(normalize(tree), tree)

    def testIdempotent(self):
        once = normalize(self.build())
        twice = normalize(normalize(self.build()))
        self.assertEqual(str(once), str(twice))
        self.assertEqual(once, twice)


if __name__ == "__main__":
    unittest.main()
