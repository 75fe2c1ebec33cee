"""
List helper tests (structural comparisons over pattern sequences).

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
    LeafNotFoundError,
    unique,
    index,
    count,
    diff,
    remove,
    double,
    dictionary,
)


class TestLists(TestCase):

    def setUp(self) -> None:
        self.first = Command("add")
        self.second = Command("add")
        self.other = Option("-v")

    def testUniqueKeepsFirstOccurrence(self):
        result = unique([self.first, self.other, self.second])
        self.assertEqual(len(result), 2)
        self.assertIs(result[0], self.first)
        self.assertIs(result[1], self.other)

    def testUniqueSeparatesValues(self):
        self.assertEqual(len(unique([Command("go", 0), Command("go", False)])), 2)

    def testIndexIsStructural(self):
        self.assertEqual(index([self.other, self.first], self.second), 1)

    def testIndexMissingRaises(self):
        with self.assertRaises(LeafNotFoundError):
            index([self.first], self.other)
        with self.assertRaises(LookupError):
            index([], self.other)

    def testCount(self):
        self.assertEqual(count([self.first, self.other, self.second], Command("add")), 2)
        self.assertEqual(count([self.first], Argument("<x>")), 0)

    def testDiffIsMultisetSubtraction(self):
        self.assertEqual(diff([self.first, self.second, self.other], [Command("add")]), [self.first, self.other])
        self.assertEqual(diff([self.first, self.other], [Argument("<x>")]), [self.first, self.other])

    def testDiffLeavesInputsAlone(self):
        patterns = [self.first, self.other]
        removed = [self.other]
        diff(patterns, removed)
        self.assertEqual(patterns, [self.first, self.other])
        self.assertEqual(removed, [self.other])

    def testRemoveDropsOneOccurrence(self):
        self.assertEqual(remove([self.first, self.second], self.first), [self.second])

    def testDouble(self):
        self.assertEqual(double([self.first, self.other]), [self.first, self.other, self.first, self.other])
        self.assertEqual(double([]), [])

    def testDictionary(self):
        bound = [Command("add", True), Argument("<file>", ["a", "b"]), Option("-v", value=2)]
        self.assertEqual(dictionary(bound), {"add": True, "<file>": ["a", "b"], "-v": 2})


if __name__ == "__main__":
    unittest.main()
