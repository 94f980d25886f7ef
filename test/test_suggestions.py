"""
Suggestion ranking behavioral tests.

Scope
- Validate the optimal string alignment distance.
- Validate candidate collection (inherited options, aliases, hidden entries).
- Validate filtering and ordering.

Conventions
- Test method names follow CamelCase per project convention.
"""

import unittest
from unittest import TestCase

from argosy import Command, NameComparison
from argosy.suggestions import candidates, distance, rank, suggest


class TestDistance(TestCase):
    """Behavioral tests for distance()."""

    def testBasics(self):
        self.assertEqual(distance("push", "push"), 0)
        self.assertEqual(distance("", "abc"), 3)
        self.assertEqual(distance("abc", ""), 3)
        self.assertEqual(distance("kitten", "sitting"), 3)

    def testTranspositionCostsOne(self):
        self.assertEqual(distance("ab", "ba"), 1)
        self.assertEqual(distance("verbsoe", "verbose"), 1)

    def testSubstringEditedOnce(self):
        self.assertEqual(distance("ca", "abc"), 3)


class TestCandidates(TestCase):
    """Behavioral tests for candidates() and suggest()."""

    def setUp(self):
        self.root = Command("git")
        self.root.option("--verbose", "-v", arity="none", inherited=True)
        self.root.option("--secret", arity="none", inherited=True, hidden=True)
        self.root.option("-C")
        self.push = self.root.command("push", aliases=("p",))
        self.push.option("--force", "-f", arity="none")
        self.root.command("internal", hidden=True)

    def testCollectsVisibleSpellings(self):
        self.assertEqual(candidates(self.root), ["--verbose", "-v", "-C", "push", "p"])
        self.assertEqual(candidates(self.push), ["--force", "-f", "--verbose", "-v"])

    def testSuggestPrefersClosest(self):
        self.assertEqual(suggest("pshu", self.root)[0], "push")
        self.assertEqual(suggest("--forse", self.push)[0], "--force")

    def testNothingClose(self):
        self.assertEqual(suggest("--zzzzzzzz", self.root), ())


class TestRank(TestCase):
    """Behavioral tests for rank()."""

    def testOrderedByScoreThenSpelling(self):
        self.assertEqual(rank("cat", ["bat", "cart", "cat", "dog"]), ("cat", "bat", "cart"))

    def testPrefixesAreKept(self):
        self.assertEqual(rank("--verb", ["--verbose", "--verbatim"]), ("--verbose", "--verbatim"))

    def testDashesAloneAreNotPrefixes(self):
        self.assertEqual(rank("--", ["--verbose"]), ())

    def testLimit(self):
        self.assertEqual(len(rank("a", ["b", "c", "d", "e", "f", "g"], limit=3)), 3)

    def testComparison(self):
        self.assertEqual(rank("PUSH", ["push"], NameComparison.IGNORE_CASE), ("push",))
        self.assertEqual(rank("PUSHED", ["push"]), ())


if __name__ == "__main__":
    unittest.main()
