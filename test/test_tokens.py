"""
Tokenizer behavioral tests.

Scope
- Validate classification of long, short, positional and separator tokens.
- Validate name/value splitting and negative-number detection.

Conventions
- Test method names follow CamelCase per project convention.
"""

import unittest
from unittest import TestCase

from argosy.tokens import TokenKind, classify, is_negative_number, looks_like_option, split

SEPARATORS = frozenset({" ", ":", "="})


class TestClassify(TestCase):
    """Behavioral tests for classify()."""

    def testLongWithAndWithoutValue(self):
        token = classify("--output=a=b", SEPARATORS)
        self.assertIs(token.kind, TokenKind.LONG)
        self.assertEqual((token.name, token.value), ("output", "a=b"))
        self.assertTrue(token.attached)
        token = classify("--output", SEPARATORS)
        self.assertEqual((token.name, token.value), ("output", None))
        self.assertFalse(token.attached)

    def testEmptyAttachedValue(self):
        token = classify("--output=", SEPARATORS)
        self.assertEqual(token.value, "")
        self.assertTrue(token.attached)

    def testShortKeepsBody(self):
        token = classify("-abc=x", SEPARATORS)
        self.assertIs(token.kind, TokenKind.SHORT)
        self.assertEqual(token.name, "abc=x")
        self.assertIsNone(token.value)

    def testPositionals(self):
        for argument in ("file", "-", "", "@file"):
            with self.subTest(argument=argument):
                self.assertIs(classify(argument, SEPARATORS).kind, TokenKind.POSITIONAL)

    def testSeparator(self):
        self.assertIs(classify("--", SEPARATORS, allow_separator=True).kind, TokenKind.SEPARATOR)
        token = classify("--", SEPARATORS)
        self.assertIs(token.kind, TokenKind.LONG)
        self.assertEqual(token.name, "")

    def testEverythingIsPositionalAfterSeparator(self):
        for argument in ("--output", "-v", "--"):
            with self.subTest(argument=argument):
                token = classify(argument, SEPARATORS, separated=True, allow_separator=True)
                self.assertIs(token.kind, TokenKind.POSITIONAL)
                self.assertEqual(token.text, argument)


class TestHelpers(TestCase):
    """Behavioral tests for split() and the number helpers."""

    def testSplitIgnoresSpace(self):
        self.assertEqual(split("name value", SEPARATORS), ("name value", None))
        self.assertEqual(split("name:value=x", SEPARATORS), ("name", "value=x"))
        self.assertEqual(split("name=value", {"="}), ("name", "value"))
        self.assertEqual(split("name:value", {"="}), ("name:value", None))

    def testNegativeNumbers(self):
        for argument in ("-1", "-1.5", "-.5", "-1e10", "-1_000"):
            with self.subTest(argument=argument):
                self.assertTrue(is_negative_number(argument))
                self.assertFalse(looks_like_option(argument))
        for argument in ("-x", "-1x", "--1", "1"):
            with self.subTest(argument=argument):
                self.assertFalse(is_negative_number(argument))

    def testLooksLikeOption(self):
        self.assertTrue(looks_like_option("-v"))
        self.assertTrue(looks_like_option("--"))
        self.assertFalse(looks_like_option("-"))
        self.assertFalse(looks_like_option("value"))


if __name__ == "__main__":
    unittest.main()
