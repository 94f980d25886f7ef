"""
Parser configuration behavioral tests.

Scope
- Validate defaults and loose string spellings of the enumerated settings.
- Validate assignment-time checks (TypeError vs InvalidConfigurationError).
- Validate copy.replace() semantics.

Conventions
- Test method names follow CamelCase per project convention.
- Tests use the public API (ParserConfig and its enumerations).
"""

import copy
import unittest
from unittest import TestCase

from argosy import (
    InvalidConfigurationError,
    NameComparison,
    ParserConfig,
    ResponseFileHandling,
    UnrecognizedArgumentHandling,
    ValueParserProvider,
)
from argosy.utils import Unset


class TestParserConfig(TestCase):
    """Behavioral tests for ParserConfig settings."""

    def testDefaults(self):
        config = ParserConfig()
        self.assertIs(config.cluster_options, Unset)
        self.assertEqual(config.separators, frozenset({" ", ":", "="}))
        self.assertFalse(config.allow_argument_separator)
        self.assertIs(config.name_comparison, NameComparison.ORDINAL)
        self.assertIs(config.response_file_handling, ResponseFileHandling.DISABLED)
        self.assertIs(config.unrecognized_argument_handling, UnrecognizedArgumentHandling.THROW)
        self.assertTrue(config.make_suggestions)
        self.assertIsInstance(config.value_parsers, ValueParserProvider)

    def testLooseEnumSpellings(self):
        config = ParserConfig(
            name_comparison="IGNORE_CASE",
            response_file_handling="enabled",
            unrecognized_argument_handling="stop_parsing",
        )
        self.assertIs(config.name_comparison, NameComparison.IGNORE_CASE)
        self.assertIs(config.response_file_handling, ResponseFileHandling.SPACE_SEPARATED)
        self.assertIs(config.unrecognized_argument_handling, UnrecognizedArgumentHandling.STOP_PARSING)

    def testEnabledIsSpaceSeparated(self):
        self.assertIs(ResponseFileHandling.ENABLED, ResponseFileHandling.SPACE_SEPARATED)

    def testUnknownEnumValue(self):
        with self.assertRaises(InvalidConfigurationError):
            ParserConfig(unrecognized_argument_handling="ignore")
        with self.assertRaises(TypeError):
            ParserConfig(name_comparison=1)

    def testEmptySeparatorsRejected(self):
        with self.assertRaises(InvalidConfigurationError):
            ParserConfig(separators=())
        config = ParserConfig()
        with self.assertRaises(InvalidConfigurationError):
            config.separators = set()
        self.assertEqual(config.separators, frozenset({" ", ":", "="}))

    def testInvalidSeparatorsRejected(self):
        for separators in (("==",), ("-",), ("=", "")):
            with self.subTest(separators=separators):
                with self.assertRaises(InvalidConfigurationError):
                    ParserConfig(separators=separators)
        with self.assertRaises(TypeError):
            ParserConfig(separators=(1,))
        with self.assertRaises(TypeError):
            ParserConfig(separators=None)

    def testSingleStringSeparator(self):
        self.assertEqual(ParserConfig(separators="=").separators, frozenset({"="}))
        self.assertEqual(ParserConfig(separators="=:").separators, frozenset({"=", ":"}))

    def testBooleansAreStrict(self):
        for field in ("allow_argument_separator", "make_suggestions", "cluster_options"):
            with self.subTest(field=field):
                with self.assertRaises(TypeError):
                    ParserConfig(**{field: "yes"})

    def testReplace(self):
        config = ParserConfig(make_suggestions=False)
        replaced = copy.replace(config, allow_argument_separator=True)
        self.assertFalse(replaced.make_suggestions)
        self.assertTrue(replaced.allow_argument_separator)
        self.assertFalse(config.allow_argument_separator)
        self.assertIsNot(replaced.value_parsers, config.value_parsers)
        self.assertEqual(copy.replace(config), config)
        with self.assertRaises(TypeError):
            copy.replace(config, colour=True)

    def testUnhashable(self):
        with self.assertRaises(TypeError):
            hash(ParserConfig())


class TestNameComparison(TestCase):
    """Behavioral tests for name folding."""

    def testFold(self):
        self.assertEqual(NameComparison.ORDINAL.fold("Push"), "Push")
        self.assertEqual(NameComparison.IGNORE_CASE.fold("Push"), "push")

    def testEquals(self):
        self.assertTrue(NameComparison.IGNORE_CASE.equals("STRASSE", "straße"))
        self.assertFalse(NameComparison.ORDINAL.equals("a", "A"))


if __name__ == "__main__":
    unittest.main()
