"""
Value parser behavioral tests.

Scope
- Validate the built-in converters (numbers, booleans, paths, dates, enums).
- Validate provider resolution order and custom registrations.
- Validate the conversion fault raised for rejected strings.

Conventions
- Test method names follow CamelCase per project convention.
- Tests use the public API (ValueParserProvider, argosy.values.parse).
"""

import datetime
import decimal
import enum
import pathlib
import unittest
from unittest import TestCase

from argosy import InvalidOptionValueError, Operand, Option, ValueParserProvider
from argosy.values import parse


class Color(enum.Enum):
    RED = "r"
    GREEN = "g"


class Level(enum.IntEnum):
    LOW = 1
    HIGH = 2


class Point:
    def __init__(self, raw):
        self.x, self.y = map(int, raw.split(","))


class TestBuiltinParsers(TestCase):
    """Behavioral tests for the built-in converters."""

    def setUp(self):
        self.provider = ValueParserProvider()

    def testIntegers(self):
        integer = self.provider.resolve(int)
        self.assertEqual(integer("42"), 42)
        self.assertEqual(integer("010"), 10)
        self.assertEqual(integer("0x1F"), 31)
        self.assertEqual(integer("-0b11"), -3)
        with self.assertRaises(ValueError):
            integer("4.2")

    def testBooleans(self):
        boolean = self.provider.resolve(bool)
        for raw in ("true", "Yes", "ON", "1"):
            self.assertIs(boolean(raw), True)
        for raw in ("false", "No", "off", "0"):
            self.assertIs(boolean(raw), False)
        with self.assertRaises(ValueError):
            boolean("maybe")

    def testOtherBuiltins(self):
        self.assertEqual(self.provider.resolve(float)("1.5"), 1.5)
        self.assertEqual(self.provider.resolve(pathlib.Path)("a/b"), pathlib.Path("a/b"))
        self.assertEqual(self.provider.resolve(decimal.Decimal)("0.1"), decimal.Decimal("0.1"))
        self.assertEqual(self.provider.resolve(datetime.date)("2024-02-29"), datetime.date(2024, 2, 29))

    def testEnumsByNameOrValue(self):
        color = self.provider.resolve(Color)
        self.assertIs(color("red"), Color.RED)
        self.assertIs(color("g"), Color.GREEN)
        self.assertIs(self.provider.resolve(Level)("2"), Level.HIGH)
        with self.assertRaises(ValueError):
            color("blue")

    def testFallbackToType(self):
        point = self.provider.resolve(Point)("1,2")
        self.assertEqual((point.x, point.y), (1, 2))

    def testUnresolvable(self):
        with self.assertRaises(TypeError):
            self.provider.resolve(None)


class TestProviderRegistry(TestCase):
    """Behavioral tests for registrations and copies."""

    def testRegisterReplaces(self):
        provider = ValueParserProvider()
        provider.register(str, str.upper)
        self.assertEqual(provider.resolve(str)("abc"), "ABC")
        self.assertEqual(ValueParserProvider().resolve(str)("abc"), "abc")

    def testConstructorRegistrations(self):
        provider = ValueParserProvider({Point: lambda raw: "custom"})
        self.assertIn(Point, provider)
        self.assertEqual(provider.resolve(Point)("1,2"), "custom")

    def testRegisterValidation(self):
        provider = ValueParserProvider()
        with self.assertRaises(TypeError):
            provider.register("int", int)
        with self.assertRaises(TypeError):
            provider.register(int, 3)

    def testCopyIsIndependent(self):
        provider = ValueParserProvider()
        clone = provider.copy()
        clone.register(Point, str)
        self.assertNotIn(Point, provider)
        self.assertNotEqual(provider, clone)


class TestParse(TestCase):
    """Behavioral tests for definition-level conversion."""

    def testUsesDefinitionType(self):
        self.assertEqual(parse(Option("--count", type=int), "7"), 7)
        self.assertEqual(parse(Operand("ratio", type=float), "0.5"), 0.5)

    def testDefinitionParserWins(self):
        option = Option("--size", type=int, parser=lambda raw: len(raw))
        self.assertEqual(parse(option, "abc"), 3)

    def testRejectedValueRaises(self):
        with self.assertRaises(InvalidOptionValueError) as context:
            parse(Option("--count", type=int), "many")
        self.assertEqual(context.exception.token, "many")
        self.assertIn("--count", str(context.exception))
        self.assertIsInstance(context.exception.__cause__, ValueError)

    def testProviderIsConsulted(self):
        provider = ValueParserProvider()
        provider.register(int, lambda raw: -1)
        self.assertEqual(parse(Option("--count", type=int), "7", provider), -1)


if __name__ == "__main__":
    unittest.main()
