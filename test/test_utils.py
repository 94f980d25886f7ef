"""
Utilities behavioral tests.

Scope
- Validate the Unset sentinel and coalesce().
- Validate rename(), pluralize() and ordinal().
- Validate loose ChoiceEnum lookups and SpecType conveniences.

Conventions
- Test method names follow CamelCase per project convention.
"""

import copy
import pickle
import unittest
from unittest import TestCase

from argosy.utils import ChoiceEnum, SpecType, Unset, UnsetType, coalesce, ordinal, pluralize, rename


class Mode(ChoiceEnum):
    FAST = "fast"
    SAFE_MODE = "safe-mode"


class SampleDescriptor(metaclass=SpecType):
    __introspectable__ = ("names", "label")

    def __init__(self):
        self._names = ["a", "b"]
        self._label = "sample"


class TestUnset(TestCase):
    """Behavioral tests for the sentinel."""

    def testSingletonAndFalsy(self):
        self.assertIs(UnsetType(), Unset)
        self.assertFalse(Unset)
        self.assertEqual(repr(Unset), "Unset")
        self.assertIs(copy.deepcopy(Unset), Unset)
        self.assertIs(pickle.loads(pickle.dumps(Unset)), Unset)

    def testSealed(self):
        with self.assertRaises(TypeError):
            type("Subclass", (UnsetType,), {})

    def testUnions(self):
        self.assertTrue(isinstance(Unset, str | Unset))
        self.assertFalse(isinstance(None, str | Unset))

    def testCoalesce(self):
        self.assertEqual(coalesce(Unset, 1), 1)
        self.assertIsNone(coalesce(Unset))
        self.assertEqual(coalesce(0, 1), 0)
        self.assertIsNone(coalesce(None, 1))


class TestHelpers(TestCase):
    """Behavioral tests for small helpers."""

    def testRename(self):
        def function():
            pass
        self.assertEqual(rename(function, "renamed").__name__, "renamed")

        @rename("decorated")
        def other():
            pass
        self.assertEqual(other.__qualname__, "decorated")

        with self.assertRaises(TypeError):
            rename(3, "x")

    def testPluralize(self):
        self.assertEqual(pluralize("option"), "options")
        self.assertEqual(pluralize("command alias"), "command aliases")
        self.assertEqual(pluralize("Entry"), "Entries")
        self.assertEqual(pluralize("OPERAND"), "OPERANDS")
        self.assertEqual(pluralize("subcommand"), "subcommands")

    def testOrdinal(self):
        self.assertEqual([ordinal(number) for number in (1, 3, 10)], ["first", "third", "tenth"])
        self.assertEqual([ordinal(number) for number in (11, 12, 21, 22, 23, 111)], ["11th", "12th", "21st", "22nd", "23rd", "111th"])


class TestChoiceEnum(TestCase):
    """Behavioral tests for loose enum lookups."""

    def testLookups(self):
        self.assertIs(Mode("fast"), Mode.FAST)
        self.assertIs(Mode("FAST"), Mode.FAST)
        self.assertIs(Mode("safe_mode"), Mode.SAFE_MODE)
        self.assertIs(Mode("Safe-Mode"), Mode.SAFE_MODE)
        with self.assertRaises(ValueError):
            Mode("slow")
        with self.assertRaises(ValueError):
            Mode(1)


class TestSpecType(TestCase):
    """Behavioral tests for the descriptor metaclass."""

    def testTypename(self):
        self.assertEqual(SampleDescriptor.__typename__, "sample-descriptor")

    def testMirroredFieldsAreCopies(self):
        descriptor = SampleDescriptor()
        names = descriptor.names
        names.append("c")
        self.assertEqual(descriptor.names, ["a", "b"])
        with self.assertRaises(AttributeError):
            descriptor.label = "other"

    def testRepr(self):
        self.assertEqual(repr(SampleDescriptor()), "sample-descriptor(names=['a', 'b'], label='sample')")


if __name__ == "__main__":
    unittest.main()
