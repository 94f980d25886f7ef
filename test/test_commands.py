"""
Command tree behavioral tests (composition, lookups, inheritance, cloning).

Scope
- Validate name and alias uniqueness among siblings.
- Validate option/operand registration constraints.
- Validate ancestry helpers (parent, root, path, route, walk).
- Validate inherited option visibility and shadowing.
- Validate that clones are independent trees sharing definitions.

Conventions
- Test method names follow CamelCase per project convention.
- Tests use the public API (Command, Option, Operand, NameComparison).
"""

import unittest
from unittest import TestCase

from argosy import Command, NameComparison, Operand, Option


class TestCommandComposition(TestCase):
    """Behavioral tests for building command trees."""

    def setUp(self):
        self.git = Command("git", descr="the stupid content tracker")
        self.remote = self.git.command("remote")
        self.add = self.remote.command("add", aliases=("a",))

    def testAncestry(self):
        self.assertIs(self.add.parent, self.remote)
        self.assertIs(self.add.root, self.git)
        self.assertEqual(self.add.path, (self.git, self.remote, self.add))
        self.assertEqual(self.add.route, ("git", "remote", "add"))
        self.assertIsNone(self.git.parent)

    def testWalkIsDepthFirst(self):
        fetch = self.git.command("fetch")
        self.assertEqual(list(self.git.walk()), [self.git, self.remote, self.add, fetch])

    def testDuplicatedChildNameRejected(self):
        with self.assertRaises(ValueError):
            self.git.command("remote")

    def testAliasCollisionRejected(self):
        with self.assertRaises(ValueError):
            self.remote.command("append", aliases=("a",))
        with self.assertRaises(ValueError):
            self.remote.command("a")

    def testAliasesMustBeUnique(self):
        with self.assertRaises(ValueError):
            Command("push", aliases=("p", "p"))
        with self.assertRaises(ValueError):
            Command("push", aliases=("push",))
        with self.assertRaises(TypeError):
            Command("push", aliases="p")

    def testInvalidNamesRejected(self):
        with self.assertRaises(ValueError):
            Command("-push")
        with self.assertRaises(TypeError):
            Command(3)

    def testChildLookup(self):
        self.assertIs(self.remote.child("add"), self.add)
        self.assertIs(self.remote.child("a"), self.add)
        self.assertIsNone(self.remote.child("ADD"))
        self.assertIs(self.remote.child("ADD", NameComparison.IGNORE_CASE), self.add)

    def testAddAttachesTopLevelCommand(self):
        status = Command("status")
        self.assertIs(self.git.add(status), status)
        self.assertIs(status.parent, self.git)
        with self.assertRaises(ValueError):
            self.remote.add(status)

    def testAddRejectsAncestor(self):
        with self.assertRaises(ValueError):
            self.add.add(self.git)
        orphan = Command("orphan")
        with self.assertRaises(ValueError):
            orphan.add(orphan)

    def testChildrenAreCopies(self):
        children = self.git.children
        children.clear()
        self.assertEqual(list(self.git.children), ["remote"])


class TestCommandDefinitions(TestCase):
    """Behavioral tests for option and operand registration."""

    def setUp(self):
        self.command = Command("tool")

    def testOptionInPlace(self):
        option = self.command.option("--output", "-o")
        self.assertIsInstance(option, Option)
        self.assertEqual(self.command.options, [option])

    def testOptionInstance(self):
        option = Option("--output")
        self.assertIs(self.command.option(option), option)
        with self.assertRaises(TypeError):
            self.command.option(Option("--input"), "-i")

    def testDuplicatedOptionNamesRejected(self):
        self.command.option("--output", "-o")
        with self.assertRaises(ValueError):
            self.command.option("--output")
        with self.assertRaises(ValueError):
            self.command.option("--other", "-o")

    def testOperandsKeepOrder(self):
        first = self.command.operand("source")
        second = self.command.operand(Operand("target"))
        self.assertEqual(self.command.operands, [first, second])

    def testDuplicatedOperandRejected(self):
        self.command.operand("source")
        with self.assertRaises(ValueError):
            self.command.operand("source")

    def testOperandAfterMultipleRejected(self):
        self.command.operand("files", arity="multiple")
        with self.assertRaises(ValueError):
            self.command.operand("target")

    def testConstructorDefinitions(self):
        command = Command("cp", options=[Option("-r", arity="none")], operands=[Operand("source")])
        self.assertEqual(len(command.options), 1)
        self.assertEqual(command.operands[0].name, "source")


class TestAvailableOptions(TestCase):
    """Behavioral tests for inherited option visibility."""

    def setUp(self):
        self.root = Command("git")
        self.verbose = self.root.option("--verbose", "-v", arity="none", inherited=True)
        self.directory = self.root.option("-C")
        self.push = self.root.command("push")
        self.force = self.push.option("--force", "-f", arity="none")

    def testOwnOptionsFirstThenInherited(self):
        self.assertEqual(self.push.available_options(), [self.force, self.verbose])
        self.assertEqual(self.root.available_options(), [self.verbose, self.directory])

    def testNearerDefinitionShadows(self):
        version = self.push.option("--version", "-v", arity="none")
        self.assertEqual(self.push.available_options(), [self.force, version])

    def testShadowingFollowsComparison(self):
        self.push.option("-V", arity="none")
        self.assertIn(self.verbose, self.push.available_options())
        self.assertNotIn(self.verbose, self.push.available_options(NameComparison.IGNORE_CASE))


class TestCommandClone(TestCase):
    """Behavioral tests for structural copies."""

    def testCloneIsIndependent(self):
        root = Command("git")
        option = root.option("--verbose", arity="none")
        root.command("push")
        clone = root.clone()
        clone.command("pull")
        self.assertEqual(list(root.children), ["push"])
        self.assertEqual(list(clone.children), ["push", "pull"])
        self.assertIs(clone.options[0], option)

    def testCloneWithoutDescriptionOrHandler(self):
        root = Command("git")
        root.command("push")
        clone = root.clone()
        self.assertIsNone(clone.descr)
        self.assertIsNone(clone.handler)
        self.assertIsNone(clone.child("push").descr)

    def testCloneKeepsDescriptionAndHandler(self):
        handler = object()
        clone = Command("git", descr="tracker", handler=handler).clone()
        self.assertEqual(clone.descr, "tracker")
        self.assertIs(clone.handler, handler)

    def testCloneUnderParent(self):
        host = Command("host")
        clone = Command("push", aliases=("p",)).clone(host)
        self.assertIs(clone.parent, host)
        self.assertEqual(clone.aliases, ("p",))


if __name__ == "__main__":
    unittest.main()
