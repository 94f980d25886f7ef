"""
Argosy command tree.

A Command is one node of the command tree: it owns its options, its operands
and its child commands, and keeps a weak back-reference to its parent. The
tree is built once, then shared read-only by every parse.

Overview
- Command(name, parent=Unset, *, aliases, descr, options, operands, handler, hidden)
  • option(...), operand(...): register definitions (or build them in place).
  • command(...): create and attach a child command.
  • add(command): attach an existing top-level command as a child.
  • child(name, comparison): find a child by name or alias.
  • available_options(comparison): own options plus inherited ancestor options.
  • root, path, route, walk(), clone().

Constraints (checked on registration)
- Child names and aliases are unique among siblings (ordinal comparison;
  case-insensitive uniqueness is checked when a Parser is built).
- Long and short option names are unique within a command.
- At most one MULTIPLE operand, and it is the last operand.

Quick example:
    >>> git = Command("git", descr="the stupid content tracker")
    >>> git.option("--verbose", "-v", arity="none", inherited=True)
    >>> push = git.command("push", aliases=("p",))
    >>> push.operand("remote")
"""
import logging
import re
import weakref

from rich.text import Text

from .arguments import Arity, Operand, Option
from .config import NameComparison
from .utils import *

logger = logging.getLogger(__name__)


def _sanitize_identity(cls, metadata, /):
    """
    Internal: validate the command name, its aliases and its help metadata.

    Raises
    - TypeError: non-string name/aliases/descr.
    - ValueError: invalid or duplicated spellings, empty descr.
    """
    pattern = r"[^\W_][\w.-]*"

    if not isinstance(name := metadata["name"], str):
        raise TypeError(f"{cls.__typename__} 'name' must be a string")
    elif not re.fullmatch(pattern, name := name.strip()):
        raise ValueError(f"{cls.__typename__} 'name' must be a valid command name (unicodes are allowed)")
    metadata["name"] = name

    if isinstance(metadata["aliases"], str):
        raise TypeError(f"{cls.__typename__} 'aliases' must be an iterable of strings")
    aliases = []
    for alias in metadata["aliases"]:
        if not isinstance(alias, str):
            raise TypeError(f"{cls.__typename__} 'aliases' must be an iterable of strings")
        elif not re.fullmatch(pattern, alias := alias.strip()):
            raise ValueError(f"{cls.__typename__} 'aliases' must be valid command names (unicodes are allowed)")
        elif alias == name or alias in aliases:
            raise ValueError(f"{cls.__typename__} 'aliases' cannot contain duplicates")
        aliases.append(alias)
    metadata["aliases"] = tuple(aliases)

    if not isinstance(descr := metadata["descr"], str | Text | Unset):
        raise TypeError(f"{cls.__typename__} 'descr' must be a string")
    elif isinstance(descr, str) and not (descr := descr.strip()):
        raise ValueError(f"{cls.__typename__} 'descr' cannot be empty")
    metadata["descr"] = coalesce(descr)

    metadata["hidden"] = bool(metadata["hidden"])


def _attach_to_parent(self, parent):
    """
    Register this command under its parent, enforcing unique names.

    Both the name and every alias must be free among the parent's children.
    """
    if not parent:
        return
    taken = {
        spelling: child
        for child in parent._children.values()
        for spelling in (child.name, *child.aliases)
    }
    for spelling in (self.name, *self.aliases):
        if taken.get(spelling, self) is not self:
            typeof = "subcommand" if parent.parent else "command"
            raise ValueError(f"{type(self).__typename__} {typeof} name {spelling!r} is already in use")
    parent._children[self.name] = self
    self._parent = weakref.ref(parent)


class Command(metaclass=SpecType):
    """
    Node of the command tree.

    Responsibilities
    - Identity: name, aliases, descr, hidden, and an opaque handler owned by
      the embedding application (never called by argosy).
    - Composition: ordered children, weak parent back-reference.
    - Definitions: options (unique names) and operands (declaration order).

    Properties
    - The names listed in __introspectable__ are exposed as read-only attributes;
      containers are handed out as fresh copies.
    """

    __introspectable__ = (
        "name",
        "aliases",
        "descr",
        "handler",
        "hidden",
        "options",
        "operands",
        "children",
    )

    __displayable__ = (
        "name",
        "aliases",
        "descr",
        "options",
        "operands",
        "children",
    )

    def __new__(
            cls,
            name,
            /,
            parent=Unset,
            *,
            aliases=(),
            descr=Unset,
            options=(),
            operands=(),
            handler=Unset,
            hidden=False,
    ):
        """
        Construct a Command and attach it to its parent when one is given.

        Parameters
        - name: the spelling users type to select this command.
        - parent: Command | Unset.
        - aliases: alternative spellings.
        - descr: short help text.
        - options/operands: definitions registered in order.
        - handler: opaque application object (Unset becomes None).
        - hidden: suppress from help and suggestions.

        Raises
        - TypeError/ValueError on invalid metadata, duplicated option names,
          misplaced MULTIPLE operands, or name conflicts under the parent.
        """
        if not isinstance(parent, Command | Unset):
            raise TypeError(f"{cls.__typename__} 'parent' must be a command")

        metadata = {
            "name": name,
            "aliases": aliases,
            "descr": descr,
            "handler": coalesce(handler),
            "hidden": hidden,
        }
        _sanitize_identity(cls, metadata)

        self = super().__new__(cls)
        for key, object in metadata.items():
            setattr(self, "_" + key, object)
        self._parent = None
        self._children = {}
        self._options = []
        self._operands = []

        for option in options:
            self.option(option)
        for operand in operands:
            self.operand(operand)

        _attach_to_parent(self, parent)
        return self

    @property
    def parent(self):
        """
        Return the parent command, or None for a root (or an orphaned) node.
        """
        return self._parent() if self._parent is not None else None

    @property
    def root(self):
        """
        Return the topmost command in the current command hierarchy.
        """
        child, parent = self, self.parent
        while parent:
            child, parent = parent, parent.parent
        return child

    @property
    def path(self):
        """
        Return the full ancestry from root to this command as a tuple.
        """
        path = [command := self]
        while command.parent:
            path.append(command := command.parent)
        return tuple(reversed(path))

    @property
    def route(self):
        return tuple(command.name for command in self.path)

    def walk(self):
        """
        Yield this command and every descendant, depth-first in registration order.
        """
        yield self
        for child in self._children.values():
            yield from child.walk()

    def option(self, source, /, *names, **options):
        """
        Register an option and return it.

        Forms
        - option(Option(...)): register an existing definition.
        - option("--name", "-n", **metadata): build the definition in place.
        """
        if isinstance(source, Option):
            if names or options:
                raise TypeError(f"{type(self).__typename__}.option() takes no metadata with an option")
            option = source
        else:
            option = Option(source, *names, **options)

        for existing in self._options:
            for attribute, prefix in (("long", "--"), ("short", "-")):
                if (spelling := getattr(option, attribute)) is not None and getattr(existing, attribute) == spelling:
                    raise ValueError(f"{type(self).__typename__} option name {prefix + spelling!r} is already in use")

        if option.short is not None and not option.clusterable:
            logger.debug(
                "command %r registers multi-character short name '-%s'; clustering defaults to off",
                self.name,
                option.short,
            )
        self._options.append(option)
        return option

    def operand(self, source, /, *args, **kwargs):
        """
        Register an operand and return it.

        Forms
        - operand(Operand(...)): register an existing definition.
        - operand("name", **metadata): build the definition in place.
        """
        if isinstance(source, Operand):
            if args or kwargs:
                raise TypeError(f"{type(self).__typename__}.operand() takes no metadata with an operand")
            operand = source
        else:
            operand = Operand(source, *args, **kwargs)

        if any(existing.name == operand.name for existing in self._operands):
            raise ValueError(f"{type(self).__typename__} operand name {operand.name!r} is already in use")
        if self._operands and self._operands[-1].arity is Arity.MULTIPLE:
            raise ValueError(f"{type(self).__typename__} operand {operand.name!r} cannot follow a multiple-value operand")
        self._operands.append(operand)
        return operand

    def command(self, name, /, *args, **kwargs):
        """
        Create a child command under this one and return it.
        """
        return type(self)(name, self, *args, **kwargs)

    def add(self, command, /):
        """
        Attach an existing top-level command (and its subtree) as a child.
        """
        if not isinstance(command, Command):
            raise TypeError(f"{type(self).__typename__}.add() argument must be a command")
        if command.parent is not None:
            raise ValueError(f"{type(self).__typename__} {command.name!r} already has a parent")
        if any(node is command for node in self.path):
            raise ValueError(f"{type(self).__typename__} {command.name!r} cannot be its own descendant")
        _attach_to_parent(command, self)
        return command

    def child(self, name, /, comparison=NameComparison.ORDINAL):
        """
        Return the child whose name or alias matches `name`, or None.
        """
        key = comparison.fold(name)
        for child in self._children.values():
            if any(comparison.fold(spelling) == key for spelling in (child.name, *child.aliases)):
                return child
        return None

    def available_options(self, comparison=NameComparison.ORDINAL):
        """
        Return the options reachable from this command.

        Own options come first, then inherited options of each ancestor from
        the nearest to the root. An inherited option is shadowed when a nearer
        command already defines one of its spellings.
        """
        available = []
        taken = set()
        for level, command in enumerate(reversed(self.path)):
            for option in command._options:
                if level and not option.inherited:
                    continue
                spellings = {
                    (attribute, comparison.fold(name))
                    for attribute, name in (("long", option.long), ("short", option.short))
                    if name is not None
                }
                if level and spellings & taken:
                    continue
                taken |= spellings
                available.append(option)
        return available

    def clone(self, parent=Unset):
        """
        Return a structural copy of this subtree.

        Definitions are immutable and shared; command nodes are new. The copy
        is attached to `parent` when given, otherwise it is a new root.
        """
        clone = type(self)(
            self.name,
            parent,
            aliases=self.aliases,
            descr=self.descr if self.descr is not None else Unset,
            options=self._options,
            operands=self._operands,
            handler=self.handler if self.handler is not None else Unset,
            hidden=self.hidden,
        )
        for child in self._children.values():
            child.clone(clone)
        return clone

    def __command__(self):
        """
        Introspection hook: identify this node as a Command.
        """
        return self


__all__ = (
    "Command",
)
