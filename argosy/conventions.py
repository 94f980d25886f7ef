"""
Argosy conventions.

A convention is a step `step(tree, config) -> (tree, config)` that adds
well-known definitions or settings to an application. apply() runs an ordered
sequence of steps over clones of the tree and the configuration, so the
caller's own objects are never modified.

Built-in steps
- help_option(*names): inherited "--help"/"-h" terminator option.
- version_option(version, *names): "--version" terminator option on the root.
- response_files(handling): enable "@file" expansion.
- ignore_case(): case-insensitive option and command names.
- subcommands(table): mount child commands from a registration table mapping
  a route (tuple of names below the root, or a space-separated string) to the
  commands to attach there.

Quick example:
    >>> tree, config = apply(git, ParserConfig(), help_option(), subcommands({
    ...     (): [push, pull],
    ...     ("remote",): [add, remove],
    ... }))
"""
import copy
import logging
from collections.abc import Iterable, Mapping

from .arguments import Arity
from .commands import Command
from .config import NameComparison, ParserConfig, ResponseFileHandling
from .utils import Unset, coalesce, rename

logger = logging.getLogger(__name__)


def apply(root, config=Unset, /, *steps):
    """
    Run `steps` in order over clones of `root` and `config`.

    Returns
    - (tree, config): the transformed clones.

    Raises
    - TypeError: a step is not callable or does not return a (tree, config) pair.
    """
    if not isinstance(root, Command):
        raise TypeError("apply() 'root' must be a command")
    config = coalesce(config, ParserConfig())
    if not isinstance(config, ParserConfig):
        raise TypeError("apply() 'config' must be a parser configuration")

    tree, config = root.clone(), copy.replace(config)
    for step in steps:
        if not callable(step):
            raise TypeError("apply() steps must be callable")
        outcome = step(tree, config)
        if (
            not isinstance(outcome, tuple) or
            len(outcome) != 2 or
            not isinstance(outcome[0], Command) or
            not isinstance(outcome[1], ParserConfig)
        ):
            raise TypeError(f"convention {getattr(step, '__name__', step)!r} must return a (command, config) pair")
        tree, config = outcome
        logger.debug("applied convention %s", getattr(step, "__name__", step))
    return tree, config


def _has_spelling(command, names, /):
    return any(name in option.names for option in command.available_options() for name in names)


def help_option(*names, descr="show help information"):
    """
    Add an inherited, presence-only terminator option (default "--help", "-h")
    to the root, unless one of its spellings is already taken.
    """
    names = names or ("--help", "-h")

    @rename("help_option")
    def step(tree, config):
        if not _has_spelling(tree, names):
            tree.option(*names, arity=Arity.NONE, terminator=True, inherited=True, descr=descr)
        return tree, config

    return step


def version_option(version, /, *names, descr=Unset):
    """
    Add a presence-only terminator option (default "--version") to the root.
    """
    if not isinstance(version, str) or not version.strip():
        raise TypeError("version_option() 'version' must be a non-empty string")
    names = names or ("--version",)

    @rename("version_option")
    def step(tree, config):
        if not _has_spelling(tree, names):
            tree.option(
                *names,
                arity=Arity.NONE,
                terminator=True,
                descr=coalesce(descr, f"show version information ({version.strip()})"),
            )
        return tree, config

    return step


def response_files(handling=ResponseFileHandling.ENABLED, /):
    """
    Enable response-file expansion with the given splitting mode.
    """
    handling = ResponseFileHandling(handling)

    @rename("response_files")
    def step(tree, config):
        config.response_file_handling = handling
        return tree, config

    return step


def ignore_case():
    """
    Match option and command names case-insensitively.
    """

    @rename("ignore_case")
    def step(tree, config):
        config.name_comparison = NameComparison.IGNORE_CASE
        return tree, config

    return step


def _route(route, /):
    if isinstance(route, str):
        return tuple(route.split())
    if isinstance(route, Iterable) and all(isinstance(name, str) for name in route):
        return tuple(route)
    raise TypeError("subcommands() routes must be strings or tuples of strings")


def subcommands(table, /):
    """
    Mount child commands from a registration table.

    Routes are resolved from the root by child name, shallowest first, so a
    command mounted by one entry can host the commands of a deeper entry.
    Commands are cloned when mounted; the table can be reused.
    """
    if not isinstance(table, Mapping):
        raise TypeError("subcommands() argument must be a mapping")
    entries = sorted(((_route(route), tuple(commands)) for route, commands in table.items()), key=lambda x: len(x[0]))
    for _, commands in entries:
        if not all(isinstance(command, Command) for command in commands):
            raise TypeError("subcommands() values must be iterables of commands")

    @rename("subcommands")
    def step(tree, config):
        for route, commands in entries:
            node = tree
            for name in route:
                if (node := node.child(name)) is None:
                    raise ValueError(f"subcommands() route {' '.join(route)!r} does not exist under {tree.name!r}")
            for command in commands:
                command.clone(node)
                logger.debug("mounted %r under %r", command.name, " ".join(node.route))
        return tree, config

    return step


__all__ = (
    "apply",
    "help_option",
    "version_option",
    "response_files",
    "ignore_case",
    "subcommands",
)
