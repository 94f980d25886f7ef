"""
Argosy parse results.

A ParseResult is created fresh for every parse and filled by the parser
session; once returned (or attached to a ParseExit) it is never touched by
argosy again.

Lookups accept a definition or any of its spellings:
    >>> result["--verbose"], result["-v"], result["verbose"]
    >>> result.get("--output", "out.txt")
    >>> "files" in result
"""
from .arguments import Operand, Option
from .utils import *


class ParseResult(metaclass=SpecType):
    """
    Structured outcome of one parse.

    Fields
    - command: the resolved command (the deepest subcommand selected).
    - values: option -> converted value (list for MULTIPLE, True for flags).
    - raw: option -> raw string(s) as received.
    - arguments: operand -> converted value (list for MULTIPLE).
    - positionals: raw positional strings bound to operands, in order.
    - unrecognized: tokens collected by the COLLECT policy, in order.
    - remaining: tokens left unconsumed (STOP_PARSING, or after a terminator).
    - faults: errors and warnings recorded during the parse, in order.
    - terminator: the terminator option that stopped parsing, or None.
    - route: command names from the root to the resolved command.
    """

    __introspectable__ = (
        "command",
        "values",
        "raw",
        "arguments",
        "positionals",
        "unrecognized",
        "remaining",
        "faults",
        "terminator",
    )

    __displayable__ = (
        "route",
        "values",
        "arguments",
        "unrecognized",
        "remaining",
        "faults",
        "terminator",
    )

    def __init__(self, command, /):
        self._command = command
        self._values = {}
        self._raw = {}
        self._arguments = {}
        self._positionals = []
        self._unrecognized = []
        self._remaining = []
        self._faults = []
        self._terminator = None

    @property
    def route(self):
        return self._command.route

    @property
    def errors(self):
        return [fault for fault in self._faults if isinstance(fault, Exception) and not isinstance(fault, Warning)]

    @property
    def warnings(self):
        return [fault for fault in self._faults if isinstance(fault, Warning)]

    def definition(self, key, /):
        """
        Resolve `key` to an option or operand of the resolved command path.

        Strings are matched against "--long", "-short", bare long/short names
        (nearest command first) and operand names; definitions are returned
        as-is. Returns None when nothing matches.
        """
        if isinstance(key, Option | Operand):
            return key
        if not isinstance(key, str):
            raise TypeError("parse-result key must be a string or a definition")

        for command in reversed(self._command.path):
            for option in command._options:
                if key in option.names or key in (option.long, option.short):
                    return option
        for operand in self._command._operands:
            if key == operand.name:
                return operand
        return None

    def _bound(self, definition):
        if isinstance(definition, Option):
            return self._values
        return self._arguments

    def __getitem__(self, key):
        if (definition := self.definition(key)) is None or definition not in self._bound(definition):
            raise KeyError(key)
        return self._bound(definition)[definition]

    def get(self, key, default=Unset, /):
        """
        Return the bound value for `key`, else `default`, else the
        definition default (None for unknown keys).
        """
        if (definition := self.definition(key)) is None:
            return coalesce(default)
        if definition in (bound := self._bound(definition)):
            return bound[definition]
        return coalesce(default, definition.default)

    def __contains__(self, key):
        return (definition := self.definition(key)) is not None and definition in self._bound(definition)


__all__ = (
    "ParseResult",
)
