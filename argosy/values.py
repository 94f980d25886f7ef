"""
Argosy value parsers.

A value parser turns one raw argument string into a Python value for a target
type. It is a plain callable taking the raw string; raising ValueError,
TypeError or ArithmeticError means "this string could not be converted".

Overview
- ValueParserProvider: registry of parsers keyed by target type.
  • register(type, parser) adds or replaces a parser.
  • resolve(type) looks up the exact type, then Enum subclasses, then the
    closest registered base class, and finally falls back to calling the type.
- parse(definition, raw, provider): convert one raw string for an option or an
  operand, raising InvalidOptionValueError on failure.

Built-in parsers
- str, int (decimal, or with 0x/0o/0b prefixes), float, complex
- bool: true/false, yes/no, on/off, 1/0 (case-insensitive)
- pathlib.Path, decimal.Decimal, fractions.Fraction, uuid.UUID
- datetime.date, datetime.datetime, datetime.time (ISO 8601)
- Enum subclasses: member name (case-insensitive) or member value
"""
import builtins
import datetime
import decimal
import enum
import fractions
import logging
import pathlib
import uuid

from .faults import InvalidOptionValueError
from .utils import Unset, coalesce, rename

logger = logging.getLogger(__name__)

_TRUTHY = frozenset({"true", "yes", "on", "1"})
_FALSY = frozenset({"false", "no", "off", "0"})


@rename("int")
def _integer(raw, /):
    try:
        return int(raw, 10)
    except ValueError:
        return int(raw, 0)


@rename("bool")
def _boolean(raw, /):
    if (lowered := raw.strip().lower()) in _TRUTHY:
        return True
    if lowered in _FALSY:
        return False
    raise ValueError(f"{raw!r} is not a boolean (expected true/false, yes/no, on/off or 1/0)")


def _enumeration(cls, /):
    """
    Build a parser for an Enum subclass: match member names ignoring case,
    then member values by their string form.
    """

    @rename(cls.__name__)
    def parser(raw, /):
        folded = raw.casefold()
        for name, member in cls.__members__.items():
            if name.casefold() == folded:
                return member
        for member in cls:
            if str(member.value) == raw:
                return member
        raise ValueError(f"{raw!r} is not a valid {cls.__name__} (expected one of "
                         f"{', '.join(name.lower() for name in cls.__members__)})")

    return parser


_BUILTINS = {
    str: str,
    int: _integer,
    float: float,
    complex: complex,
    bool: _boolean,
    pathlib.Path: pathlib.Path,
    decimal.Decimal: decimal.Decimal,
    fractions.Fraction: fractions.Fraction,
    uuid.UUID: uuid.UUID,
    datetime.date: datetime.date.fromisoformat,
    datetime.datetime: datetime.datetime.fromisoformat,
    datetime.time: datetime.time.fromisoformat,
}


class ValueParserProvider:
    """
    Registry of value parsers keyed by target type.

    A fresh provider knows the built-in parsers; registering a parser for a
    type replaces the previous one for that exact type only.
    """
    __slots__ = ("_parsers",)

    def __init__(self, parsers=Unset, /):
        self._parsers = dict(_BUILTINS)
        for type, parser in dict(coalesce(parsers, {})).items():
            self.register(type, parser)

    def register(self, type, parser, /):
        if not isinstance(type, builtins.type):
            raise TypeError("value-parser provider key must be a type")
        if not callable(parser):
            raise TypeError("value-parser provider parser must be callable")
        logger.debug("registered value parser %r for %s", parser, type.__qualname__)
        self._parsers[type] = parser
        return parser

    def resolve(self, type, /):
        """
        Return the parser for `type`.

        Lookup order: exact registration, Enum subclass, nearest registered
        base class in the MRO, then `type` itself when it is callable.
        """
        try:
            return self._parsers[type]
        except (KeyError, TypeError):
            pass
        if isinstance(type, builtins.type):
            if issubclass(type, enum.Enum):
                return _enumeration(type)
            for base in type.__mro__[1:]:
                if base is not object and base in self._parsers:
                    return self._parsers[base]
        if callable(type):
            return type
        raise TypeError(f"no value parser available for {type!r}")

    def copy(self):
        provider = type(self)()
        provider._parsers = dict(self._parsers)
        return provider

    def __contains__(self, type):
        return type in self._parsers

    def __eq__(self, other):
        if not isinstance(other, ValueParserProvider):
            return NotImplemented
        return self._parsers == other._parsers

    __hash__ = None

    def __repr__(self):
        return f"value-parser-provider(types={len(self._parsers)})"


def parse(definition, raw, /, provider=Unset):
    """
    Convert one raw string for an option or operand definition.

    The definition's own parser wins; otherwise the provider (a fresh default
    one when omitted) resolves a parser from definition.type.

    Raises
    - InvalidOptionValueError: when the parser rejects the string.
    """
    if (parser := definition.parser) is None:
        parser = (ValueParserProvider() if provider is Unset else provider).resolve(definition.type)
    try:
        return parser(raw)
    except (ValueError, TypeError, ArithmeticError) as exception:
        raise InvalidOptionValueError(
            f"{raw!r} is not a valid {getattr(definition.type, '__name__', 'value')} for {definition.display}",
            token=raw,
            hint=str(exception) or f"pass a value convertible to {getattr(definition.type, '__name__', 'the target type')}",
        ) from exception


__all__ = (
    "ValueParserProvider",
    "parse",
)
