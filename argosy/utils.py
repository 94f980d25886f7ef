"""
Argosy utilities (internal helpers, carefully exposed)

Scope
- Small building blocks shared by the model, the parser and the renderers.
- Re-exported names are stable; anything not in __all__ may change.

Overview
- UnsetType / Unset
  • Sentinel for “not provided” that does not collide with None.
- coalesce(value, default=None)
  • Replace Unset with a default, keep every other value (None included).
- rename(callable, name) / @rename("name")
  • Stable __name__/__qualname__ for generated callables.
- mirror("attr")
  • Read-only property over a private backing field (self._attr) that hands
    out fresh container copies.
- pluralize(text)
  • Best-effort English plural for labels ("option" → "options").
- ordinal(number)
  • Human ordinal for 1-based positions ("first", "12th", ...).
- SpecType
  • Metaclass for descriptor classes (typename, mirrored fields, reprs).
- ChoiceEnum
  • Enum that also accepts its values (or names) as loose strings.

Quick examples
    >>> coalesce(Unset, "fallback")
    'fallback'
    >>> coalesce(None, "fallback") is None
    True
    >>> ordinal(3), ordinal(22)
    ('third', '22nd')
"""
import builtins
import enum
import functools
import operator
import re
from collections.abc import Sequence, Mapping, Set
from typing import final


@final
class UnsetType:
    """
    Sentinel type for values that were not provided.

    Characteristics
    - Falsy, printable as "Unset", sealed, one instance per process.
    - Participates in PEP 604 unions (str | UnsetType) for annotations.
    """

    def __or__(self, other, /):
        try:
            return type(self) | other
        except TypeError:
            return NotImplemented

    def __ror__(self, other, /):
        try:
            return other | type(self)
        except TypeError:
            return NotImplemented

    @functools.cache
    def __new__(cls):
        return super().__new__(cls)

    def __bool__(self):
        return False

    def __repr__(self):
        return "Unset"

    def __copy__(self):
        return self

    def __deepcopy__(self, memo, /):
        return self

    def __reduce__(self):
        return "Unset"

    def __init_subclass__(cls, **options):
        raise TypeError("type 'UnsetType' is not an acceptable base type")


Unset = UnsetType()
"""
The single “not provided” marker.

Use it as a default where None is a meaningful user value, then materialize
with coalesce(value, default).
"""


def coalesce(object, default=None, /):
    """
    Resolve the Unset sentinel to a concrete default.

    Falsy values such as None, 0, "" or [] are preserved; only Unset is
    replaced.
    """
    return object if object is not Unset else default


def rename(*parameters):
    """
    Set __name__/__qualname__ on a callable, or return a decorator doing so.

    Forms
    - rename(callable, name) -> callable
    - rename(name) -> decorator
    """
    match len(parameters):
        case 2:
            callable, name = parameters
            if not builtins.callable(callable):
                raise TypeError("rename() first argument must be callable")
            if not isinstance(name, str):
                raise TypeError("rename() second argument must be a string")
            try:
                callable.__qualname__ = name
                callable.__name__ = name
            except (AttributeError, TypeError):
                raise TypeError("rename() first argument must be a updatable callable") from None
            return callable
        case 1:
            name, = parameters
            if not isinstance(name, str):
                raise TypeError("@rename() argument must be a string")

            def wrapper(callable):
                if not builtins.callable(callable):
                    raise TypeError("@rename() must be applied to a callable")
                return rename(callable, name)

            return rename(wrapper, "rename")
        case _:
            raise TypeError("rename takes 1 to 2 arguments but %d were given" % len(parameters))


def _immortalize(object):
    """
    Copy container values (one fresh container per level), leave leaves as-is.
    """
    if isinstance(object, Sequence) and not isinstance(object, str):
        return list(map(_immortalize, object))
    elif isinstance(object, Mapping):
        return dict(zip(object.keys(), map(_immortalize, object.values())))
    elif isinstance(object, Set):
        return set(map(_immortalize, object))
    return object


def mirror(name, /):
    """
    Read-only property over the backing field "_{name}".

    Containers are returned as fresh copies so callers cannot mutate the
    definition they came from.
    """
    if not isinstance(name, str):
        raise TypeError("mirror() argument must be a string")

    @rename(name)
    def getter(self):
        return _immortalize(getattr(self, "_" + name))

    return property(getter)


@functools.cache
def pluralize(text, /):
    """
    Best-effort English pluralizer for labels and messages.

    Only the last word of a phrase is pluralized; casing of that word is kept.

    Examples
    - pluralize("option")          -> "options"
    - pluralize("command alias")   -> "command aliases"
    - pluralize("Entry")           -> "Entries"
    """
    if not isinstance(text, str):
        raise TypeError("pluralize() argument must be a string")
    if not (match := re.search(r"(\S+)(\s*)$", text)):
        return text

    head, last, trail = text[:match.start(1)], match.group(1), match.group(2)
    lower = last.lower()

    if lower.endswith(("s", "sh", "ch", "x", "z")):
        plural = lower + "es"
    elif lower.endswith("y") and len(lower) > 1 and lower[-2] not in "aeiou":
        plural = lower[:-1] + "ies"
    else:
        plural = lower + "s"

    if last.isupper() and len(last) > 1:
        plural = plural.upper()
    elif last[:1].isupper():
        plural = plural[:1].upper() + plural[1:]
    return head + plural + trail


@functools.cache
def ordinal(number, /):
    """
    Return a human-friendly ordinal label for a 1-based position.

    1..10 are spelled out ("first"…"tenth"); other numbers get an English
    suffix ("11th", "21st", "112th").
    """
    try:
        return (
            "first", "second", "third", "fourth", "fifth",
            "sixth", "seventh", "eighth", "ninth", "tenth",
        )[number - 1] if number > 0 else str(number)
    except IndexError:
        pass
    if 10 < number % 100 < 20:
        return f"{number}th"
    return f"{number}%s" % {1: "st", 2: "nd", 3: "rd"}.get(number % 10, "th")


class SpecType(type):
    """
    Metaclass for introspectable descriptor classes (options, operands, commands).

    Responsibilities
    - __typename__: class name split on camel-case humps and lowercased
      ("Option" → "option"), used in every construction-time message.
    - Read-only properties (via mirror) for every name in __introspectable__.
    - Stable __repr__ and __rich_repr__ built from __displayable__ (or
      __introspectable__ when unset).
    """
    __introspectable__ = ()
    __displayable__ = Unset

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | {
                name: mirror(name) for name in namespace.get("__introspectable__", ())
                if name not in namespace
            },
        )

        if "__repr__" not in namespace:
            @rename("__repr__")
            def __repr__(self):
                return f"{type(self).__typename__}({', '.join(map(functools.partial(operator.mod, '%s=%r'), self.__rich_repr__()))})"
            self.__repr__ = __repr__

        if "__rich_repr__" not in namespace:
            @rename("__rich_repr__")
            def __rich_repr__(self):
                for name in coalesce(type(self).__displayable__, type(self).__introspectable__):
                    yield name, getattr(self, name)
            self.__rich_repr__ = __rich_repr__

        return self


class ChoiceEnum(enum.Enum):
    """
    Enum accepting its members, or their values or names as strings
    (case-insensitive, underscores and hyphens interchangeable).
    """

    @classmethod
    def _missing_(cls, value):
        if isinstance(value, str):
            normalized = value.strip().lower().replace("_", "-")
            for member in cls:
                if member.value == normalized:
                    return member
            return cls.__members__.get(normalized.replace("-", "_").upper())
        return None


__all__ = (
    # Functions
    "coalesce",
    "rename",
    "mirror",
    "pluralize",
    "ordinal",

    # Types
    "UnsetType",
    "SpecType",
    "ChoiceEnum",

    # Constants
    "Unset",
)
