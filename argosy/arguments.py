r"""
Argosy argument definitions.

Overview
- Arity: how many values a definition binds.
  • NONE: presence-only option (a flag), bound to True when seen.
  • SINGLE: exactly one value; repeating the option is an error.
  • MULTIPLE: values accumulate across repeated occurrences (options), or
    every remaining positional value (the trailing operand).
- Option: named definition with a long name ("--output"), a short name
  ("-o"), or both.
- Operand: positional definition, bound in declaration order.

Both are lightweight, immutable descriptors: the parser reads them, never
writes them, and the results are keyed by definition identity.

Metadata (sanitized on construction)
- Shared
  • descr: Unset | str | Text (short help), non-empty when provided.
  • metavar: Unset | str (value label in help), non-empty when provided.
  • type: the target type handed to the value parser (default str).
  • parser: Unset | Callable[[str], object], overrides the provider lookup.
  • required: bool, default: any value.
  • hidden: bool (suppressed from help and suggestions).
- Option only
  • names: at most one "--long" and at most one "-s" spelling. Short names
    may be longer than one character ("-vv", "-cp"), which makes them
    ineligible for clustering.
  • inherited: bool, the option is visible from every descendant command.
  • terminator: bool, parsing stops once the option is bound (--help).

Validation highlights
- Long names must match r"--[^\W\d_](-?[^\W_]+)*".
- Short names must match r"-([^\W_]+|\?)".
- Operand names must match r"[^\W\d][\w-]*".
- Presence-only options cannot specify a metavar or a parser.
- Operands cannot be presence-only.

Quick example:
    >>> verbose = Option("-v", "--verbose", arity="none", inherited=True)
    >>> output = Option("--output", "-o", metavar="PATH", type=pathlib.Path)
    >>> files = Operand("files", arity="multiple", required=True)
"""
import re

from rich.text import Text

from .utils import *


class Arity(ChoiceEnum):
    NONE = "none"
    SINGLE = "single"
    MULTIPLE = "multiple"


def _sanitize_metadata(cls, metadata, /):
    """
    Internal: normalize and validate metadata shared by options and operands.

    Responsibilities
    - descr/metavar: Unset or non-empty (after trimming) strings; Unset
      becomes None.
    - arity: Arity member or its string value.
    - type: callable target type.
    - parser: Unset or a callable; Unset becomes None.
    - required/hidden: coerced to bool.

    Raises
    - TypeError: wrong Python types.
    - ValueError: empty strings or unknown arity names.

    Notes
    - The metadata dict is mutated in place.
    """
    if not isinstance(descr := metadata["descr"], str | Text | Unset):
        raise TypeError(f"{cls.__typename__} 'descr' must be a string")
    elif isinstance(descr, str) and not (descr := descr.strip()):
        raise ValueError(f"{cls.__typename__} 'descr' cannot be empty")
    metadata["descr"] = coalesce(descr)

    if not isinstance(metavar := metadata["metavar"], str | Unset):
        raise TypeError(f"{cls.__typename__} 'metavar' must be a string")
    elif isinstance(metavar, str) and not (metavar := metavar.strip()):
        raise ValueError(f"{cls.__typename__} 'metavar' cannot be empty")
    metadata["metavar"] = coalesce(metavar)

    if not isinstance(arity := metadata["arity"], Arity | str):
        raise TypeError(f"{cls.__typename__} 'arity' must be an arity or a string")
    try:
        metadata["arity"] = Arity(arity)
    except ValueError:
        raise ValueError(f"{cls.__typename__} 'arity' must be one of 'none', 'single', or 'multiple'") from None

    if not callable(metadata["type"]):
        raise TypeError(f"{cls.__typename__} 'type' must be callable")

    if (parser := metadata["parser"]) is not Unset and not callable(parser):
        raise TypeError(f"{cls.__typename__} 'parser' must be callable")
    metadata["parser"] = coalesce(parser)

    metadata["required"] = bool(metadata["required"])
    metadata["hidden"] = bool(metadata["hidden"])


def _sanitize_named_metadata(cls, metadata, /):
    """
    Internal: split option spellings into a long and a short name.

    Accepted forms
    - "--name", "--long-name" (at most one per option)
    - "-n", "-nm", "-?" (at most one per option)

    The leading dashes are stripped from the stored names. Presence-only
    options cannot carry a metavar or a parser.

    Raises
    - TypeError: no names, or names that are not strings.
    - ValueError: empty/invalid names, duplicates, or two spellings of the
      same kind.
    """
    if not metadata["names"]:
        raise TypeError(f"{cls.__typename__} must specify at least one name")

    long = short = Unset
    for name in metadata["names"]:
        if not isinstance(name, str):
            raise TypeError(f"{cls.__typename__} names must be strings")
        elif not (name := name.strip()):
            raise ValueError(f"{cls.__typename__} names cannot be empty-strings")
        elif re.fullmatch(r"--[^\W\d_](-?[^\W_]+)*", name):
            if long is not Unset:
                raise ValueError(f"{cls.__typename__} cannot have more than one long name")
            long = name[2:]
        elif re.fullmatch(r"-([^\W_]+|\?)", name):
            if short is not Unset:
                raise ValueError(f"{cls.__typename__} cannot have more than one short name")
            short = name[1:]
        else:
            raise ValueError(f"{cls.__typename__} names must be valid shell-style option names (unicodes are allowed)")

    metadata["long"], metadata["short"] = coalesce(long), coalesce(short)
    del metadata["names"]

    if metadata["arity"] is Arity.NONE:
        if metadata["metavar"] is not None:
            raise TypeError(f"presence-only {cls.__typename__} cannot specify a 'metavar'")
        if metadata["parser"] is not None:
            raise TypeError(f"presence-only {cls.__typename__} cannot specify a 'parser'")

    metadata["inherited"] = bool(metadata["inherited"])
    metadata["terminator"] = bool(metadata["terminator"])


class Option(metaclass=SpecType):
    """
    Named option definition.

    Highlights
    - Long and/or short spelling; lookups compare names without their dashes.
    - Arity NONE binds True when seen; SINGLE binds one value; MULTIPLE
      accumulates a list across repeated occurrences.
    - default: value reported by ParseResult.get() when the option is absent
      (False for presence-only options unless given).

    Properties
    - The names listed in __introspectable__ are exposed as read-only attributes.
    - names: every spelling with its dashes ("-o", "--output").
    - display: the preferred spelling for messages (long first).
    - clusterable: True when the short name is a single character.
    """

    __introspectable__ = (
        "long",
        "short",
        "arity",
        "type",
        "parser",
        "required",
        "default",
        "inherited",
        "terminator",
        "metavar",
        "descr",
        "hidden",
    )

    __displayable__ = (
        "long",
        "short",
        "arity",
        "type",
        "required",
        "default",
        "inherited",
        "terminator",
        "hidden",
    )

    def __new__(
            cls,
            *names,
            arity=Arity.SINGLE,
            type=str,
            parser=Unset,
            required=False,
            default=Unset,
            inherited=False,
            terminator=False,
            metavar=Unset,
            descr=Unset,
            hidden=False,
    ):
        """
        Construct an Option definition.

        Parameters
        - names: "--long" and/or "-s" spellings (at least one).
        - arity: Arity | "none" | "single" | "multiple".
        - type: target type for the value parser (ignored for presence-only).
        - parser: explicit converter overriding the provider.
        - required: the option must appear on the resolved command path.
        - default: value reported when the option is absent.
        - inherited: visible from every descendant command.
        - terminator: parsing stops right after the option is bound.
        - metavar/descr/hidden: help metadata.
        """
        metadata = {
            "names": names,
            "arity": arity,
            "type": type,
            "parser": parser,
            "required": required,
            "default": default,
            "inherited": inherited,
            "terminator": terminator,
            "metavar": metavar,
            "descr": descr,
            "hidden": hidden,
        }
        _sanitize_metadata(cls, metadata)
        _sanitize_named_metadata(cls, metadata)

        if metadata["default"] is Unset:
            metadata["default"] = {Arity.NONE: False, Arity.SINGLE: None, Arity.MULTIPLE: []}[metadata["arity"]]

        self = super().__new__(cls)
        for name, object in metadata.items():
            setattr(self, "_" + name, object)
        return self

    @property
    def names(self):
        return tuple(
            name for name in (
                "--" + self.long if self.long is not None else None,
                "-" + self.short if self.short is not None else None,
            ) if name
        )

    @property
    def display(self):
        return self.names[0]

    @property
    def clusterable(self):
        return self.short is not None and len(self.short) == 1

    def __option__(self):
        """
        Introspection hook: identify this definition as an Option.
        """
        return self


class Operand(metaclass=SpecType):
    """
    Positional operand definition.

    Operands bind in declaration order. A MULTIPLE operand takes every
    remaining positional value and must therefore be the last operand of its
    command (enforced by Command).

    Properties
    - The names listed in __introspectable__ are exposed as read-only attributes.
    - display: the metavar in angle brackets ("<FILE>"), used in messages.
    """

    __introspectable__ = (
        "name",
        "arity",
        "type",
        "parser",
        "required",
        "default",
        "metavar",
        "descr",
        "hidden",
    )

    def __new__(
            cls,
            name,
            /,
            arity=Arity.SINGLE,
            type=str,
            parser=Unset,
            required=False,
            default=Unset,
            *,
            metavar=Unset,
            descr=Unset,
            hidden=False,
    ):
        """
        Construct an Operand definition.

        Parameters
        - name: identifier used for lookups (result["file"]).
        - arity: Arity.SINGLE or Arity.MULTIPLE (presence-only is rejected).
        - type/parser: value conversion, as for options.
        - required: a value must be supplied on the resolved command.
        - default: value reported when no value was supplied.
        - metavar: help label, defaults to the upper-cased name.
        """
        if not isinstance(name, str):
            raise TypeError(f"{cls.__typename__} 'name' must be a string")
        elif not re.fullmatch(r"[^\W\d][\w-]*", name := name.strip()):
            raise ValueError(f"{cls.__typename__} 'name' must be a valid identifier (unicodes are allowed)")

        metadata = {
            "name": name,
            "arity": arity,
            "type": type,
            "parser": parser,
            "required": required,
            "default": default,
            "metavar": metavar,
            "descr": descr,
            "hidden": hidden,
        }
        _sanitize_metadata(cls, metadata)

        if metadata["arity"] is Arity.NONE:
            raise ValueError(f"{cls.__typename__} cannot be presence-only")

        metadata["metavar"] = metadata["metavar"] or name.upper().replace("-", "_")
        metadata["default"] = coalesce(default, [] if metadata["arity"] is Arity.MULTIPLE else None)

        self = super().__new__(cls)
        for name, object in metadata.items():
            setattr(self, "_" + name, object)
        return self

    @property
    def display(self):
        return f"<{self.metavar}>"

    def __operand__(self):
        """
        Introspection hook: identify this definition as an Operand.
        """
        return self


__all__ = (
    "Arity",
    "Option",
    "Operand",
)
