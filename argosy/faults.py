"""
Argosy faults (errors and warnings) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every parse-time and
  configuration-time issue. Codes are grouped by domain so logs and searches
  stay predictable.
- ParseException / ParseWarning: base types that carry a message plus context
  options (token, index, command, suggestions, ...) and render themselves
  through rich.
- ParseExit: an exception group raised once at the end of a parse that ran in
  a non-throwing unrecognized-argument mode; it carries the partial result.
- trigger(): merge context into a fault and surface it.
- report(): print any fault (or exit group) to a rich console.
- getdoc(): optional documentation lookup for a code from the host application.

UX goals
- Position-first messages: parse-time messages name the ordinal position of
  the offending token ("at third position").
- Short titles, one-sentence bodies, a single hint and an optional
  "did you mean" list.

Integration
- The parser builds faults, merges session context with trigger() or
  copy.replace(), then raises or records them depending on the configured
  unrecognized-argument handling.
- Hosts may customise rendering from __main__: __codes__ (code labels),
  __docs__ (code documentation), __styles__ (palette) and __prog__ (program
  name shown in headers).
"""
import copy
import inspect
import warnings
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset, coalesce

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes used by the parser (stable identifiers).

    grouping (by high-level domain)
    - arguments (1110x)
      • UNRECOGNIZED_ARGUMENT
    - options (1111x)
      • AMBIGUOUS_OPTION, DUPLICATED_OPTION, OPTION_VALUE_REQUIRED
    - requirements (1112x)
      • MISSING_REQUIRED_POSITIONAL, MISSING_REQUIRED_OPTION
    - conversion (1113x)
      • INVALID_OPTION_VALUE
    - response files (1115x)
      • RESPONSE_FILE_NOT_FOUND
    - configuration (1116x)
      • INVALID_CONFIGURATION
    - warnings (12xxx)
      • COLLECTED_ARGUMENT, EMPTY_OPTION_VALUE

    rationale
    - spacing leaves room for future additions without reshuffling codes.
    - normalize() lets hosts remap codes to their own labels.
    """
    # --- argument errors (11xxx) ---
    UNRECOGNIZED_ARGUMENT       = 11101

    # --- option errors (11xxx) ---
    AMBIGUOUS_OPTION            = 11111
    DUPLICATED_OPTION           = 11115
    OPTION_VALUE_REQUIRED       = 11117

    # --- requirement errors (11xxx) ---
    MISSING_REQUIRED_POSITIONAL = 11125
    MISSING_REQUIRED_OPTION     = 11126

    # --- conversion errors (11xxx) ---
    INVALID_OPTION_VALUE        = 11131

    # --- response-file errors (11xxx) ---
    RESPONSE_FILE_NOT_FOUND     = 11151

    # --- configuration errors (11xxx) ---
    INVALID_CONFIGURATION       = 11161

    # --- warnings (12xxx) ---
    COLLECTED_ARGUMENT          = 12101
    EMPTY_OPTION_VALUE          = 12111

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


_ERROR_STYLES = {
    # header parts
    "prog-name": "bold #E6E6F0",
    "code": "bold #00E5FF",
    "title": "bold #FF4DA6",

    # body
    "message": "#C8C8D0",
    "hint-arrow": "#9CE19C dim",
    "hint": "italic #9CE19C",
    "suggestion-label": "#9CA3AF",
    "suggestion": "bold #00E6FF",
    "docs": "underline #00E5FF dim",
}

_WARNING_STYLES = _ERROR_STYLES | {
    "code": "bold #FFB400",
    "title": "bold #FFC2E0",
    "message": "#D6D6DE",
    "hint-arrow": "#B8EFAF dim",
    "hint": "italic #B8EFAF",
}


def _prog(options):
    main = __import__("__main__")
    if command := options.get("command"):
        return getattr(main, "__prog__", command.root.name)
    return getattr(main, "__prog__", "argosy")


def _render(fault, palette, /):
    """
    Build the rich renderable shared by errors and warnings.

    Layout
    - header: "[ prog — code | Title ]"
    - message (one sentence), hint arrow, "did you mean" list, docs line.
    - fancy=True wraps the body into a panel titled by the header.
    """
    colorful = fault.options.get("colorful", True)
    styles = defaultdict(str, palette | getattr(__import__("__main__"), "__styles__", {}))

    def text(fragment, style=""):
        if not fragment:
            return Text("")
        if isinstance(fragment, Text):
            return fragment
        return Text(str(fragment), styles[style] if colorful else "")

    header = Text.assemble(
        "[ ",
        text(_prog(fault.options), "prog-name"),
        " — ",
        text(fault.code.normalize(), "code"),
        " | ",
        text(fault.title.title(), "title"),
        " ]",
    )
    renders = [text(fault.message, "message")]

    if hint := fault.options.get("hint"):
        renders.append(Text.assemble(text(" → ", "hint-arrow"), text(hint, "hint")))

    if fault.suggestions:
        renders.append(Text.assemble(
            text("   did you mean: ", "suggestion-label"),
            Text(", ").join(text(suggestion, "suggestion") for suggestion in fault.suggestions),
        ))

    if docs := coalesce(fault.options.get("docs", Unset), getdoc(fault.code)):
        renders.append(text(docs, "docs"))

    if fault.options.get("fancy", False):
        return Panel(Group(*renders), title=header, title_align="left")
    return Group(header, *renders)


class _FaultMixin:
    """
    Shared accessors for parse faults.

    Each concrete fault declares its default code and title through the
    __fault__ and __title__ class attributes; both can be overridden per
    instance through the options.
    """
    __fault__ = FaultCode.UNRECOGNIZED_ARGUMENT
    __title__ = "parse fault"

    @property
    def code(self):
        return self.options.get("code", type(self).__fault__)

    @property
    def title(self):
        return self.options.get("title", type(self).__title__)

    @property
    def token(self):
        return self.options.get("token")

    @property
    def index(self):
        return self.options.get("index")

    @property
    def command(self):
        return self.options.get("command")

    @property
    def suggestions(self):
        return tuple(self.options.get("suggestions", ()))

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})

    def __str__(self):
        return coalesce(self.message, self.title)


class ParseException(_FaultMixin, Exception):
    """
    Base class for every argosy error.

    Parameters
    - message: Unset | str, one-sentence, lowercased description.
    - options: context merged by the parser (token, index, command, hint,
      suggestions, docs, code, title, colorful, fancy).
    """

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(*(() if message is Unset else (message,)))
        self.message = message
        self.options = MappingProxyType(options)

    def __rich__(self):
        return _render(self, _ERROR_STYLES)

    def __trigger__(self):
        raise self from None


class UnrecognizedArgumentError(ParseException):
    __fault__ = FaultCode.UNRECOGNIZED_ARGUMENT
    __title__ = "unrecognized argument"


class AmbiguousOptionError(ParseException):
    __fault__ = FaultCode.AMBIGUOUS_OPTION
    __title__ = "ambiguous option"


class DuplicatedOptionError(ParseException):
    __fault__ = FaultCode.DUPLICATED_OPTION
    __title__ = "duplicated option"


class OptionValueRequiredError(ParseException):
    __fault__ = FaultCode.OPTION_VALUE_REQUIRED
    __title__ = "option value required"


class MissingRequiredPositionalError(ParseException):
    __fault__ = FaultCode.MISSING_REQUIRED_POSITIONAL
    __title__ = "missing required positional"


class MissingRequiredOptionError(ParseException):
    __fault__ = FaultCode.MISSING_REQUIRED_OPTION
    __title__ = "missing required option"


class InvalidOptionValueError(ParseException):
    __fault__ = FaultCode.INVALID_OPTION_VALUE
    __title__ = "invalid option value"


class ResponseFileNotFoundError(ParseException):
    __fault__ = FaultCode.RESPONSE_FILE_NOT_FOUND
    __title__ = "response file not found"


class InvalidConfigurationError(ParseException):
    __fault__ = FaultCode.INVALID_CONFIGURATION
    __title__ = "invalid configuration"


class ParseWarning(_FaultMixin, Warning):
    """
    Base class for non-fatal parse findings recorded in ParseResult.faults.
    """
    __fault__ = FaultCode.COLLECTED_ARGUMENT
    __title__ = "parse warning"

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(*(() if message is Unset else (message,)))
        self.message = message
        self.options = MappingProxyType(options)

    def __rich__(self):
        return _render(self, _WARNING_STYLES)

    def __trigger__(self):
        warnings.warn(self, stacklevel=len(inspect.stack()))


class UnrecognizedArgumentWarning(ParseWarning):
    __fault__ = FaultCode.COLLECTED_ARGUMENT
    __title__ = "unrecognized argument"


class EmptyOptionValueWarning(ParseWarning):
    __fault__ = FaultCode.EMPTY_OPTION_VALUE
    __title__ = "empty option value"


class ParseExit(ExceptionGroup):
    """
    Every error collected by one parse, raised together at its end.

    The partial ParseResult is available as .result; its .faults list also
    holds the warnings recorded along the way.
    """

    def __new__(cls, exceptions, /, **options):
        return super().__new__(cls, "parse failed", tuple(exceptions))

    def __init__(self, exceptions, /, **options):
        super().__init__("parse failed", tuple(exceptions))
        self.options = MappingProxyType(options)

    @property
    def result(self):
        return self.options.get("result")

    def derive(self, exceptions):
        return type(self)(exceptions, **self.options)

    def __rich__(self):
        colorful = self.options.get("colorful", True)
        styles = defaultdict(str, {
            "prog-name": "bold #E6E6F0",
            "title": "bold #FF4DA6",
        } | getattr(__import__("__main__"), "__styles__", {}))

        result = self.result
        prog = getattr(__import__("__main__"), "__prog__", result.command.root.name if result else "argosy")

        header = Text.assemble(
            "[ ",
            Text(prog, styles["prog-name"] if colorful else ""),
            " — ",
            Text(self.message.title(), styles["title"] if colorful else ""),
            " ]",
        )
        renders = [copy.replace(exception, colorful=colorful) for exception in self.exceptions]

        if self.options.get("fancy", False):
            return Panel(Group(*renders), title=header, title_align="left")
        return Group(header, *renders)

    def __trigger__(self):
        raise self from None

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.exceptions, **{**self.options, **overrides})


def trigger(fault, /, **options):
    """
    surface a fault with the given context options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see base classes).
    - options are merged into the fault via __replace__(**options) first.
    - errors and exit groups are raised; warnings go through warnings.warn().
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    copy.replace(fault, **options).__trigger__()


def report(fault, /, console=Unset):
    """
    print a fault, a warning or a ParseExit with rich (stderr by default).
    """
    if not hasattr(fault, "__rich__"):
        raise TypeError("report() argument must be a renderable fault")
    coalesce(console, globals()["console"]).print(fault)


def getdoc(code, /):
    """
    optional documentation fetch for a fault code.

    the host application may expose a __docs__ mapping in __main__ where keys
    are FaultCode members and values are short documentation strings. when
    not found, None is returned.
    """
    if not isinstance(code, FaultCode):
        raise TypeError("getdoc() argument must be a fault-code")
    return getattr(__import__("__main__"), "__docs__", {}).get(code)


__all__ = (
    "FaultCode",
    "ParseException",
    "UnrecognizedArgumentError",
    "AmbiguousOptionError",
    "DuplicatedOptionError",
    "OptionValueRequiredError",
    "MissingRequiredPositionalError",
    "MissingRequiredOptionError",
    "InvalidOptionValueError",
    "ResponseFileNotFoundError",
    "InvalidConfigurationError",
    "ParseWarning",
    "UnrecognizedArgumentWarning",
    "EmptyOptionValueWarning",
    "ParseExit",
    "trigger",
    "report",
    "getdoc",
)
