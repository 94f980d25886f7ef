"""
Argosy parser configuration.

Overview
- NameComparison: how option and command names are matched (ordinal or
  case-insensitive).
- ResponseFileHandling: whether "@file" arguments are expanded, and how the
  file contents are split.
- UnrecognizedArgumentHandling: what happens to tokens no definition claims.
- ParserConfig: the mutable bundle of settings read by the parser.

Every setting is validated when it is assigned: wrong Python types raise
TypeError, semantically invalid values raise InvalidConfigurationError. The
clustering default depends on the command tree, so it stays Unset ("decide
from the tree") until a Parser resolves it.

Quick example:
    >>> config = ParserConfig(unrecognized_argument_handling="collect")
    >>> config.separators = {"="}
    >>> config.separators = ()
    Traceback (most recent call last):
    ...
    argosy.faults.InvalidConfigurationError: option-name value separators cannot be empty
"""
from .faults import InvalidConfigurationError
from .utils import ChoiceEnum, Unset, coalesce
from .values import ValueParserProvider


class NameComparison(ChoiceEnum):
    ORDINAL = "ordinal"
    IGNORE_CASE = "ignore-case"

    def fold(self, name, /):
        """
        Return the key used to compare `name` under this comparison mode.
        """
        return name.casefold() if self is NameComparison.IGNORE_CASE else name

    def equals(self, left, right, /):
        return self.fold(left) == self.fold(right)


class ResponseFileHandling(ChoiceEnum):
    DISABLED = "disabled"
    SPACE_SEPARATED = "space-separated"
    LINE_SEPARATED = "line-separated"
    ENABLED = "space-separated"


class UnrecognizedArgumentHandling(ChoiceEnum):
    THROW = "throw"
    COLLECT = "collect"
    STOP_PARSING = "stop-parsing"


def _enumerated(enumeration, name, value, /):
    if not isinstance(value, enumeration | str):
        raise TypeError(f"parser configuration {name!r} must be a {enumeration.__name__} or a string")
    try:
        return enumeration(value)
    except ValueError:
        raise InvalidConfigurationError(
            f"{value!r} is not a valid {name.replace('_', ' ')} (expected one of "
            f"{', '.join(repr(member.value) for member in enumeration)})",
            hint="use one of the documented members",
        ) from None


class ParserConfig:
    """
    Settings controlling one Parser.

    Fields
    - cluster_options: Unset | bool
      Unset means "on, unless a multi-character short name exists anywhere in
      the command tree". The Parser resolves it; an explicit True alongside
      such a name is rejected when the Parser is built.
    - separators: frozenset[str]
      Characters that may separate an option name from its value. The space
      character means "the value may be the next argument". Defaults to
      {" ", ":", "="}; never empty.
    - allow_argument_separator: bool
      Treat a bare "--" as "everything after this is positional".
    - name_comparison: NameComparison
    - response_file_handling: ResponseFileHandling
    - unrecognized_argument_handling: UnrecognizedArgumentHandling
    - make_suggestions: bool
      Attach "did you mean" candidates to unrecognized-argument faults.
    - value_parsers: ValueParserProvider
      Converters used for option and operand values.

    ParserConfig supports copy.replace(config, **overrides).
    """
    __slots__ = (
        "_cluster_options",
        "_separators",
        "_allow_argument_separator",
        "_name_comparison",
        "_response_file_handling",
        "_unrecognized_argument_handling",
        "_make_suggestions",
        "_value_parsers",
    )

    __fields__ = tuple(slot.removeprefix("_") for slot in __slots__)

    def __init__(
            self,
            *,
            cluster_options=Unset,
            separators=(" ", ":", "="),
            allow_argument_separator=False,
            name_comparison=NameComparison.ORDINAL,
            response_file_handling=ResponseFileHandling.DISABLED,
            unrecognized_argument_handling=UnrecognizedArgumentHandling.THROW,
            make_suggestions=True,
            value_parsers=Unset,
    ):
        self.cluster_options = cluster_options
        self.separators = separators
        self.allow_argument_separator = allow_argument_separator
        self.name_comparison = name_comparison
        self.response_file_handling = response_file_handling
        self.unrecognized_argument_handling = unrecognized_argument_handling
        self.make_suggestions = make_suggestions
        self.value_parsers = coalesce(value_parsers, ValueParserProvider())

    @property
    def cluster_options(self):
        return self._cluster_options

    @cluster_options.setter
    def cluster_options(self, value):
        if not isinstance(value, bool | Unset):
            raise TypeError("parser configuration 'cluster_options' must be a boolean")
        self._cluster_options = value

    @property
    def separators(self):
        return self._separators

    @separators.setter
    def separators(self, value):
        if isinstance(value, str):
            value = (value,) if len(value) <= 1 else tuple(value)
        try:
            separators = frozenset(value)
        except TypeError:
            raise TypeError("parser configuration 'separators' must be an iterable of strings") from None
        if not separators:
            raise InvalidConfigurationError(
                "option-name value separators cannot be empty",
                hint="keep at least one of ' ', ':' or '='",
            )
        for separator in separators:
            if not isinstance(separator, str):
                raise TypeError("parser configuration 'separators' must be an iterable of strings")
            if len(separator) != 1 or separator == "-":
                raise InvalidConfigurationError(
                    f"{separator!r} is not a valid option-name value separator",
                    hint="separators are single characters other than '-'",
                )
        self._separators = separators

    @property
    def allow_argument_separator(self):
        return self._allow_argument_separator

    @allow_argument_separator.setter
    def allow_argument_separator(self, value):
        if not isinstance(value, bool):
            raise TypeError("parser configuration 'allow_argument_separator' must be a boolean")
        self._allow_argument_separator = value

    @property
    def name_comparison(self):
        return self._name_comparison

    @name_comparison.setter
    def name_comparison(self, value):
        self._name_comparison = _enumerated(NameComparison, "name_comparison", value)

    @property
    def response_file_handling(self):
        return self._response_file_handling

    @response_file_handling.setter
    def response_file_handling(self, value):
        self._response_file_handling = _enumerated(ResponseFileHandling, "response_file_handling", value)

    @property
    def unrecognized_argument_handling(self):
        return self._unrecognized_argument_handling

    @unrecognized_argument_handling.setter
    def unrecognized_argument_handling(self, value):
        self._unrecognized_argument_handling = _enumerated(
            UnrecognizedArgumentHandling, "unrecognized_argument_handling", value
        )

    @property
    def make_suggestions(self):
        return self._make_suggestions

    @make_suggestions.setter
    def make_suggestions(self, value):
        if not isinstance(value, bool):
            raise TypeError("parser configuration 'make_suggestions' must be a boolean")
        self._make_suggestions = value

    @property
    def value_parsers(self):
        return self._value_parsers

    @value_parsers.setter
    def value_parsers(self, value):
        if not isinstance(value, ValueParserProvider):
            raise TypeError("parser configuration 'value_parsers' must be a value-parser provider")
        self._value_parsers = value

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        if unknown := overrides.keys() - set(type(self).__fields__):
            raise TypeError(f"parser configuration has no field {sorted(unknown)[0]!r}")
        fields = {name: getattr(self, name) for name in type(self).__fields__}
        fields["value_parsers"] = fields["value_parsers"].copy()
        return type(self)(**fields | overrides)

    def __eq__(self, other):
        if not isinstance(other, ParserConfig):
            return NotImplemented
        return all(getattr(self, name) == getattr(other, name) for name in type(self).__fields__)

    __hash__ = None

    def __rich_repr__(self):
        for name in type(self).__fields__:
            yield name, getattr(self, name)

    def __repr__(self):
        return f"parser-config({', '.join(f'{name}={value!r}' for name, value in self.__rich_repr__())})"


__all__ = (
    "NameComparison",
    "ResponseFileHandling",
    "UnrecognizedArgumentHandling",
    "ParserConfig",
)
