"""
Argosy parser.

Turns a raw argument vector into a ParseResult against a command tree.

Pipeline (per parse)
1. Response-file expansion ("@file"), one level deep.
2. Left-to-right tokenizing, one argument at a time, against the active
   command: long options, short options (clustered or not), positionals and
   the "--" separator.
3. Positionals naming a child of the active command descend into it;
   others fill the active command's operands in order.
4. Anything left over goes through the unrecognized-argument policy
   (throw, collect, or stop parsing).
5. Required options and operands of the resolved command are checked.

Short-option resolution order
- cluster: every character is a single-character short option; options
  before the last value-taking one are presence-only, and a value-taking
  option takes the rest of the token (a leading separator is dropped);
- exact short name, split at the first separator ("-cp=lib");
- first character as a value-taking option, rest of the token as its value;
- negative number used as a positional value;
- unrecognized.

Error handling
- THROW: the first fault is raised with trigger().
- COLLECT / STOP_PARSING: faults are recorded in ParseResult.faults and
  every error is raised at the end as one ParseExit carrying the result.

Parsing never mutates the command tree or the configuration; all state lives
in a per-call _Session.
"""
import collections
import copy
import logging
import shlex
import sys

from .arguments import Arity, Option
from .commands import Command
from .config import ParserConfig, UnrecognizedArgumentHandling
from .faults import *
from .responses import expand
from .results import ParseResult
from .suggestions import suggest
from .tokens import TokenKind, classify, is_negative_number, looks_like_option, split
from .utils import *
from .values import parse as convert

logger = logging.getLogger(__name__)


def _resolve_clustering(root, config, /):
    """
    Decide whether short options may be clustered for this tree.

    An explicit setting wins; an explicit True next to a multi-character
    short name is a configuration error. Unset means "on, unless a
    multi-character short name exists anywhere in the tree".
    """
    offender = next((
        option for command in root.walk() for option in command._options
        if option.short is not None and not option.clusterable
    ), None)

    if config.cluster_options is Unset:
        return offender is None
    if config.cluster_options and offender is not None:
        raise InvalidConfigurationError(
            f"option clustering cannot be enabled while '-{offender.short}' is a short name",
            hint="use single-character short names or disable cluster_options",
            command=root,
        )
    return config.cluster_options


def _check_names(root, config, /):
    """
    Reject sibling commands whose names or aliases collide under the
    configured name comparison.
    """
    comparison = config.name_comparison
    for command in root.walk():
        seen = {}
        for child in command._children.values():
            for spelling in (child.name, *child.aliases):
                if seen.setdefault(comparison.fold(spelling), child) is not child:
                    raise InvalidConfigurationError(
                        f"command name {spelling!r} collides with {seen[comparison.fold(spelling)].name!r} under {command.name!r}",
                        hint=f"names must be unique under {comparison.value} comparison",
                        command=command,
                    )


class Parser:
    """
    A command tree bound to a configuration.

    The tree and configuration are validated once, when the parser is built;
    parse() can then run any number of times, concurrently if the caller
    does not mutate either of them meanwhile.
    """

    def __init__(self, root, config=Unset, /):
        if not isinstance(root, Command):
            raise TypeError("parser 'root' must be a command")
        if not isinstance(config := coalesce(config, ParserConfig()), ParserConfig):
            raise TypeError("parser 'config' must be a parser configuration")

        self._root = root
        self._config = config
        self._cluster = _resolve_clustering(root, config)
        _check_names(root, config)

        logger.debug(
            "built parser for %r (%d commands, clustering %s)",
            root.name,
            sum(1 for _ in root.walk()),
            "on" if self._cluster else "off",
        )

    @property
    def root(self):
        return self._root

    @property
    def config(self):
        return self._config

    @property
    def cluster_options(self):
        """
        The effective clustering setting (the configured one, or the default
        derived from the tree).
        """
        return self._cluster

    def parse(self, arguments=Unset, /, *, cwd=Unset):
        """
        Parse `arguments` and return a ParseResult.

        Parameters
        - arguments: iterable of strings (default: sys.argv[1:]), or a single
          string split with shell rules.
        - cwd: base directory for response files.

        Raises
        - ParseException subclasses (THROW mode, or fatal response-file faults).
        - ParseExit: COLLECT / STOP_PARSING mode with at least one error.
        """
        arguments = coalesce(arguments, sys.argv[1:])
        if isinstance(arguments, str):
            arguments = shlex.split(arguments)
        arguments = list(arguments)
        if not all(isinstance(argument, str) for argument in arguments):
            raise TypeError("parser arguments must be strings")
        return _Session(self, arguments, cwd).run()


class _Session:
    """
    Mutable state of one parse: pending tokens, active command, free operand
    slots, separator state and the result being filled.
    """

    def __init__(self, parser, arguments, cwd, /):
        self.config = parser.config
        self.cluster = parser.cluster_options
        self.comparison = self.config.name_comparison
        self.throw = self.config.unrecognized_argument_handling is UnrecognizedArgumentHandling.THROW
        self.arguments = arguments
        self.cwd = cwd
        self.command = parser.root
        self.operands = collections.deque(parser.root._operands)
        self.tokens = collections.deque()
        self.separated = False
        self.stopped = False
        self.index = 0
        self.result = ParseResult(parser.root)
        self._available = {}

    # ── driving ────────────────────────────────────────────────────────────

    def run(self):
        allow = self.config.allow_argument_separator
        try:
            arguments = expand(
                self.arguments,
                self.config.response_file_handling,
                cwd=self.cwd,
                separator="--" if allow else Unset,
            )
        except ResponseFileNotFoundError as exception:
            trigger(exception, command=self.command)

        logger.debug("parsing %d arguments against %r", len(arguments), self.command.name)
        self.tokens.extend(enumerate(arguments, start=1))

        while self.tokens and not self.stopped:
            self.index, argument = self.tokens.popleft()
            token = classify(
                argument,
                self.config.separators,
                separated=self.separated,
                allow_separator=allow,
            )
            match token.kind:
                case TokenKind.SEPARATOR:
                    self.separated = True
                case TokenKind.LONG:
                    self._long(token)
                case TokenKind.SHORT:
                    self._short(token)
                case TokenKind.POSITIONAL:
                    self._positional(token.text, forced=self.separated)

        return self._finalize()

    def _finalize(self):
        result = self.result
        if result._terminator is None:
            for option in self._options():
                if option.required and option not in result._values:
                    self._fail(MissingRequiredOptionError(
                        f"missing required option {option.display} for {' '.join(self.command.route)!r}",
                        hint=f"pass {option.display}{'' if option.arity is Arity.NONE else ' <{}>'.format(option.metavar or 'value')}",
                    ), index=None, token=None)
            for operand in self.command._operands:
                if operand.required and operand not in result._arguments:
                    self._fail(MissingRequiredPositionalError(
                        f"missing required positional {operand.display} for {' '.join(self.command.route)!r}",
                        hint=f"pass a value for {operand.display}",
                    ), index=None, token=None)

        logger.debug(
            "parsed %r: %d values, %d arguments, %d unrecognized, %d remaining, %d faults",
            " ".join(result.route),
            len(result._values),
            len(result._arguments),
            len(result._unrecognized),
            len(result._remaining),
            len(result._faults),
        )
        if errors := result.errors:
            raise ParseExit(errors, result=result)
        return result

    # ── faults ─────────────────────────────────────────────────────────────

    def _fail(self, fault, /, **context):
        fault = copy.replace(fault, **{"index": self.index, "command": self.command} | context)
        if self.throw:
            trigger(fault)
        logger.debug("recorded %s at index %s", type(fault).__name__, fault.index)
        self.result._faults.append(fault)

    def _warn(self, fault, /, **context):
        fault = copy.replace(fault, **{"index": self.index, "command": self.command} | context)
        logger.debug("recorded %s at index %s", type(fault).__name__, fault.index)
        self.result._faults.append(fault)

    def _unrecognized(self, text, /, lookup=Unset):
        lookup = coalesce(lookup, text)
        suggestions = suggest(lookup, self.command, self.comparison) if self.config.make_suggestions else ()
        context = {
            "token": text,
            "suggestions": suggestions,
            "hint": f"check the arguments accepted by {' '.join(self.command.route)!r}",
        }
        message = f"unrecognized argument {text!r} at {ordinal(self.index)} position"

        match self.config.unrecognized_argument_handling:
            case UnrecognizedArgumentHandling.THROW:
                self._fail(UnrecognizedArgumentError(message), **context)
            case UnrecognizedArgumentHandling.COLLECT:
                logger.debug("collected unrecognized argument %r", text)
                self.result._unrecognized.append(text)
                self._warn(UnrecognizedArgumentWarning(message), **context)
            case UnrecognizedArgumentHandling.STOP_PARSING:
                self.result._remaining.append(text)
                self.result._remaining.extend(argument for _, argument in self.tokens)
                logger.debug("stopped parsing at %r (%d arguments left)", text, len(self.result._remaining))
                self.tokens.clear()
                self.stopped = True

    # ── lookups ────────────────────────────────────────────────────────────

    def _options(self):
        try:
            return self._available[self.command]
        except KeyError:
            return self._available.setdefault(self.command, self.command.available_options(self.comparison))

    def _match(self, name, attribute, text, /):
        """
        Return the option whose `attribute` ("long"/"short") matches `name`,
        None when nothing matches, or Unset when the match is ambiguous (the
        fault has been reported).
        """
        key = self.comparison.fold(name)
        matches = [
            option for option in self._options()
            if getattr(option, attribute) is not None and self.comparison.fold(getattr(option, attribute)) == key
        ]
        if len(matches) > 1:
            self._fail(AmbiguousOptionError(
                f"option {text!r} at {ordinal(self.index)} position is ambiguous",
                hint=f"spell it exactly as one of {', '.join(option.display for option in matches)}",
            ), token=text, suggestions=tuple(option.display for option in matches))
            return Unset
        return matches[0] if matches else None

    # ── options ────────────────────────────────────────────────────────────

    def _long(self, token):
        if not token.name:
            return self._unrecognized(token.text)
        if (option := self._match(token.name, "long", token.text)) is Unset:
            return
        if option is None:
            return self._unrecognized(token.text, "--" + token.name)
        self._bind(option, token.value, token.text)

    def _short(self, token):
        body = token.name

        if self.cluster and len(body) >= 2 and (bindings := self._cluster(body)):
            logger.debug("expanded cluster %r into %s", token.text, ", ".join(option.display for option, _ in bindings))
            for option, value in bindings:
                self._bind(option, value, token.text)
                if self.stopped:
                    break
            return

        name, value = split(body, self.config.separators)
        if (option := self._match(name, "short", token.text)) is Unset:
            return
        if option is not None:
            return self._bind(option, value, token.text)

        if len(body) >= 2:
            option = self._match(body[0], "short", token.text)
            if option is Unset:
                return
            if option is not None and option.arity is not Arity.NONE:
                return self._bind(option, body[1:], token.text)

        if is_negative_number(token.text):
            return self._positional(token.text, forced=True)
        self._unrecognized(token.text, "-" + name)

    def _cluster(self, body):
        """
        Resolve a clustered short token into (option, value) bindings, or
        return None when any character fails (nothing is applied then).
        """
        bindings = []
        for position, character in enumerate(body):
            key = self.comparison.fold(character)
            matches = [
                option for option in self._options()
                if option.clusterable and self.comparison.fold(option.short) == key
            ]
            if len(matches) != 1:
                return None
            option, = matches
            if option.arity is Arity.NONE:
                bindings.append((option, None))
                continue
            if suffix := body[position + 1:]:
                if suffix[0] != " " and suffix[0] in self.config.separators:
                    suffix = suffix[1:]
                bindings.append((option, suffix))
            else:
                bindings.append((option, None))
            break
        return bindings

    def _take(self):
        """
        Pop the next argument as an option value when the space separator is
        enabled and that argument is not option-like.
        """
        if " " not in self.config.separators or not self.tokens or self.separated:
            return None
        _, argument = self.tokens[0]
        if self.config.allow_argument_separator and argument == "--":
            return None
        if looks_like_option(argument):
            return None
        self.tokens.popleft()
        return argument

    def _bind(self, option, value, text, /):
        result = self.result

        if option.arity is Arity.NONE:
            if value is not None:
                return self._fail(InvalidOptionValueError(
                    f"option {option.display} at {ordinal(self.index)} position does not take a value",
                    hint=f"pass {option.display} alone",
                ), token=text)
            result._values[option] = True
            result._raw[option] = text
        else:
            if value is None and (value := self._take()) is None:
                return self._fail(OptionValueRequiredError(
                    f"option {option.display} at {ordinal(self.index)} position requires a value",
                    hint=f"pass {option.display} <{option.metavar or 'value'}>",
                ), token=text)
            if option.arity is Arity.SINGLE and option in result._values:
                return self._fail(DuplicatedOptionError(
                    f"option {option.display} at {ordinal(self.index)} position was already specified",
                    hint=f"pass {option.display} only once",
                ), token=text)
            if value == "":
                self._warn(EmptyOptionValueWarning(
                    f"option {option.display} at {ordinal(self.index)} position received an empty value",
                    hint="remove the separator or provide a value",
                ), token=text)
            try:
                converted = convert(option, value, self.config.value_parsers)
            except InvalidOptionValueError as exception:
                return self._fail(exception, token=text)

            if option.arity is Arity.MULTIPLE:
                result._values.setdefault(option, []).append(converted)
                result._raw.setdefault(option, []).append(value)
            else:
                result._values[option] = converted
                result._raw[option] = value

        if option.terminator:
            result._terminator = option
            result._remaining.extend(argument for _, argument in self.tokens)
            logger.debug("terminator %s stopped parsing", option.display)
            self.tokens.clear()
            self.stopped = True

    # ── positionals ────────────────────────────────────────────────────────

    def _positional(self, text, /, *, forced=False):
        if not forced and (child := self.command.child(text, self.comparison)) is not None:
            logger.debug("descending from %r into %r", self.command.name, child.name)
            self.command = child
            self.operands = collections.deque(child._operands)
            self.result._command = child
            return

        if not self.operands:
            return self._unrecognized(text)

        operand = self.operands[0]
        if operand.arity is Arity.SINGLE:
            self.operands.popleft()
        try:
            converted = convert(operand, text, self.config.value_parsers)
        except InvalidOptionValueError as exception:
            return self._fail(exception, token=text)

        if operand.arity is Arity.MULTIPLE:
            self.result._arguments.setdefault(operand, []).append(converted)
        else:
            self.result._arguments[operand] = converted
        self.result._positionals.append(text)


def parse(root, arguments=Unset, /, config=Unset, *, cwd=Unset):
    """
    Build a Parser for `root` and parse `arguments` once.
    """
    return Parser(root, config).parse(arguments, cwd=cwd)


__all__ = (
    "Parser",
    "parse",
)
