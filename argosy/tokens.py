"""
Argosy tokenizer.

Classifies one raw argument at a time; the parser drives it argument by
argument because whether a token is an option, a value or a subcommand name
depends on what came before.

Kinds
- LONG: "--name" or "--name<sep>value" (split at the first non-space
  separator character). A bare "--" is a LONG token with an empty name when
  the argument separator is not allowed, so it is never silently bound.
- SHORT: "-x", "-xyz", "-x<sep>value"; the body is kept whole because the
  clustering resolver decides how to read it.
- SEPARATOR: a bare "--" when the argument separator is allowed.
- POSITIONAL: everything else, including "-" alone and every token after an
  active separator.
"""
import collections
import enum
import re

_NUMBER = re.compile(r"-(\d[\d_]*(\.\d*)?|\.\d+)([eE][-+]?\d+)?")


class TokenKind(enum.Enum):
    LONG = "long"
    SHORT = "short"
    POSITIONAL = "positional"
    SEPARATOR = "separator"


class Token(collections.namedtuple("Token", ("kind", "text", "name", "value"))):
    """
    One classified argument.

    Fields
    - kind: TokenKind.
    - text: the argument exactly as received.
    - name: option name without dashes (LONG/SHORT), else None.
    - value: attached value for LONG tokens ("" for "--name="), else None.
    """
    __slots__ = ()

    @property
    def attached(self):
        return self.value is not None


def split(body, separators, /):
    """
    Split "name<sep>value" at the first separator character other than space.

    Returns (name, value); value is None when no separator occurs.
    """
    for index, character in enumerate(body):
        if character != " " and character in separators:
            return body[:index], body[index + 1:]
    return body, None


def is_negative_number(argument, /):
    return _NUMBER.fullmatch(argument) is not None


def looks_like_option(argument, /):
    """
    True for tokens that start with a dash and are not "-" alone or a
    negative number.
    """
    return argument.startswith("-") and argument != "-" and not is_negative_number(argument)


def classify(argument, separators, /, *, separated=False, allow_separator=False):
    """
    Classify one raw argument.

    Parameters
    - argument: the raw string (never stripped).
    - separators: the configured option-name value separators.
    - separated: an active "--" was already seen; the token is positional.
    - allow_separator: a bare "--" marks the end of options.
    """
    if separated:
        return Token(TokenKind.POSITIONAL, argument, None, None)
    if argument == "--":
        if allow_separator:
            return Token(TokenKind.SEPARATOR, argument, None, None)
        return Token(TokenKind.LONG, argument, "", None)
    if argument.startswith("--"):
        name, value = split(argument[2:], separators)
        return Token(TokenKind.LONG, argument, name, value)
    if argument.startswith("-") and len(argument) > 1:
        return Token(TokenKind.SHORT, argument, argument[1:], None)
    return Token(TokenKind.POSITIONAL, argument, None, None)


__all__ = (
    "TokenKind",
    "Token",
    "classify",
    "split",
    "looks_like_option",
    "is_negative_number",
)
