"""
Argosy response-file expansion.

An argument of the form "@path" names a text file whose contents replace the
argument in place. Expansion happens once, before tokenizing, and is exactly
one level deep: arguments read from a file are never expanded again.

Handling modes (ResponseFileHandling)
- DISABLED: arguments pass through untouched.
- SPACE_SEPARATED (alias ENABLED): contents are split on whitespace; single
  and double quotes group words, backslashes are literal and "#" starts a
  comment running to the end of the line.
- LINE_SEPARATED: every non-blank line that does not start with "#" is one
  argument (surrounding whitespace trimmed).

When the argument separator is active, everything after the first bare
separator is left alone.
"""
import copy
import logging
import os
import pathlib
import shlex

from .config import ResponseFileHandling
from .faults import ResponseFileNotFoundError
from .utils import Unset, coalesce

logger = logging.getLogger(__name__)


def _split_words(contents, /):
    lexer = shlex.shlex(contents, posix=True)
    lexer.whitespace_split = True
    lexer.escape = ""
    lexer.commenters = "#"
    return list(lexer)


def _split_lines(contents, /):
    return [
        line.strip() for line in contents.splitlines()
        if line.strip() and not line.lstrip().startswith("#")
    ]


def read(path, handling, /):
    """
    Read one response file and split it according to `handling`.

    Raises
    - ResponseFileNotFoundError: the file cannot be read or tokenized.
    """
    try:
        contents = pathlib.Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exception:
        raise ResponseFileNotFoundError(
            f"response file {str(path)!r} could not be read",
            hint=exception.strerror.lower() if getattr(exception, "strerror", None) else "check the path and its encoding",
        ) from exception

    if handling is ResponseFileHandling.LINE_SEPARATED:
        return _split_lines(contents)
    try:
        return _split_words(contents)
    except ValueError as exception:
        raise ResponseFileNotFoundError(
            f"response file {str(path)!r} could not be tokenized",
            hint=str(exception).lower(),
        ) from exception


def expand(arguments, handling, /, *, cwd=Unset, separator=Unset):
    """
    Replace every "@file" argument with the arguments read from that file.

    Parameters
    - arguments: iterable of raw argument strings.
    - handling: ResponseFileHandling member (or its string value).
    - cwd: base directory for relative paths (default: the process cwd).
    - separator: the active argument separator ("--"), or Unset when none.

    Returns
    - a new list of arguments.

    Raises
    - ResponseFileNotFoundError: a named file cannot be read. The token and
      its 1-based position are attached to the fault.
    """
    handling = ResponseFileHandling(handling)
    arguments = list(arguments)
    if handling is ResponseFileHandling.DISABLED:
        return arguments

    base = pathlib.Path(coalesce(cwd, os.getcwd()))
    expanded = []
    separated = False

    for index, argument in enumerate(arguments, start=1):
        if separated or not argument.startswith("@") or len(argument) == 1:
            separated |= separator is not Unset and argument == separator
            expanded.append(argument)
            continue
        try:
            contents = read(base / argument[1:], handling)
        except ResponseFileNotFoundError as exception:
            raise copy.replace(exception, token=argument, index=index) from exception.__cause__
        logger.debug("expanded response file %r into %d arguments", argument[1:], len(contents))
        for content in contents:
            separated |= separator is not Unset and content == separator
        expanded.extend(contents)

    return expanded


__all__ = (
    "expand",
    "read",
)
