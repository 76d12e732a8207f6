"""Protocol errors.

Every error raised while parsing or dispatching a line derives from
UciError. Errors are scoped to the line that caused them: the handler
turns them into an error result and the loop keeps reading.
"""

from __future__ import annotations


class UciError(Exception):
    """Base class for per-line protocol errors."""

    code = "UCI_ERROR"


class UnknownCommandError(UciError):
    """Command name is not in the command registry."""

    code = "UNKNOWN_COMMAND"


class GrammarError(UciError):
    """Line does not match the command grammar."""

    code = "GRAMMAR_ERROR"


class UnexpectedTokenError(GrammarError):
    """Token found where no keyword value can absorb it."""

    code = "UNEXPECTED_TOKEN"


class MutuallyExclusiveError(UciError):
    """Exactly one of a set of arguments must be given."""

    code = "MUTUALLY_EXCLUSIVE"


class InvalidValueError(UciError):
    """Numeric argument is not a number."""

    code = "INVALID_VALUE"


class OutOfRangeError(UciError):
    """Numeric argument does not fit a signed 32-bit integer."""

    code = "OUT_OF_RANGE"


class OptionError(UciError):
    """Unknown option, or a value the option cannot take."""

    code = "OPTION_ERROR"
