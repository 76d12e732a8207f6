"""Line grammar for protocol commands.

Most commands use a simple keyword grammar: the line is split on
whitespace and each recognized keyword collects the tokens that follow it,
so multi-word values such as move lists land under one key.

"setoption" is irregular. Its name and value are free text that may
themselves contain the words "name", "value" or "context", so it is split
on whitespace-bounded keyword occurrences instead:

    setoption name <NAME> value <VALUE> [context <CONTEXT>]

The first bounded "value" ends the name and the last bounded "context"
after it starts the context.
"""

from __future__ import annotations

import logging

from .commands import COMMAND_KEYWORDS, CommandType, ParsedCommand, SetOptionRequest
from .errors import GrammarError, UnexpectedTokenError, UnknownCommandError

logger = logging.getLogger(__name__)

NAME_KEYWORD = "name"
VALUE_KEYWORD = "value"
CONTEXT_KEYWORD = "context"


def _is_bounded(text: str, pos: int, length: int) -> bool:
    """Check that text[pos:pos + length] is a whole whitespace-delimited token."""
    before = pos == 0 or text[pos - 1].isspace()
    end = pos + length
    after = end == len(text) or text[end].isspace()
    return before and after


def find_bounded_keyword(
    text: str,
    keyword: str,
    start: int = 0,
    find_last: bool = False,
) -> int:
    """Find a whitespace-bounded occurrence of keyword in text.

    Args:
        text: Text to search
        keyword: Literal keyword to look for
        start: Lowest index a match may start at
        find_last: Return the rightmost match instead of the leftmost

    Returns:
        Start index of the match, or -1 if there is none
    """
    if not keyword:
        return -1

    if find_last:
        end = len(text)
        while True:
            pos = text.rfind(keyword, start, end)
            if pos < 0:
                return -1
            if _is_bounded(text, pos, len(keyword)):
                return pos
            # Allow earlier matches that overlap this one.
            end = pos + len(keyword) - 1

    pos = text.find(keyword, start)
    while pos >= 0:
        if _is_bounded(text, pos, len(keyword)):
            return pos
        pos = text.find(keyword, pos + 1)
    return -1


def parse_setoption(args: str) -> SetOptionRequest:
    """Parse the arguments of a setoption command.

    Args:
        args: Everything after the "setoption" token

    Returns:
        The option name, value and (possibly empty) context

    Raises:
        GrammarError: If a part is missing or empty
    """
    args = args.strip()

    if not (
        args.startswith(NAME_KEYWORD)
        and len(args) > len(NAME_KEYWORD)
        and args[len(NAME_KEYWORD)].isspace()
    ):
        raise GrammarError("Malformed setoption (expected 'name')")
    args = args[len(NAME_KEYWORD) :].strip()

    value_pos = find_bounded_keyword(args, VALUE_KEYWORD)
    if value_pos < 0:
        raise GrammarError("Malformed setoption (missing 'value')")

    name = args[:value_pos].strip()
    if not name:
        raise GrammarError("Empty option name")

    args = args[value_pos + len(VALUE_KEYWORD) :].strip()

    context = ""
    context_pos = find_bounded_keyword(args, CONTEXT_KEYWORD, find_last=True)
    if context_pos >= 0:
        value = args[:context_pos].strip()
        context = args[context_pos + len(CONTEXT_KEYWORD) :].strip()
        if not context:
            raise GrammarError(f"Empty context for '{name}'")
    else:
        value = args

    if not value:
        raise GrammarError("Empty option value")

    return SetOptionRequest(name=name, value=value, context=context)


def parse_command(line: str) -> ParsedCommand | None:
    """Split one input line into a command and its keyword values.

    Args:
        line: Raw input line

    Returns:
        The parsed command, or None for a blank line

    Raises:
        UnknownCommandError: If the command name is not registered
        GrammarError: If the arguments do not fit the command grammar
    """
    stripped = line.strip()
    if not stripped:
        return None

    parts = stripped.split(None, 1)
    cmd = parts[0]
    rest = parts[1] if len(parts) > 1 else ""

    keywords = COMMAND_KEYWORDS.get(cmd)
    if keywords is None:
        raise UnknownCommandError(f"Unknown command: '{cmd}' from line: '{line}'")

    params: dict[str, str] = {}

    if cmd == CommandType.SETOPTION.value:
        request = parse_setoption(rest)
        params[NAME_KEYWORD] = request.name
        params[VALUE_KEYWORD] = request.value
        if request.context:
            params[CONTEXT_KEYWORD] = request.context
        return ParsedCommand(cmd=cmd, params=params)

    target: str | None = None
    for token in rest.split():
        if token in keywords:
            target = token
            params[target] = ""
        elif target is None:
            raise UnexpectedTokenError(f"Unexpected token: {token} in command {cmd}")
        elif params[target]:
            params[target] += " " + token
        else:
            params[target] = token

    logger.debug(f"Parsed {cmd}: {params}")
    return ParsedCommand(cmd=cmd, params=params)
