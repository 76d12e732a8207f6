"""Command Handler - validates parsed commands and drives the engine.

Each line goes through parse -> validate -> engine call. Validation for a
command finishes before the engine is touched, so a bad line never
leaves a half-applied request behind.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from .commands import (
    GO_NUMERIC_KEYWORDS,
    CommandType,
    GoRequest,
    ParsedCommand,
    PositionRequest,
    SetOptionRequest,
)
from .errors import (
    InvalidValueError,
    MutuallyExclusiveError,
    OutOfRangeError,
    UciError,
    UnexpectedTokenError,
    UnknownCommandError,
)
from .parser import parse_command

if TYPE_CHECKING:
    from ..engine import EngineController
    from ..options import OptionsStore
    from ..responder import UciResponder

logger = logging.getLogger(__name__)

INT_MIN = -(2**31)
INT_MAX = 2**31 - 1

INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")


class LineOutcome(str, Enum):
    """What happened to one input line."""

    NOOP = "noop"  # blank line
    OK = "ok"
    ERROR = "error"  # reported, loop continues
    QUIT = "quit"  # loop should stop


@dataclass
class LineResult:
    """Outcome of processing one line."""

    outcome: LineOutcome
    command: str | None = None
    error: str | None = None
    code: str | None = None

    @property
    def should_continue(self) -> bool:
        return self.outcome is not LineOutcome.QUIT


def parse_int(key: str, text: str) -> int:
    """Parse a signed 32-bit integer argument.

    Raises:
        InvalidValueError: If text is empty or not an integer
        OutOfRangeError: If the integer does not fit 32 bits
    """
    if not text:
        raise InvalidValueError(f"expected value after {key}")
    if not INTEGER_PATTERN.fullmatch(text):
        raise InvalidValueError(f"invalid value {text}")
    value = int(text)
    if value < INT_MIN or value > INT_MAX:
        raise OutOfRangeError(f"out of range value {text}")
    return value


def build_go_request(command: ParsedCommand) -> GoRequest:
    """Convert the keywords of a "go" line into a GoRequest."""
    request = GoRequest()

    for flag in ("infinite", "ponder"):
        if command.has_param(flag):
            if command.get_param(flag):
                raise UnexpectedTokenError(f"Unexpected token {command.get_param(flag)}")
            setattr(request, flag, True)

    if command.has_param("searchmoves"):
        request.searchmoves = command.get_param("searchmoves").split()

    for key in GO_NUMERIC_KEYWORDS:
        if command.has_param(key):
            setattr(request, key, parse_int(key, command.get_param(key)))

    return request


def build_position_request(command: ParsedCommand) -> PositionRequest:
    """Convert the keywords of a "position" line into a PositionRequest."""
    has_fen = command.has_param("fen")
    if has_fen == command.has_param("startpos"):
        raise MutuallyExclusiveError("Position requires either fen or startpos")
    return PositionRequest(
        fen=command.get_param("fen") if has_fen else None,
        startpos=not has_fen,
        moves=command.get_param("moves").split(),
    )


class CommandHandler:
    """Dispatches parsed commands to the engine and the option store.

    Usage:
        handler = CommandHandler(responder, options, engine)
        result = handler.process_line("go depth 5")
        if not result.should_continue:
            ...

    Responses that are not engine events (id lines, option list, readyok)
    are written through the responder directly.
    """

    def __init__(
        self,
        responder: UciResponder,
        options: OptionsStore,
        engine: EngineController,
    ) -> None:
        """Initialize handler with its collaborators.

        Args:
            responder: Output for direct responses
            options: Store receiving "setoption" and listed by "uci"
            engine: Engine receiving search and position commands
        """
        self._responder = responder
        self._options = options
        self._engine = engine

    def process_line(self, line: str) -> LineResult:
        """Parse and dispatch one input line.

        Protocol errors are returned as ERROR results rather than raised.
        """
        try:
            command = parse_command(line)
            if command is None:
                return LineResult(LineOutcome.NOOP)
            if not self.handle(command):
                return LineResult(LineOutcome.QUIT, command=command.cmd)
            return LineResult(LineOutcome.OK, command=command.cmd)

        except UciError as e:
            logger.warning(f"Error processing line '{line.strip()}': {e}")
            return LineResult(LineOutcome.ERROR, error=str(e), code=e.code)

        except Exception as e:
            logger.exception(f"Error handling line '{line.strip()}': {e}")
            return LineResult(LineOutcome.ERROR, error=str(e), code="HANDLER_ERROR")

    def handle(self, command: ParsedCommand) -> bool:
        """Dispatch a parsed command.

        Returns:
            False if the command asks the loop to quit, True otherwise
        """
        logger.debug(f"Handling command: {command.cmd}")

        match command.cmd:
            case CommandType.UCI.value:
                self._responder.send_id()
                self._responder.send_raw_responses(self._options.list_options_uci())
                self._responder.send_raw_response("uciok")

            case CommandType.ISREADY.value:
                self._engine.ensure_ready()
                self._responder.send_raw_response("readyok")

            case CommandType.SETOPTION.value:
                request = SetOptionRequest(
                    name=command.get_param("name"),
                    value=command.get_param("value"),
                    context=command.get_param("context"),
                )
                self._options.set_uci_option(request.name, request.value, request.context)

            case CommandType.UCINEWGAME.value:
                self._engine.new_game()

            case CommandType.POSITION.value:
                position = build_position_request(command)
                self._engine.set_position(position.base_fen, position.moves)

            case CommandType.GO.value:
                self._engine.go(build_go_request(command))

            case CommandType.STOP.value:
                self._engine.stop()

            case CommandType.PONDERHIT.value:
                self._engine.ponder_hit()

            case CommandType.XYZZY.value:
                self._responder.send_raw_response("Nothing happens.")

            case CommandType.QUIT.value:
                return False

            case _:
                raise UnknownCommandError(f"Unknown command: {command.cmd}")

        return True
