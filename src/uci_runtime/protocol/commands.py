"""Command definitions for the protocol layer.

Commands are lines sent by the controlling process (GUI or test harness).
Each known command has a fixed set of keywords that may introduce a value
on the same line; everything else on the line belongs to the value of the
most recent keyword.
"""

from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import Any

import chess
from pydantic import BaseModel, Field


class CommandType(str, Enum):
    """All supported command types."""

    # Handshake
    UCI = "uci"
    ISREADY = "isready"

    # Configuration
    SETOPTION = "setoption"

    # Game state
    UCINEWGAME = "ucinewgame"
    POSITION = "position"

    # Search control
    GO = "go"
    STOP = "stop"
    PONDERHIT = "ponderhit"

    # Misc
    QUIT = "quit"
    XYZZY = "xyzzy"


# Integer keywords of "go", in the order they are copied into a GoRequest.
GO_NUMERIC_KEYWORDS = (
    "wtime",
    "btime",
    "winc",
    "binc",
    "movestogo",
    "depth",
    "mate",
    "nodes",
    "movetime",
)

_COMMAND_TABLE: tuple[tuple[CommandType, tuple[str, ...]], ...] = (
    (CommandType.UCI, ()),
    (CommandType.ISREADY, ()),
    (CommandType.SETOPTION, ("name", "value", "context")),
    (CommandType.UCINEWGAME, ()),
    (CommandType.POSITION, ("fen", "startpos", "moves")),
    (CommandType.GO, ("infinite", "ponder", *GO_NUMERIC_KEYWORDS, "searchmoves")),
    (CommandType.STOP, ()),
    (CommandType.PONDERHIT, ()),
    (CommandType.QUIT, ()),
    (CommandType.XYZZY, ()),
)

# Command name -> keywords that may start a value. Read-only.
COMMAND_KEYWORDS: MappingProxyType[str, frozenset[str]] = MappingProxyType(
    {cmd.value: frozenset(keywords) for cmd, keywords in _COMMAND_TABLE}
)


class ParsedCommand(BaseModel):
    """One input line split into a command name and keyword values.

    A keyword present without an argument maps to the empty string.

    Example:
        "position startpos moves e2e4 e7e5"
        -> ParsedCommand(cmd="position",
                         params={"startpos": "", "moves": "e2e4 e7e5"})
    """

    cmd: str
    params: dict[str, str] = Field(default_factory=dict)

    def has_param(self, key: str) -> bool:
        """Check whether the keyword appeared on the line."""
        return key in self.params

    def get_param(self, key: str, default: str = "") -> str:
        """Get a keyword value, empty string when absent."""
        return self.params.get(key, default)


class GoRequest(BaseModel):
    """Search limits for a "go" command.

    Integer fields left as None were not given on the line.
    """

    infinite: bool = False
    ponder: bool = False
    searchmoves: list[str] = Field(default_factory=list)

    wtime: int | None = None
    btime: int | None = None
    winc: int | None = None
    binc: int | None = None
    movestogo: int | None = None
    depth: int | None = None
    mate: int | None = None
    nodes: int | None = None
    movetime: int | None = None

    def limits(self) -> dict[str, Any]:
        """Return only the integer limits that were set."""
        return {
            key: getattr(self, key)
            for key in GO_NUMERIC_KEYWORDS
            if getattr(self, key) is not None
        }


class PositionRequest(BaseModel):
    """Base position plus the moves to play from it.

    Exactly one of `fen` and `startpos` describes the base position.
    """

    fen: str | None = None
    startpos: bool = False
    moves: list[str] = Field(default_factory=list)

    @property
    def base_fen(self) -> str:
        """FEN of the base position; empty or missing FEN means the start position."""
        if self.startpos or not self.fen:
            return chess.STARTING_FEN
        return self.fen


class SetOptionRequest(BaseModel):
    """Arguments of a "setoption" command. Empty context means none given."""

    name: str
    value: str
    context: str = ""
