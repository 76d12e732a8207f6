"""Event definitions for the protocol layer.

Events are produced by the engine, usually from its own worker threads,
and handed to a responder that turns them into output lines. The protocol
layer only reads them.

Unset markers follow the engine's conventions:
- integer counters use -1
- optional values (score, mate, wdl, moves left, side) use None
- an empty comment or principal variation is omitted
"""

from __future__ import annotations

import chess
from pydantic import BaseModel, Field, field_validator


class EngineMove(BaseModel):
    """A move as the engine reports it.

    Castling moves are stored as "king takes rook" (e1h1) and rendered in
    either notation by `to_uci`.
    """

    uci: str
    castling: bool = False

    @field_validator("uci")
    @classmethod
    def _check_uci(cls, value: str) -> str:
        chess.Move.from_uci(value)
        return value

    @classmethod
    def from_board(cls, board: chess.Board, move: chess.Move) -> EngineMove:
        """Build a move from a python-chess move played on board."""
        if board.is_castling(move):
            return cls(uci=board.uci(move, chess960=True), castling=True)
        return cls(uci=move.uci())

    def to_uci(self, chess960: bool = False) -> str:
        """Render the move, using king-to-destination castling unless chess960."""
        if not self.castling or chess960:
            return self.uci
        move = chess.Move.from_uci(self.uci)
        king_file = chess.square_file(move.from_square)
        rook_file = chess.square_file(move.to_square)
        target_file = 6 if rook_file > king_file else 2
        target = chess.square(target_file, chess.square_rank(move.from_square))
        return chess.square_name(move.from_square) + chess.square_name(target)


class Wdl(BaseModel):
    """Win/draw/loss estimate in permille."""

    w: int
    d: int
    l: int  # noqa: E741


class ThinkingInfo(BaseModel):
    """Search progress for one line of analysis."""

    player: int = -1
    game_id: int = -1
    is_black: bool | None = None

    depth: int = -1
    seldepth: int = -1
    time: int = -1
    nodes: int = -1

    # Only one of score and mate is set at a time.
    score: int | None = None
    mate: int | None = None
    wdl: Wdl | None = None
    moves_left: int | None = None

    hashfull: int = -1
    nps: int = -1
    tb_hits: int = -1
    multipv: int = -1

    pv: list[EngineMove] = Field(default_factory=list)
    comment: str = ""


class BestMoveInfo(BaseModel):
    """Final result of a search."""

    bestmove: EngineMove
    ponder: EngineMove | None = None
    player: int = -1
    game_id: int = -1
    is_black: bool | None = None
