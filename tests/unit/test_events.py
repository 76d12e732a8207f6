"""Unit tests for engine event types."""

import chess
import pytest
from pydantic import ValidationError

from uci_runtime.protocol.events import BestMoveInfo, EngineMove, ThinkingInfo


class TestEngineMove:
    """Test move rendering."""

    def test_plain_move(self):
        move = EngineMove(uci="g1f3")

        assert move.to_uci() == "g1f3"
        assert move.to_uci(chess960=True) == "g1f3"

    def test_promotion(self):
        assert EngineMove(uci="a7a8q").to_uci() == "a7a8q"

    @pytest.mark.parametrize(
        "stored, standard",
        [
            ("e1h1", "e1g1"),
            ("e1a1", "e1c1"),
            ("e8h8", "e8g8"),
            ("e8a8", "e8c8"),
            ("b1a1", "b1c1"),
            ("f1g1", "f1g1"),
        ],
    )
    def test_castling(self, stored, standard):
        """Castling renders as king-to-destination unless chess960."""
        move = EngineMove(uci=stored, castling=True)

        assert move.to_uci() == standard
        assert move.to_uci(chess960=True) == stored

    def test_from_board_castling(self):
        """Castling moves from python-chess are stored king-takes-rook."""
        board = chess.Board("r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 0 1")
        move = EngineMove.from_board(board, chess.Move.from_uci("e1g1"))

        assert move.castling is True
        assert move.uci == "e1h1"
        assert move.to_uci() == "e1g1"

    def test_from_board_regular(self):
        board = chess.Board()
        move = EngineMove.from_board(board, chess.Move.from_uci("e2e4"))

        assert move.castling is False
        assert move.uci == "e2e4"

    def test_rejects_malformed(self):
        with pytest.raises(ValidationError):
            EngineMove(uci="e2")


class TestInfoDefaults:
    """Test unset markers."""

    def test_thinking_info_defaults(self):
        info = ThinkingInfo()

        assert info.depth == -1
        assert info.nodes == -1
        assert info.score is None
        assert info.mate is None
        assert info.wdl is None
        assert info.is_black is None
        assert info.pv == []
        assert info.comment == ""

    def test_best_move_defaults(self):
        info = BestMoveInfo(bestmove=EngineMove(uci="e2e4"))

        assert info.ponder is None
        assert info.player == -1
        assert info.game_id == -1
        assert info.is_black is None
