"""Engine collaborator interface and a demo engine.

The protocol layer drives the engine only through EngineController. The
engine reports results by calling the responders registered with it,
from whatever thread it likes.

RandomEngineController is a small stand-in used by the CLI and the tests:
it tracks the position with python-chess and answers "go" with a random
legal move from a worker thread.
"""

from __future__ import annotations

import logging
import random
import threading
import time
from typing import TYPE_CHECKING, Protocol, runtime_checkable

import chess

from .protocol.commands import GoRequest
from .protocol.events import BestMoveInfo, EngineMove, ThinkingInfo, Wdl

if TYPE_CHECKING:
    from .responder import UciResponder

logger = logging.getLogger(__name__)


@runtime_checkable
class EngineController(Protocol):
    """Operations the protocol layer invokes on the engine."""

    def ensure_ready(self) -> None: ...

    def new_game(self) -> None: ...

    def set_position(self, fen: str, moves: list[str]) -> None: ...

    def go(self, request: GoRequest) -> None: ...

    def stop(self) -> None: ...

    def ponder_hit(self) -> None: ...

    def register_responder(self, responder: UciResponder) -> None: ...

    def unregister_responder(self, responder: UciResponder) -> None: ...


class RandomEngineController:
    """Plays a random legal move.

    Searches run on a daemon thread. With "infinite" or "ponder" the
    thread holds its answer until "stop" (or "ponderhit" for ponder
    searches); with "movetime" it waits that long unless stopped.
    """

    def __init__(self, seed: int | None = None) -> None:
        self._rng = random.Random(seed)
        self._board = chess.Board()
        self._responders: list[UciResponder] = []
        self._lock = threading.Lock()
        self._search_thread: threading.Thread | None = None
        self._stop_event = threading.Event()
        # Set by both "stop" and "ponderhit".
        self._wake_event = threading.Event()

    @property
    def board(self) -> chess.Board:
        """Copy of the current position."""
        return self._board.copy()

    # =========================================================================
    # Responder registration
    # =========================================================================

    def register_responder(self, responder: UciResponder) -> None:
        with self._lock:
            if responder not in self._responders:
                self._responders.append(responder)

    def unregister_responder(self, responder: UciResponder) -> None:
        with self._lock:
            if responder in self._responders:
                self._responders.remove(responder)

    def _notify(self) -> list[UciResponder]:
        with self._lock:
            return list(self._responders)

    # =========================================================================
    # EngineController
    # =========================================================================

    def ensure_ready(self) -> None:
        """Nothing to load; returns once a finished search thread is reaped."""
        thread = self._search_thread
        if thread is not None and not thread.is_alive():
            thread.join()
            self._search_thread = None

    def new_game(self) -> None:
        self._finish_search()
        self._board = chess.Board()

    def set_position(self, fen: str, moves: list[str]) -> None:
        self._finish_search()
        board = chess.Board(fen)
        for move in moves:
            board.push_uci(move)
        self._board = board
        logger.debug(f"Position set: {board.fen()}")

    def go(self, request: GoRequest) -> None:
        self._finish_search()
        self._stop_event.clear()
        self._wake_event.clear()
        logger.debug(f"Search started: {request.limits()}")
        self._search_thread = threading.Thread(
            target=self._search,
            args=(self._board.copy(), request),
            name="random-search",
            daemon=True,
        )
        self._search_thread.start()

    def stop(self) -> None:
        self._stop_event.set()
        self._wake_event.set()

    def ponder_hit(self) -> None:
        self._wake_event.set()

    def close(self) -> None:
        """Stop any running search and wait for its result to be sent."""
        self._finish_search()

    # =========================================================================
    # Search
    # =========================================================================

    def _finish_search(self) -> None:
        thread = self._search_thread
        if thread is None:
            return
        self.stop()
        thread.join()
        self._search_thread = None

    def _wait(self, request: GoRequest) -> None:
        if request.infinite:
            self._stop_event.wait()
        elif request.ponder:
            self._wake_event.wait()
        elif request.movetime is not None and request.movetime > 0:
            self._stop_event.wait(request.movetime / 1000)

    def _search(self, board: chess.Board, request: GoRequest) -> None:
        started = time.monotonic()
        moves = list(board.legal_moves)
        if request.searchmoves:
            allowed = set(request.searchmoves)
            moves = [move for move in moves if move.uci() in allowed]

        is_black = board.turn == chess.BLACK
        if not moves:
            # Mated, stalemated or no searchmove was legal.
            best = EngineMove(uci="0000")
            info = ThinkingInfo(depth=0, nodes=0, score=0, comment="no legal moves")
        else:
            move = self._rng.choice(moves)
            best = EngineMove.from_board(board, move)
            info = ThinkingInfo(
                depth=1,
                seldepth=1,
                nodes=len(moves),
                score=0,
                wdl=Wdl(w=0, d=1000, l=0),
                pv=[best],
            )

        self._wait(request)

        elapsed = int((time.monotonic() - started) * 1000)
        info = info.model_copy(update={"time": elapsed})
        result = BestMoveInfo(bestmove=best)
        logger.debug(f"Search finished: {best.uci} ({'black' if is_black else 'white'} to move)")

        for responder in self._notify():
            responder.output_thinking_info([info])
            responder.output_best_move(result)
