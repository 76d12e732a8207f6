"""Response formatting.

Turns engine events into protocol lines and writes them to the output
sink. The responder is called from the command thread and from engine
worker threads; every call writes its whole batch of lines while holding
one lock, so lines of different calls never interleave.
"""

from __future__ import annotations

import logging
import sys
import threading
from collections.abc import Iterable
from typing import TextIO

from . import __author__, __engine_name__, __version__
from .options import DisplayOptions
from .protocol.events import BestMoveInfo, ThinkingInfo

logger = logging.getLogger(__name__)

NEWLINE = "\n"


def _side(is_black: bool) -> str:
    return "black" if is_black else "white"


class UciResponder:
    """Formats and writes protocol responses.

    Usage:
        responder = UciResponder(sys.stdout, DisplayOptions.declare(store))
        responder.send_id()
        responder.output_best_move(BestMoveInfo(bestmove=EngineMove(uci="e2e4")))

    Threading:
        The lock may be passed in so several responders (or other writers)
        can share one sink. Without one, the responder owns its own lock.
    """

    def __init__(
        self,
        sink: TextIO | None = None,
        display: DisplayOptions | None = None,
        lock: threading.Lock | None = None,
    ) -> None:
        """Initialize the responder.

        Args:
            sink: Text stream for protocol output (default: sys.stdout)
            display: Live display options; None renders with all defaults off
            lock: Lock guarding the sink (default: a new lock)
        """
        self._sink = sink if sink is not None else sys.stdout
        self._display = display
        self._lock = lock or threading.Lock()

    @property
    def lock(self) -> threading.Lock:
        """The lock serializing writes to the sink."""
        return self._lock

    # =========================================================================
    # Display options
    # =========================================================================

    def _chess960(self) -> bool:
        return self._display.chess960 if self._display else False

    def _show_wdl(self) -> bool:
        return self._display.show_wdl if self._display else False

    def _show_movesleft(self) -> bool:
        return self._display.show_movesleft if self._display else False

    # =========================================================================
    # Raw output
    # =========================================================================

    def send_raw_response(self, response: str) -> None:
        """Write a single line."""
        self.send_raw_responses([response])

    def send_raw_responses(self, responses: Iterable[str]) -> None:
        """Write a batch of lines without interleaving with other callers."""
        with self._lock:
            for response in responses:
                logger.info(f"<< {response}")
                try:
                    self._sink.write(response + NEWLINE)
                    self._sink.flush()
                except (OSError, ValueError) as e:
                    logger.error(f"Failed to write response: {e}")
                    return

    # =========================================================================
    # Formatted responses
    # =========================================================================

    def send_id(self) -> None:
        """Send the engine identification lines."""
        self.send_raw_responses(
            [
                f"id name {__engine_name__} v{__version__}",
                f"id author {__author__}",
            ]
        )

    def output_best_move(self, info: BestMoveInfo) -> None:
        """Send a "bestmove" line."""
        chess960 = self._chess960()
        res = f"bestmove {info.bestmove.to_uci(chess960)}"
        if info.ponder is not None:
            res += f" ponder {info.ponder.to_uci(chess960)}"
        if info.player != -1:
            res += f" player {info.player}"
        if info.game_id != -1:
            res += f" gameid {info.game_id}"
        if info.is_black is not None:
            res += f" side {_side(info.is_black)}"
        self.send_raw_response(res)

    def output_thinking_info(self, infos: Iterable[ThinkingInfo]) -> None:
        """Send one "info" line per record, as one batch."""
        chess960 = self._chess960()
        show_wdl = self._show_wdl()
        show_movesleft = self._show_movesleft()
        self.send_raw_responses(
            [self._format_info(info, chess960, show_wdl, show_movesleft) for info in infos]
        )

    @staticmethod
    def _format_info(
        info: ThinkingInfo,
        chess960: bool,
        show_wdl: bool,
        show_movesleft: bool,
    ) -> str:
        res = "info"
        if info.player != -1:
            res += f" player {info.player}"
        if info.game_id != -1:
            res += f" gameid {info.game_id}"
        if info.is_black is not None:
            res += f" side {_side(info.is_black)}"
        if info.depth >= 0:
            res += f" depth {max(info.depth, 1)}"
        if info.seldepth >= 0:
            res += f" seldepth {info.seldepth}"
        if info.time >= 0:
            res += f" time {info.time}"
        if info.nodes >= 0:
            res += f" nodes {info.nodes}"
        if info.mate is not None:
            res += f" score mate {info.mate}"
        elif info.score is not None:
            res += f" score cp {info.score}"
        if info.wdl is not None and show_wdl:
            res += f" wdl {info.wdl.w} {info.wdl.d} {info.wdl.l}"
        if info.moves_left is not None and show_movesleft:
            res += f" movesleft {info.moves_left}"
        if info.hashfull >= 0:
            res += f" hashfull {info.hashfull}"
        if info.nps >= 0:
            res += f" nps {info.nps}"
        if info.tb_hits >= 0:
            res += f" tbhits {info.tb_hits}"
        if info.multipv >= 0:
            res += f" multipv {info.multipv}"
        if info.pv:
            res += " pv " + " ".join(move.to_uci(chess960) for move in info.pv)
        if info.comment:
            res += f" string {info.comment}"
        return res
