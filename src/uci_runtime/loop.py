"""Line loop for the UCI protocol.

Reads commands from a text stream one line at a time, processes each one
to completion before reading the next, and reports per-line errors back
to the controller as "error ..." lines.

The loop registers its responder with the engine for as long as it is
entered as a context manager:

    with UciLoop(responder, options, engine) as loop:
        loop.run(sys.stdin)
"""

from __future__ import annotations

import logging
import sys
from types import TracebackType
from typing import TextIO

from .engine import EngineController
from .options import OptionsStore
from .protocol import CommandHandler, LineOutcome, LineResult
from .responder import UciResponder

logger = logging.getLogger(__name__)


class UciLoop:
    """Drives a CommandHandler from an input stream."""

    def __init__(
        self,
        responder: UciResponder,
        options: OptionsStore,
        engine: EngineController,
    ) -> None:
        self._responder = responder
        self._engine = engine
        self._handler = CommandHandler(responder, options, engine)
        self._registered = False

    def __enter__(self) -> UciLoop:
        self._engine.register_responder(self._responder)
        self._registered = True
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        if self._registered:
            self._engine.unregister_responder(self._responder)
            self._registered = False

    def process_line(self, line: str) -> LineResult:
        """Process one line and report it if it failed."""
        line = line.rstrip("\r\n")
        logger.info(f">> {line}")
        result = self._handler.process_line(line)
        if result.outcome is LineOutcome.ERROR:
            self._responder.send_raw_response(f"error {result.error}")
        return result

    def run(self, stream: TextIO | None = None) -> None:
        """Process lines until "quit" or end of input."""
        stream = stream if stream is not None else sys.stdin
        for line in stream:
            if not self.process_line(line).should_continue:
                logger.info("Quit received")
                return
        logger.info("Input closed")
