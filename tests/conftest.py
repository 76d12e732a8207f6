"""Pytest configuration and shared fixtures."""

import io
from typing import Any

import pytest

from uci_runtime.options import DisplayOptions, OptionsStore
from uci_runtime.protocol import CommandHandler, GoRequest
from uci_runtime.responder import UciResponder


class RecordingEngine:
    """Engine stub that records every call it receives."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, Any]] = []
        self.responders: list[UciResponder] = []

    def ensure_ready(self) -> None:
        self.calls.append(("ensure_ready", None))

    def new_game(self) -> None:
        self.calls.append(("new_game", None))

    def set_position(self, fen: str, moves: list[str]) -> None:
        self.calls.append(("set_position", (fen, moves)))

    def go(self, request: GoRequest) -> None:
        self.calls.append(("go", request))

    def stop(self) -> None:
        self.calls.append(("stop", None))

    def ponder_hit(self) -> None:
        self.calls.append(("ponder_hit", None))

    def register_responder(self, responder: UciResponder) -> None:
        self.responders.append(responder)

    def unregister_responder(self, responder: UciResponder) -> None:
        self.responders.remove(responder)

    def names(self) -> list[str]:
        return [name for name, _ in self.calls]


@pytest.fixture
def store() -> OptionsStore:
    return OptionsStore()


@pytest.fixture
def display(store: OptionsStore) -> DisplayOptions:
    return DisplayOptions.declare(store)


@pytest.fixture
def sink() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def responder(sink: io.StringIO, display: DisplayOptions) -> UciResponder:
    return UciResponder(sink, display)


@pytest.fixture
def engine() -> RecordingEngine:
    return RecordingEngine()


@pytest.fixture
def handler(
    responder: UciResponder, store: OptionsStore, engine: RecordingEngine
) -> CommandHandler:
    return CommandHandler(responder, store, engine)
