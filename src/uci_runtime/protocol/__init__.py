"""Line protocol layer.

Turns controller input lines into typed requests and engine calls:
- Parser: line -> ParsedCommand, using the per-command keyword registry
- Handler: ParsedCommand -> validated request -> engine / option store call
- Events: records the engine reports back, rendered by the responder
"""

from .commands import COMMAND_KEYWORDS, CommandType, GoRequest, ParsedCommand, PositionRequest
from .errors import UciError
from .events import BestMoveInfo, EngineMove, ThinkingInfo, Wdl
from .handler import CommandHandler, LineOutcome, LineResult
from .parser import find_bounded_keyword, parse_command, parse_setoption

__all__ = [
    "COMMAND_KEYWORDS",
    "CommandType",
    "GoRequest",
    "ParsedCommand",
    "PositionRequest",
    "UciError",
    "BestMoveInfo",
    "EngineMove",
    "ThinkingInfo",
    "Wdl",
    "CommandHandler",
    "LineOutcome",
    "LineResult",
    "find_bounded_keyword",
    "parse_command",
    "parse_setoption",
]
