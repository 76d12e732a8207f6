"""In-memory UCI option store.

Options are declared once at startup with a type and a default. The
controller changes them with "setoption", optionally scoped to a context
(for example one side of a self-play match); reads fall back from the
context to the global value and then to the declared default.

Nothing is persisted.
"""

from __future__ import annotations

import logging
import threading
from typing import Literal

from pydantic import BaseModel, Field

from .protocol.errors import OptionError
from .protocol.handler import INTEGER_PATTERN

logger = logging.getLogger(__name__)

OptionType = Literal["check", "spin", "string", "combo"]
OptionValue = bool | int | str

# Display options read by the responder.
UCI_CHESS960 = "UCI_Chess960"
UCI_SHOW_WDL = "UCI_ShowWDL"
UCI_SHOW_MOVES_LEFT = "UCI_ShowMovesLeft"


class UciOption(BaseModel):
    """A declared option and its UCI declaration details."""

    name: str
    type: OptionType
    default: OptionValue
    min: int | None = None
    max: int | None = None
    choices: list[str] = Field(default_factory=list)

    def to_uci(self) -> str:
        """Format the option as an "option name ..." line."""
        line = f"option name {self.name} type {self.type}"
        if self.type == "check":
            line += f" default {'true' if self.default else 'false'}"
        elif self.type == "string":
            line += f" default {self.default if self.default != '' else '<empty>'}"
        else:
            line += f" default {self.default}"
        if self.type == "spin":
            line += f" min {self.min} max {self.max}"
        for choice in self.choices:
            line += f" var {choice}"
        return line

    def convert(self, raw: str) -> OptionValue:
        """Convert a setoption value to this option's type.

        Raises:
            OptionError: If the value does not fit the option
        """
        if self.type == "check":
            lowered = raw.lower()
            if lowered not in ("true", "false"):
                raise OptionError(f"Option '{self.name}' expects true or false, got '{raw}'")
            return lowered == "true"

        if self.type == "spin":
            if not INTEGER_PATTERN.fullmatch(raw):
                raise OptionError(f"Option '{self.name}' expects an integer, got '{raw}'")
            number = int(raw)
            if (self.min is not None and number < self.min) or (
                self.max is not None and number > self.max
            ):
                raise OptionError(
                    f"Option '{self.name}' must be between {self.min} and {self.max}, got {number}"
                )
            return number

        if self.type == "combo":
            for choice in self.choices:
                if choice.lower() == raw.lower():
                    return choice
            raise OptionError(f"Option '{self.name}' does not accept '{raw}'")

        return "" if raw == "<empty>" else raw


class OptionsStore:
    """Declared options plus the values set for them.

    Safe to read from engine threads while the command thread writes.

    Usage:
        store = OptionsStore()
        store.add_check("UCI_ShowWDL", True)
        store.set_uci_option("UCI_ShowWDL", "false")
        store.get("UCI_ShowWDL")  # False
    """

    def __init__(self) -> None:
        self._options: dict[str, UciOption] = {}
        # context -> option key -> value; "" is the global context
        self._values: dict[str, dict[str, OptionValue]] = {}
        self._lock = threading.Lock()

    @staticmethod
    def _key(name: str) -> str:
        # Option names are case-insensitive on the wire.
        return name.lower()

    def declare(self, option: UciOption) -> UciOption:
        """Declare an option. Names must be unique ignoring case."""
        key = self._key(option.name)
        if key in self._options:
            raise ValueError(f"Option already declared: {option.name}")
        self._options[key] = option
        return option

    def add_check(self, name: str, default: bool) -> UciOption:
        return self.declare(UciOption(name=name, type="check", default=default))

    def add_spin(self, name: str, default: int, min: int, max: int) -> UciOption:
        return self.declare(UciOption(name=name, type="spin", default=default, min=min, max=max))

    def add_string(self, name: str, default: str = "") -> UciOption:
        return self.declare(UciOption(name=name, type="string", default=default))

    def add_combo(self, name: str, default: str, choices: list[str]) -> UciOption:
        return self.declare(UciOption(name=name, type="combo", default=default, choices=choices))

    def list_options(self) -> list[UciOption]:
        """Declared options in declaration order."""
        return list(self._options.values())

    def list_options_uci(self) -> list[str]:
        """Declared options as "option name ..." lines."""
        return [option.to_uci() for option in self._options.values()]

    def set_uci_option(self, name: str, value: str, context: str = "") -> None:
        """Set an option from its wire representation.

        Raises:
            OptionError: If the option is unknown or the value does not fit
        """
        option = self._options.get(self._key(name))
        if option is None:
            raise OptionError(f"Unknown option: {name}")

        converted = option.convert(value)
        with self._lock:
            self._values.setdefault(context, {})[self._key(name)] = converted
        logger.info(
            f"Option {option.name} set to {converted!r}"
            + (f" in context '{context}'" if context else "")
        )

    def get(self, name: str, context: str = "") -> OptionValue:
        """Current value of an option, resolved through context, global, default."""
        key = self._key(name)
        option = self._options.get(key)
        if option is None:
            raise KeyError(name)
        with self._lock:
            if context and key in self._values.get(context, {}):
                return self._values[context][key]
            return self._values.get("", {}).get(key, option.default)


class DisplayOptions:
    """Live view of the options that change how responses are rendered.

    Values are looked up on every access so a "setoption" takes effect on
    the next response.
    """

    def __init__(self, store: OptionsStore) -> None:
        self._store = store

    @classmethod
    def declare(cls, store: OptionsStore) -> DisplayOptions:
        """Declare the display options in store and return a view over them."""
        store.add_check(UCI_CHESS960, False)
        store.add_check(UCI_SHOW_WDL, True)
        store.add_check(UCI_SHOW_MOVES_LEFT, False)
        return cls(store)

    @property
    def chess960(self) -> bool:
        return bool(self._store.get(UCI_CHESS960))

    @property
    def show_wdl(self) -> bool:
        return bool(self._store.get(UCI_SHOW_WDL))

    @property
    def show_movesleft(self) -> bool:
        return bool(self._store.get(UCI_SHOW_MOVES_LEFT))
