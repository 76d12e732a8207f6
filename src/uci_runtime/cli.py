"""UCI Runtime CLI.

Runs the protocol loop over stdin/stdout with the demo engine.

Usage:
    uci-runtime                                   # Read commands from stdin
    uci-runtime --log-file uci.log                # Mirror traffic to a log file
    uci-runtime --log-level DEBUG                 # More detail on stderr
    uci-runtime -o UCI_ShowWDL=false              # Preset an option
    uci-runtime --seed 42                         # Reproducible demo moves

Every option also reads a UCI_RUNTIME_* environment variable.
"""

from __future__ import annotations

import io
import logging
import sys

import click

from . import __version__
from .engine import RandomEngineController
from .loop import UciLoop
from .options import DisplayOptions, OptionsStore
from .protocol.errors import OptionError
from .responder import UciResponder

logger = logging.getLogger(__name__)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


def _configure_logging(level: str, log_file: str | None) -> None:
    """Send logs to a file or stderr; stdout carries only protocol lines."""
    if log_file:
        logging.basicConfig(
            level=level,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
            filename=log_file,
        )
    else:
        logging.basicConfig(
            level=level,
            format="%(levelname)s: %(message)s",
            stream=sys.stderr,
        )


def _apply_presets(store: OptionsStore, presets: tuple[str, ...]) -> None:
    for preset in presets:
        name, sep, value = preset.partition("=")
        if not sep or not name.strip():
            raise click.BadParameter(f"expected NAME=VALUE, got '{preset}'", param_hint="--option")
        try:
            store.set_uci_option(name.strip(), value.strip())
        except OptionError as e:
            raise click.BadParameter(str(e), param_hint="--option") from None


@click.command()
@click.version_option(__version__, prog_name="uci-runtime")
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default="WARNING",
    envvar="UCI_RUNTIME_LOG_LEVEL",
    show_default=True,
    help="Diagnostic log level",
)
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False),
    envvar="UCI_RUNTIME_LOG_FILE",
    help="Write the diagnostic log here instead of stderr",
)
@click.option(
    "--option",
    "-o",
    "presets",
    multiple=True,
    envvar="UCI_RUNTIME_OPTIONS",
    metavar="NAME=VALUE",
    help="Set a UCI option before reading commands (repeatable)",
)
@click.option(
    "--seed",
    type=int,
    envvar="UCI_RUNTIME_SEED",
    help="Seed for the demo engine's move choice",
)
def main(
    log_level: str,
    log_file: str | None,
    presets: tuple[str, ...],
    seed: int | None,
) -> None:
    """UCI Runtime - line protocol front end for a chess engine.

    Reads UCI commands from stdin and writes responses to stdout.
    """
    _configure_logging(log_level.upper(), log_file)

    store = OptionsStore()
    display = DisplayOptions.declare(store)
    _apply_presets(store, presets)

    responder = UciResponder(sys.stdout, display)
    engine = RandomEngineController(seed=seed)

    # Undecodable input becomes a per-line error instead of ending the session.
    if isinstance(sys.stdin, io.TextIOWrapper):
        sys.stdin.reconfigure(errors="replace")

    with UciLoop(responder, store, engine) as loop:
        try:
            loop.run(sys.stdin)
        except KeyboardInterrupt:
            logger.info("Interrupted")
        finally:
            engine.close()


if __name__ == "__main__":
    main()
