"""Unit tests for the option store and display options."""

import pytest

from uci_runtime.options import DisplayOptions, OptionsStore, UciOption
from uci_runtime.protocol.errors import OptionError


@pytest.fixture
def options() -> OptionsStore:
    store = OptionsStore()
    store.add_check("Ponder", False)
    store.add_spin("Threads", 2, 1, 128)
    store.add_string("WeightsFile", "")
    store.add_combo("ScoreType", "centipawn", ["centipawn", "win_percentage", "Q"])
    return store


class TestDeclaration:
    """Test option declaration and the "option" lines."""

    def test_uci_lines(self, options):
        """Each type renders its own declaration."""
        assert options.list_options_uci() == [
            "option name Ponder type check default false",
            "option name Threads type spin default 2 min 1 max 128",
            "option name WeightsFile type string default <empty>",
            "option name ScoreType type combo default centipawn"
            " var centipawn var win_percentage var Q",
        ]

    def test_duplicate_declaration(self, options):
        """Names must be unique ignoring case."""
        with pytest.raises(ValueError, match="already declared"):
            options.add_check("ponder", True)

    def test_declaration_order_is_kept(self, options):
        """list_options follows declaration order."""
        assert [option.name for option in options.list_options()] == [
            "Ponder",
            "Threads",
            "WeightsFile",
            "ScoreType",
        ]

    def test_string_default(self):
        """Non-empty string defaults are printed as is."""
        option = UciOption(name="LogFile", type="string", default="lc0.log")

        assert option.to_uci() == "option name LogFile type string default lc0.log"


class TestSetOption:
    """Test setting values from the wire."""

    def test_defaults(self, options):
        """Unset options read their default."""
        assert options.get("Ponder") is False
        assert options.get("Threads") == 2

    def test_check(self, options):
        """check accepts true/false in any case."""
        options.set_uci_option("Ponder", "TRUE")

        assert options.get("Ponder") is True

    def test_check_rejects_other_text(self, options):
        with pytest.raises(OptionError, match="expects true or false"):
            options.set_uci_option("Ponder", "yes")

    def test_spin(self, options):
        """spin parses integers inside the range."""
        options.set_uci_option("Threads", "8")

        assert options.get("Threads") == 8

    @pytest.mark.parametrize("value", ["0", "129", "many", "1_000", "\u0668"])
    def test_spin_rejects(self, options, value):
        with pytest.raises(OptionError):
            options.set_uci_option("Threads", value)

    def test_spin_uses_protocol_integer_grammar(self, options):
        """Digit separators are not integers on the wire."""
        with pytest.raises(OptionError, match="expects an integer"):
            options.set_uci_option("Threads", "1_0")

        assert options.get("Threads") == 2

    def test_string_keeps_spaces(self, options):
        options.set_uci_option("WeightsFile", "/nets/my net.pb.gz")

        assert options.get("WeightsFile") == "/nets/my net.pb.gz"

    def test_string_empty_marker(self, options):
        """<empty> clears a string option."""
        options.set_uci_option("WeightsFile", "x")
        options.set_uci_option("WeightsFile", "<empty>")

        assert options.get("WeightsFile") == ""

    def test_combo(self, options):
        """combo matches choices ignoring case and stores the declared spelling."""
        options.set_uci_option("ScoreType", "q")

        assert options.get("ScoreType") == "Q"

    def test_combo_rejects_unknown(self, options):
        with pytest.raises(OptionError, match="does not accept"):
            options.set_uci_option("ScoreType", "pawns")

    def test_names_are_case_insensitive(self, options):
        options.set_uci_option("threads", "4")

        assert options.get("THREADS") == 4

    def test_unknown_option(self, options):
        with pytest.raises(OptionError, match="Unknown option: Hash"):
            options.set_uci_option("Hash", "64")

    def test_failed_set_keeps_old_value(self, options):
        options.set_uci_option("Threads", "4")
        with pytest.raises(OptionError):
            options.set_uci_option("Threads", "999")

        assert options.get("Threads") == 4

    def test_get_unknown_option(self, options):
        with pytest.raises(KeyError):
            options.get("Hash")


class TestContexts:
    """Test context-scoped values."""

    def test_context_overrides_global(self, options):
        options.set_uci_option("Threads", "4")
        options.set_uci_option("Threads", "16", context="white")

        assert options.get("Threads", "white") == 16
        assert options.get("Threads", "black") == 4
        assert options.get("Threads") == 4

    def test_context_falls_back_to_default(self, options):
        options.set_uci_option("Ponder", "true", context="black")

        assert options.get("Ponder", "white") is False
        assert options.get("Ponder", "black") is True


class TestDisplayOptions:
    """Test the live display option view."""

    def test_declared_defaults(self):
        store = OptionsStore()
        display = DisplayOptions.declare(store)

        assert display.chess960 is False
        assert display.show_wdl is True
        assert display.show_movesleft is False

    def test_reads_are_live(self):
        """Changes in the store show up immediately."""
        store = OptionsStore()
        display = DisplayOptions.declare(store)

        store.set_uci_option("UCI_Chess960", "true")
        store.set_uci_option("UCI_ShowWDL", "false")
        store.set_uci_option("UCI_ShowMovesLeft", "true")

        assert display.chess960 is True
        assert display.show_wdl is False
        assert display.show_movesleft is True
