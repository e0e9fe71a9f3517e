"""Tests for scrollfield.config module."""

import pytest

from scrollfield.config import DEFAULT_MAX_TEXT, ScrollArgs, ScrollSettings, parse_scroll_arg
from scrollfield.errors import ConfigurationError


class TestParseScrollArg:
    """Tests for parsing "<width> [<step>] <text>"."""

    def test_width_step_text(self):
        assert parse_scroll_arg("20 2 hello world") == ScrollArgs(20, 2, "hello world")

    def test_step_optional(self):
        assert parse_scroll_arg("20 hello") == ScrollArgs(20, 1, "hello")

    def test_lone_number_after_width_is_text(self):
        """A would-be step with nothing after it is the text itself."""
        assert parse_scroll_arg("20 42") == ScrollArgs(20, 1, "42")

    def test_width_only(self):
        assert parse_scroll_arg("20") == ScrollArgs(20, 1, "")

    def test_text_taken_verbatim(self):
        """Whitespace after the consumed tokens is skipped; inner whitespace is kept."""
        assert parse_scroll_arg("  7   3   spaced  text ") == ScrollArgs(7, 3, "spaced  text ")

    def test_non_integer_step_token_is_text(self):
        assert parse_scroll_arg("10 2abc") == ScrollArgs(10, 1, "2abc")

    def test_step_zero_allowed(self):
        assert parse_scroll_arg("10 0 frozen") == ScrollArgs(10, 0, "frozen")

    @pytest.mark.parametrize("argument", [None, "", "   ", "abc", "10abc", "-3 x", "x 10"])
    def test_missing_width(self, argument):
        with pytest.raises(ConfigurationError) as exc_info:
            parse_scroll_arg(argument)
        assert "scroll needs arguments" in str(exc_info.value)
        assert exc_info.value.argument == argument

    def test_zero_width(self):
        with pytest.raises(ConfigurationError) as exc_info:
            parse_scroll_arg("0 text")
        assert "at least 1" in str(exc_info.value)


class TestScrollSettings:
    """Tests for environment-driven settings."""

    @pytest.fixture(autouse=True)
    def _clean_env(self, monkeypatch):
        for name in ("SCROLLFIELD_MAX_TEXT", "SCROLLFIELD_LINE_SEPARATOR",
                     "SCROLLFIELD_INTERVAL", "SCROLLFIELD_STYLES"):
            monkeypatch.delenv(name, raising=False)

    def test_defaults(self):
        settings = ScrollSettings()
        assert settings.max_text == DEFAULT_MAX_TEXT
        assert settings.line_separator == "|"
        assert settings.interval == 1.0
        assert settings.styles_path is None

    def test_from_environment(self, monkeypatch):
        monkeypatch.setenv("SCROLLFIELD_MAX_TEXT", "64")
        monkeypatch.setenv("SCROLLFIELD_LINE_SEPARATOR", " / ")
        monkeypatch.setenv("SCROLLFIELD_INTERVAL", "0.25")
        monkeypatch.setenv("SCROLLFIELD_STYLES", "/tmp/styles.json")
        settings = ScrollSettings()
        assert settings.max_text == 64
        assert settings.line_separator == " / "
        assert settings.interval == 0.25
        assert settings.styles_path == "/tmp/styles.json"

    def test_invalid_values_fall_back(self, monkeypatch):
        monkeypatch.setenv("SCROLLFIELD_MAX_TEXT", "lots")
        monkeypatch.setenv("SCROLLFIELD_INTERVAL", "soon")
        settings = ScrollSettings()
        assert settings.max_text == DEFAULT_MAX_TEXT
        assert settings.interval == 1.0

    def test_explicit_values_win(self, monkeypatch):
        monkeypatch.setenv("SCROLLFIELD_MAX_TEXT", "64")
        assert ScrollSettings(max_text=128).max_text == 128
