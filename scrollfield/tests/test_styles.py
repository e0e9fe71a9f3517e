"""Tests for scrollfield.styles module."""

import json
import logging

import pytest

from scrollfield.errors import ConfigurationError
from scrollfield.styles import (
    BASE_STYLE,
    DEFAULT_STYLES,
    StyleSpec,
    is_hex_color,
    load_styles,
    prompt_toolkit_style,
    resolve_style,
)


class TestStyleSpec:

    def test_to_rich_full(self):
        spec = StyleSpec(fg="#ffffff", bg="#333333", bold=True, underline=True)
        assert spec.to_rich() == "bold underline #ffffff on #333333"

    def test_to_rich_empty(self):
        assert StyleSpec().to_rich() == ""

    def test_from_dict_ignores_unknown_keys(self):
        spec = StyleSpec.from_dict({"fg": "red", "italic": True, "blink": True})
        assert spec == StyleSpec(fg="red", italic=True)

    def test_is_hex_color(self):
        assert is_hex_color("#a0B1c2")
        assert not is_hex_color("red")
        assert not is_hex_color("#fff")

    def test_to_prompt_toolkit_full(self):
        spec = StyleSpec(fg="#ffffff", bg="#333333", bold=True, dim=True)
        assert spec.to_prompt_toolkit() == "bg:#333333 #ffffff bold dim"

    def test_to_prompt_toolkit_translates_rich_colors(self):
        spec = StyleSpec(fg="rgb(255,136,0)", bg="default", underline=True)
        assert spec.to_prompt_toolkit() == "bg:default #ff8800 underline"

    def test_to_prompt_toolkit_empty(self):
        assert StyleSpec().to_prompt_toolkit() == ""


class TestPromptToolkitStyle:

    def test_default_table_classes(self):
        style = prompt_toolkit_style()
        rules = dict(style.style_rules)
        assert rules["scroll.warning"] == "#f5f543 bold"
        assert rules["scroll.highlight"] == "bg:#ffaf00 #000000"
        assert len(rules) == len(DEFAULT_STYLES)

    def test_invalid_entries_skipped(self, caplog):
        table = {
            "ok": StyleSpec(fg="#00ff00"),
            "has space": StyleSpec(fg="#00ff00"),
            "broken": StyleSpec(fg="nocolour"),
        }
        with caplog.at_level(logging.WARNING, logger="scrollfield.styles"):
            style = prompt_toolkit_style(table)
        assert [name for name, _ in style.style_rules] == ["scroll.ok"]
        assert "has space" in caplog.text
        assert "broken" in caplog.text


class TestResolveStyle:

    def test_empty_is_base_style(self):
        assert resolve_style("") == BASE_STYLE
        assert resolve_style("   ") == BASE_STYLE

    def test_table_name(self):
        assert resolve_style("warning") == DEFAULT_STYLES["warning"].to_rich()

    def test_custom_table(self):
        table = {"calm": StyleSpec(fg="blue")}
        assert resolve_style("calm", table) == "blue"

    def test_raw_rich_style(self):
        assert resolve_style("bold magenta on black") == "bold magenta on black"

    def test_invalid_style(self):
        with pytest.raises(ConfigurationError) as exc_info:
            resolve_style("nocolour")
        assert exc_info.value.argument == "nocolour"


class TestLoadStyles:

    @pytest.fixture(autouse=True)
    def _clean_env(self, monkeypatch):
        monkeypatch.delenv("SCROLLFIELD_STYLES", raising=False)

    def test_defaults_without_file(self):
        assert load_styles() == DEFAULT_STYLES

    def test_merges_file(self, tmp_path):
        path = tmp_path / "styles.json"
        path.write_text(json.dumps({
            "alert": {"fg": "#ffffff", "bg": "#c01c28"},
            "calm": "blue",
            "primary": {"fg": "#00ff00"},
        }))
        table = load_styles(path)
        assert table["alert"] == StyleSpec(fg="#ffffff", bg="#c01c28")
        assert table["calm"] == StyleSpec(fg="blue")
        assert table["primary"] == StyleSpec(fg="#00ff00")
        assert table["muted"] == DEFAULT_STYLES["muted"]

    def test_path_from_environment(self, tmp_path, monkeypatch):
        path = tmp_path / "styles.json"
        path.write_text(json.dumps({"calm": "blue"}))
        monkeypatch.setenv("SCROLLFIELD_STYLES", str(path))
        assert "calm" in load_styles()

    def test_bad_entries_skipped(self, tmp_path, caplog):
        path = tmp_path / "styles.json"
        path.write_text(json.dumps({"bad": 3, "good": "red"}))
        with caplog.at_level(logging.WARNING, logger="scrollfield.styles"):
            table = load_styles(path)
        assert "bad" not in table
        assert "good" in table
        assert "bad" in caplog.text

    def test_missing_file_ignored(self, tmp_path, caplog):
        with caplog.at_level(logging.WARNING, logger="scrollfield.styles"):
            table = load_styles(tmp_path / "missing.json")
        assert table == DEFAULT_STYLES
        assert "Could not load style table" in caplog.text

    def test_malformed_file_ignored(self, tmp_path):
        path = tmp_path / "styles.json"
        path.write_text("{not json")
        assert load_styles(path) == DEFAULT_STYLES

    def test_non_dict_file_ignored(self, tmp_path):
        path = tmp_path / "styles.json"
        path.write_text("[1, 2]")
        assert load_styles(path) == DEFAULT_STYLES
