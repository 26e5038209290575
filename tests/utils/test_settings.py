# tests/utils/test_settings.py
"""Tests for the `settings.config` preferences loader."""

from pathlib import Path

from tedit.utils.settings import Preferences, load_settings, parse_settings


def test_defaults() -> None:
    prefs = Preferences()
    assert prefs.tab_four_spaces is True
    assert prefs.auto_indent is True


def test_assignments_override_base() -> None:
    prefs = parse_settings(["TAB_FOUR_SPACES = false;", "auto_indent=no"])
    assert prefs == Preferences(tab_four_spaces=False, auto_indent=False)


def test_comments_unknown_keys_and_bad_values_are_skipped() -> None:
    prefs = parse_settings(
        [
            "# editor preferences",
            "// tabs",
            "",
            "LINE_WRAP = true;",
            "AUTO_INDENT = sometimes;",
            "TAB_FOUR_SPACES",
            "TAB_FOUR_SPACES = off;",
        ]
    )
    assert prefs == Preferences(tab_four_spaces=False, auto_indent=True)


def test_from_config_reads_editor_section() -> None:
    prefs = Preferences.from_config({"editor": {"auto_indent": False, "tab_four_spaces": "yes"}})
    assert prefs == Preferences(tab_four_spaces=True, auto_indent=False)


def test_load_settings_layers_over_base(tmp_path: Path) -> None:
    path = tmp_path / "settings.config"
    path.write_text("AUTO_INDENT = true;\n", encoding="utf-8")
    base = Preferences(tab_four_spaces=False, auto_indent=False)
    assert load_settings(path, base) == Preferences(tab_four_spaces=False, auto_indent=True)


def test_missing_file_returns_base(tmp_path: Path) -> None:
    base = Preferences(auto_indent=False)
    assert load_settings(tmp_path / "nope.config", base) is base


def test_value_ends_at_first_semicolon() -> None:
    prefs = parse_settings(["AUTO_INDENT = false; // keep my own indent", "TAB_FOUR_SPACES = no;;"])
    assert prefs == Preferences(tab_four_spaces=False, auto_indent=False)
